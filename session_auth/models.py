from . import db
from .user import User


class UserRecord(db.Model):
    __tablename__ = "user"

    id = db.Column(db.Integer, primary_key=True, autoincrement=False)
    name = db.Column(db.String(150), nullable=False)
    email = db.Column(db.String(255), nullable=False)  # uniqueness is checked by the register flow
    password = db.Column(db.String(255), nullable=False)

    def to_user(self):
        return User(id=self.id, name=self.name, email=self.email, password=self.password)
