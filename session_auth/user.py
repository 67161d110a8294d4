from flask_login import UserMixin


class User(UserMixin):
    def __init__(self, id, name, email, password):
        self.id = id
        self.name = name
        self.email = email
        self.password = password  # plaintext, compared as-is

    def __repr__(self):
        return f"<User id={self.id} email={self.email!r}>"


# Demo accounts loaded into a fresh directory (name, email, password)
DEMO_USERS = (
    ("Alex", "alex@gmail.com", "secret1"),
    ("Max", "max@gmail.com", "secret2"),
    ("Hagard", "hagard@gmail.com", "secret3"),
)
