"""
User directory backends.

Lookups are exact string matches on the stored fields: no normalization,
no hashing. ``create`` assigns ``count() + 1`` as the id and does not check
for duplicate emails; callers run ``exists_by_email`` first.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from .user import DEMO_USERS, User


class UserRepository(ABC):
    @abstractmethod
    def find_by_credentials(self, email: str, password: str) -> Optional[User]:
        ...

    @abstractmethod
    def exists_by_email(self, email: str) -> bool:
        ...

    @abstractmethod
    def create(self, name: str, email: str, password: str) -> User:
        ...

    @abstractmethod
    def get(self, user_id: int) -> Optional[User]:
        ...

    @abstractmethod
    def all(self) -> List[User]:
        ...

    def count(self) -> int:
        return len(self.all())


class InMemoryUserRepository(UserRepository):
    """Process-wide list of users, lost on restart."""

    def __init__(self, users=None):
        self._users: List[User] = list(users or [])

    def find_by_credentials(self, email, password):
        return next(
            (u for u in self._users if u.email == email and u.password == password),
            None,
        )

    def exists_by_email(self, email):
        return any(u.email == email for u in self._users)

    def create(self, name, email, password):
        user = User(id=len(self._users) + 1, name=name, email=email, password=password)
        self._users.append(user)
        return user

    def get(self, user_id):
        return next((u for u in self._users if u.id == user_id), None)

    def all(self):
        return list(self._users)

    def count(self):
        return len(self._users)


class SqlUserRepository(UserRepository):
    """Users stored in the ``user`` table. Needs an application context."""

    def find_by_credentials(self, email, password):
        from .models import UserRecord

        record = (
            UserRecord.query.filter_by(email=email, password=password)
            .order_by(UserRecord.id.asc())
            .first()
        )
        return record.to_user() if record else None

    def exists_by_email(self, email):
        from .models import UserRecord

        return UserRecord.query.filter_by(email=email).first() is not None

    def create(self, name, email, password):
        from . import db
        from .models import UserRecord

        record = UserRecord(id=self.count() + 1, name=name, email=email, password=password)
        db.session.add(record)
        db.session.commit()
        return record.to_user()

    def get(self, user_id):
        from . import db
        from .models import UserRecord

        record = db.session.get(UserRecord, user_id)
        return record.to_user() if record else None

    def all(self):
        from .models import UserRecord

        return [r.to_user() for r in UserRecord.query.order_by(UserRecord.id.asc()).all()]

    def count(self):
        from .models import UserRecord

        return UserRecord.query.count()


def seed_demo_users(repository: UserRepository) -> int:
    """Create the demo accounts in an empty directory; returns how many were added."""
    if repository.count():
        return 0
    for name, email, password in DEMO_USERS:
        repository.create(name, email, password)
    return len(DEMO_USERS)


def build_user_repository(store: str) -> UserRepository:
    if store == "memory":
        return InMemoryUserRepository()
    if store == "sql":
        return SqlUserRepository()
    raise ValueError(f"Unknown USER_STORE: {store!r}")
