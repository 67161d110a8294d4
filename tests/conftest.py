import pytest

from config import TestingConfig
from session_auth import create_app
from session_auth.directory import InMemoryUserRepository
from session_auth.guards import SessionContext
from session_auth.sessions import MemorySessionStore


@pytest.fixture()
def users():
    return InMemoryUserRepository()


@pytest.fixture()
def session_store():
    return MemorySessionStore()


@pytest.fixture()
def app(users, session_store):
    app = create_app(TestingConfig, user_repository=users, session_store=session_store)
    yield app


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def session_user_id(client):
    """Read the authenticated user id out of the client's current session."""

    def _read():
        with client.session_transaction() as sess:
            return SessionContext.from_session(sess).user_id

    return _read


@pytest.fixture()
def pat(users):
    return users.create("Pat", "pat@x.com", "pw")
