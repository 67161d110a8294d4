import pytest

from config import TestingConfig
from session_auth import create_app
from session_auth.directory import (
    InMemoryUserRepository,
    SqlUserRepository,
    build_user_repository,
    seed_demo_users,
)


class SqlTestingConfig(TestingConfig):
    USER_STORE = "sql"


@pytest.fixture()
def sql_repo():
    app = create_app(SqlTestingConfig)
    with app.app_context():
        yield app.extensions["user_repository"]


@pytest.fixture(params=["memory", "sql"])
def repo(request):
    if request.param == "memory":
        yield InMemoryUserRepository()
    else:
        yield request.getfixturevalue("sql_repo")


def test_create_assigns_count_plus_one(repo):
    first = repo.create("Pat", "pat@x.com", "pw")
    second = repo.create("Sam", "sam@x.com", "pw2")
    assert (first.id, second.id) == (1, 2)
    assert repo.count() == 2
    assert [u.email for u in repo.all()] == ["pat@x.com", "sam@x.com"]


def test_find_by_credentials_is_exact(repo):
    repo.create("Pat", "pat@x.com", "pw")

    assert repo.find_by_credentials("pat@x.com", "pw").id == 1
    assert repo.find_by_credentials("pat@x.com", "PW") is None
    assert repo.find_by_credentials("Pat@x.com", "pw") is None
    assert repo.find_by_credentials(" pat@x.com", "pw") is None
    assert repo.find_by_credentials("nobody@x.com", "pw") is None


def test_exists_by_email_is_case_sensitive(repo):
    repo.create("Pat", "pat@x.com", "pw")
    assert repo.exists_by_email("pat@x.com")
    assert not repo.exists_by_email("PAT@x.com")


def test_create_does_not_check_duplicates(repo):
    # Uniqueness is the register flow's job
    repo.create("Pat", "pat@x.com", "pw")
    repo.create("Pat2", "pat@x.com", "pw2")
    assert repo.count() == 2
    assert repo.find_by_credentials("pat@x.com", "pw").name == "Pat"
    assert repo.find_by_credentials("pat@x.com", "pw2").name == "Pat2"


def test_get(repo):
    repo.create("Pat", "pat@x.com", "pw")
    assert repo.get(1).name == "Pat"
    assert repo.get(2) is None


def test_seed_demo_users_only_fills_empty_directory():
    repo = InMemoryUserRepository()
    assert seed_demo_users(repo) == 3
    assert [u.id for u in repo.all()] == [1, 2, 3]
    assert repo.find_by_credentials("max@gmail.com", "secret2").name == "Max"

    assert seed_demo_users(repo) == 0
    assert repo.count() == 3


def test_build_user_repository():
    assert isinstance(build_user_repository("memory"), InMemoryUserRepository)
    assert isinstance(build_user_repository("sql"), SqlUserRepository)
    with pytest.raises(ValueError):
        build_user_repository("redis")
