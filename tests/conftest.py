import pytest
from fastapi.testclient import TestClient

from cinemovie_api.app.core.config import settings
from cinemovie_api.app.core.db import apply_migrations, get_connection
from cinemovie_api.app.main import app
from cinemovie_api.app.repositories import CommentRepo, FavouriteRepo, TitleRepo, UserRepo
from cinemovie_api.app.schemas.title import TitleUpsert
from cinemovie_api.app.schemas.user import UserRegister
from cinemovie_api.app.services import CommentService, FavouriteService, TitleService, UserService


@pytest.fixture
def conn():
    connection = get_connection(":memory:")
    apply_migrations(connection)
    yield connection
    connection.close()


@pytest.fixture
def user_repo(conn):
    return UserRepo(conn)


@pytest.fixture
def title_repo(conn):
    return TitleRepo(conn)


@pytest.fixture
def comment_repo(conn):
    return CommentRepo(conn)


@pytest.fixture
def favourite_repo(conn):
    return FavouriteRepo(conn)


@pytest.fixture
def user_service(user_repo):
    return UserService(user_repo)


@pytest.fixture
def title_service(title_repo):
    return TitleService(title_repo)


@pytest.fixture
def comment_service(comment_repo, user_repo, title_repo):
    return CommentService(comment_repo, user_repo, title_repo)


@pytest.fixture
def favourite_service(user_repo, title_repo, favourite_repo):
    return FavouriteService(user_repo, title_repo, favourite_repo)


@pytest.fixture
def user_id(user_service):
    return user_service.create(
        UserRegister(email="u@a.com", password="p", login="login", name="Name", state=True)
    )


@pytest.fixture
def title_id(title_service):
    return title_service.create(TitleUpsert(title_name="Inception", genres=["Sci-Fi"]))


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "test.db"))
    with TestClient(app) as test_client:
        yield test_client
