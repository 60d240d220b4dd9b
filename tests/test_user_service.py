import sqlite3

import pytest

from cinemovie_api.app.core.errors import ConflictError, NotFoundError
from cinemovie_api.app.schemas.comment import CommentCreate
from cinemovie_api.app.schemas.user import UserRegister, UserUpdate


def register(service, login="login1", email="a@b.com", **kwargs):
    data = dict(email=email, password="pass", login=login, name="Name", state=True)
    data.update(kwargs)
    return service.create(UserRegister(**data))


def test_create_saves_user_and_returns_id(user_service, user_repo):
    user_id = register(user_service)

    saved = user_repo.find_by_id(user_id)
    assert saved.email == "a@b.com"
    assert saved.password == "pass"
    assert saved.login == "login1"
    assert saved.name == "Name"
    assert saved.state is True


def test_create_returns_distinct_ids(user_service):
    ids = {register(user_service, login=f"l{i}", email=f"{i}@a.com") for i in range(5)}
    assert len(ids) == 5


def test_create_rejects_duplicate_email(user_service, user_repo):
    register(user_service)
    with pytest.raises(ConflictError, match="email already exists"):
        register(user_service, login="other")
    assert len(user_repo.find_all()) == 1


def test_create_rejects_duplicate_login(user_service):
    register(user_service)
    with pytest.raises(ConflictError, match="login already exists"):
        register(user_service, email="other@b.com")


def test_create_checks_email_before_login(user_service):
    register(user_service)
    with pytest.raises(ConflictError, match="email"):
        register(user_service)


def test_get_all_returns_users_in_insertion_order(user_service):
    first = register(user_service, login="l1", email="u1@a.com", name="N1", state=True)
    second = register(user_service, login="l2", email="u2@a.com", name="N2", state=False)

    result = user_service.get_all()

    assert [u.user_id for u in result] == [first, second]
    assert result[0].login == "l1"
    assert result[0].user_name == "N1"
    assert result[0].state is True
    assert result[1].state is False


def test_get_returns_projection_without_credentials(user_service):
    user_id = register(user_service)

    result = user_service.get(user_id)

    assert result.user_id == user_id
    assert result.login == "login1"
    assert result.user_name == "Name"
    assert not hasattr(result, "password")
    assert not hasattr(result, "email")


def test_get_is_idempotent(user_service):
    user_id = register(user_service)
    assert user_service.get(user_id) == user_service.get(user_id)


def test_get_missing_user_raises_not_found(user_service):
    with pytest.raises(NotFoundError) as exc_info:
        user_service.get("missing")
    assert exc_info.value.entity == "User"
    assert exc_info.value.entity_id == "missing"
    assert str(exc_info.value) == "User with id missing is not found"


def test_update_patches_all_given_fields(user_service, user_repo):
    user_id = register(user_service, login="oldLogin", name="Old Name")

    result = user_service.update(
        user_id, UserUpdate(login="newLogin", password="newPass", user_name="New Name")
    )

    assert result.user_id == user_id
    assert result.login == "newLogin"
    assert result.user_name == "New Name"
    assert result.state is True
    saved = user_repo.find_by_id(user_id)
    assert saved.password == "newPass"
    assert saved.email == "a@b.com"


def test_update_keeps_absent_fields(user_service, user_repo):
    user_id = register(user_service, login="keep", name="Keep Name")

    user_service.update(user_id, UserUpdate(password="changed"))

    saved = user_repo.find_by_id(user_id)
    assert saved.login == "keep"
    assert saved.name == "Keep Name"
    assert saved.password == "changed"
    assert user_service.get(user_id).user_name == "Keep Name"


def test_update_with_same_login_skips_conflict_check(user_service, user_repo, monkeypatch):
    user_id = register(user_service, login="same")

    def fail(login):
        raise AssertionError("find_by_login should not be called")

    monkeypatch.setattr(user_repo, "find_by_login", fail)
    assert user_service.update(user_id, UserUpdate(login="same")).login == "same"


def test_update_login_taken_by_other_user_conflicts(user_service, user_repo):
    register(user_service, login="taken", email="x@a.com")
    user_id = register(user_service, login="mine", email="y@a.com")

    with pytest.raises(ConflictError):
        user_service.update(user_id, UserUpdate(login="taken", user_name="Changed"))

    saved = user_repo.find_by_id(user_id)
    assert saved.login == "mine"
    assert saved.name == "Name"


def test_update_missing_user_raises_not_found(user_service):
    with pytest.raises(NotFoundError):
        user_service.update("missing", UserUpdate(user_name="x"))


def test_delete_removes_user(user_service, user_repo):
    user_id = register(user_service)

    assert user_service.delete(user_id) is True
    assert user_repo.find_by_id(user_id) is None


def test_delete_missing_user_raises_not_found(user_service):
    with pytest.raises(NotFoundError):
        user_service.delete("missing")


def test_get_entity_returns_stored_user(user_service):
    user_id = register(user_service)
    assert user_service.get_entity(user_id).login == "login1"


def test_to_profile_includes_email(user_service):
    user = user_service.get_entity(register(user_service))

    profile = user_service.to_profile(user)

    assert profile.user_id == user.user_id
    assert profile.email == "a@b.com"
    assert profile.login == "login1"
    assert profile.user_name == "Name"
    assert profile.state is True


def test_delete_user_with_comments_is_refused_by_store(user_service, user_repo, comment_service, user_id, title_id):
    comment_service.create(CommentCreate(user_id=user_id, title_id=title_id, rating=7))

    with pytest.raises(sqlite3.IntegrityError, match="FOREIGN KEY"):
        user_service.delete(user_id)
    assert user_repo.find_by_id(user_id) is not None
