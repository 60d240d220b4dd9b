from datetime import datetime, timezone

import pytest

from cinemovie_api.app.core.errors import InvalidInputError, NotFoundError
from cinemovie_api.app.schemas.comment import CommentCreate, CommentUpdate
from cinemovie_api.app.schemas.title import TitleUpsert
from cinemovie_api.app.schemas.user import UserRegister
from cinemovie_api.app.services.comment_service import validate_rating


def make_comment(user_id, title_id, rating=7, info="Great"):
    return CommentCreate(user_id=user_id, title_id=title_id, rating=rating, info=info)


def test_create_saves_comment(comment_service, comment_repo, user_id, title_id):
    before = datetime.now(timezone.utc)

    comment_id = comment_service.create(make_comment(user_id, title_id))

    saved = comment_repo.find_by_id(comment_id)
    assert saved.user_id == user_id
    assert saved.title_id == title_id
    assert saved.rating == 7
    assert saved.info == "Great"
    assert saved.creation_date >= before


def test_create_returns_distinct_ids(comment_service, user_id, title_id):
    ids = {comment_service.create(make_comment(user_id, title_id)) for _ in range(5)}
    assert len(ids) == 5


@pytest.mark.parametrize("rating", [0, 10])
def test_create_accepts_boundary_ratings(comment_service, user_id, title_id, rating):
    comment_id = comment_service.create(make_comment(user_id, title_id, rating=rating))
    assert comment_service.get(comment_id).rating == rating


@pytest.mark.parametrize("rating", [-1, 11])
def test_create_rejects_out_of_range_ratings(comment_service, comment_repo, user_id, title_id, rating):
    with pytest.raises(InvalidInputError, match=f"but got: {rating}"):
        comment_service.create(make_comment(user_id, title_id, rating=rating))
    assert comment_repo.find_all() == []


def test_create_reports_missing_user_before_bad_rating(comment_service, title_id):
    with pytest.raises(NotFoundError) as exc_info:
        comment_service.create(make_comment("ghost", title_id, rating=11))
    assert exc_info.value.entity == "User"
    assert exc_info.value.entity_id == "ghost"


def test_create_reports_missing_user_before_missing_title(comment_service):
    with pytest.raises(NotFoundError) as exc_info:
        comment_service.create(make_comment("ghost", "no-title", rating=11))
    assert exc_info.value.entity == "User"


def test_create_reports_missing_title_before_bad_rating(comment_service, user_id):
    with pytest.raises(NotFoundError) as exc_info:
        comment_service.create(make_comment(user_id, "no-title", rating=-1))
    assert exc_info.value.entity == "Title"
    assert str(exc_info.value) == "Title with id no-title is not found"


def test_get_missing_comment_raises_not_found(comment_service):
    with pytest.raises(NotFoundError, match="Comment with id x is not found"):
        comment_service.get("x")


def test_get_is_idempotent(comment_service, user_id, title_id):
    comment_id = comment_service.create(make_comment(user_id, title_id))
    assert comment_service.get(comment_id) == comment_service.get(comment_id)


def test_get_all_by_user_and_title(comment_service, user_service, title_service, user_id, title_id):
    other_user = user_service.create(UserRegister(email="o@a.com", password="p", login="other"))
    other_title = title_service.create(TitleUpsert(title_name="Memento"))
    c1 = comment_service.create(make_comment(user_id, title_id))
    c2 = comment_service.create(make_comment(user_id, other_title))
    c3 = comment_service.create(make_comment(other_user, title_id))

    assert [c.id for c in comment_service.get_all()] == [c1, c2, c3]
    assert [c.id for c in comment_service.get_all_by_user(user_id)] == [c1, c2]
    assert [c.id for c in comment_service.get_all_by_title(title_id)] == [c1, c3]


def test_get_all_by_missing_parent_raises_not_found(comment_service):
    with pytest.raises(NotFoundError):
        comment_service.get_all_by_user("ghost")
    with pytest.raises(NotFoundError):
        comment_service.get_all_by_title("ghost")


def test_update_replaces_rating_and_info_and_refreshes_date(comment_service, user_id, title_id):
    comment_id = comment_service.create(make_comment(user_id, title_id, rating=3, info="meh"))
    created = comment_service.get(comment_id).creation_date

    result = comment_service.update(comment_id, CommentUpdate(rating=10, info="Masterpiece"))

    assert result.rating == 10
    assert result.info == "Masterpiece"
    assert result.user_id == user_id
    assert result.title_id == title_id
    assert result.creation_date >= created
    assert comment_service.get(comment_id) == result


@pytest.mark.parametrize("rating", [-1, 11])
def test_update_rejects_out_of_range_ratings(comment_service, user_id, title_id, rating):
    comment_id = comment_service.create(make_comment(user_id, title_id, rating=5))

    with pytest.raises(InvalidInputError):
        comment_service.update(comment_id, CommentUpdate(rating=rating, info="x"))
    assert comment_service.get(comment_id).rating == 5


def test_update_missing_comment_raises_not_found(comment_service):
    with pytest.raises(NotFoundError):
        comment_service.update("x", CommentUpdate(rating=5))


def test_delete_removes_comment(comment_service, comment_repo, user_id, title_id):
    comment_id = comment_service.create(make_comment(user_id, title_id))

    assert comment_service.delete(comment_id) is True
    assert comment_repo.find_by_id(comment_id) is None


def test_delete_missing_comment_raises_not_found(comment_service):
    with pytest.raises(NotFoundError):
        comment_service.delete("x")


@pytest.mark.parametrize("rating,valid", [(-1, False), (0, True), (5, True), (10, True), (11, False)])
def test_validate_rating(rating, valid):
    if valid:
        validate_rating(rating)
    else:
        with pytest.raises(InvalidInputError):
            validate_rating(rating)
