"""
Business logic for comments.

A comment belongs to one user and one title, both fixed when it is
created.  Creation checks, in this order, that the user exists, that
the title exists and that the rating lies in ``0..10``; the first
failing check is reported and nothing is stored.  Every update
refreshes ``creation_date``.
"""

import logging
from datetime import datetime, timezone
from typing import List

from ..core.errors import InvalidInputError, NotFoundError
from ..models import Comment, Title, User
from ..repositories.comment_repo import CommentRepo
from ..repositories.title_repo import TitleRepo
from ..repositories.user_repo import UserRepo
from ..schemas.comment import CommentCreate, CommentRead, CommentUpdate


logger = logging.getLogger(__name__)

MIN_RATING = 0
MAX_RATING = 10


def validate_rating(rating: int) -> None:
    """Raise ``InvalidInputError`` unless ``MIN_RATING <= rating <= MAX_RATING``."""
    if rating < MIN_RATING or rating > MAX_RATING:
        raise InvalidInputError(
            f"Rating must be in range {MIN_RATING}..{MAX_RATING}, but got: {rating}"
        )


class CommentService:
    """Service for handling title comments."""

    def __init__(self, comment_repo: CommentRepo, user_repo: UserRepo, title_repo: TitleRepo) -> None:
        self.comment_repo = comment_repo
        self.user_repo = user_repo
        self.title_repo = title_repo

    def create(self, data: CommentCreate) -> str:
        """Create a comment and return its id."""
        user = self._get_user(data.user_id)
        title = self._get_title(data.title_id)
        validate_rating(data.rating)

        comment = Comment(
            user_id=user.user_id,
            title_id=title.title_id,
            creation_date=datetime.now(timezone.utc),
            rating=data.rating,
            info=data.info,
        )
        comment = self.comment_repo.save(comment)
        logger.info(
            "User %s commented on title %s (comment %s)", user.user_id, title.title_id, comment.comment_id
        )
        return comment.comment_id

    def get(self, comment_id: str) -> CommentRead:
        return self._to_read(self._get_comment(comment_id))

    def get_all(self) -> List[CommentRead]:
        return [self._to_read(c) for c in self.comment_repo.find_all()]

    def get_all_by_user(self, user_id: str) -> List[CommentRead]:
        user = self._get_user(user_id)
        return [self._to_read(c) for c in self.comment_repo.find_all_by_user(user)]

    def get_all_by_title(self, title_id: str) -> List[CommentRead]:
        title = self._get_title(title_id)
        return [self._to_read(c) for c in self.comment_repo.find_all_by_title(title)]

    def update(self, comment_id: str, data: CommentUpdate) -> CommentRead:
        """Replace rating and text of a comment and refresh its date."""
        comment = self._get_comment(comment_id)
        validate_rating(data.rating)

        comment.rating = data.rating
        comment.info = data.info
        comment.creation_date = datetime.now(timezone.utc)

        comment = self.comment_repo.save(comment)
        logger.info("Updated comment %s", comment_id)
        return self._to_read(comment)

    def delete(self, comment_id: str) -> bool:
        comment = self._get_comment(comment_id)
        self.comment_repo.delete(comment)
        logger.info("Deleted comment %s", comment_id)
        return True

    def _get_comment(self, comment_id: str) -> Comment:
        comment = self.comment_repo.find_by_id(comment_id)
        if comment is None:
            raise NotFoundError("Comment", comment_id)
        return comment

    def _get_user(self, user_id: str) -> User:
        user = self.user_repo.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    def _get_title(self, title_id: str) -> Title:
        title = self.title_repo.find_by_id(title_id)
        if title is None:
            raise NotFoundError("Title", title_id)
        return title

    @staticmethod
    def _to_read(comment: Comment) -> CommentRead:
        return CommentRead(
            id=comment.comment_id,
            user_id=comment.user_id,
            title_id=comment.title_id,
            creation_date=comment.creation_date,
            rating=comment.rating,
            info=comment.info,
        )
