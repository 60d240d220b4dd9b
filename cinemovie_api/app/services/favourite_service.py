"""
Business logic for favourite titles.

A favourite links one user to one title.  The same pair may be
stored more than once.  Favourites cannot be edited.
"""

import logging
from typing import List

from ..core.errors import NotFoundError
from ..models import FavouriteTitle
from ..repositories.favourite_repo import FavouriteRepo
from ..repositories.title_repo import TitleRepo
from ..repositories.user_repo import UserRepo
from ..schemas.favourite import FavouriteCreate, FavouriteRead


logger = logging.getLogger(__name__)


class FavouriteService:
    """Service for users' favourite titles."""

    def __init__(self, user_repo: UserRepo, title_repo: TitleRepo, favourite_repo: FavouriteRepo) -> None:
        self.user_repo = user_repo
        self.title_repo = title_repo
        self.favourite_repo = favourite_repo

    def create(self, data: FavouriteCreate) -> str:
        """Mark a title as a user's favourite and return the favourite id.

        Raises ``NotFoundError`` for a missing user, then for a missing
        title.
        """
        user = self.user_repo.find_by_id(data.user_id)
        if user is None:
            raise NotFoundError("User", data.user_id)
        title = self.title_repo.find_by_id(data.title_id)
        if title is None:
            raise NotFoundError("Title", data.title_id)

        fav = self.favourite_repo.save(FavouriteTitle(user_id=user.user_id, title_id=title.title_id))
        logger.info("User %s added title %s to favourites (%s)", user.user_id, title.title_id, fav.fav_id)
        return fav.fav_id

    def get_all(self) -> List[FavouriteRead]:
        return [self._to_read(fav) for fav in self.favourite_repo.find_all()]

    def get_all_by_user(self, user_id: str) -> List[FavouriteRead]:
        user = self.user_repo.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return [self._to_read(fav) for fav in self.favourite_repo.find_all_by_user(user)]

    def delete(self, fav_id: str) -> bool:
        # Existence is checked directly; the favourite is never loaded.
        if not self.favourite_repo.exists_by_id(fav_id):
            raise NotFoundError("Favourite", fav_id)
        self.favourite_repo.delete_by_id(fav_id)
        logger.info("Deleted favourite %s", fav_id)
        return True

    @staticmethod
    def _to_read(fav: FavouriteTitle) -> FavouriteRead:
        return FavouriteRead(fav_id=fav.fav_id, title_id=fav.title_id, user_id=fav.user_id)
