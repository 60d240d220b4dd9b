"""
Business logic for titles.

Titles are created with a server generated ``tmdb_id``: a random
decimal number below one million that is redrawn until no stored
title uses it.  The check and the insert are not atomic, so two
concurrent creations can pick the same value; the ``UNIQUE``
constraint on ``titles.tmdb_id`` rejects the second insert.  There is
no cap on the number of draws.
"""

import logging
import random
from typing import List, Optional

from ..core.errors import NotFoundError
from ..models import Title
from ..repositories.title_repo import TitleRepo
from ..schemas.title import TitleRead, TitleUpsert


logger = logging.getLogger(__name__)

TMDB_ID_SPACE = 1_000_000


class TitleService:
    """Service for creating, reading, replacing and deleting titles."""

    def __init__(self, title_repo: TitleRepo, rng: Optional[random.Random] = None) -> None:
        self.title_repo = title_repo
        self.rng = rng or random.Random()

    def create(self, data: TitleUpsert) -> str:
        """Persist a new title and return its id."""
        title = Title(tmdb_id=self.generate_unique_tmdb_id())
        self._apply(title, data)
        title = self.title_repo.save(title)
        logger.info("Created title %s (tmdb_id=%s)", title.title_id, title.tmdb_id)
        return title.title_id

    def get(self, title_id: str) -> TitleRead:
        return self._to_read(self.get_entity(title_id))

    def get_all(self) -> List[TitleRead]:
        return [self._to_read(title) for title in self.title_repo.find_all()]

    def update(self, title_id: str, data: TitleUpsert) -> TitleUpsert:
        """Replace every mutable field of a title.

        ``tmdb_id`` is left as generated.  Returns the stored values in
        upsert form.
        """
        title = self.get_entity(title_id)
        self._apply(title, data)
        self.title_repo.save(title)
        logger.info("Updated title %s", title_id)
        return self._to_upsert(title)

    def delete(self, title_id: str) -> bool:
        title = self.get_entity(title_id)
        self.title_repo.delete(title)
        logger.info("Deleted title %s", title_id)
        return True

    def get_entity(self, title_id: str) -> Title:
        title = self.title_repo.find_by_id(title_id)
        if title is None:
            logger.warning("Title %s not found", title_id)
            raise NotFoundError("Title", title_id)
        return title

    def generate_unique_tmdb_id(self) -> str:
        """Draw random ids until one is not used by any stored title."""
        while True:
            tmdb_id = str(self.rng.randrange(TMDB_ID_SPACE))
            if not self.title_repo.exists_by_tmdb_id(tmdb_id):
                return tmdb_id
            logger.debug("tmdb_id %s already taken, drawing again", tmdb_id)

    @staticmethod
    def _apply(title: Title, data: TitleUpsert) -> None:
        title.title_name = data.title_name
        title.overview = data.overview
        title.keywords = list(data.keywords)
        title.genres = list(data.genres)
        title.actors = list(data.actors)
        title.director = list(data.director)
        title.release_year = data.release_year
        title.rating = data.rating
        title.image_url = data.image_url

    @staticmethod
    def _to_upsert(title: Title) -> TitleUpsert:
        return TitleUpsert(
            title_name=title.title_name,
            overview=title.overview,
            keywords=title.keywords,
            genres=title.genres,
            actors=title.actors,
            director=title.director,
            release_year=title.release_year,
            rating=title.rating,
            image_url=title.image_url,
        )

    @staticmethod
    def _to_read(title: Title) -> TitleRead:
        return TitleRead(
            id=title.title_id,
            tmdb_id=title.tmdb_id,
            title_name=title.title_name,
            overview=title.overview,
            keywords=title.keywords,
            genres=title.genres,
            actors=title.actors,
            director=title.director,
            release_year=title.release_year,
            rating=title.rating,
            image_url=title.image_url,
        )
