"""SQLite access for the ``titles`` table.

List attributes (keywords, genres, actors, director) are stored as
JSON arrays in TEXT columns.
"""

import json
import sqlite3
import uuid
from typing import List, Optional

from ..models import Title


_COLUMNS = (
    "title_id, tmdb_id, title_name, overview, keywords, genres, actors, "
    "director, release_year, rating, image_url"
)


def _load_list(value: Optional[str]) -> List[str]:
    return json.loads(value) if value else []


def _to_title(row: sqlite3.Row) -> Title:
    return Title(
        title_id=row["title_id"],
        tmdb_id=row["tmdb_id"],
        title_name=row["title_name"],
        overview=row["overview"],
        keywords=_load_list(row["keywords"]),
        genres=_load_list(row["genres"]),
        actors=_load_list(row["actors"]),
        director=_load_list(row["director"]),
        release_year=row["release_year"],
        rating=row["rating"],
        image_url=row["image_url"],
    )


class TitleRepo:
    """Lookup and persistence of ``Title`` records."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def find_by_id(self, title_id: str) -> Optional[Title]:
        row = self.conn.execute(
            f"SELECT {_COLUMNS} FROM titles WHERE title_id = ?", (title_id,)
        ).fetchone()
        return _to_title(row) if row else None

    def find_all(self) -> List[Title]:
        rows = self.conn.execute(f"SELECT {_COLUMNS} FROM titles ORDER BY rowid").fetchall()
        return [_to_title(row) for row in rows]

    def exists_by_tmdb_id(self, tmdb_id: str) -> bool:
        row = self.conn.execute("SELECT 1 FROM titles WHERE tmdb_id = ?", (tmdb_id,)).fetchone()
        return row is not None

    def save(self, title: Title) -> Title:
        """Insert ``title`` if it has no id yet, otherwise update it in place."""
        values = (
            title.tmdb_id,
            title.title_name,
            title.overview,
            json.dumps(title.keywords),
            json.dumps(title.genres),
            json.dumps(title.actors),
            json.dumps(title.director),
            title.release_year,
            title.rating,
            title.image_url,
        )
        if title.title_id is None:
            title.title_id = str(uuid.uuid4())
            self.conn.execute(
                f"INSERT INTO titles ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (title.title_id,) + values,
            )
        else:
            self.conn.execute(
                """
                UPDATE titles
                SET tmdb_id = ?, title_name = ?, overview = ?, keywords = ?, genres = ?,
                    actors = ?, director = ?, release_year = ?, rating = ?, image_url = ?
                WHERE title_id = ?
                """,
                values + (title.title_id,),
            )
        return title

    def delete(self, title: Title) -> None:
        self.conn.execute("DELETE FROM titles WHERE title_id = ?", (title.title_id,))
