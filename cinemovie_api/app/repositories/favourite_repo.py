"""SQLite access for the ``favourite_titles`` table."""

import sqlite3
import uuid
from typing import List, Optional

from ..models import FavouriteTitle, User


def _to_favourite(row: sqlite3.Row) -> FavouriteTitle:
    return FavouriteTitle(fav_id=row["fav_id"], user_id=row["user_id"], title_id=row["title_id"])


class FavouriteRepo:
    """Lookup and persistence of ``FavouriteTitle`` records."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def find_by_id(self, fav_id: str) -> Optional[FavouriteTitle]:
        row = self.conn.execute(
            "SELECT fav_id, user_id, title_id FROM favourite_titles WHERE fav_id = ?", (fav_id,)
        ).fetchone()
        return _to_favourite(row) if row else None

    def find_all(self) -> List[FavouriteTitle]:
        rows = self.conn.execute(
            "SELECT fav_id, user_id, title_id FROM favourite_titles ORDER BY rowid"
        ).fetchall()
        return [_to_favourite(row) for row in rows]

    def find_all_by_user(self, user: User) -> List[FavouriteTitle]:
        rows = self.conn.execute(
            "SELECT fav_id, user_id, title_id FROM favourite_titles WHERE user_id = ? ORDER BY rowid",
            (user.user_id,),
        ).fetchall()
        return [_to_favourite(row) for row in rows]

    def exists_by_id(self, fav_id: str) -> bool:
        row = self.conn.execute("SELECT 1 FROM favourite_titles WHERE fav_id = ?", (fav_id,)).fetchone()
        return row is not None

    def save(self, fav: FavouriteTitle) -> FavouriteTitle:
        # Favourites are never updated, only created and deleted.
        if fav.fav_id is None:
            fav.fav_id = str(uuid.uuid4())
            self.conn.execute(
                "INSERT INTO favourite_titles (fav_id, user_id, title_id) VALUES (?, ?, ?)",
                (fav.fav_id, fav.user_id, fav.title_id),
            )
        return fav

    def delete_by_id(self, fav_id: str) -> None:
        self.conn.execute("DELETE FROM favourite_titles WHERE fav_id = ?", (fav_id,))
