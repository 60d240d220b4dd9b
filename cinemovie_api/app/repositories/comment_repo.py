"""SQLite access for the ``comments`` table."""

import sqlite3
import uuid
from datetime import datetime
from typing import List, Optional

from ..models import Comment, Title, User


_COLUMNS = "comment_id, user_id, title_id, rating, info, creation_date"


def _to_comment(row: sqlite3.Row) -> Comment:
    return Comment(
        comment_id=row["comment_id"],
        user_id=row["user_id"],
        title_id=row["title_id"],
        rating=row["rating"],
        info=row["info"],
        creation_date=datetime.fromisoformat(row["creation_date"]),
    )


class CommentRepo:
    """Lookup and persistence of ``Comment`` records."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def find_by_id(self, comment_id: str) -> Optional[Comment]:
        row = self.conn.execute(
            f"SELECT {_COLUMNS} FROM comments WHERE comment_id = ?", (comment_id,)
        ).fetchone()
        return _to_comment(row) if row else None

    def find_all(self) -> List[Comment]:
        rows = self.conn.execute(f"SELECT {_COLUMNS} FROM comments ORDER BY rowid").fetchall()
        return [_to_comment(row) for row in rows]

    def find_all_by_user(self, user: User) -> List[Comment]:
        rows = self.conn.execute(
            f"SELECT {_COLUMNS} FROM comments WHERE user_id = ? ORDER BY rowid", (user.user_id,)
        ).fetchall()
        return [_to_comment(row) for row in rows]

    def find_all_by_title(self, title: Title) -> List[Comment]:
        rows = self.conn.execute(
            f"SELECT {_COLUMNS} FROM comments WHERE title_id = ? ORDER BY rowid", (title.title_id,)
        ).fetchall()
        return [_to_comment(row) for row in rows]

    def save(self, comment: Comment) -> Comment:
        """Insert ``comment`` if it has no id yet, otherwise update it in place.

        The user and title references are never rewritten on update.
        """
        if comment.comment_id is None:
            comment.comment_id = str(uuid.uuid4())
            self.conn.execute(
                f"INSERT INTO comments ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?)",
                (
                    comment.comment_id,
                    comment.user_id,
                    comment.title_id,
                    comment.rating,
                    comment.info,
                    comment.creation_date.isoformat(),
                ),
            )
        else:
            self.conn.execute(
                "UPDATE comments SET rating = ?, info = ?, creation_date = ? WHERE comment_id = ?",
                (comment.rating, comment.info, comment.creation_date.isoformat(), comment.comment_id),
            )
        return comment

    def delete(self, comment: Comment) -> None:
        self.conn.execute("DELETE FROM comments WHERE comment_id = ?", (comment.comment_id,))
