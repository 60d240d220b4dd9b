"""SQLite access for the ``users`` table."""

import sqlite3
import uuid
from typing import List, Optional

from ..models import User


_COLUMNS = "user_id, login, email, password, name, state"


def _to_user(row: sqlite3.Row) -> User:
    return User(
        user_id=row["user_id"],
        login=row["login"],
        email=row["email"],
        password=row["password"],
        name=row["name"],
        state=bool(row["state"]),
    )


class UserRepo:
    """Lookup and persistence of ``User`` records."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def find_by_id(self, user_id: str) -> Optional[User]:
        row = self.conn.execute(
            f"SELECT {_COLUMNS} FROM users WHERE user_id = ?", (user_id,)
        ).fetchone()
        return _to_user(row) if row else None

    def find_by_login(self, login: str) -> Optional[User]:
        row = self.conn.execute(
            f"SELECT {_COLUMNS} FROM users WHERE login = ?", (login,)
        ).fetchone()
        return _to_user(row) if row else None

    def find_all(self) -> List[User]:
        rows = self.conn.execute(f"SELECT {_COLUMNS} FROM users ORDER BY rowid").fetchall()
        return [_to_user(row) for row in rows]

    def exists_by_login(self, login: str) -> bool:
        row = self.conn.execute("SELECT 1 FROM users WHERE login = ?", (login,)).fetchone()
        return row is not None

    def exists_by_email(self, email: str) -> bool:
        row = self.conn.execute("SELECT 1 FROM users WHERE email = ?", (email,)).fetchone()
        return row is not None

    def save(self, user: User) -> User:
        """Insert ``user`` if it has no id yet, otherwise update it in place."""
        if user.user_id is None:
            user.user_id = str(uuid.uuid4())
            self.conn.execute(
                f"INSERT INTO users ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?)",
                (user.user_id, user.login, user.email, user.password, user.name, int(user.state)),
            )
        else:
            self.conn.execute(
                "UPDATE users SET login = ?, email = ?, password = ?, name = ?, state = ? "
                "WHERE user_id = ?",
                (user.login, user.email, user.password, user.name, int(user.state), user.user_id),
            )
        return user

    def delete(self, user: User) -> None:
        self.conn.execute("DELETE FROM users WHERE user_id = ?", (user.user_id,))
