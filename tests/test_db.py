import sqlite3

import pytest

from cinemovie_api.app.core import db
from cinemovie_api.app.core.db import MIGRATIONS, apply_migrations, get_connection
from cinemovie_api.app.models import FavouriteTitle, User


def test_migrations_are_applied_once(conn):
    latest = MIGRATIONS[-1][0]

    assert apply_migrations(conn) == latest
    versions = [row["version"] for row in conn.execute("SELECT version FROM migrations")]
    assert versions == [v for v, _ in MIGRATIONS]


def test_init_db_creates_database_file(tmp_path, monkeypatch):
    path = tmp_path / "fresh.db"
    monkeypatch.setattr(db.settings, "database_url", str(path))

    db.init_db()

    conn = get_connection(str(path))
    try:
        tables = {row["name"] for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}
    finally:
        conn.close()
    assert {"users", "titles", "comments", "favourite_titles"} <= tables


def test_relative_database_url_resolves_to_absolute_path(monkeypatch):
    monkeypatch.setattr(db.settings, "database_url", "relative.db")
    path = db.get_database_path()
    assert path.endswith("relative.db")
    assert path.startswith("/")


def test_login_uniqueness_is_enforced_by_store(user_repo):
    user_repo.save(User(login="dup", email="one@a.com", password="p"))
    with pytest.raises(sqlite3.IntegrityError):
        user_repo.save(User(login="dup", email="two@a.com", password="p"))


def test_foreign_keys_are_enforced(favourite_repo):
    with pytest.raises(sqlite3.IntegrityError):
        favourite_repo.save(FavouriteTitle(user_id="ghost", title_id="ghost"))


def test_get_db_rolls_back_on_error(tmp_path, monkeypatch):
    path = tmp_path / "tx.db"
    monkeypatch.setattr(db.settings, "database_url", str(path))
    db.init_db()

    gen = db.get_db()
    conn = next(gen)
    conn.execute(
        "INSERT INTO users (user_id, login, email, password) VALUES ('u1', 'l', 'e', 'p')"
    )
    with pytest.raises(RuntimeError):
        gen.throw(RuntimeError("boom"))

    check = get_connection(str(path))
    try:
        assert check.execute("SELECT COUNT(*) AS n FROM users").fetchone()["n"] == 0
    finally:
        check.close()


def test_get_db_discards_uncommitted_work(tmp_path, monkeypatch):
    path = tmp_path / "tx.db"
    monkeypatch.setattr(db.settings, "database_url", str(path))
    db.init_db()

    gen = db.get_db()
    conn = next(gen)
    conn.execute(
        "INSERT INTO users (user_id, login, email, password) VALUES ('u1', 'l', 'e', 'p')"
    )
    with pytest.raises(StopIteration):
        next(gen)

    check = get_connection(str(path))
    try:
        assert check.execute("SELECT COUNT(*) AS n FROM users").fetchone()["n"] == 0
    finally:
        check.close()
