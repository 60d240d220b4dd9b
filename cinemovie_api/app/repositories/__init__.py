"""
Storage collaborators.

One repository per entity.  Each is constructed with an open SQLite
connection and performs lookups, existence checks, saves and deletes
on its own table.  Repositories never commit: the owner of the
connection (the endpoint handler for HTTP requests) decides the
transaction boundary.
"""

from .comment_repo import CommentRepo
from .favourite_repo import FavouriteRepo
from .title_repo import TitleRepo
from .user_repo import UserRepo

__all__ = ["CommentRepo", "FavouriteRepo", "TitleRepo", "UserRepo"]
