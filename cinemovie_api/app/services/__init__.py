"""
Service layer.

Each service encapsulates the business rules for one entity and is
constructed with the repositories it needs.  Services raise the
errors from ``core.errors`` and leave HTTP concerns to the API layer.
"""

from .comment_service import CommentService
from .favourite_service import FavouriteService
from .title_service import TitleService
from .user_service import UserService

__all__ = ["CommentService", "FavouriteService", "TitleService", "UserService"]
