"""
Top-level router for version 1 of the API.

This router aggregates the per-entity routers (users, titles,
comments, favourites) under a unified prefix.  When a new entity is
introduced, include its router here.
"""

from fastapi import APIRouter

from .endpoints import comments, favourites, titles, users

router = APIRouter()

router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(titles.router, prefix="/titles", tags=["titles"])
router.include_router(comments.router, prefix="/comments", tags=["comments"])
# Favourites keep the short ``/favs`` prefix used by the web frontend.
router.include_router(favourites.router, prefix="/favs", tags=["favourites"])
