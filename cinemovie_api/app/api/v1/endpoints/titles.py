"""
Title endpoints for API v1.

Anyone can list and read titles.  Creating, replacing and deleting a
title requires a valid ``jwt`` session cookie.
"""

import sqlite3
from typing import List

from fastapi import APIRouter, Depends, status

from cinemovie_api.app.core.db import get_db
from cinemovie_api.app.core.security import get_current_user
from cinemovie_api.app.models import User
from cinemovie_api.app.repositories.title_repo import TitleRepo
from cinemovie_api.app.schemas.title import TitleRead, TitleUpsert
from cinemovie_api.app.services.title_service import TitleService


router = APIRouter()


def get_title_service(conn: sqlite3.Connection = Depends(get_db)) -> TitleService:
    return TitleService(TitleRepo(conn))


@router.post("/", response_model=str, status_code=status.HTTP_201_CREATED)
async def create_title(
    data: TitleUpsert,
    service: TitleService = Depends(get_title_service),
    current_user: User = Depends(get_current_user),
    conn: sqlite3.Connection = Depends(get_db),
) -> str:
    """Create a title and return its id.  ``tmdb_id`` is generated."""
    title_id = service.create(data)
    conn.commit()
    return title_id


@router.get("/", response_model=List[TitleRead])
async def list_titles(service: TitleService = Depends(get_title_service)) -> List[TitleRead]:
    return service.get_all()


@router.get("/{title_id}", response_model=TitleRead)
async def get_title(title_id: str, service: TitleService = Depends(get_title_service)) -> TitleRead:
    return service.get(title_id)


@router.put("/{title_id}", response_model=TitleUpsert)
async def update_title(
    title_id: str,
    data: TitleUpsert,
    service: TitleService = Depends(get_title_service),
    current_user: User = Depends(get_current_user),
    conn: sqlite3.Connection = Depends(get_db),
) -> TitleUpsert:
    """Replace all fields of a title.

    The body must carry every field; anything omitted is reset to its
    default.
    """
    title = service.update(title_id, data)
    conn.commit()
    return title


@router.delete("/{title_id}", response_model=bool)
async def delete_title(
    title_id: str,
    service: TitleService = Depends(get_title_service),
    current_user: User = Depends(get_current_user),
    conn: sqlite3.Connection = Depends(get_db),
) -> bool:
    deleted = service.delete(title_id)
    conn.commit()
    return deleted
