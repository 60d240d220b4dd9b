"""
Favourite title endpoints for API v1.

``GET /favs/{user_id}`` lists a user's favourites while
``DELETE /favs/{fav_id}`` removes a single favourite by its own id.
"""

import sqlite3
from typing import List

from fastapi import APIRouter, Depends, status

from cinemovie_api.app.core.db import get_db
from cinemovie_api.app.repositories.favourite_repo import FavouriteRepo
from cinemovie_api.app.repositories.title_repo import TitleRepo
from cinemovie_api.app.repositories.user_repo import UserRepo
from cinemovie_api.app.schemas.favourite import FavouriteCreate, FavouriteRead
from cinemovie_api.app.services.favourite_service import FavouriteService


router = APIRouter()


def get_favourite_service(conn: sqlite3.Connection = Depends(get_db)) -> FavouriteService:
    return FavouriteService(UserRepo(conn), TitleRepo(conn), FavouriteRepo(conn))


@router.post("/", response_model=str, status_code=status.HTTP_201_CREATED)
async def create_favourite(
    data: FavouriteCreate,
    service: FavouriteService = Depends(get_favourite_service),
    conn: sqlite3.Connection = Depends(get_db),
) -> str:
    fav_id = service.create(data)
    conn.commit()
    return fav_id


@router.get("/", response_model=List[FavouriteRead])
async def list_favourites(service: FavouriteService = Depends(get_favourite_service)) -> List[FavouriteRead]:
    return service.get_all()


@router.get("/{user_id}", response_model=List[FavouriteRead])
async def list_user_favourites(
    user_id: str,
    service: FavouriteService = Depends(get_favourite_service),
) -> List[FavouriteRead]:
    return service.get_all_by_user(user_id)


@router.delete("/{fav_id}", response_model=bool)
async def delete_favourite(
    fav_id: str,
    service: FavouriteService = Depends(get_favourite_service),
    conn: sqlite3.Connection = Depends(get_db),
) -> bool:
    deleted = service.delete(fav_id)
    conn.commit()
    return deleted
