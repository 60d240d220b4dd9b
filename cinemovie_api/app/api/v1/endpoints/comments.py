"""
Comment endpoints for API v1.

Comments can be listed globally, per user or per title.  Ratings
outside ``0..10`` are rejected with 400 once the referenced user and
title are known to exist.
"""

import sqlite3
from typing import List

from fastapi import APIRouter, Depends, status

from cinemovie_api.app.core.db import get_db
from cinemovie_api.app.repositories.comment_repo import CommentRepo
from cinemovie_api.app.repositories.title_repo import TitleRepo
from cinemovie_api.app.repositories.user_repo import UserRepo
from cinemovie_api.app.schemas.comment import CommentCreate, CommentRead, CommentUpdate
from cinemovie_api.app.services.comment_service import CommentService


router = APIRouter()


def get_comment_service(conn: sqlite3.Connection = Depends(get_db)) -> CommentService:
    return CommentService(CommentRepo(conn), UserRepo(conn), TitleRepo(conn))


@router.post("/", response_model=str, status_code=status.HTTP_201_CREATED)
async def create_comment(
    data: CommentCreate,
    service: CommentService = Depends(get_comment_service),
    conn: sqlite3.Connection = Depends(get_db),
) -> str:
    comment_id = service.create(data)
    conn.commit()
    return comment_id


@router.get("/", response_model=List[CommentRead])
async def list_comments(service: CommentService = Depends(get_comment_service)) -> List[CommentRead]:
    return service.get_all()


@router.get("/user/{user_id}", response_model=List[CommentRead])
async def list_user_comments(
    user_id: str,
    service: CommentService = Depends(get_comment_service),
) -> List[CommentRead]:
    """All comments written by a user; 404 if the user does not exist."""
    return service.get_all_by_user(user_id)


@router.get("/title/{title_id}", response_model=List[CommentRead])
async def list_title_comments(
    title_id: str,
    service: CommentService = Depends(get_comment_service),
) -> List[CommentRead]:
    """All comments on a title; 404 if the title does not exist."""
    return service.get_all_by_title(title_id)


@router.get("/{comment_id}", response_model=CommentRead)
async def get_comment(comment_id: str, service: CommentService = Depends(get_comment_service)) -> CommentRead:
    return service.get(comment_id)


@router.put("/{comment_id}", response_model=CommentRead)
async def update_comment(
    comment_id: str,
    data: CommentUpdate,
    service: CommentService = Depends(get_comment_service),
    conn: sqlite3.Connection = Depends(get_db),
) -> CommentRead:
    comment = service.update(comment_id, data)
    conn.commit()
    return comment


@router.delete("/{comment_id}", response_model=bool)
async def delete_comment(
    comment_id: str,
    service: CommentService = Depends(get_comment_service),
    conn: sqlite3.Connection = Depends(get_db),
) -> bool:
    deleted = service.delete(comment_id)
    conn.commit()
    return deleted
