"""
User endpoints for API v1.

Provide registration, cookie based login and logout, the current
user's profile, listing, patching and deletion of users.  Updating or
deleting a user requires a valid ``jwt`` cookie.
"""

import logging
import sqlite3
from typing import Dict, List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from cinemovie_api.app.core.db import get_db
from cinemovie_api.app.core.security import (
    authenticate_user,
    clear_session_cookie,
    get_current_user,
    set_session_cookie,
)
from cinemovie_api.app.models import User
from cinemovie_api.app.repositories.user_repo import UserRepo
from cinemovie_api.app.schemas.user import UserAuth, UserProfile, UserRead, UserRegister, UserUpdate
from cinemovie_api.app.services.user_service import UserService


logger = logging.getLogger(__name__)

router = APIRouter()


def get_user_service(conn: sqlite3.Connection = Depends(get_db)) -> UserService:
    return UserService(UserRepo(conn))


@router.post("/login")
async def login(
    credentials: UserAuth,
    response: Response,
    conn: sqlite3.Connection = Depends(get_db),
) -> Dict[str, str]:
    """Check login and password and set the ``jwt`` session cookie."""
    user = authenticate_user(UserRepo(conn), credentials.login, credentials.password)
    if user is None:
        logger.warning("Failed login attempt for %s", credentials.login)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    set_session_cookie(response, user)
    logger.info("User %s logged in", user.user_id)
    return {}


@router.post("/logout")
async def logout(response: Response) -> Dict[str, str]:
    clear_session_cookie(response)
    return {"message": "Logged out"}


@router.get("/me", response_model=UserProfile)
async def read_profile(current_user: User = Depends(get_current_user)) -> UserProfile:
    """Return the profile (including email) of the logged in user."""
    return UserService.to_profile(current_user)


@router.post("/", response_model=str, status_code=status.HTTP_201_CREATED)
async def register_user(
    data: UserRegister,
    service: UserService = Depends(get_user_service),
    conn: sqlite3.Connection = Depends(get_db),
) -> str:
    """Register a new user and return its id.

    Responds with 409 if the email or the login is already taken.
    """
    user_id = service.create(data)
    conn.commit()
    return user_id


@router.get("/", response_model=List[UserRead])
async def list_users(service: UserService = Depends(get_user_service)) -> List[UserRead]:
    return service.get_all()


@router.get("/{user_id}", response_model=UserRead)
async def get_user(user_id: str, service: UserService = Depends(get_user_service)) -> UserRead:
    return service.get(user_id)


@router.put("/{user_id}", response_model=UserRead)
async def update_user(
    user_id: str,
    data: UserUpdate,
    service: UserService = Depends(get_user_service),
    current_user: User = Depends(get_current_user),
    conn: sqlite3.Connection = Depends(get_db),
) -> UserRead:
    """Patch login, password and/or display name.

    Fields omitted from the body keep their current value.
    """
    user = service.update(user_id, data)
    conn.commit()
    return user


@router.delete("/{user_id}", response_model=bool)
async def delete_user(
    user_id: str,
    service: UserService = Depends(get_user_service),
    current_user: User = Depends(get_current_user),
    conn: sqlite3.Connection = Depends(get_db),
) -> bool:
    deleted = service.delete(user_id)
    conn.commit()
    return deleted
