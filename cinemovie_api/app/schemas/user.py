"""
Pydantic models for user data.

``UserRead`` is the public projection and never carries the email or
password.  ``UserProfile`` adds the email and is only returned to the
user themself.  ``UserUpdate`` is a patch: a field left out (or sent
as ``null``) keeps its stored value.
"""

from typing import Optional

from pydantic import BaseModel, Field


class UserRegister(BaseModel):
    """Schema for registering a user."""

    email: str = Field(..., examples=["user@example.com"])
    password: str = Field(..., examples=["secret"])
    login: str = Field(..., examples=["moviefan"])
    name: Optional[str] = Field(None, examples=["Olena"])
    state: bool = Field(False, description="Account state flag")


class UserAuth(BaseModel):
    """Credentials for ``POST /users/login``."""

    login: str
    password: str


class UserUpdate(BaseModel):
    login: Optional[str] = None
    password: Optional[str] = None
    user_name: Optional[str] = None


class UserRead(BaseModel):
    """Schema for reading a user from the API."""

    user_id: str
    login: str
    user_name: Optional[str] = None
    state: bool


class UserProfile(UserRead):
    email: str
