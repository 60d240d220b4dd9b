"""Pydantic schemas for favourite titles."""

from pydantic import BaseModel


class FavouriteCreate(BaseModel):
    title_id: str
    user_id: str


class FavouriteRead(BaseModel):
    fav_id: str
    title_id: str
    user_id: str
