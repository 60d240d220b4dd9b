"""
Pydantic schemas for comments.

The rating range (0 to 10 inclusive) is not declared on the schema.
``CommentService`` checks it after both the user and the title have
been resolved.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class CommentCreate(BaseModel):
    """Schema for creating a new comment."""

    user_id: str = Field(..., description="Identifier of the commenting user")
    title_id: str = Field(..., description="Identifier of the commented title")
    rating: int = Field(..., description="Rating from 0 to 10")
    info: Optional[str] = Field(None, description="Free text")


class CommentUpdate(BaseModel):
    rating: int
    info: Optional[str] = None


class CommentRead(BaseModel):
    """Schema for reading a comment from the API."""

    id: str
    user_id: str
    title_id: str
    creation_date: datetime
    rating: int
    info: Optional[str] = None
