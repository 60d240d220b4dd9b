"""
Pydantic models for titles.

The same ``TitleUpsert`` payload is used to create and to update a
title: an update replaces every field.  ``tmdb_id`` is generated by
the server and only appears on ``TitleRead``.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class TitleUpsert(BaseModel):
    """Schema for creating or fully replacing a title."""

    title_name: Optional[str] = Field(None, examples=["Inception"])
    overview: Optional[str] = None
    keywords: List[str] = Field(default_factory=list)
    genres: List[str] = Field(default_factory=list)
    actors: List[str] = Field(default_factory=list)
    director: List[str] = Field(default_factory=list)
    release_year: Optional[int] = Field(None, examples=[2010])
    rating: Optional[float] = Field(None, examples=[8.0])
    image_url: Optional[str] = None


class TitleRead(TitleUpsert):
    """Schema for reading a title from the API."""

    id: str
    tmdb_id: str
