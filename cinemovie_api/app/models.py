"""
Domain entities.

Plain dataclasses mapped to and from SQLite rows by the repositories.
Identifiers are ``None`` until the entity is first saved, at which
point the repository assigns a UUID4 string.  Comments and favourites
reference their user and title by id; the references are fixed at
creation.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass
class User:
    login: str
    email: str
    password: str
    name: Optional[str] = None
    state: bool = False
    user_id: Optional[str] = None


@dataclass
class Title:
    tmdb_id: str
    title_name: Optional[str] = None
    overview: Optional[str] = None
    keywords: List[str] = field(default_factory=list)
    genres: List[str] = field(default_factory=list)
    actors: List[str] = field(default_factory=list)
    director: List[str] = field(default_factory=list)
    release_year: Optional[int] = None
    rating: Optional[float] = None
    image_url: Optional[str] = None
    title_id: Optional[str] = None


@dataclass
class Comment:
    user_id: str
    title_id: str
    rating: int
    creation_date: datetime
    info: Optional[str] = None
    comment_id: Optional[str] = None


@dataclass
class FavouriteTitle:
    user_id: str
    title_id: str
    fav_id: Optional[str] = None
