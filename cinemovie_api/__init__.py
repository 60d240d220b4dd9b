"""
Cinemovie API.

A REST backend for cataloguing movies: users, titles, comments and
per-user favourites, stored in SQLite and served with FastAPI.
"""

__version__ = "1.0.0"
