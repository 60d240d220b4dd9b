"""
Application package for the Cinemovie API.

Exposes ``create_app`` so that callers can build the FastAPI instance
(``from cinemovie_api.app import create_app``).
"""

from .main import create_app

__all__ = ["create_app"]
