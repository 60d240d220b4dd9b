"""
Main entrypoint for the Cinemovie API.

This module assembles the FastAPI application, sets up logging,
maps service errors onto HTTP responses and includes the versioned
routers.  The ``create_app`` function builds and configures the app,
which is then instantiated at module import time as ``app``, e.g.::

    uvicorn cinemovie_api.app.main:app --reload

The application title and version are provided via ``Settings`` from
``core.config``.
"""

import logging
import sqlite3
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.db import init_db
from .core.errors import ConflictError, InvalidInputError, NotFoundError
from .core.logging_config import setup_logging


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Creates the database file on first start and applies pending migrations.
    init_db()
    yield


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


async def conflict_handler(request: Request, exc: ConflictError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)})


async def invalid_input_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


async def integrity_error_handler(request: Request, exc: sqlite3.IntegrityError) -> JSONResponse:
    logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc)
    # A user or title that still has comments or favourites cannot be deleted.
    if "FOREIGN KEY" in str(exc):
        detail = "Record is still referenced by comments or favourites"
    else:
        # A concurrent request won the race for a unique login, email or
        # tmdb_id between the service check and the insert.
        detail = "Conflicting record already exists"
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": detail})


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Configures logging, CORS for the web frontend, error handlers and
    the ``/api/v1`` routes.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Logging first so that everything below can log.
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    # The frontend authenticates with a cookie, so credentials must be allowed.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(ConflictError, conflict_handler)
    app.add_exception_handler(InvalidInputError, invalid_input_handler)
    app.add_exception_handler(sqlite3.IntegrityError, integrity_error_handler)

    app.include_router(v1_router, prefix="/api/v1")

    return app


app = create_app()
