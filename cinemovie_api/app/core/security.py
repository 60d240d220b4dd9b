"""
Session token helpers for the HTTP boundary.

This module implements a lightweight JSON Web Token (JWT) mechanism
using HMAC-SHA256 signatures and base64url encoding.  Tokens embed
the user id as the ``sub`` claim and an expiration timestamp
(``exp``).  The token travels in an http-only ``jwt`` cookie which is
issued by ``POST /users/login`` and cleared by ``POST /users/logout``.

Only the API layer touches credentials.  Services receive plain ids
and projections and never see cookies or tokens.
"""

import base64
import hashlib
import hmac
import json
import logging
import sqlite3
import time
from typing import Dict, Optional

from fastapi import Cookie, Depends, HTTPException, Response, status

from ..models import User
from ..repositories.user_repo import UserRepo
from .config import settings
from .db import get_db


logger = logging.getLogger(__name__)

COOKIE_NAME = "jwt"


def _b64_url_encode(data: bytes) -> str:
    """Base64-url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64-url encoded string, adding padding if necessary."""
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(data: Dict[str, str], expires_delta: Optional[int] = None) -> str:
    """Create a signed JWT token with the given payload.

    The payload is extended with an ``exp`` field representing the
    expiration time as a UNIX timestamp.

    Parameters
    ----------
    data : dict
        Claims to embed in the token (e.g. ``{"sub": "<user id>"}``).
    expires_delta : Optional[int]
        Lifetime of the token in seconds.  Defaults to
        ``settings.access_token_expire_minutes * 60``.

    Returns
    -------
    str
        A signed token of the form ``header.payload.signature``.
    """
    to_encode = data.copy()
    if expires_delta is None:
        expires_delta = settings.access_token_expire_minutes * 60
    to_encode["exp"] = int(time.time()) + expires_delta
    header = {"alg": "HS256", "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(to_encode, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature_b64 = _b64_url_encode(_sign(signing_input, settings.secret_key))
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def decode_access_token(token: str) -> Optional[Dict[str, str]]:
    """Verify and decode a JWT token.

    Returns the payload if the signature matches and the token has not
    expired, otherwise ``None``.
    """
    parts = token.split(".")
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    try:
        actual_sig = _b64_url_decode(signature_b64)
        payload_json = _b64_url_decode(payload_b64)
    except (ValueError, TypeError):
        return None
    if not hmac.compare_digest(_sign(signing_input, settings.secret_key), actual_sig):
        return None
    try:
        data = json.loads(payload_json.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        return None
    if not isinstance(data, dict) or data.get("exp") is None:
        return None
    if int(data["exp"]) < int(time.time()):
        return None
    return data


def authenticate_user(repo: UserRepo, login: str, password: str) -> Optional[User]:
    """Return the user owning ``login`` if ``password`` matches.

    Passwords are stored as given, so the comparison is a constant-time
    equality check on the plaintext.
    """
    user = repo.find_by_login(login)
    if user is None:
        return None
    if not hmac.compare_digest(user.password.encode("utf-8"), password.encode("utf-8")):
        return None
    return user


def set_session_cookie(response: Response, user: User) -> None:
    """Issue a fresh session cookie for ``user``."""
    max_age = settings.access_token_expire_minutes * 60
    token = create_access_token({"sub": user.user_id}, expires_delta=max_age)
    response.set_cookie(
        key=COOKIE_NAME,
        value=token,
        max_age=max_age,
        path="/",
        httponly=True,
        secure=False,
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    response.set_cookie(
        key=COOKIE_NAME,
        value="",
        max_age=0,
        path="/",
        httponly=True,
        secure=False,
    )


def get_current_user(
    jwt: Optional[str] = Cookie(None),
    conn: sqlite3.Connection = Depends(get_db),
) -> User:
    """Dependency that resolves the user behind the ``jwt`` cookie.

    Raises HTTP 401 if the cookie is missing, the token is invalid or
    expired, or the user it names no longer exists.
    """
    if not jwt:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    payload = decode_access_token(jwt)
    if not payload:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")
    user = UserRepo(conn).find_by_id(payload.get("sub"))
    if user is None:
        logger.warning("Token presented for missing user %s", payload.get("sub"))
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User no longer exists")
    return user
