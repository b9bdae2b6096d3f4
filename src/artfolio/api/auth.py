"""JWT authentication for the HTTP surface.

Tokens are HS256-signed and carry the artist either as
``{"artist": {"id": "..."}}`` or as ``{"artist": "..."}``.
"""

from __future__ import annotations

import logging
import time
from typing import Any

import jwt
from fastapi import Request

from artfolio.errors import ArtfolioError

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


class AuthError(ArtfolioError):
    """Missing or invalid credentials."""


def issue_token(artist_id: str, secret: str, ttl_minutes: int = 60 * 24) -> str:
    """Sign a token identifying ``artist_id``."""
    iat = int(time.time())
    payload = {
        "artist": {"id": artist_id},
        "iat": iat,
        "exp": iat + ttl_minutes * 60,
    }
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def artist_from_payload(payload: Any) -> str | None:
    if not isinstance(payload, dict):
        return None
    artist = payload.get("artist")
    if isinstance(artist, dict):
        artist = artist.get("id")
    if isinstance(artist, str) and artist:
        return artist
    return None


def decode_token(token: str, secret: str) -> str:
    """Return the artist id in ``token``.

    Raises AuthError for a bad signature, an expired token or a payload
    without an artist.
    """
    try:
        payload = jwt.decode(token, secret, algorithms=[ALGORITHM])
    except jwt.PyJWTError as exc:
        logger.debug("Rejected token: %s", exc)
        raise AuthError("Token is not valid") from exc
    artist = artist_from_payload(payload)
    if artist is None:
        raise AuthError("Token is not valid")
    return artist


def _header_token(request: Request) -> str | None:
    config = request.app.state.config
    return request.headers.get(config.auth.header) or None


def current_artist(request: Request) -> str:
    """Dependency: the authenticated artist id."""
    token = _header_token(request)
    if token is None:
        raise AuthError("No token, authorization denied")
    return decode_token(token, request.app.state.config.auth.jwt_secret)


def optional_artist(request: Request) -> str | None:
    """Dependency: the artist id when a valid token is present, else None."""
    token = _header_token(request)
    if token is None:
        return None
    try:
        return decode_token(token, request.app.state.config.auth.jwt_secret)
    except AuthError:
        return None
