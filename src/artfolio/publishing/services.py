"""Slug assignment, availability checks and public site resolution.

Publishing only flips ``isPublished`` and assigns ``publishedUrl``; it
never compiles. Re-publishing a slug the artist already owns is a no-op
success; a slug owned by another artist is a ConflictError raised by the
store's uniqueness check.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from pydantic import BaseModel

from artfolio.content.models import ContentState
from artfolio.content.store import ContentStateStore
from artfolio.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

SLUG_MIN_LENGTH = 3
SLUG_MAX_LENGTH = 30
_SLUG_RE = re.compile(r"[a-z0-9]+(?:-[a-z0-9]+)*")


class SlugAvailability(BaseModel):
    slug: str
    available: bool
    reason: str | None = None  # "invalid", "taken", "own"

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class PublicSite(BaseModel):
    artist_id: str
    slug: str | None
    compiled_json_path: str | None
    is_published: bool = True

    def to_wire(self) -> dict[str, Any]:
        return {
            "artistId": self.artist_id,
            "slug": self.slug,
            "compiledJsonPath": self.compiled_json_path,
            "isPublished": self.is_published,
        }


def is_valid_slug(slug: object) -> bool:
    """Lowercase alphanumerics and single inner hyphens, 3-30 chars."""
    return (
        isinstance(slug, str)
        and SLUG_MIN_LENGTH <= len(slug) <= SLUG_MAX_LENGTH
        and _SLUG_RE.fullmatch(slug) is not None
    )


def validate_slug(slug: object) -> str:
    if not isinstance(slug, str) or not is_valid_slug(slug):
        raise ValidationError("Invalid slug")
    return slug


def normalize_slug(raw: str) -> str:
    """Best-effort slug suggestion: lowercase, hyphenate, collapse, trim."""
    slug = raw.lower()
    slug = re.sub(r"[^a-z0-9-]", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def publish(store: ContentStateStore, artist: str, slug: object) -> ContentState:
    """Publish the artist's site under ``slug``.

    Raises ValidationError for a malformed slug, NotFoundError if the
    artist has no ContentState and ConflictError if another artist owns
    the slug.
    """
    slug = validate_slug(slug)
    if not store.exists(artist):
        raise NotFoundError("Website state not found")

    def _assign(current: ContentState) -> None:
        current.is_published = True
        current.published_url = slug

    state = store.mutate(artist, _assign, bump_version=False)
    if state.compiled_json_path is None:
        logger.warning("Published %s as %r before any compile", artist, slug)
    else:
        logger.info("Published %s as %r", artist, slug)
    return state


def check_slug_availability(
    store: ContentStateStore,
    raw_slug: str,
    artist: str | None = None,
) -> SlugAvailability:
    """Normalise ``raw_slug`` and report whether ``artist`` could claim it."""
    slug = normalize_slug(raw_slug)
    if not is_valid_slug(slug):
        return SlugAvailability(slug=slug, available=False, reason="invalid")
    owner = store.find_by_slug(slug)
    if owner is None:
        return SlugAvailability(slug=slug, available=True)
    if artist is not None and owner.artist == artist:
        return SlugAvailability(slug=slug, available=True, reason="own")
    return SlugAvailability(slug=slug, available=False, reason="taken")


def resolve_public_site(store: ContentStateStore, raw_slug: str) -> PublicSite:
    """Find the published site behind a slug."""
    slug = normalize_slug(raw_slug)
    if not is_valid_slug(slug):
        raise ValidationError("Invalid slug")
    state = store.find_by_slug(slug)
    if state is None or not state.is_published:
        raise NotFoundError("Site not found")
    return PublicSite(
        artist_id=state.artist,
        slug=state.published_url,
        compiled_json_path=state.compiled_json_path,
    )


def resolve_public_site_by_artist(store: ContentStateStore, artist: str) -> PublicSite:
    if not artist.strip():
        raise ValidationError("Artist id required")
    state = store.get(artist)
    if state is None or not state.is_published:
        raise NotFoundError("Site not found")
    return PublicSite(
        artist_id=state.artist,
        slug=state.published_url,
        compiled_json_path=state.compiled_json_path,
    )
