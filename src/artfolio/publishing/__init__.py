"""Publishing - slugs and public site lookup."""

from artfolio.publishing.services import (
    PublicSite,
    SlugAvailability,
    check_slug_availability,
    publish,
    resolve_public_site,
    resolve_public_site_by_artist,
    validate_slug,
)

__all__ = [
    "PublicSite",
    "SlugAvailability",
    "check_slug_availability",
    "publish",
    "resolve_public_site",
    "resolve_public_site_by_artist",
    "validate_slug",
]
