"""Editable content paths and the value types each one accepts."""

from __future__ import annotations

from artfolio.content.models import PatchType

TEXT_ONLY = frozenset({PatchType.TEXT})
HTML_ONLY = frozenset({PatchType.HTML})
IMAGE = frozenset({PatchType.IMAGE_URL, PatchType.TEXT})

ALLOWED_PATHS: dict[str, frozenset[PatchType]] = {
    "homeContent.title": TEXT_ONLY,
    "homeContent.subtitle": TEXT_ONLY,
    "homeContent.description": TEXT_ONLY,
    "homeContent.explore_text": TEXT_ONLY,
    "homeContent.imageUrl": IMAGE,
    "aboutContent.title": TEXT_ONLY,
    "aboutContent.bio": HTML_ONLY,
    "aboutContent.imageUrl": IMAGE,
    "aboutContent.contactInfo": HTML_ONLY,
    "aboutContent.education": HTML_ONLY,
    "aboutContent.workExperience": HTML_ONLY,
    "aboutContent.recentlyFeatured": HTML_ONLY,
    "aboutContent.selectedExhibition": HTML_ONLY,
    "aboutContent.selectedPress": HTML_ONLY,
    "aboutContent.selectedAwards": HTML_ONLY,
    "aboutContent.selectedProjects": HTML_ONLY,
}


def is_allowed_path(path: str) -> bool:
    return path in ALLOWED_PATHS


def accepts_type(path: str, patch_type: PatchType) -> bool:
    return patch_type in ALLOWED_PATHS.get(path, frozenset())
