"""ContentState lifecycle: auto-create, survey merge, start over."""

from __future__ import annotations

import logging
from typing import Any

import pydantic

from artfolio.artifacts import DEFAULT_SITES_PREFIX, ArtifactStore, sites_key
from artfolio.content.models import (
    MAX_SELECTION_ITEMS,
    AboutContent,
    ContentState,
    HomeContent,
    SurveyData,
)
from artfolio.content.store import ContentStateStore
from artfolio.errors import NotFoundError, StorageError, ValidationError

logger = logging.getLogger(__name__)

ABOUT_LAYOUTS = frozenset({"split", "vertical"})


def get_state(store: ContentStateStore, artist: str) -> ContentState:
    """Return the artist's ContentState, creating a default one on first access."""
    return store.get_or_create(artist)


# ---------------------------------------------------------------------------
# Survey
# ---------------------------------------------------------------------------


def sanitize_artwork_item(item: Any) -> dict[str, str] | None:
    """Normalise one selection entry to ``{_id?, title?, imageUrl?}``."""
    if isinstance(item, str):
        return {"_id": item}
    if isinstance(item, dict):
        return {
            key: item[key]
            for key in ("_id", "title", "imageUrl")
            if isinstance(item.get(key), str)
        }
    return None


def sanitize_artwork_list(items: Any) -> list[dict[str, str]]:
    """Keep well-formed entries, in order, up to MAX_SELECTION_ITEMS."""
    out: list[dict[str, str]] = []
    if not isinstance(items, list):
        return out
    for item in items:
        cleaned = sanitize_artwork_item(item)
        if cleaned is not None:
            out.append(cleaned)
        if len(out) >= MAX_SELECTION_ITEMS:
            break
    return out


def sanitize_works_selections(selections: Any) -> dict[str, list[dict[str, str]]]:
    if not isinstance(selections, dict):
        return {}
    return {str(folder): sanitize_artwork_list(items) for folder, items in selections.items()}


def normalize_survey(payload: dict[str, Any]) -> dict[str, Any]:
    """Coerce a wizard payload into the stored survey shape.

    A logo object contributes its ``dataUrl``; an unknown about layout
    is dropped; selection lists, when present, are sanitised.
    """
    normalized = dict(payload)
    logo = normalized.get("logo")
    if isinstance(logo, dict):
        normalized["logo"] = logo.get("dataUrl")

    layouts = normalized.get("layouts")
    if isinstance(layouts, dict) and layouts.get("about") not in (None, *ABOUT_LAYOUTS):
        layouts = dict(layouts)
        del layouts["about"]
        normalized["layouts"] = layouts

    if "worksSelections" in normalized:
        normalized["worksSelections"] = sanitize_works_selections(normalized["worksSelections"])
    if "homeSelections" in normalized:
        normalized["homeSelections"] = sanitize_artwork_list(normalized["homeSelections"])
    return normalized


def update_survey(store: ContentStateStore, artist: str, payload: dict[str, Any]) -> ContentState:
    """Shallow-merge survey answers into the stored survey. Last write wins.

    Top-level survey keys in ``payload`` replace the stored ones whole;
    keys not mentioned are kept. Bumps ``version``.

    Raises ValidationError if the merged survey does not validate.
    """
    if not isinstance(payload, dict):
        raise ValidationError("Survey payload must be an object")
    normalized = normalize_survey(payload)

    def _merge(current: ContentState) -> None:
        merged = {**current.survey_data.to_wire(), **normalized}
        try:
            current.survey_data = SurveyData.model_validate(merged)
        except pydantic.ValidationError as exc:
            raise ValidationError(f"Invalid survey data: {exc.error_count()} error(s)") from exc

    store.get_or_create(artist)
    state = store.mutate(artist, _merge)
    logger.info("Updated survey for %s (medium=%s)", artist, state.survey_data.medium)
    return state


# ---------------------------------------------------------------------------
# Reset
# ---------------------------------------------------------------------------


def start_over(
    store: ContentStateStore,
    artifacts: ArtifactStore,
    artist: str,
    *,
    sites_prefix: str = DEFAULT_SITES_PREFIX,
) -> ContentState:
    """Drop the compiled artifact and send the artist back to the survey.

    Clears persisted home/about edits and restores the initial version.
    The ContentState document itself survives.
    """
    state = store.get(artist)
    if state is None:
        raise NotFoundError("Website state not found")

    if state.compiled_json_path:
        try:
            artifacts.delete(sites_key(artist, sites_prefix))
        except StorageError:
            logger.warning("Failed to delete compiled site for %s", artist, exc_info=True)

    def _reset(current: ContentState) -> None:
        current.compiled_json_path = None
        current.compiled_at = None
        current.survey_completed = False
        current.home_content = HomeContent()
        current.about_content = AboutContent()

    return store.mutate(artist, _reset, reset_version=True)


def delete_state(store: ContentStateStore, artist: str) -> None:
    """Hard-delete the artist's ContentState."""
    if not store.delete(artist):
        logger.info("No content state to delete for %s", artist)
