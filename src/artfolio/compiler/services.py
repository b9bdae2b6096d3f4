"""Site compiler: ContentState -> CompiledSite -> artifact.

``build_compiled_site`` is a pure in-memory transform. ``compile_site``
runs it, writes the artifact in one put, and only then records the
artifact path on the ContentState, so a failed write leaves the state
untouched and the call can simply be retried.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel

from artfolio.artifacts import DEFAULT_SITES_PREFIX, ArtifactStore, sites_key
from artfolio.compiler.placeholders import (
    ABOUT_BIO,
    ABOUT_EXAMPLE_SECTIONS,
    ABOUT_TITLE,
    PlaceholderBundle,
    explore_text_for,
    placeholders_for,
)
from artfolio.content.models import ContentState, CompiledSite, SurveyData
from artfolio.content.store import ContentStateStore
from artfolio.errors import NotFoundError, StorageError

logger = logging.getLogger(__name__)

DEFAULT_HOME_LAYOUT = "grid"


class CompileResult(BaseModel):
    compiled: CompiledSite
    compiled_json_path: str


def _persisted_fields(persisted: dict[str, Any]) -> dict[str, Any]:
    """Drop unset fields so they never mask a placeholder."""
    return {k: v for k, v in persisted.items() if v is not None}


def build_home_content(
    layout: str | None,
    bundle: PlaceholderBundle,
    persisted: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Placeholder-derived home shape for ``layout`` with persisted edits on top.

    hero fills title/subtitle/description, split fills
    title/description/explore_text, grid takes nothing from the bundle.
    Persisted values win field by field.
    """
    layout = layout or DEFAULT_HOME_LAYOUT
    home: dict[str, Any] = {"imageUrl": ""}
    if layout == "hero":
        home.update(title=bundle.title, subtitle=bundle.subtitle, description=bundle.description)
    elif layout == "split":
        home.update(
            title=bundle.title,
            description=bundle.description,
            explore_text=explore_text_for(bundle),
        )
    home.update(_persisted_fields(persisted or {}))
    return home


def build_about_content(
    survey: SurveyData,
    persisted: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Generic about copy, one example block per enabled section, then edits."""
    about: dict[str, Any] = {"imageUrl": "", "title": ABOUT_TITLE, "bio": ABOUT_BIO}
    for section, enabled in survey.about_sections.to_wire().items():
        if enabled:
            about[section] = ABOUT_EXAMPLE_SECTIONS.get(section, "")
    about.update(_persisted_fields(persisted or {}))
    return about


def build_compiled_site(state: ContentState, *, now: datetime | None = None) -> CompiledSite:
    """Merge survey data, placeholders and persisted edits into a CompiledSite."""
    survey = state.survey_data
    layout = survey.layouts.homepage or DEFAULT_HOME_LAYOUT
    bundle = placeholders_for(survey.medium)
    survey_wire = survey.to_wire()

    home = build_home_content(layout, bundle, state.home_content.to_wire())
    if layout == "grid":
        home["homeSelections"] = survey_wire["homeSelections"]
    about = build_about_content(survey, state.about_content.to_wire())

    return CompiledSite(
        survey_data=survey_wire,
        home_content=home,
        about_content=about,
        generated_at=now or datetime.now(tz=UTC),
        version=state.version,
    )


def compiled_json_path(artist: str, prefix: str = DEFAULT_SITES_PREFIX) -> str:
    return "/" + sites_key(artist, prefix)


def compile_site(
    store: ContentStateStore,
    artifacts: ArtifactStore,
    artist: str,
    *,
    sites_prefix: str = DEFAULT_SITES_PREFIX,
) -> CompileResult:
    """Compile the artist's site, write the artifact and record it.

    Raises NotFoundError if the artist has no ContentState and
    StorageError if the artifact write fails.
    """
    state = store.get(artist)
    if state is None:
        raise NotFoundError("Website state not found")

    compiled = build_compiled_site(state)
    body = json.dumps(compiled.to_wire(), indent=2).encode("utf-8")
    artifacts.put(sites_key(artist, sites_prefix), body, "application/json")

    path = compiled_json_path(artist, sites_prefix)

    def _record(current: ContentState) -> None:
        current.compiled_json_path = path
        current.compiled_at = compiled.generated_at
        current.survey_completed = True

    store.mutate(artist, _record, bump_version=False)
    logger.info(
        "Compiled site for %s at version %d (home keys=%s, about keys=%s)",
        artist,
        compiled.version,
        sorted(compiled.home_content),
        sorted(compiled.about_content),
    )
    return CompileResult(compiled=compiled, compiled_json_path=path)


def load_compiled_site(
    artifacts: ArtifactStore,
    artist: str,
    *,
    sites_prefix: str = DEFAULT_SITES_PREFIX,
) -> CompiledSite | None:
    """Read back the artist's compiled artifact, or None if never compiled."""
    raw = artifacts.get(sites_key(artist, sites_prefix))
    if raw is None:
        return None
    try:
        return CompiledSite.model_validate(json.loads(raw))
    except ValueError as exc:
        raise StorageError(f"Compiled artifact for {artist} is unreadable: {exc}") from exc
