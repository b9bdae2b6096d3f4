"""Batched, path-based content patches under optimistic concurrency.

A batch is validated entry by entry before anything is written; any
invalid entry or a stale expected version rejects the whole batch. An
accepted batch is one logical write and bumps ``version`` by exactly 1.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel

from artfolio.artifacts import DEFAULT_SITES_PREFIX, ArtifactStore
from artfolio.compiler.services import compile_site
from artfolio.content.models import CompiledSite, ContentState, PatchType, PatchUpdate
from artfolio.content.paths import has_index, set_value
from artfolio.content.store import ContentStateStore
from artfolio.editing.sanitize import sanitize_html_basic
from artfolio.editing.whitelist import accepts_type, is_allowed_path
from artfolio.errors import CompileFailedError, StorageError, ValidationError

logger = logging.getLogger(__name__)


class ValidatedUpdate(BaseModel):
    path: str
    type: PatchType
    value: str


class PatchResult(BaseModel):
    version: int
    compiled: CompiledSite | None = None
    compiled_json_path: str | None = None

    def to_wire(self) -> dict[str, Any]:
        if self.compiled is None:
            return {"version": self.version}
        return {
            "compiled": self.compiled.to_wire(),
            "version": self.version,
            "compiledJsonPath": self.compiled_json_path,
        }


def validate_update(update: PatchUpdate | dict[str, Any]) -> ValidatedUpdate:
    """Check one edit against the whitelist and return its storable form.

    Raises ValidationError for an empty or array-index path, a path
    outside the whitelist, a type the path does not accept, or a
    non-string value.
    """
    if isinstance(update, dict):
        update = PatchUpdate.model_validate(update)
    path = update.path
    if not isinstance(path, str) or not path:
        raise ValidationError("Invalid update path")
    if has_index(path):
        raise ValidationError(f"Array index paths not supported: {path}")
    if not is_allowed_path(path):
        raise ValidationError(f"Path not allowed: {path}")
    try:
        patch_type = PatchType(update.type)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid type for path {path}") from None
    if not accepts_type(path, patch_type):
        raise ValidationError(f"Invalid type for path {path}")

    value = update.value
    if value is None:
        value = ""
    if not isinstance(value, str):
        raise ValidationError(f"Value for {path} must be a string")
    if patch_type is PatchType.HTML:
        value = sanitize_html_basic(value)
    return ValidatedUpdate(path=path, type=patch_type, value=value)


def apply_patch(
    store: ContentStateStore,
    artifacts: ArtifactStore,
    artist: str,
    updates: Sequence[PatchUpdate | dict[str, Any]],
    *,
    expected_version: int | None = None,
    recompile: bool = False,
    sites_prefix: str = DEFAULT_SITES_PREFIX,
) -> PatchResult:
    """Apply a batch of edits to the artist's ContentState.

    Args:
        store: ContentState store.
        artifacts: Artifact store, used only when ``recompile`` is set.
        artist: Owning artist identity.
        updates: Ordered ``{path, type, value}`` edits; later entries for
            the same path win.
        expected_version: Optional optimistic-concurrency guard.
        recompile: Compile synchronously after the write, before returning.

    Returns:
        The new version, plus the compiled site when requested.

    Raises:
        ValidationError: An entry is invalid; nothing was written.
        VersionConflictError: ``expected_version`` is stale; nothing was
            written. Carries the server version.
        CompileFailedError: The edits were committed but ``recompile``
            failed. Carries the committed version.
    """
    if not updates:
        raise ValidationError("No updates provided")
    validated = [validate_update(u) for u in updates]

    def _apply(current: ContentState) -> ContentState:
        doc = current.to_wire()
        for update in validated:
            set_value(doc, update.path, update.value)
        return ContentState.model_validate(doc)

    store.get_or_create(artist)
    updated = store.mutate(artist, _apply, expected_version=expected_version)
    logger.info(
        "Applied %d content update(s) for %s, version now %d",
        len(validated),
        artist,
        updated.version,
    )

    if not recompile:
        return PatchResult(version=updated.version)
    try:
        result = compile_site(store, artifacts, artist, sites_prefix=sites_prefix)
    except StorageError as exc:
        logger.warning(
            "Edits for %s saved at version %d but compile failed: %s",
            artist,
            updated.version,
            exc,
        )
        raise CompileFailedError(str(exc), version=updated.version) from exc
    return PatchResult(
        version=updated.version,
        compiled=result.compiled,
        compiled_json_path=result.compiled_json_path,
    )
