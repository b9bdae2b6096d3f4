"""Renderer session: one instance per editing session.

Owns the loaded CompiledSite, the server version it was compiled at,
and the dirty map of unsaved edits. Controllers receive the instance
explicitly instead of reaching for shared module state.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Literal

from bs4 import BeautifulSoup
from pydantic import BaseModel, ConfigDict

from artfolio.content.models import CompiledSite, PatchType
from artfolio.content.paths import set_value
from artfolio.errors import (
    ArtfolioError,
    CompileFailedError,
    ValidationError,
    VersionConflictError,
)
from artfolio.renderer.bindings import apply_data_bindings, apply_data_styles, mark_editable
from artfolio.renderer.client import PatchTransport
from artfolio.renderer.pages import DEFAULT_EMPTY_MESSAGE, PageState, render_page
from artfolio.renderer.templates import TemplateStore

logger = logging.getLogger(__name__)

SaveStatus = Literal["saved", "conflict", "failed", "skipped"]


class DirtyEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: PatchType
    value: Any


class SaveOutcome(BaseModel):
    """Result of one save attempt, surfaced to the user as a notification."""

    status: SaveStatus
    version: int
    sent: int = 0
    message: str = ""


def canonical_patch_type(raw: str | PatchType) -> PatchType:
    """Accept any casing of the binding type (``imageurl`` -> ``imageUrl``)."""
    lowered = str(raw).lower()
    for patch_type in PatchType:
        if patch_type.value.lower() == lowered:
            return patch_type
    raise ValidationError(f"Unknown content type: {raw}")


class Renderer:
    """Renders pages from a CompiledSite and saves edits back through a transport."""

    def __init__(
        self,
        templates: TemplateStore,
        transport: PatchTransport | None = None,
        *,
        empty_message: str = DEFAULT_EMPTY_MESSAGE,
        editable: bool = True,
    ) -> None:
        self.templates = templates
        self.transport = transport
        self.empty_message = empty_message
        self.editable = editable
        self.compiled: dict[str, Any] = {}
        self.version = 0
        self._dirty: dict[str, DirtyEntry] = {}
        self._is_saving = False

    # ── Loading ──────────────────────────────────────────────────

    def load(self, compiled: CompiledSite | dict[str, Any]) -> None:
        """Replace the local CompiledSite and drop any unsaved edits."""
        if isinstance(compiled, CompiledSite):
            data = compiled.to_wire()
        else:
            data = copy.deepcopy(dict(compiled))
        self.compiled = data
        version = data.get("version")
        self.version = version if isinstance(version, int) else 0
        self._dirty = {}

    def refresh(self) -> None:
        if self.transport is None:
            raise ArtfolioError("No transport configured")
        self.load(self.transport.fetch_compiled())

    # ── Rendering ────────────────────────────────────────────────

    def render(self, page: str, layout: str | None, state: PageState | None = None) -> str:
        """Render ``page`` and return markup with styles and bindings applied."""
        markup = render_page(
            self.templates,
            page,
            layout,
            self.compiled,
            state,
            empty_message=self.empty_message,
        )
        soup = BeautifulSoup(markup, "html.parser")
        apply_data_styles(soup)
        apply_data_bindings(soup, self.compiled)
        if self.editable:
            mark_editable(soup)
        return str(soup)

    # ── Editing ──────────────────────────────────────────────────

    @property
    def dirty(self) -> dict[str, DirtyEntry]:
        return dict(self._dirty)

    @property
    def is_saving(self) -> bool:
        return self._is_saving

    def record_edit(self, path: str, patch_type: str | PatchType, value: Any) -> None:
        """Record a user edit locally. The last edit to a path wins."""
        entry = DirtyEntry(type=canonical_patch_type(patch_type), value=value)
        set_value(self.compiled, path, value)
        self._dirty[path] = entry

    def save(self) -> SaveOutcome:
        """Send the current dirty map as one patch batch.

        Entries edited again while the request was in flight stay dirty.
        On any failure the whole dirty map is kept for a retry, except when
        the server committed the edits and only the rebuild failed: then
        the committed version is adopted and the sent entries are dropped.
        """
        if self._is_saving or not self._dirty:
            return SaveOutcome(status="skipped", version=self.version)
        if self.transport is None:
            raise ArtfolioError("No transport configured")

        snapshot = dict(self._dirty)
        payload: dict[str, Any] = {
            "updates": [
                {"path": path, "type": entry.type.value, "value": entry.value}
                for path, entry in snapshot.items()
            ]
        }
        if self.version > 0:
            payload["version"] = self.version

        self._is_saving = True
        try:
            response = self.transport.patch_content(payload, recompile=True)
        except VersionConflictError as exc:
            logger.warning(
                "Save conflict: local version %d, server version %d",
                self.version,
                exc.server_version,
            )
            self.version = exc.server_version
            return SaveOutcome(
                status="conflict",
                version=self.version,
                message="Content changed elsewhere. Reload before saving again.",
            )
        except CompileFailedError as exc:
            logger.error("Saved at version %d but compile failed: %s", exc.version, exc)
            self.version = exc.version
            self._clear_sent(snapshot)
            return SaveOutcome(
                status="failed",
                version=self.version,
                sent=len(snapshot),
                message=f"Edits saved, but the site could not be rebuilt: {exc}",
            )
        except ArtfolioError as exc:
            logger.error("Save failed: %s", exc)
            return SaveOutcome(status="failed", version=self.version, message=str(exc))
        finally:
            self._is_saving = False

        self._apply_response(response)
        self._clear_sent(snapshot)
        logger.info("Saved %d edit(s), version now %d", len(snapshot), self.version)
        return SaveOutcome(status="saved", version=self.version, sent=len(snapshot))

    def _clear_sent(self, snapshot: dict[str, DirtyEntry]) -> None:
        for path, sent in snapshot.items():
            if self._dirty.get(path) == sent:
                del self._dirty[path]

    def _apply_response(self, response: dict[str, Any]) -> None:
        version = response.get("version")
        if isinstance(version, int):
            self.version = version
        compiled = response.get("compiled")
        if isinstance(compiled, dict):
            self.compiled = compiled
            # keep edits made while the request was in flight visible
            for path, entry in self._dirty.items():
                set_value(self.compiled, path, entry.value)
