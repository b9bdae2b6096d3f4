"""FastAPI application exposing the content-state and public endpoints."""

from __future__ import annotations

import logging
from typing import Annotated, Any

import pydantic
from fastapi import Body, Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from artfolio import __version__
from artfolio.api.auth import AuthError, current_artist, optional_artist
from artfolio.artifacts import ArtifactStore, LocalArtifactStore
from artfolio.compiler.services import compile_site, load_compiled_site
from artfolio.config import ArtfolioConfig
from artfolio.content.models import PatchRequest
from artfolio.content.services import delete_state, get_state, start_over, update_survey
from artfolio.content.store import ContentStateStore
from artfolio.editing.services import apply_patch
from artfolio.errors import (
    ArtfolioError,
    CompileFailedError,
    ConflictError,
    NotFoundError,
    StorageError,
    ValidationError,
    VersionConflictError,
)
from artfolio.publishing.services import (
    check_slug_availability,
    publish,
    resolve_public_site,
    resolve_public_site_by_artist,
)

logger = logging.getLogger(__name__)


def error_response(exc: ArtfolioError) -> JSONResponse:
    """Map a service error onto its HTTP status and ``{"msg"}`` body."""
    body: dict[str, Any] = {"msg": str(exc)}
    if isinstance(exc, AuthError):
        status = 401
    elif isinstance(exc, VersionConflictError):
        status = 409
        body["serverVersion"] = exc.server_version
    elif isinstance(exc, ConflictError):
        status = 409
    elif isinstance(exc, ValidationError):
        status = 400
    elif isinstance(exc, NotFoundError):
        status = 404
    elif isinstance(exc, StorageError):
        status = 503
        if isinstance(exc, CompileFailedError):
            body["version"] = exc.version
    else:
        status = 500
    if status >= 500:
        logger.error("Request failed: %s", exc)
    return JSONResponse(status_code=status, content=body)


# ── Dependencies ─────────────────────────────────────────────────


def get_store(request: Request) -> ContentStateStore:
    return request.app.state.store


def get_artifacts(request: Request) -> ArtifactStore:
    return request.app.state.artifacts


Artist = Annotated[str, Depends(current_artist)]
MaybeArtist = Annotated[str | None, Depends(optional_artist)]
Store = Annotated[ContentStateStore, Depends(get_store)]
Artifacts = Annotated[ArtifactStore, Depends(get_artifacts)]


def create_app(
    config: ArtfolioConfig | None = None,
    *,
    store: ContentStateStore | None = None,
    artifacts: ArtifactStore | None = None,
) -> FastAPI:
    """Build the application. Stores default to the configured local directories."""
    config = config or ArtfolioConfig()
    app = FastAPI(title="artfolio", version=__version__)
    app.state.config = config
    app.state.store = store or ContentStateStore(config.data_path)
    app.state.artifacts = artifacts or LocalArtifactStore(config.artifacts_path)
    prefix = config.artifacts.sites_prefix

    @app.exception_handler(ArtfolioError)
    async def _artfolio_error(request: Request, exc: ArtfolioError) -> JSONResponse:
        return error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def _request_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"msg": "Invalid request"})

    # ── Content state ────────────────────────────────────────────

    @app.get("/content-state")
    def read_state(artist: Artist, store: Store) -> dict[str, Any]:
        return get_state(store, artist).to_wire()

    @app.patch("/content-state/survey")
    def patch_survey(
        artist: Artist,
        store: Store,
        payload: Annotated[Any, Body()] = None,
    ) -> dict[str, Any]:
        return update_survey(store, artist, payload).to_wire()

    @app.post("/content-state/compile")
    def compile_state(artist: Artist, store: Store, artifacts: Artifacts) -> dict[str, Any]:
        result = compile_site(store, artifacts, artist, sites_prefix=prefix)
        return {"compiledJsonPath": result.compiled_json_path}

    @app.post("/content-state/update-content-batch")
    def update_content_batch(
        artist: Artist,
        store: Store,
        artifacts: Artifacts,
        payload: Annotated[Any, Body()] = None,
        recompile: Annotated[bool, Query(alias="compile")] = False,
    ) -> dict[str, Any]:
        try:
            batch = PatchRequest.model_validate(payload if payload is not None else {})
        except pydantic.ValidationError as exc:
            raise ValidationError("Invalid update batch") from exc
        result = apply_patch(
            store,
            artifacts,
            artist,
            batch.updates,
            expected_version=batch.version,
            recompile=recompile,
            sites_prefix=prefix,
        )
        return result.to_wire()

    @app.post("/content-state/publish")
    def publish_state(
        artist: Artist,
        store: Store,
        payload: Annotated[Any, Body()] = None,
    ) -> dict[str, Any]:
        slug = payload.get("customUrl") if isinstance(payload, dict) else None
        return publish(store, artist, slug).to_wire()

    @app.post("/content-state/start-over")
    def start_over_state(artist: Artist, store: Store, artifacts: Artifacts) -> dict[str, str]:
        start_over(store, artifacts, artist, sites_prefix=prefix)
        return {"msg": "Start over succeeded"}

    @app.get("/content-state/slug-available")
    def slug_available(artist: MaybeArtist, store: Store, slug: str = "") -> dict[str, Any]:
        return check_slug_availability(store, slug, artist).to_wire()

    @app.get("/content-state/compiled")
    def read_compiled(artist: Artist, artifacts: Artifacts) -> dict[str, Any]:
        compiled = load_compiled_site(artifacts, artist, sites_prefix=prefix)
        if compiled is None:
            raise NotFoundError("Compiled site not found")
        return compiled.to_wire()

    @app.delete("/content-state")
    def delete_content_state(artist: Artist, store: Store) -> dict[str, str]:
        delete_state(store, artist)
        return {"msg": "Website state deleted successfully"}

    # ── Public ───────────────────────────────────────────────────

    @app.get("/public/site")
    def public_site(store: Store, slug: str = "") -> dict[str, Any]:
        return resolve_public_site(store, slug).to_wire()

    @app.get("/public/site-by-artist/{artist_id}")
    def public_site_by_artist(artist_id: str, store: Store) -> dict[str, Any]:
        return resolve_public_site_by_artist(store, artist_id).to_wire()

    return app
