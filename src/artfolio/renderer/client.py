"""HTTP transport from the editor to the content-state API.

Uses urllib and the ``x-auth-token`` header. Error responses are mapped
back onto the service error taxonomy so callers handle remote and local
failures the same way.
"""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Protocol

from artfolio.errors import (
    ArtfolioError,
    CompileFailedError,
    ConflictError,
    NotFoundError,
    StorageError,
    ValidationError,
    VersionConflictError,
)

logger = logging.getLogger(__name__)


class PatchTransport(Protocol):
    """What the Renderer session needs to save and refresh."""

    def patch_content(self, payload: dict[str, Any], *, recompile: bool = True) -> dict[str, Any]: ...

    def fetch_compiled(self) -> dict[str, Any]: ...


class ContentStateClient:
    """Client for the artfolio content-state API."""

    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        auth_header: str = "x-auth-token",
        timeout: float = 10.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.auth_header = auth_header
        self.timeout = timeout

    def _request(
        self,
        method: str,
        path: str,
        data: dict[str, Any] | None = None,
        query: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        url = f"{self.base_url}{path}"
        if query:
            url += "?" + urllib.parse.urlencode(query)
        body = json.dumps(data).encode("utf-8") if data is not None else None
        req = urllib.request.Request(
            url,
            data=body,
            method=method,
            headers={
                self.auth_header: self.token,
                "Content-Type": "application/json",
            },
        )
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                raw = resp.read().decode("utf-8")
        except urllib.error.HTTPError as exc:
            raise _error_from_response(exc.code, exc.read()) from exc
        except urllib.error.URLError as exc:
            raise StorageError(f"{method} {path} failed: {exc.reason}") from exc
        return json.loads(raw) if raw else {}

    def get_state(self) -> dict[str, Any]:
        return self._request("GET", "/content-state")

    def fetch_compiled(self) -> dict[str, Any]:
        return self._request("GET", "/content-state/compiled")

    def patch_content(self, payload: dict[str, Any], *, recompile: bool = True) -> dict[str, Any]:
        """POST a patch batch; with ``recompile`` the response carries the new CompiledSite."""
        query = {"compile": "true"} if recompile else None
        return self._request("POST", "/content-state/update-content-batch", payload, query)

    def update_survey(self, survey: dict[str, Any]) -> dict[str, Any]:
        return self._request("PATCH", "/content-state/survey", survey)

    def compile_site(self) -> dict[str, Any]:
        return self._request("POST", "/content-state/compile")

    def publish(self, slug: str) -> dict[str, Any]:
        return self._request("POST", "/content-state/publish", {"customUrl": slug})


def _error_from_response(status: int, raw: bytes) -> ArtfolioError:
    try:
        body = json.loads(raw.decode("utf-8")) if raw else {}
    except (UnicodeDecodeError, ValueError):
        body = {}
    if not isinstance(body, dict):
        body = {}
    message = str(body.get("msg") or f"HTTP {status}")

    if status == 409 and isinstance(body.get("serverVersion"), int):
        return VersionConflictError(body["serverVersion"])
    if status == 409:
        return ConflictError(message)
    if status == 404:
        return NotFoundError(message)
    if 400 <= status < 500:
        return ValidationError(message)
    logger.warning("Server error %d: %s", status, message)
    if isinstance(body.get("version"), int):
        return CompileFailedError(message, version=body["version"])
    return StorageError(message)
