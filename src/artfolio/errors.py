"""Error taxonomy shared by the services and the HTTP layer."""

from __future__ import annotations


class ArtfolioError(Exception):
    """Base class for all artfolio service errors."""

    retryable: bool = False


class ValidationError(ArtfolioError):
    """Malformed input: bad slug, disallowed patch path, type mismatch."""


class ConflictError(ArtfolioError):
    """The write lost against the stored state.

    ``current`` carries the authoritative server-side value (the stored
    version for a version conflict, the slug for a taken slug) so the
    caller can reconcile.
    """

    def __init__(self, message: str, *, current: object = None) -> None:
        super().__init__(message)
        self.current = current


class VersionConflictError(ConflictError):
    """Optimistic concurrency check failed."""

    def __init__(self, server_version: int) -> None:
        super().__init__("Version conflict", current=server_version)
        self.server_version = server_version


class NotFoundError(ArtfolioError):
    """The requested ContentState or artifact does not exist."""


class StorageError(ArtfolioError):
    """Artifact read/write failure. Safe to retry."""

    retryable = True


class CompileFailedError(StorageError):
    """A content write was committed but the follow-up compile failed.

    ``version`` is the committed version; a retry must send it, or only
    recompile.
    """

    def __init__(self, message: str, *, version: int) -> None:
        super().__init__(message)
        self.version = version
