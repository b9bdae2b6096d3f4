"""Batched content patches."""

from artfolio.editing.services import PatchResult, apply_patch, validate_update

__all__ = ["PatchResult", "apply_patch", "validate_update"]
