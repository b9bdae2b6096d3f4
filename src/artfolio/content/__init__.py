"""Content domain - ContentState models, path resolver, store and lifecycle."""

from artfolio.content.models import (
    AboutContent,
    CompiledSite,
    ContentState,
    HomeContent,
    Medium,
    PatchRequest,
    PatchType,
    PatchUpdate,
    SurveyData,
)
from artfolio.content.store import ContentStateStore

__all__ = [
    "AboutContent",
    "CompiledSite",
    "ContentState",
    "ContentStateStore",
    "HomeContent",
    "Medium",
    "PatchRequest",
    "PatchType",
    "PatchUpdate",
    "SurveyData",
]
