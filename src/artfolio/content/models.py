"""Content domain models - pure Pydantic v2 data types.

ContentState is the persistent per-artist record: survey answers,
persisted edits to the home/about pages, publication metadata and the
optimistic-concurrency version. CompiledSite is the disposable artifact
derived from it. Wire names are camelCase; attributes are snake_case.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

INITIAL_VERSION = 1
MAX_SELECTION_ITEMS = 200


class WireModel(BaseModel):
    """Base for models exchanged as camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class Medium(StrEnum):
    """Artistic medium chosen in the survey."""

    PAINTING = "painting"
    PHOTOGRAPHY = "photography"
    POETRY = "poetry"
    FURNITURE = "furniture"
    MULTI_MEDIUM = "multi-medium"


class PatchType(StrEnum):
    """Declared value type of an editable content field."""

    TEXT = "text"
    HTML = "html"
    IMAGE_URL = "imageUrl"


# ---------------------------------------------------------------------------
# Survey
# ---------------------------------------------------------------------------


class ArtworkRef(WireModel):
    """Reference to an uploaded artwork inside a selection list."""

    id: str | None = Field(default=None, alias="_id")
    title: str | None = None
    image_url: str | None = None

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Features(WireModel):
    home: bool = True
    about: bool = True
    works: bool = True
    works_organization: Literal["year", "theme"] | None = None
    commission: bool = False
    exhibition: bool = False


class Layouts(WireModel):
    homepage: Literal["grid", "split", "hero"] | None = None
    about: Literal["split", "vertical"] | None = None
    works: Literal["grid", "single"] | None = None
    commission: str | None = None
    exhibition: str | None = None


class WorksDetails(WireModel):
    years: list[int] = Field(default_factory=list)
    themes: list[str] = Field(default_factory=list)


class AboutSections(WireModel):
    """About-page section toggles, in page order."""

    education: bool = False
    work_experience: bool = False
    recently_featured: bool = False
    selected_exhibition: bool = False
    selected_press: bool = False
    selected_awards: bool = False
    selected_projects: bool = False
    contact_info: bool = False


class StyleSettings(WireModel):
    font_size: int = 16
    text_color: str = "#333333"
    theme_color: str = "#007bff"


class SurveyData(WireModel):
    """Structured answers collected by the survey wizard."""

    medium: str | None = None
    features: Features = Field(default_factory=Features)
    layouts: Layouts = Field(default_factory=Layouts)
    works_details: WorksDetails = Field(default_factory=WorksDetails)
    about_sections: AboutSections = Field(default_factory=AboutSections)
    logo: str | None = None
    style: StyleSettings = Field(default_factory=StyleSettings)
    works_selections: dict[str, list[ArtworkRef]] = Field(default_factory=dict)
    home_selections: list[ArtworkRef] = Field(default_factory=list)

    def to_wire(self) -> dict[str, Any]:
        data = self.model_dump(mode="json", by_alias=True)
        data["worksSelections"] = {
            folder: [a.to_wire() for a in items]
            for folder, items in self.works_selections.items()
        }
        data["homeSelections"] = [a.to_wire() for a in self.home_selections]
        return data


# ---------------------------------------------------------------------------
# Persisted edits
# ---------------------------------------------------------------------------


class HomeContent(WireModel):
    title: str | None = None
    subtitle: str | None = None
    description: str | None = None
    explore_text: str | None = Field(default=None, alias="explore_text")
    image_url: str | None = None


class AboutContent(WireModel):
    title: str | None = None
    bio: str | None = None
    image_url: str | None = None
    contact_info: str | None = None
    education: str | None = None
    work_experience: str | None = None
    recently_featured: str | None = None
    selected_exhibition: str | None = None
    selected_press: str | None = None
    selected_awards: str | None = None
    selected_projects: str | None = None


# ---------------------------------------------------------------------------
# State and artifact
# ---------------------------------------------------------------------------


class ContentState(WireModel):
    """Persistent per-artist document. One per artist."""

    artist: str
    survey_data: SurveyData = Field(default_factory=SurveyData)
    home_content: HomeContent = Field(default_factory=HomeContent)
    about_content: AboutContent = Field(default_factory=AboutContent)
    is_published: bool = False
    published_url: str | None = None
    compiled_json_path: str | None = None
    compiled_at: datetime | None = None
    survey_completed: bool = False
    version: int = INITIAL_VERSION
    last_modified: datetime | None = None

    def to_wire(self) -> dict[str, Any]:
        data = self.model_dump(mode="json", by_alias=True)
        data["surveyData"] = self.survey_data.to_wire()
        return data


class CompiledSite(WireModel):
    """Denormalised site document consumed by the renderer. Never hand-edited."""

    survey_data: dict[str, Any] = Field(default_factory=dict)
    home_content: dict[str, Any] = Field(default_factory=dict)
    about_content: dict[str, Any] = Field(default_factory=dict)
    generated_at: datetime
    version: int


# ---------------------------------------------------------------------------
# Patch wire types
# ---------------------------------------------------------------------------


class PatchUpdate(BaseModel):
    """One ``{path, type, value}`` edit. Validated by the editing service."""

    path: Any = None
    type: Any = None
    value: Any = None


class PatchRequest(BaseModel):
    """Body of ``POST /content-state/update-content-batch``."""

    version: int | None = None
    updates: list[PatchUpdate] = Field(default_factory=list)
