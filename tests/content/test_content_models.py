"""Tests for content domain models and their camelCase wire form."""

import pydantic
import pytest

from artfolio.content.models import (
    INITIAL_VERSION,
    ArtworkRef,
    ContentState,
    HomeContent,
    Layouts,
    Medium,
    PatchRequest,
    PatchType,
    SurveyData,
)


class TestContentState:
    def test_defaults(self):
        state = ContentState(artist="artist-a")
        assert state.version == INITIAL_VERSION == 1
        assert state.is_published is False
        assert state.published_url is None
        assert state.compiled_json_path is None
        assert state.survey_completed is False

    def test_wire_names_are_camel_case(self):
        wire = ContentState(artist="artist-a").to_wire()
        for key in (
            "surveyData",
            "homeContent",
            "aboutContent",
            "isPublished",
            "publishedUrl",
            "compiledJsonPath",
            "compiledAt",
            "surveyCompleted",
            "version",
        ):
            assert key in wire

    def test_round_trips_through_wire(self):
        state = ContentState(artist="artist-a", published_url="my-site", is_published=True)
        state.survey_data.home_selections.append(ArtworkRef(id="a1", title="One"))
        assert ContentState.model_validate(state.to_wire()) == state

    def test_accepts_snake_case_names(self):
        state = ContentState(artist="a", is_published=True)
        assert state.is_published


class TestSurveyData:
    def test_defaults(self):
        wire = SurveyData().to_wire()
        assert wire["medium"] is None
        assert wire["style"] == {"fontSize": 16, "textColor": "#333333", "themeColor": "#007bff"}
        assert wire["features"]["home"] is True
        assert wire["features"]["commission"] is False
        assert wire["aboutSections"]["workExperience"] is False
        assert wire["worksSelections"] == {}
        assert wire["homeSelections"] == []

    def test_about_sections_keep_page_order(self):
        assert list(SurveyData().to_wire()["aboutSections"]) == [
            "education",
            "workExperience",
            "recentlyFeatured",
            "selectedExhibition",
            "selectedPress",
            "selectedAwards",
            "selectedProjects",
            "contactInfo",
        ]

    def test_rejects_unknown_layout(self):
        with pytest.raises(pydantic.ValidationError):
            Layouts.model_validate({"homepage": "carousel"})

    def test_selection_refs_omit_unset_fields(self):
        survey = SurveyData.model_validate({"homeSelections": [{"_id": "a1"}]})
        assert survey.to_wire()["homeSelections"] == [{"_id": "a1"}]


class TestArtworkRef:
    def test_id_uses_underscore_alias(self):
        ref = ArtworkRef.model_validate({"_id": "x", "imageUrl": "https://img/x.png"})
        assert ref.id == "x"
        assert ref.to_wire() == {"_id": "x", "imageUrl": "https://img/x.png"}


class TestHomeContent:
    def test_explore_text_keeps_snake_case_on_the_wire(self):
        wire = HomeContent(explore_text="Explore").to_wire()
        assert wire["explore_text"] == "Explore"
        assert "imageUrl" in wire


class TestEnums:
    def test_patch_type_values(self):
        assert [t.value for t in PatchType] == ["text", "html", "imageUrl"]

    def test_medium_values(self):
        assert Medium("multi-medium") is Medium.MULTI_MEDIUM


class TestPatchRequest:
    def test_version_optional(self):
        request = PatchRequest.model_validate({"updates": [{"path": "a", "type": "text"}]})
        assert request.version is None
        assert request.updates[0].path == "a"
        assert request.updates[0].value is None
