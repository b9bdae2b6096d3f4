"""Tests for the dotted/bracketed path resolver."""

import pytest

from artfolio.content.paths import (
    PathConflictError,
    PathSyntaxError,
    get_value,
    has_index,
    parse_path,
    set_value,
)
from artfolio.errors import ValidationError


class TestParsePath:
    def test_plain_keys(self):
        assert parse_path("aboutContent.bio") == ["aboutContent", "bio"]

    def test_indices(self):
        assert parse_path("a.b[2].c") == ["a", "b", 2, "c"]

    def test_consecutive_indices(self):
        assert parse_path("grid[0][1]") == ["grid", 0, 1]

    @pytest.mark.parametrize("path", ["", "a..b", ".a", "a.", "a[", "a[x]", "[0]", "a]b"])
    def test_rejects_malformed(self, path: str):
        with pytest.raises(PathSyntaxError):
            parse_path(path)

    def test_rejects_non_string(self):
        with pytest.raises(PathSyntaxError):
            parse_path(None)  # type: ignore[arg-type]

    def test_syntax_error_is_validation_error(self):
        assert issubclass(PathSyntaxError, ValidationError)

    def test_has_index(self):
        assert has_index("a.b[0]")
        assert not has_index("a.b")


class TestGetValue:
    def test_reads_nested(self):
        root = {"a": {"b": [10, {"c": "hit"}]}}
        assert get_value(root, "a.b[1].c") == "hit"
        assert get_value(root, "a.b[0]") == 10

    def test_missing_key_is_none(self):
        assert get_value({"a": {}}, "a.b.c") is None

    def test_index_out_of_range_is_none(self):
        assert get_value({"a": [1]}, "a[5]") is None

    def test_descending_into_scalar_is_none(self):
        assert get_value({"a": 1}, "a.b") is None

    def test_index_into_dict_is_none(self):
        assert get_value({"a": {"0": 1}}, "a[0]") is None

    def test_falsy_values_survive(self):
        root = {"a": {"empty": "", "zero": 0, "off": False}}
        assert get_value(root, "a.empty") == ""
        assert get_value(root, "a.zero") == 0
        assert get_value(root, "a.off") is False


class TestSetValue:
    def test_creates_intermediates(self):
        root: dict = {}
        set_value(root, "a.b[2].c", 5)
        assert root == {"a": {"b": [None, None, {"c": 5}]}}

    def test_overwrites_leaf(self):
        root = {"homeContent": {"title": "old"}}
        set_value(root, "homeContent.title", "new")
        assert root == {"homeContent": {"title": "new"}}

    def test_extends_existing_list(self):
        root = {"a": [1]}
        set_value(root, "a[3]", 4)
        assert root == {"a": [1, None, None, 4]}

    def test_none_intermediate_is_replaced(self):
        root = {"a": None}
        set_value(root, "a.b", 1)
        assert root == {"a": {"b": 1}}

    def test_scalar_intermediate_raises(self):
        root = {"a": {"b": "text"}}
        with pytest.raises(PathConflictError):
            set_value(root, "a.b.c", 1)
        assert root == {"a": {"b": "text"}}

    def test_dict_where_list_needed_raises(self):
        root = {"a": {"b": {}}}
        with pytest.raises(PathConflictError):
            set_value(root, "a.b[0]", 1)

    def test_list_where_dict_needed_raises(self):
        root = {"a": [1, 2]}
        with pytest.raises(PathConflictError):
            set_value(root, "a.b", 1)

    def test_conflict_is_validation_error(self):
        assert issubclass(PathConflictError, ValidationError)


class TestRoundTrip:
    @pytest.mark.parametrize(
        "path",
        [
            "a",
            "a.b",
            "homeContent.explore_text",
            "surveyData.worksDetails.years[2]",
            "a[0][1].b",
            "x.y[3].z[0]",
        ],
    )
    @pytest.mark.parametrize("value", ["text", 0, {"nested": [1, 2]}, ""])
    def test_get_after_set_on_empty_root(self, path: str, value: object):
        root: dict = {}
        set_value(root, path, value)
        assert get_value(root, path) == value
