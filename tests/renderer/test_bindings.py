"""Tests for style hydration and path-based data binding."""

from datetime import UTC, datetime

from bs4 import BeautifulSoup

from artfolio.content.models import CompiledSite
from artfolio.renderer.bindings import (
    apply_data_bindings,
    apply_data_styles,
    css_url,
    mark_editable,
    strip_style_properties,
)


def _soup(markup: str) -> BeautifulSoup:
    return BeautifulSoup(markup, "html.parser")


def _compiled(**home: object) -> dict:
    return {"homeContent": home, "aboutContent": {}, "surveyData": {}}


IMAGE_MARKUP = (
    '<div><div id="img" data-content-path="homeContent.imageUrl" data-type="imageUrl" '
    'style="min-height: 10px;"><span>placeholder</span></div>'
    '<p class="image-caption">Click to add</p></div>'
)


class TestApplyDataStyles:
    def test_moves_staged_css(self):
        soup = _soup('<div data-style="margin: 0;">x</div>')
        assert apply_data_styles(soup) == 1
        div = soup.div
        assert div["style"] == "margin: 0;"
        assert not div.has_attr("data-style")

    def test_separator_added_when_needed(self):
        soup = _soup('<div style="color: red" data-style="margin: 0;">x</div>')
        apply_data_styles(soup)
        assert soup.div["style"] == "color: red; margin: 0;"

    def test_idempotent(self):
        soup = _soup('<div style="color: red;" data-style="margin: 0;">x</div>')
        apply_data_styles(soup)
        once = str(soup)
        assert apply_data_styles(soup) == 0
        assert str(soup) == once

    def test_empty_staging_attribute_removed(self):
        soup = _soup('<div data-style="  ">x</div>')
        assert apply_data_styles(soup) == 0
        assert not soup.div.has_attr("data-style")
        assert not soup.div.has_attr("style")


class TestTextBinding:
    def test_sets_text(self):
        soup = _soup('<h1 data-content-path="homeContent.title" data-type="text">old</h1>')
        apply_data_bindings(soup, _compiled(title="New"))
        assert soup.h1.get_text() == "New"

    def test_text_is_not_parsed_as_markup(self):
        soup = _soup('<h1 data-content-path="homeContent.title" data-type="text"></h1>')
        apply_data_bindings(soup, _compiled(title="<b>x</b>"))
        assert soup.h1.find("b") is None
        assert soup.h1.get_text() == "<b>x</b>"

    def test_missing_value_clears(self):
        soup = _soup('<h1 data-content-path="homeContent.title" data-type="text">stale</h1>')
        apply_data_bindings(soup, _compiled())
        assert soup.h1.get_text() == ""

    def test_default_type_is_text(self):
        soup = _soup('<h1 data-content-path="homeContent.title">old</h1>')
        apply_data_bindings(soup, _compiled(title="New"))
        assert soup.h1.get_text() == "New"

    def test_malformed_path_clears(self):
        soup = _soup('<h1 data-content-path="homeContent..title">stale</h1>')
        assert apply_data_bindings(soup, _compiled(title="x")) == 1
        assert soup.h1.get_text() == ""

    def test_accepts_compiled_model(self):
        compiled = CompiledSite(
            home_content={"title": "Model"},
            generated_at=datetime(2024, 1, 1, tzinfo=UTC),
            version=1,
        )
        soup = _soup('<h1 data-content-path="homeContent.title">old</h1>')
        apply_data_bindings(soup, compiled)
        assert soup.h1.get_text() == "Model"


class TestHtmlBinding:
    def test_sets_inner_markup(self):
        soup = _soup('<div data-content-path="aboutContent.bio" data-type="html">old</div>')
        apply_data_bindings(soup, {"aboutContent": {"bio": "<p>Hi <b>there</b></p>"}})
        assert soup.div.find("b").get_text() == "there"
        assert "old" not in soup.div.get_text()

    def test_missing_value_clears(self):
        soup = _soup('<div data-content-path="aboutContent.bio" data-type="html"><p>x</p></div>')
        apply_data_bindings(soup, {"aboutContent": {}})
        assert soup.div.contents == []

    def test_legacy_type_attribute(self):
        soup = _soup('<div data-content-path="aboutContent.bio" data-content-type="html"></div>')
        apply_data_bindings(soup, {"aboutContent": {"bio": "<i>x</i>"}})
        assert soup.div.find("i") is not None


class TestImageBinding:
    def test_sets_background_and_hides_caption(self):
        soup = _soup(IMAGE_MARKUP)
        apply_data_bindings(soup, _compiled(imageUrl="https://cdn/img.png"))

        div = soup.find(id="img")
        assert "background-image: url('https://cdn/img.png')" in div["style"]
        assert "background-size: cover" in div["style"]
        assert div["style"].startswith("min-height: 10px;")
        assert div.find("span") is None
        assert "display: none" in soup.find("p")["style"]

    def test_rebinding_does_not_duplicate(self):
        soup = _soup(IMAGE_MARKUP)
        apply_data_bindings(soup, _compiled(imageUrl="one.png"))
        apply_data_bindings(soup, _compiled(imageUrl="two.png"))

        style = soup.find(id="img")["style"]
        assert style.count("background-image") == 1
        assert "two.png" in style
        assert soup.find("p")["style"].count("display: none") == 1

    def test_missing_value_clears_background(self):
        soup = _soup(
            '<div data-content-path="homeContent.imageUrl" data-type="imageUrl" '
            "style=\"min-height: 10px; background-image: url('old.png'); background-size: cover;\">"
            "</div>"
        )
        apply_data_bindings(soup, _compiled())
        assert soup.div["style"] == "min-height: 10px;"

    def test_type_is_case_insensitive(self):
        soup = _soup('<div data-content-path="homeContent.imageUrl" data-type="IMAGEURL"></div>')
        apply_data_bindings(soup, _compiled(imageUrl="x.png"))
        assert "x.png" in soup.div["style"]

    def test_quotes_cannot_close_url(self):
        soup = _soup(IMAGE_MARKUP)
        apply_data_bindings(soup, _compiled(imageUrl="a.png'); color: red; x: url('b"))
        style = soup.find(id="img")["style"]
        assert "url('a.png%27%29; color: red; x: url%28%27b')" in style
        assert style.count("background-image") == 1

    def test_css_url_escapes(self):
        assert css_url("""a'b"c\\d(e)f""") == "a%27b%22c%5Cd%28e%29f"
        assert css_url("https://cdn/img.png") == "https://cdn/img.png"

    def test_data_url_survives_style_strip(self):
        style = "color: red; background-image: url('data:image/png;base64,AAA');"
        assert strip_style_properties(style, frozenset({"background-image"})) == "color: red;"


class TestMarkEditable:
    def test_marks_text_and_html_only(self):
        soup = _soup(
            '<h1 data-content-path="homeContent.title">t</h1>'
            '<div data-content-path="aboutContent.bio" data-type="html"></div>'
            '<div id="img" data-content-path="homeContent.imageUrl" data-type="imageUrl"></div>'
            "<p>plain</p>"
        )
        editable = mark_editable(soup)
        assert len(editable) == 2
        assert soup.h1["contenteditable"] == "true"
        assert not soup.find(id="img").has_attr("contenteditable")
        assert not soup.p.has_attr("contenteditable")
