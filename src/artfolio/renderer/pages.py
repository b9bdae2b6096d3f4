"""Page renderers: CompiledSite + page state -> page markup.

Each renderer returns an HTML string with bound nodes still carrying
their ``data-content-path`` attributes; the Renderer session applies
styles and bindings afterwards.
"""

from __future__ import annotations

import html
import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

from pydantic import BaseModel, Field

from artfolio.renderer.bindings import background_style
from artfolio.renderer.templates import TemplateStore, render_template

DEFAULT_EMPTY_MESSAGE = "No artworks selected."

# aboutContent keys that are page furniture rather than sections
_ABOUT_NON_SECTIONS = frozenset({"title", "bio", "imageUrl"})

_CARD_CAPTION_STYLE = (
    "padding:6px 4px; font-size:0.9rem; text-align:center; color:#999; "
    "white-space:nowrap; overflow:hidden; text-overflow:ellipsis;"
)
_CARD_PLACEHOLDER_STYLE = (
    "height: 180px; background: #f0f0f0; display:flex; align-items:center; "
    "justify-content:center; color:#999;"
)


class PageState(BaseModel):
    """Per-view UI state the compiled site does not carry."""

    home_selections: list[dict[str, Any]] = Field(default_factory=list)
    works_selection: list[dict[str, Any]] = Field(default_factory=list)
    works_index: int = 0


def _artwork_href(artwork: Mapping[str, Any]) -> str:
    return "/artwork.html?id=" + quote(str(artwork.get("_id") or ""), safe="")


def _artwork_title(artwork: Mapping[str, Any]) -> str:
    return str(artwork.get("title") or "Untitled")


def _artwork_card(artwork: Mapping[str, Any]) -> str:
    title = html.escape(_artwork_title(artwork))
    image_url = artwork.get("imageUrl")
    if image_url:
        media = (
            f'<img src="{html.escape(str(image_url))}" alt="{title}" '
            'style="display:block; width:100%; height:auto;">'
        )
    else:
        media = f'<div style="{_CARD_PLACEHOLDER_STYLE}">{title}</div>'
    return (
        f'<a href="{_artwork_href(artwork)}" style="display:block; text-decoration:none; '
        f'color:inherit;"><div style="background:#fff;">{media}'
        f'<div style="{_CARD_CAPTION_STYLE}">{title}</div></div></a>'
    )


def _empty_message(message: str) -> str:
    return (
        '<div style="grid-column: 1 / -1; text-align:center; color:#999; '
        f'padding-top:40px;">{html.escape(message)}</div>'
    )


def _grid_items(selection: list[dict[str, Any]], empty_message: str) -> str:
    if not selection:
        return _empty_message(empty_message)
    return "".join(_artwork_card(a) for a in selection if isinstance(a, Mapping))


def _image_style(url: Any) -> str:
    return html.escape(background_style(str(url)), quote=True) if url else ""


def _section(compiled: Mapping[str, Any], key: str) -> dict[str, Any]:
    value = compiled.get(key)
    return value if isinstance(value, dict) else {}


# ---------------------------------------------------------------------------
# Home
# ---------------------------------------------------------------------------


def render_home_grid(
    templates: TemplateStore,
    state: PageState,
    empty_message: str = DEFAULT_EMPTY_MESSAGE,
) -> str:
    return render_template(
        templates.get("home", "grid"),
        {"works_grid_items": _grid_items(state.home_selections, empty_message)},
    )


def render_home_split(templates: TemplateStore, compiled: Mapping[str, Any]) -> str:
    home = _section(compiled, "homeContent")
    return render_template(
        templates.get("home", "split"),
        {
            "title": html.escape(str(home.get("title") or "")),
            "description": html.escape(str(home.get("description") or "")),
            "explore_text": html.escape(str(home.get("explore_text") or "")),
            "split_feature_style": _image_style(home.get("imageUrl")),
        },
    )


def render_home_hero(templates: TemplateStore, compiled: Mapping[str, Any]) -> str:
    home = _section(compiled, "homeContent")
    return render_template(
        templates.get("home", "hero"),
        {
            "title": html.escape(str(home.get("title") or "")),
            "subtitle": html.escape(str(home.get("subtitle") or "")),
            "hero_description": html.escape(str(home.get("description") or "")),
            "hero_style": _image_style(home.get("imageUrl")),
        },
    )


# ---------------------------------------------------------------------------
# Works
# ---------------------------------------------------------------------------


def render_works_grid(
    templates: TemplateStore,
    state: PageState,
    empty_message: str = DEFAULT_EMPTY_MESSAGE,
) -> str:
    return render_template(
        templates.get("works", "grid"),
        {"works_grid_items": _grid_items(state.works_selection, empty_message)},
    )


def render_works_single(
    templates: TemplateStore,
    state: PageState,
    empty_message: str = DEFAULT_EMPTY_MESSAGE,
) -> str:
    """One artwork at a time; ``works_index`` wraps around in both directions."""
    selection = state.works_selection
    total = len(selection)
    index = state.works_index % total if total else 0
    artwork = selection[index] if total else None

    if artwork is None:
        content = (
            '<div style="text-align:center; color:#888; margin:0 auto 16px;">'
            f"{html.escape(empty_message)}</div>"
        )
        title = "Untitled"
    else:
        title = html.escape(_artwork_title(artwork))
        if artwork.get("imageUrl"):
            content = (
                f'<img src="{html.escape(str(artwork["imageUrl"]))}" alt="{title}" '
                'style="display:block; max-width: 100%; max-height: 75vh; width:auto; '
                'height:auto; margin:0 auto 16px;" />'
            )
        else:
            content = f'<div style="text-align:center; color:#888; margin:0 auto 16px;">{title}</div>'
        if artwork.get("_id"):
            href = _artwork_href(artwork)
            content = (
                f'<a href="{href}" style="display:block; text-decoration:none; '
                f'color:inherit;">{content}</a>'
            )
            title = f'<a href="{href}" style="text-decoration:none; color:inherit;">{title}</a>'

    return render_template(
        templates.get("works", "single"),
        {
            "single_work_style": "",
            "single_work_content": content,
            "single_title": title,
            "single_index": index + 1 if total else 0,
            "single_total": total,
        },
    )


# ---------------------------------------------------------------------------
# About
# ---------------------------------------------------------------------------


def get_selected_about_sections(
    compiled: Mapping[str, Any],
    survey: Mapping[str, Any] | None = None,
) -> list[str]:
    """Sections to show, in order.

    Sections with compiled content come first, then any further sections
    the survey enables.
    """
    about = _section(compiled, "aboutContent")
    ordered = [k for k, v in about.items() if k not in _ABOUT_NON_SECTIONS and v]
    toggles = (survey or {}).get("aboutSections") or {}
    for key, enabled in toggles.items():
        if enabled and key not in ordered:
            ordered.append(key)
    return ordered


def section_title(section: str) -> str:
    """``workExperience`` -> ``Work Experience``."""
    return re.sub(r"([A-Z])", r" \1", section).strip().title()


def render_about_sections(compiled: Mapping[str, Any], survey: Mapping[str, Any] | None) -> str:
    about = _section(compiled, "aboutContent")
    blocks = []
    for section in get_selected_about_sections(compiled, survey):
        body = str(about.get(section) or "")
        blocks.append(
            '<div class="about-section" style="margin-bottom: 40px; border-top: 1px solid '
            '#e0e0e0; padding-top: 30px;">'
            f"<h3>{html.escape(section_title(section))}</h3>"
            f'<div data-content-path="aboutContent.{section}" data-type="html">{body}</div>'
            "</div>"
        )
    return "".join(blocks)


def render_about(
    templates: TemplateStore,
    layout: str | None,
    compiled: Mapping[str, Any],
    survey: Mapping[str, Any] | None = None,
) -> str:
    about = _section(compiled, "aboutContent")
    template = templates.get("about", "vertical" if layout == "vertical" else "split")
    return render_template(
        template,
        {
            "about_title": html.escape(str(about.get("title") or "")),
            "about_bio": str(about.get("bio") or ""),
            "about_sections_html": render_about_sections(compiled, survey),
            "about_photo_style": _image_style(about.get("imageUrl")),
        },
    )


def render_page(
    templates: TemplateStore,
    page: str,
    layout: str | None,
    compiled: Mapping[str, Any],
    state: PageState | None = None,
    *,
    empty_message: str = DEFAULT_EMPTY_MESSAGE,
) -> str:
    """Dispatch to the renderer for ``page``/``layout``. Unknown pages render empty."""
    state = state or PageState()
    survey = _section(compiled, "surveyData")
    if page == "home":
        if layout == "grid":
            return render_home_grid(templates, state, empty_message)
        if layout == "hero":
            return render_home_hero(templates, compiled)
        return render_home_split(templates, compiled)
    if page == "works":
        if layout == "single":
            return render_works_single(templates, state, empty_message)
        return render_works_grid(templates, state, empty_message)
    if page == "about":
        return render_about(templates, layout, compiled, survey)
    return ""
