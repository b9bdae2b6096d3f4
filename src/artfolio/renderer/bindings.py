"""Data binding between rendered markup and a CompiledSite.

Works on BeautifulSoup trees. Bound nodes carry ``data-content-path``
and a ``data-type`` (``text``, ``html`` or ``imageUrl``; the legacy
``data-content-type`` spelling is accepted). Style staging uses a
``data-style`` attribute that is consumed on first application.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from bs4 import BeautifulSoup, Tag

from artfolio.content.models import CompiledSite, PatchType
from artfolio.content.paths import PathSyntaxError, get_value

logger = logging.getLogger(__name__)

PATH_ATTR = "data-content-path"
STYLE_ATTR = "data-style"

_DECLARATION_SPLIT_RE = re.compile(r";(?![^(]*\))")
_BACKGROUND_PROPS = frozenset(
    {"background-image", "background-size", "background-position", "background-repeat"}
)


# characters that could close the quoted url() or the declaration
_CSS_URL_ESCAPES = str.maketrans(
    {
        "'": "%27",
        '"': "%22",
        "\\": "%5C",
        "(": "%28",
        ")": "%29",
        "\n": "%0A",
        "\r": "%0D",
    }
)


def css_url(url: str) -> str:
    return url.translate(_CSS_URL_ESCAPES)


def background_style(url: str) -> str:
    return (
        f"background-image: url('{css_url(url)}'); background-size: cover; "
        "background-position: center; background-repeat: no-repeat;"
    )


def append_style(el: Tag, css: str) -> None:
    current = el.get("style", "") or ""
    separator = "; " if current and not current.strip().endswith(";") else ""
    el["style"] = current + separator + css


def strip_style_properties(style: str, props: frozenset[str]) -> str:
    kept = []
    for declaration in _DECLARATION_SPLIT_RE.split(style):
        name = declaration.split(":", 1)[0].strip().lower()
        if declaration.strip() and name not in props:
            kept.append(declaration.strip())
    return "; ".join(kept) + (";" if kept else "")


def binding_type(el: Tag) -> PatchType:
    """Declared type of a bound node; unknown spellings bind as text."""
    raw = str(el.get("data-type") or el.get("data-content-type") or "text").lower()
    if raw == "html":
        return PatchType.HTML
    if raw == "imageurl":
        return PatchType.IMAGE_URL
    return PatchType.TEXT


def apply_data_styles(root: Tag) -> int:
    """Move staged ``data-style`` CSS into ``style``.

    The staging attribute is removed once applied, so a second pass is
    a no-op. Returns the number of nodes updated.
    """
    applied = 0
    for el in root.select(f"[{STYLE_ATTR}]"):
        css = (el.get(STYLE_ATTR) or "").strip()
        del el[STYLE_ATTR]
        if css:
            append_style(el, css)
            applied += 1
    return applied


def _clear_background(el: Tag) -> None:
    style = el.get("style")
    if style is None:
        return
    cleaned = strip_style_properties(style, _BACKGROUND_PROPS)
    if cleaned:
        el["style"] = cleaned
    else:
        del el["style"]


def _set_inner_html(el: Tag, markup: str) -> None:
    el.clear()
    fragment = BeautifulSoup(markup, "html.parser")
    for node in list(fragment.contents):
        el.append(node.extract())


def _hide_caption(el: Tag) -> None:
    sibling = el.find_next_sibling()
    if sibling is not None and sibling.name == "p":
        style = sibling.get("style", "") or ""
        if "display: none" not in style:
            append_style(sibling, "display: none;")


def apply_data_bindings(root: Tag, compiled: CompiledSite | Mapping[str, Any] | None) -> int:
    """Populate every bound node from ``compiled``.

    Missing values clear the node's text, markup or background image so
    no stale content survives a refresh. Returns the number of bound
    nodes visited.
    """
    data = compiled.to_wire() if isinstance(compiled, CompiledSite) else dict(compiled or {})
    visited = 0
    for el in root.select(f"[{PATH_ATTR}]"):
        path = el.get(PATH_ATTR)
        if not path:
            continue
        visited += 1
        kind = binding_type(el)
        try:
            value = get_value(data, path)
        except PathSyntaxError:
            logger.warning("Ignoring malformed binding path %r", path)
            value = None

        if kind is PatchType.HTML:
            _set_inner_html(el, "" if value is None else str(value))
        elif kind is PatchType.IMAGE_URL:
            _clear_background(el)
            url = "" if value is None else str(value)
            if url:
                append_style(el, background_style(url))
                el.clear()
                _hide_caption(el)
        else:
            el.string = "" if value is None else str(value)
    return visited


def mark_editable(root: Tag) -> list[Tag]:
    """Flag text/html bound nodes as ``contenteditable``; image nodes are skipped."""
    editable = []
    for el in root.select(f"[{PATH_ATTR}]"):
        if binding_type(el) is PatchType.IMAGE_URL:
            continue
        if not el.has_attr("contenteditable"):
            el["contenteditable"] = "true"
        editable.append(el)
    return editable
