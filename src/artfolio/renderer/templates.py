"""HTML templates and ``{{ key }}`` token substitution."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)

BUILTIN_TEMPLATES_DIR = Path(__file__).parent / "html"

TEMPLATE_KEYS: tuple[tuple[str, str], ...] = (
    ("home", "grid"),
    ("home", "split"),
    ("home", "hero"),
    ("works", "grid"),
    ("works", "single"),
    ("about", "split"),
    ("about", "vertical"),
)


def render_template(template: str, data: Mapping[str, object]) -> str:
    """Replace every ``{{ key }}`` token with the string form of its value.

    None renders as an empty string. Tokens with no entry in ``data`` are
    left verbatim.
    """
    if not template:
        return ""
    out = template
    for key, value in data.items():
        text = "" if value is None else str(value)
        pattern = re.compile(r"\{\{\s*" + re.escape(key) + r"\s*\}\}")
        out = pattern.sub(lambda _m, text=text: text, out)
    return out


class TemplateStore:
    """Read-only page/layout -> template map, loaded once and cached.

    A missing or unreadable template file is logged and cached as an
    empty string, which renders as an empty page.
    """

    def __init__(self, directory: Path | None = None) -> None:
        self.directory = directory or BUILTIN_TEMPLATES_DIR
        self._templates: dict[tuple[str, str], str] | None = None

    @classmethod
    def from_mapping(cls, templates: Mapping[tuple[str, str], str]) -> TemplateStore:
        store = cls()
        store._templates = dict(templates)
        return store

    def _load(self) -> dict[tuple[str, str], str]:
        loaded: dict[tuple[str, str], str] = {}
        for page, layout in TEMPLATE_KEYS:
            path = self.directory / page / f"{layout}.html"
            try:
                loaded[(page, layout)] = path.read_text(encoding="utf-8")
            except OSError:
                logger.error("Template load error: %s", path)
                loaded[(page, layout)] = ""
        return loaded

    def ensure_loaded(self) -> dict[tuple[str, str], str]:
        if self._templates is None:
            self._templates = self._load()
        return self._templates

    def get(self, page: str, layout: str) -> str:
        return self.ensure_loaded().get((page, layout), "")
