"""Best-effort HTML filter for rich-text fields.

Removes ``<script>`` blocks and inline ``on*=`` event-handler
attributes. Nothing else is touched; this is not a security boundary
for untrusted markup.
"""

from __future__ import annotations

import re

_SCRIPT_RE = re.compile(r"<\s*script[^>]*>[\s\S]*?<\s*/\s*script\s*>", re.IGNORECASE)
_HANDLER_RES = (
    re.compile(r'\s+on[a-zA-Z]+\s*=\s*"[^"]*"', re.IGNORECASE),
    re.compile(r"\s+on[a-zA-Z]+\s*=\s*'[^']*'", re.IGNORECASE),
    re.compile(r"\s+on[a-zA-Z]+\s*=\s*[^\s>]+", re.IGNORECASE),
)


def sanitize_html_basic(markup: str) -> str:
    out = _SCRIPT_RE.sub("", markup)
    for pattern in _HANDLER_RES:
        out = pattern.sub("", out)
    return out
