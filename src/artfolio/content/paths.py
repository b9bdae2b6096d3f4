"""Dotted/bracketed path access into nested dict/list documents.

A path is a dot-separated list of segments; each segment is a key
optionally followed by one or more bracketed indices::

    aboutContent.bio
    surveyData.worksDetails.years[2]
    a.b[2].c

``get_value`` never raises for missing data. ``set_value`` creates the
intermediate containers it needs (a list when the next step is an index,
a dict otherwise) and raises ``PathConflictError`` when an existing
intermediate has the wrong shape.
"""

from __future__ import annotations

import re
from typing import Any

from artfolio.errors import ValidationError

_SEGMENT_RE = re.compile(r"^([^\[\]]+)((?:\[\d+\])*)$")
_INDEX_RE = re.compile(r"\[(\d+)\]")

PathStep = str | int


class PathSyntaxError(ValidationError):
    """The path string does not follow the segment grammar."""


class PathConflictError(ValidationError):
    """An existing intermediate value is not the container the path needs."""


def parse_path(path: str) -> list[PathStep]:
    """Split a path into keys (str) and indices (int).

    Raises PathSyntaxError for empty paths, empty segments, or stray
    brackets.
    """
    if not isinstance(path, str) or not path:
        raise PathSyntaxError("Path must be a non-empty string")
    steps: list[PathStep] = []
    for segment in path.split("."):
        match = _SEGMENT_RE.match(segment)
        if match is None:
            raise PathSyntaxError(f"Invalid path segment {segment!r} in {path!r}")
        steps.append(match.group(1))
        steps.extend(int(i) for i in _INDEX_RE.findall(match.group(2)))
    return steps


def has_index(path: str) -> bool:
    """Return True if the path addresses an array element anywhere."""
    return "[" in path


def get_value(root: Any, path: str) -> Any:
    """Read the value at ``path``, or None if any step is missing."""
    current = root
    for step in parse_path(path):
        if isinstance(step, int):
            if not isinstance(current, list) or step >= len(current):
                return None
            current = current[step]
        else:
            if not isinstance(current, dict):
                return None
            current = current.get(step)
        if current is None:
            return None
    return current


def set_value(root: dict[str, Any], path: str, value: Any) -> None:
    """Write ``value`` at ``path``, mutating ``root`` in place."""
    steps = parse_path(path)
    if not isinstance(root, dict):
        raise PathConflictError(f"Root of {path!r} must be an object")

    current: Any = root
    for position, step in enumerate(steps[:-1]):
        following = steps[position + 1]
        wanted = list if isinstance(following, int) else dict
        child = _read_slot(current, step)
        if child is None:
            child = wanted()
            _write_slot(current, step, child)
        elif not isinstance(child, wanted):
            raise PathConflictError(
                f"Cannot descend into {type(child).__name__} at "
                f"{_format(steps[: position + 1])} for {path!r}"
            )
        current = child
    _write_slot(current, steps[-1], value)


def _read_slot(container: dict | list, step: PathStep) -> Any:
    if isinstance(step, int):
        return container[step] if step < len(container) else None
    return container.get(step)


def _write_slot(container: dict | list, step: PathStep, value: Any) -> None:
    if isinstance(step, int):
        if len(container) <= step:
            container.extend([None] * (step + 1 - len(container)))
        container[step] = value
    else:
        container[step] = value


def _format(steps: list[PathStep]) -> str:
    out = ""
    for step in steps:
        if isinstance(step, int):
            out += f"[{step}]"
        else:
            out += f".{step}" if out else step
    return out
