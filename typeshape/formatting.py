"""
Human-readable rendering of outcomes and failure paths.
"""

from __future__ import annotations

import re
from typing import Any, Callable

from .types import ArrayIndex, Failure, ObjectKey, Outcome, Path

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*\Z")


def format_path(path: Path) -> str:
    """
    Render a path, rooted at `$`.

    Usage:
        format_path((ObjectKey("users"), ArrayIndex(2), ObjectKey("name")))
        # -> "$.users[2].name"
        format_path((ObjectKey("first name"),))
        # -> "$['first name']"
    """
    parts = ["$"]
    for segment in path:
        match segment:
            case ArrayIndex(index=index):
                parts.append(f"[{index}]")
            case ObjectKey(key=str() as key) if _IDENTIFIER.match(key):
                parts.append(f".{key}")
            case ObjectKey(key=key):
                parts.append(f"[{key!r}]")
    return "".join(parts)


def format_failure(result: Failure) -> str:
    """The message, followed by the location when the path is not empty."""
    if not result.path:
        return result.message
    return f"{result.message} at {format_path(result.path)}"


def format_result(
    outcome: Outcome[Any], format_value: Callable[[Any], str] | None = None
) -> str:
    """
    One-line summary of an outcome.

    Usage:
        format_result(parse_int(1))     # -> "Success: 1"
        format_result(parse_int("1"))   # -> "Failure: Expected type int"
    """
    if isinstance(outcome, Failure):
        return f"Failure: {format_failure(outcome)}"
    render = format_value or repr
    return f"Success: {render(outcome.value)}"
