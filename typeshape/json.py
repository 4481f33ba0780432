"""
Parsing JSON text.
"""

from __future__ import annotations

import json
from typing import Any

from .core import Parser
from .primitives import parse_unknown
from .types import FailureKind, Outcome, failure


def parse_json(v: Any) -> Parser:
    """
    Decode JSON text, then parse the decoded value.

    Accepts `str`, `bytes` and `bytearray`. Invalid JSON is a failure, never
    an exception, including integers over the interpreter digit limit and
    overly deep nesting.

    Usage:
        parse_user = parse_json(Object({"id": parse_int}))
        parse_user('{"id": 1}')   # -> Success({"id": 1})
        parse_user('{"id": ')     # -> Failure(kind=JSON_DECODE_ERROR)
    """
    # Import here to avoid circular dependency
    from .schema import to_parser

    parse = to_parser(v).fn

    def parse_json_text(data: Any) -> Outcome[Any]:
        if not isinstance(data, (str, bytes, bytearray)):
            return failure(
                f"Expected JSON text, got {type(data).__name__}",
                FailureKind.TYPE_MISMATCH,
            )
        try:
            decoded = json.loads(data)
        except (ValueError, RecursionError) as e:
            return failure(f"Invalid JSON: {e}", FailureKind.JSON_DECODE_ERROR)
        return parse(decoded)

    return Parser(fn=parse_json_text, type_hint=Any)


parse_json_value = parse_json(parse_unknown)
