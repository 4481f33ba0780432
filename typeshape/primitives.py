"""
Primitive parsers.

One-shot type checks that succeed with the input unchanged. bool is never
accepted as a number, while NaN and infinities are valid floats.
"""

from __future__ import annotations

import math
import re
from typing import Any

from .core import Guard, Parser
from .errors import expected_type
from .guards import (
    is_bool,
    is_bytes,
    is_float,
    is_int,
    is_none,
    is_number,
    is_str,
)
from .types import FailureKind, Outcome, Success, failure


def _from_guard(guard: Guard, name: str) -> Parser:
    check = guard.check
    mismatch = expected_type(name)

    def parse_primitive(data: Any) -> Outcome[Any]:
        return Success(data) if check(data) else mismatch

    return Parser(fn=parse_primitive, type_hint=guard.type_hint)


parse_none = _from_guard(is_none, "None")
parse_bool = _from_guard(is_bool, "bool")
parse_int = _from_guard(is_int, "int")
parse_float = _from_guard(is_float, "float")
parse_number = _from_guard(is_number, "number")
parse_str = _from_guard(is_str, "str")
parse_bytes = _from_guard(is_bytes, "bytes")


def _parse_unknown(data: Any) -> Outcome[Any]:
    return Success(data)


def _parse_never(data: Any) -> Outcome[Any]:
    return failure("Expected no value, since never cannot be instantiated")


# Accepts any value. Missing object fields are still reported as missing.
parse_unknown = Parser(fn=_parse_unknown, type_hint=Any)

# Rejects any value.
parse_never = Parser(fn=_parse_never)


def InstanceOf(cls: type) -> Parser:
    """
    Check that the data is an instance of `cls`.

    Usage:
        parse_error = InstanceOf(ValueError)
    """

    def parse_instance(data: Any) -> Outcome[Any]:
        if isinstance(data, cls):
            return Success(data)
        return failure(
            f"Expected instance of {cls.__name__}, got {type(data).__name__}",
            FailureKind.TYPE_MISMATCH,
        )

    return Parser(fn=parse_instance, type_hint=cls)


_WHITESPACE = re.compile(r"\s")
# ASCII digits only; no digit separators
_PREFIXED = re.compile(r"0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+")
_INTEGER = re.compile(r"[+-]?[0-9]+")
_DECIMAL = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def _to_number(data: str) -> int | float | None:
    if _PREFIXED.fullmatch(data):
        return int(data, 0)
    if _INTEGER.fullmatch(data):
        try:
            return int(data)
        except ValueError:
            # Over the interpreter digit limit
            return float(data)
    if _DECIMAL.fullmatch(data):
        return float(data)
    return None


def _is_finite(value: int | float) -> bool:
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def _parse_number_from_string(data: Any) -> Outcome[Any]:
    if not isinstance(data, str):
        return failure(
            "Expected a stringified number but did not get a string",
            FailureKind.TYPE_MISMATCH,
        )
    if data == "":
        return failure("Expected a stringified number but got an empty string")
    if _WHITESPACE.search(data):
        return failure("Expected a stringified number but got a string with whitespace")
    parsed = _to_number(data)
    if parsed is None or not _is_finite(parsed):
        return failure(f"Expected a stringified number but got {data!r}")
    return Success(parsed)


# Parses "12" -> 12, "1.5e3" -> 1500.0 and "0x1f" -> 31; never yields NaN or
# infinities.
parse_number_from_string = Parser(fn=_parse_number_from_string, type_hint=float)
