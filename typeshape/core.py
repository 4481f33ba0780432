"""
Core validator classes for typeshape.

Provides the Guard and Parser dataclasses with functional composition.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable

from .presence import ABSENT, Present, Presence
from .types import (
    CheckFn,
    Failure,
    FailureKind,
    Outcome,
    ParseFn,
    Success,
    failure,
    success,
)


@dataclass(frozen=True, slots=True)
class Guard:
    """
    Immutable boolean validator.

    Wraps a check function. `optional` is only read by the object engine: an
    optional guard also accepts a missing property.
    """

    check: CheckFn
    optional: bool = False
    type_hint: Any = None

    def __call__(self, data: Any) -> bool:
        return bool(self.check(data))

    def __and__(self, other: Guard | CheckFn) -> Guard:
        """
        Both guards must pass.

        Usage:
            is_str & Guard(str.isidentifier)
        """
        other_g = _to_guard(other)

        def combined_check(x: Any) -> bool:
            return self.check(x) and other_g.check(x)

        return Guard(
            check=combined_check,
            optional=self.optional and other_g.optional,
            type_hint=self.type_hint or other_g.type_hint,
        )

    def __rand__(self, other: CheckFn) -> Guard:
        return _to_guard(other) & self

    def __or__(self, other: Guard | CheckFn) -> Guard:
        """
        At least one guard must pass.

        Usage:
            is_str | is_int
        """
        other_g = _to_guard(other)

        def combined_check(x: Any) -> bool:
            return self.check(x) or other_g.check(x)

        return Guard(
            check=combined_check,
            optional=self.optional or other_g.optional,
        )

    def __ror__(self, other: CheckFn) -> Guard:
        return _to_guard(other) | self


@dataclass(frozen=True, slots=True)
class Parser:
    """
    Immutable parser node.

    The fundamental building block. Wraps a parse function that maps any input
    to an Outcome, with the metadata the object engine needs:

    - `optional`: the property may be missing from the enclosing object.
    - `fallback`: `Present(default)` when the parser never fails; the default
      is also used when the property is missing.
    - `type_hint`: the Python type of successful values, for pydantic models.
    """

    fn: ParseFn
    optional: bool = False
    fallback: Presence[Any] = ABSENT
    type_hint: Any = None

    def __call__(self, data: Any) -> Outcome[Any]:
        return self.fn(data)

    def __or__(self, other: Any) -> Parser:
        """
        Union of two parsers; the left one is tried first.

        Usage:
            parse_int | parse_str
        """
        from .schema import to_parser
        from .validators import OneOf

        return OneOf(self, to_parser(other))

    def __ror__(self, other: Any) -> Parser:
        """Support `str | parse_int` where the type comes first."""
        from .schema import to_parser
        from .validators import OneOf

        return OneOf(to_parser(other), self)

    def map(self, fn: Callable[[Any], Any]) -> Parser:
        """
        Transform the value of successful outcomes.

        A fallback is transformed too, once, so a defaulted parser stays
        infallible for missing properties. The type hint is only kept when
        `fn` is a type, like `str` or `int`.

        Usage:
            parse_upper = parse_str.map(str.upper)
        """
        parse = self.fn

        def mapped(data: Any) -> Outcome[Any]:
            result = parse(data)
            if isinstance(result, Failure):
                return result
            return success(fn(result.value))

        fallback = self.fallback
        if isinstance(fallback, Present):
            fallback = Present(fn(fallback.value))
        return Parser(
            fn=mapped,
            optional=self.optional,
            fallback=fallback,
            type_hint=fn if isinstance(fn, type) else None,
        )

    def chain(self, fn: Callable[[Any], Outcome[Any]]) -> Parser:
        """
        Feed successful values into a function that may fail.

        Usage:
            parse_non_empty = Array(parse_int).chain(
                lambda xs: success(xs) if xs else failure("Expected non-empty list")
            )
        """
        parse = self.fn

        def chained(data: Any) -> Outcome[Any]:
            result = parse(data)
            if isinstance(result, Failure):
                return result
            return fn(result.value)

        return Parser(fn=chained, optional=self.optional, type_hint=self.type_hint)

    def recover(self, fn: Callable[[Failure], Outcome[Any]]) -> Parser:
        """
        Turn failures into another outcome.

        Usage:
            parse_count = parse_int.recover(lambda _: success(0))
        """
        parse = self.fn

        def recovered(data: Any) -> Outcome[Any]:
            result = parse(data)
            if isinstance(result, Failure):
                return fn(result)
            return result

        return Parser(fn=recovered, optional=self.optional, type_hint=self.type_hint)

    def with_message(self, msg: str) -> Parser:
        """Return new parser whose failures carry a custom message."""
        parse = self.fn

        def relabelled(data: Any) -> Outcome[Any]:
            result = parse(data)
            if isinstance(result, Failure):
                return Failure(msg, result.path, result.kind)
            return result

        return replace(self, fn=relabelled)


def parser_from_guard(guard: Guard | CheckFn, message: str | None = None) -> Parser:
    """
    Construct a parser from a guard or a predicate function.

    Usage:
        parse_identifier = parser_from_guard(Guard(str.isidentifier))
    """
    g = _to_guard(guard)
    check = g.check
    msg = message or "The data does not match the type guard"

    def parse_guarded(data: Any) -> Outcome[Any]:
        try:
            passed = check(data)
        except Exception as e:
            return failure(f"Validation error: {e}", FailureKind.TYPE_MISMATCH)
        if not passed:
            return failure(msg, FailureKind.TYPE_MISMATCH)
        return Success(data)

    return Parser(fn=parse_guarded, optional=g.optional, type_hint=g.type_hint)


def _to_guard(v: Guard | CheckFn) -> Guard:
    if isinstance(v, Guard):
        return v
    if isinstance(v, type):

        def type_check(x: Any, t: type = v) -> bool:
            return isinstance(x, t)

        return Guard(check=type_check, type_hint=v)
    if callable(v):
        return Guard(check=v)
    raise TypeError(f"Cannot convert {type(v).__name__} to guard")
