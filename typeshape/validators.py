"""
Built-in combinators for typeshape.

Provides factory functions that return Parser instances.
"""

from __future__ import annotations

from typing import Any, Iterable, Literal as TypingLiteral, Sequence, Union

from .context import use_compiled
from .core import Parser
from .errors import NO_UNION_MEMBER_MATCHED, NOT_AN_ARRAY, NOT_AN_OBJECT, wrong_tuple_length
from .objects import ObjectParser, _object
from .presence import ABSENT, Present
from .primitives import parse_none
from .types import (
    ArrayIndex,
    Failure,
    FailureKind,
    ObjectKey,
    Outcome,
    Success,
    failure,
)

_LITERAL_TYPES = (str, int, bool, bytes, type(None))


def Equals(*constants: Any) -> Parser:
    """
    Strict equality against one or more constants: the type must match too, so
    `Equals(1)` rejects `1.0` and `True`.

    Usage:
        parse_level = Equals("debug", "info", "warning", "error")
        parse_level("info")   # -> Success("info")
        parse_level("trace")  # -> Failure
    """
    if not constants:
        raise ValueError("Equals() requires at least one constant")

    mismatch = failure(
        f"Expected one of: {', '.join(repr(c) for c in constants)}",
        FailureKind.TYPE_MISMATCH,
    )

    def parse_equals(data: Any) -> Outcome[Any]:
        for c in constants:
            if type(data) is type(c) and data == c:
                return Success(data)
        return mismatch

    hint = None
    if all(isinstance(c, _LITERAL_TYPES) for c in constants):
        hint = TypingLiteral[constants]  # type: ignore[valid-type]
    return Parser(fn=parse_equals, type_hint=hint)


Literal = Equals


def OneOf(*parsers: Any) -> Parser:
    """
    Try `parsers` in order and return the first success.

    Failures of the members are not reported; when nothing matches, the result
    is a single "no alternative matched" failure.

    Usage:
        parse_id = OneOf(parse_int, parse_str)
        parse_id = parse_int | parse_str   # same
    """
    from .schema import to_parser

    members = [to_parser(p) for p in parsers]
    fns = [m.fn for m in members]

    def parse_one_of(data: Any) -> Outcome[Any]:
        for parse in fns:
            result = parse(data)
            if isinstance(result, Success):
                return result
        return NO_UNION_MEMBER_MATCHED

    fallback = next((m.fallback for m in members if isinstance(m.fallback, Present)), ABSENT)
    hints = [m.type_hint for m in members]
    hint = Union[tuple(hints)] if hints and all(h is not None for h in hints) else None
    return Parser(
        fn=parse_one_of,
        optional=any(m.optional for m in members),
        fallback=fallback,
        type_hint=hint,
    )


def Optional(v: Any) -> Parser:
    """
    Mark an object field as optional: it may be missing, or be None.

    Missing optional fields are left out of the result. Compare with
    `Nullable`, whose field must be present.

    Usage:
        parse_user = Object({
            "id": parse_int,
            "email": Optional(parse_str),
        })
        parse_user({"id": 1})                 # -> Success({"id": 1})
        parse_user({"id": 1, "email": None})  # -> Success({"id": 1, "email": None})
    """
    union = OneOf(parse_none, v)
    return Parser(
        fn=union.fn,
        optional=True,
        fallback=union.fallback,
        type_hint=union.type_hint,
    )


def Nullable(v: Any) -> Parser:
    """
    Union with None. The field must still be present in an object.

    Usage:
        Nullable(parse_str)(None)   # -> Success(None)
    """
    return OneOf(parse_none, v)


# Python has a single null value, so undefined and null coincide.
Undefineable = Nullable


def OptionalNullable(v: Any) -> Parser:
    """Shorthand for `Optional(Nullable(v))`."""
    return Optional(Nullable(v))


def WithDefault(v: Any, default: Any) -> Parser:
    """
    Replace failures with `default`. The parser never fails.

    In an object, a missing field also takes the default.

    The default is returned as is, never copied: with a mutable default such
    as `[]`, every result that fell back holds the same list. Do not mutate it.

    Usage:
        parse_count = WithDefault(parse_int, 0)
        parse_count("x")   # -> Success(0)
    """
    from .schema import to_parser

    inner = to_parser(v)
    parse = inner.fn

    def parse_with_default(data: Any) -> Outcome[Any]:
        result = parse(data)
        if isinstance(result, Failure):
            return Success(default)
        return result

    return Parser(
        fn=parse_with_default,
        optional=inner.optional,
        fallback=Present(default),
        type_hint=inner.type_hint,
    )


Fallback = WithDefault


def Always(value: Any) -> Parser:
    """
    Succeed with `value` whatever the input. Use as last member of `OneOf`.

    Like `WithDefault`, every result holds the same `value` object.

    Usage:
        parse_name = OneOf(parse_str, Always("Anonymous"))
    """

    def parse_always(data: Any) -> Outcome[Any]:
        return Success(value)

    return Parser(fn=parse_always, fallback=Present(value), type_hint=type(value))


def FailWith(message: str) -> Parser:
    """
    Fail with `message` whatever the input. The counterpart of `Always`.

    Usage:
        parse_legacy_user = Object({
            "version": Equals(1),
            "id": FailWith("Version 1 users are no longer supported"),
        })
    """
    rejected = failure(message)

    def parse_fail_with(data: Any) -> Outcome[Any]:
        return rejected

    return Parser(fn=parse_fail_with)


def Array(item: Any) -> Parser:
    """
    Parse a list by parsing every element.

    Fails at the first failing element. When every element comes back
    unchanged, the input list itself is returned, so `result.value is data`
    tells that nothing had to be replaced.

    Usage:
        parse_tags = Array(parse_str)
        parse_tags(["a", 1])   # -> Failure at $[1]
    """
    from .schema import to_parser

    inner = to_parser(item)
    parse = inner.fn

    def parse_array(data: Any) -> Outcome[Any]:
        if not isinstance(data, list):
            return NOT_AN_ARRAY

        output = []
        unchanged = True
        for index, element in enumerate(data):
            result = parse(element)
            if isinstance(result, Failure):
                return Failure(result.message, (ArrayIndex(index), *result.path), result.kind)
            if result.value is not element:
                unchanged = False
            output.append(result.value)

        return Success(data if unchanged else output)

    return Parser(fn=parse_array, type_hint=list[inner.type_hint or Any])


def NonEmptyArray(item: Any) -> Parser:
    """Like `Array`, but `[]` is rejected."""
    parse = Array(item)

    def parse_non_empty(data: Any) -> Outcome[Any]:
        if isinstance(data, list) and not data:
            return failure("Expected a non-empty list")
        return parse(data)

    return Parser(fn=parse_non_empty, type_hint=parse.type_hint)


def Tuple(parsers: Sequence[Any]) -> Parser:
    """
    Parse a list positionally.

    Shorter input fails; elements beyond the declared ones are dropped.

    Usage:
        parse_point = Tuple([parse_float, parse_float])
        parse_point([1.0, 2.0, 3.0])   # -> Success([1.0, 2.0])
    """
    from .schema import to_parser

    if not isinstance(parsers, (list, tuple)):
        raise TypeError(f"Tuple() expects a list of parsers, got {type(parsers).__name__}")

    members = [to_parser(p) for p in parsers]
    fns = [m.fn for m in members]
    arity = len(fns)

    def parse_tuple(data: Any) -> Outcome[Any]:
        if not isinstance(data, list):
            return NOT_AN_ARRAY
        if len(data) < arity:
            return wrong_tuple_length(len(data), arity)

        output = []
        unchanged = len(data) == arity
        for index, parse in enumerate(fns):
            element = data[index]
            result = parse(element)
            if isinstance(result, Failure):
                return Failure(result.message, (ArrayIndex(index), *result.path), result.kind)
            if result.value is not element:
                unchanged = False
            output.append(result.value)

        return Success(data if unchanged else output)

    return Parser(fn=parse_tuple, type_hint=list)


def Record(keys: Iterable[Any], value: Any) -> ObjectParser:
    """
    Parse a dict with exactly the given keys, all sharing one value parser.

    A key may only be missing when `value` is optional or has a default.

    Usage:
        parse_rgb = Record(["r", "g", "b"], parse_int)
    """
    if isinstance(keys, (str, bytes)) or not isinstance(keys, Iterable):
        raise TypeError("Record() expects an iterable of keys")
    return _object({k: value for k in keys}, strict=True, compiled=use_compiled())


def Dictionary(key: Any, value: Any) -> Parser:
    """
    Parse a dict whose keys and values are parsed independently.

    Any subset of keys accepted by `key` may be present; a key rejected by
    `key` fails the dict.

    Usage:
        parse_scores = Dictionary(parse_str, parse_int)
        parse_scores({"alice": 3, "bob": 5})   # -> Success
    """
    from .schema import to_parser

    key_parser = to_parser(key)
    value_parser = to_parser(value)
    parse_key = key_parser.fn
    parse_value = value_parser.fn

    def parse_dictionary(data: Any) -> Outcome[Any]:
        if not isinstance(data, dict):
            return NOT_AN_OBJECT

        output = {}
        unchanged = True
        for k, v in data.items():
            key_result = parse_key(k)
            if isinstance(key_result, Failure):
                return Failure(
                    f"Invalid property key: {key_result.message}",
                    (ObjectKey(k), *key_result.path),
                    key_result.kind,
                )
            value_result = parse_value(v)
            if isinstance(value_result, Failure):
                return Failure(
                    value_result.message,
                    (ObjectKey(k), *value_result.path),
                    value_result.kind,
                )
            if key_result.value is not k or value_result.value is not v:
                unchanged = False
            output[key_result.value] = value_result.value

        return Success(data if unchanged else output)

    hint = dict[key_parser.type_hint or Any, value_parser.type_hint or Any]
    return Parser(fn=parse_dictionary, type_hint=hint)


PartialRecord = Dictionary

