"""
Schema operations for typeshape.

Provides to_parser(), parse() and to_pydantic().
"""

from __future__ import annotations

from typing import Any, Mapping
from typing import Optional as TypingOptional

from pydantic import create_model

from .core import Guard, Parser, parser_from_guard
from .objects import Object, ObjectParser
from .presence import Present
from .primitives import (
    InstanceOf,
    parse_bool,
    parse_float,
    parse_int,
    parse_none,
    parse_str,
)
from .types import Outcome

_PRIMITIVES = {
    str: parse_str,
    int: parse_int,
    float: parse_float,
    bool: parse_bool,
    type(None): parse_none,
}


def to_parser(v: Any) -> Parser:
    """
    Coerce a schema value into a Parser.

    - Parser: returned unchanged
    - Guard or predicate function: failures use a generic message
    - str, int, float, bool, NoneType (or None): the primitive parsers
    - any other class: `InstanceOf`
    - dict: `Object`
    - [x]: `Array(x)`; [x, y, ...]: `Array(OneOf(x, y, ...))`
    - (x, y, ...): `Tuple`
    """
    # Import here to avoid circular dependency
    from .validators import Array, OneOf, Tuple

    if isinstance(v, Parser):
        return v
    if isinstance(v, Guard):
        return parser_from_guard(v)
    if v is None:
        return parse_none
    if isinstance(v, type):
        return _PRIMITIVES.get(v) or InstanceOf(v)
    if isinstance(v, dict):
        return Object(v)
    if isinstance(v, list):
        if not v:
            raise TypeError("List schema needs at least one item schema")
        if len(v) == 1:
            return Array(v[0])
        return Array(OneOf(*v))
    if isinstance(v, tuple):
        return Tuple(v)
    if callable(v):
        return parser_from_guard(v)
    raise TypeError(f"Cannot convert {type(v).__name__} to parser")


def parse(data: Any, schema: Any) -> Outcome[Any]:
    """
    Parse data against a schema.

    Args:
        data: The value to parse, e.g. the output of `json.loads`
        schema: Anything `to_parser` accepts

    Returns:
        Success(value) if the data matches the schema
        Failure(message, path, kind) otherwise

    Usage:
        schema = {
            "name": str,
            "email": Optional(str),
            "tags": [str],
        }
        result = parse({"name": "Alice", "tags": []}, schema)
    """
    return to_parser(schema)(data)


def to_pydantic(name: str, schema: Mapping[str, Any] | ObjectParser) -> type:
    """
    Compile an object schema to a Pydantic model.

    Args:
        name: Name of the generated model class
        schema: Dict schema, or a parser built by `Object`/`ObjectStrict`

    Returns:
        A Pydantic BaseModel subclass

    Usage:
        User = to_pydantic("User", {
            "name": str,
            "email": Optional(str),
            "role": WithDefault(str, "member"),
            "address": {"city": str},
        })
        user = User(name="Alice", address={"city": "Paris"})
    """
    parser = schema if isinstance(schema, ObjectParser) else to_parser(schema)
    if not isinstance(parser, ObjectParser):
        raise TypeError("Schema must be a dict")

    fields: dict[str, Any] = {}

    for key, p in parser.fields.items():
        if not isinstance(key, str):
            raise TypeError(f"Pydantic field names must be str, got {key!r}")
        fields[key] = _extract_pydantic_field(f"{name}_{key}", p)

    return create_model(name, **fields)


def _extract_pydantic_field(name: str, p: Parser) -> tuple[Any, Any]:
    """Extract Pydantic field type and default from parser."""
    hint = p.type_hint
    if isinstance(p, ObjectParser):
        hint = to_pydantic(name, p)

    match p:
        case Parser(fallback=Present(value=default)):
            return (hint or Any, default)
        case Parser(optional=True):
            return (TypingOptional[hint or Any], None)
        case Parser():
            return (hint or Any, ...)

    return (Any, None)
