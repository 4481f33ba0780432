"""
Object validation engine.

Two strategies share one contract:

- Interpreted: a loop over the schema entries, evaluated on every call.
- Compiled: the schema is specialized once into a Python function
  (see `typeshape.compiler`). Faster, but needs `exec`.

For every declared field, in schema order:

1. Presence is decided with `key in data`, so `{"a": None}` and `{}` differ.
2. A present value goes through the field parser. A failure fails the whole
   object, with `ObjectKey(key)` prepended to its path.
3. A missing value takes the parser's fallback when it has one, is omitted
   when the parser is optional, and otherwise fails as a missing property.

The output holds exactly the produced fields, never other keys of the input.
When no value was replaced and no key was dropped, the input dict itself is
returned.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from .compiler import compile_object_parser
from .context import use_compiled
from .core import Parser
from .errors import NOT_AN_OBJECT, extra_property, missing_property
from .presence import Absent, Present, lookup
from .types import Failure, ObjectKey, Outcome, ParseFn, Success


@dataclass(frozen=True, slots=True)
class ObjectParser(Parser):
    """Parser for dicts with a fixed set of fields."""

    fields: Mapping[Any, Parser] = field(default_factory=dict)
    strict: bool = False
    compiled: bool = False


def _interpret(fields: Mapping[Any, Parser], strict: bool) -> ParseFn:
    entries = [(key, parser.fn, parser.optional, parser.fallback) for key, parser in fields.items()]
    declared = frozenset(fields)

    def parse_object(data: Any) -> Outcome[Any]:
        if not isinstance(data, dict):
            return NOT_AN_OBJECT

        output: dict[Any, Any] = {}
        unchanged = True
        for key, parse, optional, fallback in entries:
            match lookup(data, key):
                case Present(value=value):
                    result = parse(value)
                    if isinstance(result, Failure):
                        return Failure(result.message, (ObjectKey(key), *result.path), result.kind)
                    if result.value is not value:
                        unchanged = False
                    output[key] = result.value
                case Absent():
                    if isinstance(fallback, Present):
                        output[key] = fallback.value
                        unchanged = False
                    elif not optional:
                        return missing_property(key)

        if strict:
            for key in data:
                if key not in declared:
                    return extra_property(key)

        if unchanged and len(output) == len(data):
            return Success(data)
        return Success(output)

    return parse_object


def _fields(schema: Mapping[Any, Any]) -> dict[Any, Parser]:
    from .schema import to_parser

    if not isinstance(schema, Mapping):
        raise TypeError(f"Schema must be a dict, got {type(schema).__name__}")
    return {key: to_parser(v) for key, v in schema.items()}


def _object(schema: Mapping[Any, Any], strict: bool, compiled: bool) -> ObjectParser:
    fields = _fields(schema)
    fn = compile_object_parser(fields, strict) if compiled else _interpret(fields, strict)
    return ObjectParser(
        fn=fn,
        type_hint=dict,
        fields=fields,
        strict=strict,
        compiled=compiled,
    )


def ObjectInterpreted(schema: Mapping[Any, Any]) -> ObjectParser:
    """
    Parse dicts with a fixed set of fields, walking the schema on every call.

    Extra keys of the input are left out of the result.

    Usage:
        parse_user = ObjectInterpreted({
            "id": parse_int,
            "name": parse_str,
            "email": Optional(parse_str),
        })
    """
    return _object(schema, strict=False, compiled=False)


def ObjectCompiled(schema: Mapping[Any, Any]) -> ObjectParser:
    """
    Same as `ObjectInterpreted`, but the schema is compiled into a specialized
    Python function when the parser is constructed.

    Construction is slower, calls are faster. Wrap module-level parsers in
    `Lazy` to defer the compilation to the first call.
    """
    return _object(schema, strict=False, compiled=True)


def ObjectStrictInterpreted(schema: Mapping[Any, Any]) -> ObjectParser:
    """Like `ObjectInterpreted`, but undeclared keys make the parse fail."""
    return _object(schema, strict=True, compiled=False)


def ObjectStrictCompiled(schema: Mapping[Any, Any]) -> ObjectParser:
    """Like `ObjectCompiled`, but undeclared keys make the parse fail."""
    return _object(schema, strict=True, compiled=True)


def Object(schema: Mapping[Any, Any]) -> ObjectParser:
    """
    Parse dicts with a fixed set of fields.

    Compiled, unless constructed inside `parsing_context(compiled=False)`.

    Usage:
        parse_user = Object({
            "id": parse_int,
            "name": parse_str,
            "email": Optional(parse_str),
        })
        parse_user({"id": 1, "name": "Alice"})  # -> Success
        parse_user({"id": 1})                    # -> Failure at $.name
    """
    return _object(schema, strict=False, compiled=use_compiled())


def ObjectStrict(schema: Mapping[Any, Any]) -> ObjectParser:
    """Like `Object`, but undeclared keys make the parse fail."""
    return _object(schema, strict=True, compiled=use_compiled())
