"""
Tests for schema coercion and pydantic interop.
"""

from typing import Any

import pytest
from pydantic import BaseModel, ValidationError

from typeshape import (
    ArrayIndex,
    Equals,
    Failure,
    FailureKind,
    Guard,
    ObjectKey,
    ObjectParser,
    ObjectStrict,
    Optional,
    Success,
    WithDefault,
    parse,
    parse_int,
    parse_none,
    parse_str,
    to_parser,
    to_pydantic,
)


class TestToParser:
    def test_parser_passes_through(self):
        assert to_parser(parse_int) is parse_int

    def test_primitive_types(self):
        assert to_parser(str) is parse_str
        assert to_parser(int) is parse_int
        assert to_parser(None) is parse_none
        assert to_parser(type(None)) is parse_none

    def test_other_classes(self):
        parse_error = to_parser(ValueError)
        assert isinstance(parse_error(ValueError()), Success)
        assert parse_error(1).kind == FailureKind.TYPE_MISMATCH

    def test_dict(self):
        parse_user = to_parser({"id": int, "tags": [str]})
        assert isinstance(parse_user, ObjectParser)
        assert isinstance(parse_user({"id": 1, "tags": ["a"]}), Success)
        result = parse_user({"id": 1, "tags": ["a", 2]})
        assert result.path == (ObjectKey("tags"), ArrayIndex(1))

    def test_list_of_alternatives(self):
        parse_ids = to_parser([int, str])
        assert isinstance(parse_ids([1, "a"]), Success)
        assert isinstance(parse_ids([1.5]), Failure)

    def test_tuple(self):
        parse_pair = to_parser((int, str))
        assert isinstance(parse_pair([1, "a"]), Success)
        assert parse_pair([1]).kind == FailureKind.WRONG_TUPLE_LENGTH

    def test_guard(self):
        parse_identifier = to_parser(Guard(str.isidentifier))
        assert isinstance(parse_identifier("abc"), Success)

    def test_predicate(self):
        parse_positive = to_parser(lambda x: x > 0)
        assert isinstance(parse_positive(1), Success)
        assert parse_positive(-1).kind == FailureKind.TYPE_MISMATCH

    @pytest.mark.parametrize("schema", [[], 5, "str", object()])
    def test_rejects(self, schema):
        with pytest.raises(TypeError):
            to_parser(schema)


class TestParse:
    def test_parse(self):
        schema = {"name": str, "email": Optional(str), "tags": [str]}
        data = {"name": "Alice", "tags": []}
        result = parse(data, schema)
        assert isinstance(result, Success)
        assert result.value is data

    def test_failure(self):
        result = parse({"name": 1}, {"name": str})
        assert result.path == (ObjectKey("name"),)


class TestToPydantic:
    def test_basic_model(self):
        User = to_pydantic("User", {"name": str, "age": int})
        assert issubclass(User, BaseModel)
        user = User(name="Alice", age=30)
        assert user.name == "Alice"
        assert user.age == 30

    def test_required_field(self):
        User = to_pydantic("User", {"name": str})
        with pytest.raises(ValidationError):
            User()

    def test_optional_field(self):
        User = to_pydantic("User", {"name": str, "email": Optional(str)})
        user = User(name="Alice")
        assert user.email is None

    def test_default_field(self):
        User = to_pydantic("User", {"role": WithDefault(str, "member")})
        assert User().role == "member"

    def test_literal_field(self):
        User = to_pydantic("User", {"level": Equals("debug", "info")})
        assert User(level="info").level == "info"
        with pytest.raises(ValidationError):
            User(level="trace")

    def test_nested_model(self):
        User = to_pydantic("User", {"name": str, "address": {"city": str}})
        user = User(name="Alice", address={"city": "Paris"})
        assert user.address.city == "Paris"
        with pytest.raises(ValidationError):
            User(name="Alice", address={})

    def test_list_field(self):
        User = to_pydantic("User", {"tags": [str]})
        assert User(tags=["a"]).tags == ["a"]

    def test_object_parser(self):
        Point = to_pydantic("Point", ObjectStrict({"x": parse_int, "y": parse_int}))
        assert Point(x=1, y=2).x == 1

    def test_untyped_field(self):
        Event = to_pydantic("Event", {"payload": lambda x: True})
        payload: Any = object()
        assert Event(payload=payload).payload is payload

    def test_rejects_non_object_schema(self):
        with pytest.raises(TypeError):
            to_pydantic("Tags", [str])
