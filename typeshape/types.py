"""
Type definitions for typeshape.

Provides the Outcome type (Success/Failure), failure paths and type aliases.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, TypeVar, Union

T = TypeVar("T")


class FailureKind(Enum):
    """Why a value was rejected."""

    NOT_AN_OBJECT = "not_an_object"
    NOT_AN_ARRAY = "not_an_array"
    WRONG_TUPLE_LENGTH = "wrong_tuple_length"
    MISSING_PROPERTY = "missing_property"
    EXTRA_PROPERTY = "extra_property"
    TYPE_MISMATCH = "type_mismatch"
    NO_UNION_MEMBER_MATCHED = "no_union_member_matched"
    JSON_DECODE_ERROR = "json_decode_error"
    INVALID_VALUE = "invalid_value"


@dataclass(frozen=True, slots=True)
class ObjectKey:
    """Path segment pointing at a property of a dict."""

    key: Any


@dataclass(frozen=True, slots=True)
class ArrayIndex:
    """Path segment pointing at an element of a list."""

    index: int


PathSegment = Union[ObjectKey, ArrayIndex]
Path = tuple[PathSegment, ...]


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    """The data adheres to the schema. `value` is the parsed data."""

    value: T

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class Failure:
    """
    The data does not adhere to the schema.

    `path` locates the offending value, outermost segment first. It is empty
    at the validator that detected the mismatch and grows as the failure is
    propagated through enclosing objects and arrays.
    """

    message: str
    path: Path = ()
    kind: FailureKind = FailureKind.INVALID_VALUE

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True


Outcome = Union[Success[T], Failure]

# Type aliases
CheckFn = Callable[[Any], bool]
ParseFn = Callable[[Any], Outcome[Any]]


def success(value: T) -> Success[T]:
    return Success(value)


def failure(message: str, kind: FailureKind = FailureKind.INVALID_VALUE) -> Failure:
    return Failure(message, (), kind)


def is_success(outcome: Outcome[Any]) -> bool:
    return isinstance(outcome, Success)


def is_failure(outcome: Outcome[Any]) -> bool:
    return isinstance(outcome, Failure)


def propagate_failure(result: Failure, segment: PathSegment) -> Failure:
    """
    Prepend `segment` to the path of a failure raised by a nested validator.

    When parsing objects and arrays with nested values, the failure at the root
    level conveys where in the hierarchy the failure occurred.
    """
    return Failure(result.message, (segment, *result.path), result.kind)
