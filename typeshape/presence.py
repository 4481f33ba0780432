"""
Presence of a property in a dict.

A field is either `Absent` or `Present(value)`. The distinction is kept as a
tagged variant so that no sentinel can collide with a value found in the input.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Mapping, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Present(Generic[T]):
    value: T


class Absent:
    """The property does not exist. Use the `ABSENT` singleton."""

    __slots__ = ()
    _instance: Absent | None = None

    def __new__(cls) -> Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __reduce__(self) -> str:
        return "ABSENT"


ABSENT = Absent()

Presence = Union[Present[T], Absent]


def lookup(data: Mapping[Any, Any], key: Any) -> Presence[Any]:
    """Own-property lookup: `{"a": None}` and `{}` are told apart."""
    if key in data:
        return Present(data[key])
    return ABSENT
