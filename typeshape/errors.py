"""
Failure messages shared by the parsers.

Both object engines build their failures here, so a caller cannot tell which
strategy produced a failure.
"""

from __future__ import annotations

from typing import Any

from .types import Failure, FailureKind, ObjectKey, failure

NOT_AN_OBJECT = failure("Expected type dict", FailureKind.NOT_AN_OBJECT)
NOT_AN_ARRAY = failure("Expected type list", FailureKind.NOT_AN_ARRAY)
NO_UNION_MEMBER_MATCHED = failure(
    "No alternative in the union matched", FailureKind.NO_UNION_MEMBER_MATCHED
)


def expected_type(name: str) -> Failure:
    return failure(f"Expected type {name}", FailureKind.TYPE_MISMATCH)


def missing_property(key: Any) -> Failure:
    return Failure(
        f"Property {key!r} is missing", (ObjectKey(key),), FailureKind.MISSING_PROPERTY
    )


def extra_property(key: Any) -> Failure:
    return Failure(
        f"Unexpected property {key!r}", (ObjectKey(key),), FailureKind.EXTRA_PROPERTY
    )


def wrong_tuple_length(actual: int, expected: int) -> Failure:
    return failure(
        f"Expected at least {expected} elements, got {actual}",
        FailureKind.WRONG_TUPLE_LENGTH,
    )
