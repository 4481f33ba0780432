import json
from typing import Any

import pytest

from typeshape import (
    ObjectCompiled,
    ObjectCompiledMemo,
    ObjectInterpreted,
    ObjectMemo,
    ObjectStrictCompiled,
    ObjectStrictInterpreted,
    ObjectStrictMemo,
    parsing_context,
)


def _interpreted_memo(schema):
    with parsing_context(compiled=False):
        return ObjectMemo(schema)


@pytest.fixture(
    params=[ObjectInterpreted, ObjectCompiled, ObjectCompiledMemo, _interpreted_memo],
    ids=["interpreted", "compiled", "compiled-memo", "interpreted-memo"],
)
def make_object(request):
    """Every object engine must behave the same."""
    return request.param


@pytest.fixture(
    params=[ObjectStrictInterpreted, ObjectStrictCompiled, ObjectStrictMemo],
    ids=["interpreted", "compiled", "memo"],
)
def make_strict_object(request):
    return request.param


@pytest.fixture(scope="function")
def polluted_payload() -> dict[str, Any]:
    return json.loads('{"__proto__": {"isAdmin": true}, "id": 1, "name": "Alice"}')


@pytest.fixture(scope="function")
def users_payload() -> dict[str, Any]:
    return {
        "users": [
            {"name": "Alice", "email": "alice@example.com"},
            {"name": "Bob"},
            {"name": "Carol", "email": None},
        ]
    }
