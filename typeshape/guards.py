"""
Guards: validators that answer with a plain bool.

Provides the primitive type checks and the guard combinators. Object guards
share the presence rule of the object parsers: a missing property is only
accepted when its guard is optional.
"""

from __future__ import annotations

import math
from typing import Any, Iterable, Mapping, Sequence

from .compiler import compile_object_guard
from .context import use_compiled
from .core import Guard, _to_guard
from .types import CheckFn

# Primitive checks. bool is a subclass of int but never counts as a number.


def _is_none(x: Any) -> bool:
    return x is None


def _is_bool(x: Any) -> bool:
    return isinstance(x, bool)


def _is_int(x: Any) -> bool:
    return isinstance(x, int) and not isinstance(x, bool)


def _is_float(x: Any) -> bool:
    return isinstance(x, float)


def _is_number(x: Any) -> bool:
    return isinstance(x, (int, float)) and not isinstance(x, bool)


def _is_str(x: Any) -> bool:
    return isinstance(x, str)


def _is_bytes(x: Any) -> bool:
    return isinstance(x, bytes)


def _is_dict(x: Any) -> bool:
    return isinstance(x, dict)


def _is_list(x: Any) -> bool:
    return isinstance(x, list)


is_none = Guard(check=_is_none, type_hint=type(None))
is_bool = Guard(check=_is_bool, type_hint=bool)
is_int = Guard(check=_is_int, type_hint=int)
is_float = Guard(check=_is_float, type_hint=float)
is_number = Guard(check=_is_number, type_hint=float)
is_str = Guard(check=_is_str, type_hint=str)
is_bytes = Guard(check=_is_bytes, type_hint=bytes)
is_dict = Guard(check=_is_dict, type_hint=dict)
is_list = Guard(check=_is_list, type_hint=list)
is_callable = Guard(check=callable)


def _is_json_value(x: Any) -> bool:
    if x is None or isinstance(x, (bool, str)):
        return True
    if isinstance(x, (int, float)):
        # json.dumps emits NaN/Infinity, but they are not JSON
        return not isinstance(x, float) or math.isfinite(x)
    if isinstance(x, list):
        return all(_is_json_value(item) for item in x)
    if type(x) is dict:
        return all(isinstance(k, str) and _is_json_value(v) for k, v in x.items())
    return False


is_json_value = Guard(check=_is_json_value)


# Combinators


def OptionalGuard(guard: Guard | CheckFn) -> Guard:
    """
    Allow a property to be missing from an object, or to be None.

    Usage:
        ObjectGuard({"id": is_int, "email": OptionalGuard(is_str)})
    """
    inner = _to_guard(guard)
    check = inner.check

    def optional_check(x: Any) -> bool:
        return x is None or check(x)

    return Guard(check=optional_check, optional=True, type_hint=inner.type_hint)


def NullableGuard(guard: Guard | CheckFn) -> Guard:
    """Union with None. Does not make the property optional."""
    inner = _to_guard(guard)
    check = inner.check

    def nullable_check(x: Any) -> bool:
        return x is None or check(x)

    return Guard(check=nullable_check, type_hint=inner.type_hint)


UndefineableGuard = NullableGuard


def OptionalNullableGuard(guard: Guard | CheckFn) -> Guard:
    return OptionalGuard(NullableGuard(guard))


def EqualsGuard(*constants: Any) -> Guard:
    """
    Strict equality against one or more constants: the type must match too.

    Usage:
        is_level = EqualsGuard("debug", "info", "warning", "error")
    """
    if not constants:
        raise ValueError("EqualsGuard() requires at least one constant")

    def equals_check(x: Any) -> bool:
        return any(type(x) is type(c) and x == c for c in constants)

    return Guard(check=equals_check)


def OneOfGuard(*guards: Guard | CheckFn) -> Guard:
    """Passes when any of `guards` passes."""
    members = [_to_guard(g) for g in guards]
    checks = [g.check for g in members]

    def one_of_check(x: Any) -> bool:
        return any(check(x) for check in checks)

    return Guard(check=one_of_check, optional=any(g.optional for g in members))


def ArrayGuard(item: Guard | CheckFn) -> Guard:
    check = _to_guard(item).check

    def array_check(x: Any) -> bool:
        return isinstance(x, list) and all(check(element) for element in x)

    return Guard(check=array_check, type_hint=list)


def NonEmptyArrayGuard(item: Guard | CheckFn) -> Guard:
    check = _to_guard(item).check

    def non_empty_array_check(x: Any) -> bool:
        return isinstance(x, list) and len(x) > 0 and all(check(e) for e in x)

    return Guard(check=non_empty_array_check, type_hint=list)


def TupleGuard(guards: Sequence[Guard | CheckFn]) -> Guard:
    """
    Positional guard. Extra elements are tolerated, like the tuple parser does.
    """
    checks = [_to_guard(g).check for g in guards]
    arity = len(checks)

    def tuple_check(x: Any) -> bool:
        return (
            isinstance(x, list)
            and len(x) >= arity
            and all(check(x[i]) for i, check in enumerate(checks))
        )

    return Guard(check=tuple_check, type_hint=list)


def DictionaryGuard(key: Guard | CheckFn, value: Guard | CheckFn) -> Guard:
    """Every key passes `key`, every value passes `value`."""
    key_check = _to_guard(key).check
    value_check = _to_guard(value).check

    def dictionary_check(x: Any) -> bool:
        return isinstance(x, dict) and all(
            key_check(k) and value_check(v) for k, v in x.items()
        )

    return Guard(check=dictionary_check, type_hint=dict)


PartialRecordGuard = DictionaryGuard


def RecordGuard(keys: Iterable[Any], value: Guard | CheckFn) -> Guard:
    """
    Exactly the given keys; a key may only be missing when `value` is optional.
    """
    value_guard = _to_guard(value)
    return ObjectStrictGuard({k: value_guard for k in keys})


def _object_check(fields: Mapping[Any, Guard], strict: bool) -> CheckFn:
    entries = [(key, guard.check, guard.optional) for key, guard in fields.items()]
    declared = frozenset(fields)

    def object_check(x: Any) -> bool:
        if not isinstance(x, dict):
            return False
        for key, check, optional in entries:
            if key in x:
                if not check(x[key]):
                    return False
            elif not optional:
                return False
        if strict:
            return all(key in declared for key in x)
        return True

    return object_check


def _guard_fields(schema: Mapping[Any, Guard | CheckFn]) -> dict[Any, Guard]:
    if not isinstance(schema, Mapping):
        raise TypeError(f"Schema must be a dict, got {type(schema).__name__}")
    return {key: _to_guard(g) for key, g in schema.items()}


def ObjectGuardInterpreted(schema: Mapping[Any, Guard | CheckFn]) -> Guard:
    """
    Object guard that walks the schema on every call.

    Usage:
        is_user = ObjectGuardInterpreted({
            "id": is_int,
            "email": OptionalGuard(is_str),
        })
    """
    return Guard(check=_object_check(_guard_fields(schema), strict=False), type_hint=dict)


def ObjectGuardCompiled(schema: Mapping[Any, Guard | CheckFn]) -> Guard:
    """Same as `ObjectGuardInterpreted`, specialized once into a Python function."""
    fields = _guard_fields(schema)
    return Guard(check=compile_object_guard(fields, strict=False), type_hint=dict)


def ObjectStrictGuard(schema: Mapping[Any, Guard | CheckFn]) -> Guard:
    """Object guard that also rejects undeclared keys."""
    fields = _guard_fields(schema)
    if use_compiled():
        return Guard(check=compile_object_guard(fields, strict=True), type_hint=dict)
    return Guard(check=_object_check(fields, strict=True), type_hint=dict)


def ObjectGuard(schema: Mapping[Any, Guard | CheckFn]) -> Guard:
    """
    Object guard using the strategy selected by `parsing_context`.

    Compiled unless `parsing_context(compiled=False)` is active.
    """
    if use_compiled():
        return ObjectGuardCompiled(schema)
    return ObjectGuardInterpreted(schema)
