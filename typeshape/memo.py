"""
Memoization of validators.

A memoized validator caches its outcome per input *identity*: calling it twice
with the same dict returns the cached outcome, while an equal but distinct
dict is validated again. Immutable scalars (str, int, float, ...) bypass the
cache entirely.

Inputs that can be weakly referenced (dict subclasses, class instances, ...)
are cached until they are garbage collected; the cache never keeps them alive.
Plain dicts and lists cannot be weakly referenced, so for those the cache holds
on to the inputs it has seen. That part is bounded: once `maxsize` of them are
stored, the least recently used one is evicted. Use `cache_clear()` to release
everything at once.
"""

from __future__ import annotations

import threading
import weakref
from collections import OrderedDict
from dataclasses import replace
from functools import partial, wraps
from typing import Any, Callable, TypeVar

from .core import Guard, Parser
from .guards import DictionaryGuard, ObjectGuard, OneOfGuard, TupleGuard
from .objects import Object, ObjectCompiled, ObjectStrict
from .types import Success
from .validators import (
    Array,
    Dictionary,
    NonEmptyArray,
    OneOf,
    PartialRecord,
    Record,
    Tuple,
)

V = TypeVar("V", bound=Callable[..., Any])

DEFAULT_MAXSIZE = 1024

_SCALARS = (str, bytes, int, float, complex, bool, type(None))

# Stands in for `Success(input)` in weak entries, which must not refer to
# their own key.
_SUCCESS_IS_INPUT = object()


class _IdentityCache:
    """
    Outcomes keyed by `id()` of the input.

    Weakly referenceable inputs live in `_weak` until collected. The rest live
    in `_strong`, a bounded LRU that holds on to its keys.
    """

    def __init__(self, maxsize: int):
        self.maxsize = maxsize
        self._weak: dict[int, tuple[weakref.ref, Any]] = {}
        self._strong: OrderedDict[int, tuple[Any, Any]] = OrderedDict()
        # Reentrant: weakref callbacks may run during a collection triggered
        # while the lock is held
        self._lock = threading.RLock()

    def get(self, key: Any) -> tuple[bool, Any]:
        with self._lock:
            weak_entry = self._weak.get(id(key))
            if weak_entry is not None and weak_entry[0]() is key:
                value = weak_entry[1]
                return True, Success(key) if value is _SUCCESS_IS_INPUT else value

            entry = self._strong.get(id(key))
            # The stored key pins the id, but check anyway
            if entry is None or entry[0] is not key:
                return False, None
            self._strong.move_to_end(id(key))
            return True, entry[1]

    def put(self, key: Any, value: Any) -> None:
        with self._lock:
            try:
                ref = weakref.ref(key, partial(self._discard, id(key)))
            except TypeError:
                self._strong[id(key)] = (key, value)
                self._strong.move_to_end(id(key))
                while len(self._strong) > self.maxsize:
                    self._strong.popitem(last=False)
                return

            if isinstance(value, Success) and value.value is key:
                value = _SUCCESS_IS_INPUT
            self._weak[id(key)] = (ref, value)

    def _discard(self, key_id: int, ref: weakref.ref) -> None:
        with self._lock:
            entry = self._weak.get(key_id)
            if entry is not None and entry[0] is ref:
                del self._weak[key_id]

    def clear(self) -> None:
        with self._lock:
            self._weak.clear()
            self._strong.clear()

    def __len__(self) -> int:
        return len(self._weak) + len(self._strong)


def _memoize(fn: Callable[[Any], Any], cache: _IdentityCache) -> Callable[[Any], Any]:
    @wraps(fn)
    def memoized_fn(data: Any) -> Any:
        if isinstance(data, _SCALARS):
            return fn(data)
        hit, result = cache.get(data)
        if hit:
            return result
        result = fn(data)
        cache.put(data, result)
        return result

    memoized_fn.cache = cache  # type: ignore[attr-defined]
    memoized_fn.cache_clear = cache.clear  # type: ignore[attr-defined]
    return memoized_fn


def Memo(validator: V, maxsize: int = DEFAULT_MAXSIZE) -> V:
    """
    Memoize a parser, a guard or any single-argument validator function.

    Parsers and guards keep their metadata (optional marker, fallback, ...), so
    a memoized parser can be used as an object field like the unwrapped one.

    Usage:
        parse_user = Memo(Object({
            "id": parse_int,
            "name": parse_str,
        }))

        parse_address = Object({
            "street": parse_str,
            "owner": Memo(parse_user),
        })
    """
    if maxsize < 1:
        raise ValueError("maxsize must be at least 1")
    cache = _IdentityCache(maxsize)

    if isinstance(validator, Parser):
        return replace(validator, fn=_memoize(validator.fn, cache))  # type: ignore[return-value]
    if isinstance(validator, Guard):
        return replace(validator, check=_memoize(validator.check, cache))  # type: ignore[return-value]
    if callable(validator):
        return _memoize(validator, cache)  # type: ignore[return-value]
    raise TypeError(f"Cannot memoize {type(validator).__name__}")


def memoized(factory: Callable[..., V]) -> Callable[..., V]:
    """
    Turn a validator factory into one that builds memoized validators.

    Usage:
        ObjectMemo = memoized(Object)
        parse_user = ObjectMemo({"id": parse_int})
    """

    @wraps(factory)
    def build(*args: Any, **kwargs: Any) -> V:
        return Memo(factory(*args, **kwargs))

    return build


ObjectMemo = memoized(Object)
ObjectCompiledMemo = memoized(ObjectCompiled)
ObjectStrictMemo = memoized(ObjectStrict)
ArrayMemo = memoized(Array)
TupleMemo = memoized(Tuple)
OneOfMemo = memoized(OneOf)
DictionaryMemo = memoized(Dictionary)
ObjectGuardMemo = memoized(ObjectGuard)
DictionaryGuardMemo = memoized(DictionaryGuard)
NonEmptyArrayMemo = memoized(NonEmptyArray)
RecordMemo = memoized(Record)
PartialRecordMemo = memoized(PartialRecord)
TupleGuardMemo = memoized(TupleGuard)
OneOfGuardMemo = memoized(OneOfGuard)
