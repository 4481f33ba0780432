"""
Lazily constructed validators, for recursive and mutually recursive schemas.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable

from .core import Guard, Parser
from .types import Outcome

logger = logging.getLogger(__name__)


class _LazyCell:
    """Builds the validator on first use and keeps it."""

    def __init__(self, build: Callable[[], Any]):
        self._build = build
        self._validator: Any = None
        self._building = False
        self._lock = threading.RLock()

    def resolve(self) -> Any:
        validator = self._validator
        if validator is not None:
            return validator
        with self._lock:
            if self._validator is None:
                if self._building:
                    raise RuntimeError(
                        "Lazy validator was called while it was being constructed"
                    )
                self._building = True
                try:
                    built = self._build()
                finally:
                    self._building = False
                if not callable(built):
                    raise TypeError(
                        f"Lazy build function returned {type(built).__name__}, "
                        "expected a validator"
                    )
                logger.debug("Resolved lazy validator %r", self._build)
                self._validator = built
            return self._validator


def Lazy(build: Callable[[], Parser]) -> Parser:
    """
    Defer the construction of a parser until it is called for the first time.

    The built parser is kept for every later call. This lets schemas refer to
    themselves, or to each other, before they exist; it also defers the
    compilation of `ObjectCompiled` schemas to their first use.

    Usage:
        parse_tree = Lazy(lambda: Object({
            "name": parse_str,
            "children": Array(parse_tree),
        }))

        parse_person = Lazy(lambda: Object({
            "name": parse_str,
            "employer": Optional(parse_company),
        }))
        parse_company = Lazy(lambda: Object({
            "name": parse_str,
            "ceo": Optional(parse_person),
        }))

    The build function must not call the parser it is building.
    """
    cell = _LazyCell(build)

    def parse_lazy(data: Any) -> Outcome[Any]:
        return cell.resolve()(data)

    return Parser(fn=parse_lazy)


def LazyGuard(build: Callable[[], Guard]) -> Guard:
    """Same as `Lazy`, for guards."""
    cell = _LazyCell(build)

    def check_lazy(data: Any) -> bool:
        return cell.resolve()(data)

    return Guard(check=check_lazy)
