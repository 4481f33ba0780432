"""
Code synthesis for object validators.

An object schema is turned, once, into the source of a Python function with one
unrolled block per field. The source is compiled and executed into a private
namespace. Keys, parsers and precomputed failures are bound by name in that
namespace; nothing from the schema is ever interpolated into the source text.

The synthesized functions follow the same algorithm as the interpreters in
`typeshape.objects` and `typeshape.guards`.
"""

from __future__ import annotations

import itertools
import logging
from typing import TYPE_CHECKING, Any, Callable, Mapping

from .errors import NOT_AN_OBJECT, extra_property, missing_property
from .presence import Present
from .types import CheckFn, Failure, ObjectKey, Outcome, Success

if TYPE_CHECKING:
    from .core import Guard, Parser

logger = logging.getLogger(__name__)

_counter = itertools.count()


def compile_object_parser(
    fields: Mapping[Any, Parser], strict: bool
) -> Callable[[Any], Outcome[Any]]:
    """
    Synthesize the parse function of an object parser.

    Args:
        fields: Ordered mapping of keys to parsers
        strict: If True, undeclared keys make the parse fail

    Returns:
        A function `data -> Outcome`
    """
    name = f"parse_object_{next(_counter)}"
    namespace: dict[str, Any] = {
        "Failure": Failure,
        "Success": Success,
        "NOT_AN_OBJECT": NOT_AN_OBJECT,
        "extra_property": extra_property,
        "declared": frozenset(fields),
    }
    lines = [
        f"def {name}(data):",
        "    if not isinstance(data, dict):",
        "        return NOT_AN_OBJECT",
        "    output = {}",
        "    unchanged = True",
    ]

    for i, (key, parser) in enumerate(fields.items()):
        namespace[f"key_{i}"] = key
        namespace[f"parse_{i}"] = parser.fn
        namespace[f"segment_{i}"] = ObjectKey(key)
        lines += [
            f"    if key_{i} in data:",
            f"        value = data[key_{i}]",
            f"        result = parse_{i}(value)",
            "        if isinstance(result, Failure):",
            f"            return Failure(result.message, (segment_{i}, *result.path), result.kind)",
            "        if result.value is not value:",
            "            unchanged = False",
            f"        output[key_{i}] = result.value",
        ]
        if isinstance(parser.fallback, Present):
            namespace[f"default_{i}"] = parser.fallback.value
            lines += [
                "    else:",
                f"        output[key_{i}] = default_{i}",
                "        unchanged = False",
            ]
        elif not parser.optional:
            namespace[f"missing_{i}"] = missing_property(key)
            lines += [
                "    else:",
                f"        return missing_{i}",
            ]

    if strict:
        lines += [
            "    for key in data:",
            "        if key not in declared:",
            "            return extra_property(key)",
        ]
    lines += [
        "    if unchanged and len(output) == len(data):",
        "        return Success(data)",
        "    return Success(output)",
    ]
    return _build(name, lines, namespace)


def compile_object_guard(fields: Mapping[Any, Guard], strict: bool) -> CheckFn:
    """Synthesize the check function of an object guard."""
    name = f"check_object_{next(_counter)}"
    namespace: dict[str, Any] = {"declared": frozenset(fields)}
    lines = [
        f"def {name}(data):",
        "    if not isinstance(data, dict):",
        "        return False",
    ]

    for i, (key, guard) in enumerate(fields.items()):
        namespace[f"key_{i}"] = key
        namespace[f"check_{i}"] = guard.check
        lines += [
            f"    if key_{i} in data:",
            f"        if not check_{i}(data[key_{i}]):",
            "            return False",
        ]
        if not guard.optional:
            lines += [
                "    else:",
                "        return False",
            ]

    if strict:
        lines += [
            "    for key in data:",
            "        if key not in declared:",
            "            return False",
        ]
    lines.append("    return True")
    return _build(name, lines, namespace)


def _build(name: str, lines: list[str], namespace: dict[str, Any]) -> Any:
    source = "\n".join(lines) + "\n"
    logger.debug("Synthesized %s:\n%s", name, source)
    code = compile(source, f"<typeshape:{name}>", "exec")
    exec(code, namespace)
    return namespace[name]
