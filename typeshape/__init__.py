"""
typeshape - Parse untrusted data into values of a declared shape.

Usage:
    from typeshape import Object, Optional, Array, parse_int, parse_str

    parse_user = Object({
        "id": parse_int,
        "name": parse_str,
        "email": Optional(parse_str),
        "tags": Array(parse_str),
    })

    result = parse_user(json.loads(text))
    if result.is_success():
        user = result.value
"""

from .context import parsing_context, use_compiled
from .core import Guard, Parser, parser_from_guard
from .formatting import format_failure, format_path, format_result
from .guards import (
    ArrayGuard,
    DictionaryGuard,
    EqualsGuard,
    NonEmptyArrayGuard,
    NullableGuard,
    ObjectGuard,
    ObjectGuardCompiled,
    ObjectGuardInterpreted,
    ObjectStrictGuard,
    OneOfGuard,
    OptionalGuard,
    OptionalNullableGuard,
    PartialRecordGuard,
    RecordGuard,
    TupleGuard,
    UndefineableGuard,
    is_bool,
    is_bytes,
    is_callable,
    is_dict,
    is_float,
    is_int,
    is_json_value,
    is_list,
    is_none,
    is_number,
    is_str,
)
from .json import parse_json, parse_json_value
from .lazy import Lazy, LazyGuard
from .memo import (
    ArrayMemo,
    DictionaryGuardMemo,
    DictionaryMemo,
    Memo,
    NonEmptyArrayMemo,
    ObjectCompiledMemo,
    ObjectGuardMemo,
    ObjectMemo,
    ObjectStrictMemo,
    OneOfGuardMemo,
    OneOfMemo,
    PartialRecordMemo,
    RecordMemo,
    TupleGuardMemo,
    TupleMemo,
    memoized,
)
from .objects import (
    Object,
    ObjectCompiled,
    ObjectInterpreted,
    ObjectParser,
    ObjectStrict,
    ObjectStrictCompiled,
    ObjectStrictInterpreted,
)
from .presence import ABSENT, Absent, Present
from .primitives import (
    InstanceOf,
    parse_bool,
    parse_bytes,
    parse_float,
    parse_int,
    parse_never,
    parse_none,
    parse_number,
    parse_number_from_string,
    parse_str,
    parse_unknown,
)
from .schema import parse, to_parser, to_pydantic
from .types import (
    ArrayIndex,
    Failure,
    FailureKind,
    ObjectKey,
    Success,
    failure,
    is_failure,
    is_success,
    propagate_failure,
    success,
)
from .validators import (
    Always,
    Array,
    Dictionary,
    Equals,
    FailWith,
    Fallback,
    Literal,
    NonEmptyArray,
    Nullable,
    OneOf,
    Optional,
    OptionalNullable,
    PartialRecord,
    Record,
    Tuple,
    Undefineable,
    WithDefault,
)

__all__ = [
    # Outcomes
    "Success",
    "Failure",
    "FailureKind",
    "ObjectKey",
    "ArrayIndex",
    "success",
    "failure",
    "is_success",
    "is_failure",
    "propagate_failure",
    "Present",
    "Absent",
    "ABSENT",
    # Core
    "Guard",
    "Parser",
    "ObjectParser",
    "parser_from_guard",
    "to_parser",
    # Guards
    "is_none",
    "is_bool",
    "is_int",
    "is_float",
    "is_number",
    "is_str",
    "is_bytes",
    "is_dict",
    "is_list",
    "is_callable",
    "is_json_value",
    "OptionalGuard",
    "NullableGuard",
    "UndefineableGuard",
    "OptionalNullableGuard",
    "EqualsGuard",
    "OneOfGuard",
    "ArrayGuard",
    "NonEmptyArrayGuard",
    "TupleGuard",
    "DictionaryGuard",
    "PartialRecordGuard",
    "RecordGuard",
    "ObjectGuard",
    "ObjectGuardCompiled",
    "ObjectGuardInterpreted",
    "ObjectStrictGuard",
    # Primitive parsers
    "parse_none",
    "parse_bool",
    "parse_int",
    "parse_float",
    "parse_number",
    "parse_str",
    "parse_bytes",
    "parse_unknown",
    "parse_never",
    "parse_number_from_string",
    "InstanceOf",
    # Combinators
    "Equals",
    "Literal",
    "OneOf",
    "Optional",
    "Nullable",
    "Undefineable",
    "OptionalNullable",
    "WithDefault",
    "Fallback",
    "Always",
    "FailWith",
    "Array",
    "NonEmptyArray",
    "Tuple",
    "Record",
    "Dictionary",
    "PartialRecord",
    # Objects
    "Object",
    "ObjectStrict",
    "ObjectInterpreted",
    "ObjectCompiled",
    "ObjectStrictInterpreted",
    "ObjectStrictCompiled",
    # Memoization and recursion
    "Memo",
    "memoized",
    "ObjectMemo",
    "ObjectCompiledMemo",
    "ObjectStrictMemo",
    "ArrayMemo",
    "TupleMemo",
    "OneOfMemo",
    "DictionaryMemo",
    "ObjectGuardMemo",
    "DictionaryGuardMemo",
    "NonEmptyArrayMemo",
    "RecordMemo",
    "PartialRecordMemo",
    "TupleGuardMemo",
    "OneOfGuardMemo",
    "Lazy",
    "LazyGuard",
    # JSON and formatting
    "parse_json",
    "parse_json_value",
    "format_path",
    "format_failure",
    "format_result",
    # Schema
    "parse",
    "to_pydantic",
    # Configuration
    "parsing_context",
    "use_compiled",
]
