"""
Tests for memoized validators.
"""

import gc
import threading
import weakref

import pytest

from typeshape import (
    ArrayMemo,
    DictionaryMemo,
    Equals,
    Failure,
    Guard,
    Memo,
    NonEmptyArrayMemo,
    Object,
    ObjectMemo,
    ObjectParser,
    OneOfGuardMemo,
    OneOfMemo,
    Optional,
    Parser,
    PartialRecordMemo,
    RecordMemo,
    Success,
    TupleGuardMemo,
    TupleMemo,
    WithDefault,
    is_int,
    is_str,
    memoized,
    parse_int,
    parse_str,
    success,
)


def counting_parser():
    calls = []

    def parse_counted(data):
        calls.append(data)
        return success(data)

    return Parser(fn=parse_counted), calls


class TestMemo:
    def test_same_reference_is_parsed_once(self):
        parser, calls = counting_parser()
        parse_memo = Memo(parser)
        data = {"id": 1}
        first = parse_memo(data)
        second = parse_memo(data)
        assert len(calls) == 1
        assert first is second

    def test_equal_references_are_parsed_again(self):
        parser, calls = counting_parser()
        parse_memo = Memo(parser)
        parse_memo({"id": 1})
        parse_memo({"id": 1})
        assert len(calls) == 2

    def test_scalars_bypass_the_cache(self):
        parser, calls = counting_parser()
        parse_memo = Memo(parser)
        for _ in range(3):
            parse_memo("id")
            parse_memo(1)
            parse_memo(None)
        assert len(calls) == 9
        assert len(parse_memo.fn.cache) == 0

    def test_eviction(self):
        parser, calls = counting_parser()
        parse_memo = Memo(parser, maxsize=1)
        a, b = [1], [2]
        parse_memo(a)
        parse_memo(b)
        parse_memo(a)
        assert len(calls) == 3
        assert len(parse_memo.fn.cache) == 1

    def test_cache_clear(self):
        parser, calls = counting_parser()
        parse_memo = Memo(parser)
        data = [1]
        parse_memo(data)
        parse_memo.fn.cache_clear()
        parse_memo(data)
        assert len(calls) == 2

    def test_keeps_metadata(self):
        parse_memo = Memo(Optional(WithDefault(parse_int, 0)))
        assert parse_memo.optional
        assert parse_memo.fallback.value == 0

    def test_object_parser_stays_an_object_parser(self):
        parse_memo = Memo(Object({"id": parse_int}))
        assert isinstance(parse_memo, ObjectParser)
        assert parse_memo.fields.keys() == {"id"}

    def test_guard(self):
        calls = []

        def check(x):
            calls.append(x)
            return isinstance(x, list)

        is_list_memo = Memo(Guard(check))
        data: list = []
        assert is_list_memo(data)
        assert is_list_memo(data)
        assert len(calls) == 1

    def test_plain_function(self):
        calls = []

        def parse_any(data):
            calls.append(data)
            return success(data)

        parse_memo = Memo(parse_any)
        data = {"a": 1}
        parse_memo(data)
        parse_memo(data)
        assert len(calls) == 1
        assert parse_memo.__name__ == "parse_any"

    def test_invalid_arguments(self):
        with pytest.raises(TypeError):
            Memo(5)
        with pytest.raises(ValueError):
            Memo(parse_int, maxsize=0)

    def test_threads(self):
        parser, calls = counting_parser()
        parse_memo = Memo(parser)
        data = {"id": 1}
        parse_memo(data)

        threads = [threading.Thread(target=parse_memo, args=(data,)) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(calls) == 1


class TestMemoizedFactories:
    def test_memoized(self):
        parser, calls = counting_parser()
        ObjectCountedMemo = memoized(Object)
        parse_user = ObjectCountedMemo({"id": parser})
        data = {"id": 1}
        parse_user(data)
        parse_user(data)
        assert len(calls) == 1

    def test_prebuilt(self):
        data = {"id": 1, "tags": ["a"], "point": [1, 2], "scores": {"a": 1}}
        parse_data = ObjectMemo(
            {
                "id": OneOfMemo(parse_int, parse_str),
                "tags": ArrayMemo(parse_str),
                "point": TupleMemo([parse_int, parse_int]),
                "scores": DictionaryMemo(parse_str, parse_int),
            }
        )
        result = parse_data(data)
        assert isinstance(result, Success)
        assert result.value is data

    def test_more_prebuilt(self):
        parse_data = ObjectMemo(
            {
                "tags": NonEmptyArrayMemo(parse_str),
                "limits": RecordMemo(["min", "max"], parse_int),
                "labels": PartialRecordMemo(Equals("en", "fr"), parse_str),
            }
        )
        data = {"tags": ["a"], "limits": {"min": 0, "max": 9}, "labels": {"en": "x"}}
        result = parse_data(data)
        assert isinstance(result, Success)
        assert result.value is data
        assert isinstance(parse_data({**data, "tags": []}), Failure)

    def test_prebuilt_guards(self):
        is_point = TupleGuardMemo([is_int, is_int])
        is_id = OneOfGuardMemo(is_int, is_str)
        point = [1, 2]
        assert is_point(point)
        assert is_point(point)
        assert len(is_point.check.cache) == 1
        assert not is_point(["1", 2])
        assert is_id("a")
        assert not is_id(1.5)


class Payload(dict):
    pass


class TestMemoReferences:
    def test_collected_input_leaves_the_cache(self):
        parse_memo = Memo(Object({"id": parse_int}))
        data = Payload(id=1, extra=2)
        assert parse_memo(data).value == {"id": 1}
        assert len(parse_memo.fn.cache) == 1

        ref = weakref.ref(data)
        del data
        gc.collect()
        assert ref() is None
        assert len(parse_memo.fn.cache) == 0

    def test_unchanged_input_is_not_kept_alive(self):
        parse_memo = Memo(Object({"id": parse_int}))
        data = Payload(id=1)
        assert parse_memo(data).value is data
        hit = parse_memo(data)
        assert isinstance(hit, Success)
        assert hit.value is data

        ref = weakref.ref(data)
        del data, hit
        gc.collect()
        assert ref() is None
        assert len(parse_memo.fn.cache) == 0

    def test_plain_dicts_are_kept_until_evicted(self):
        parser, calls = counting_parser()
        parse_memo = Memo(parser, maxsize=2)
        for i in range(5):
            parse_memo({"id": i})
        assert len(parse_memo.fn.cache) == 2
