import logging

from typeshape import (
    Object,
    ObjectStrict,
    Record,
    parse_int,
    parsing_context,
    use_compiled,
)


class TestParsingContext:
    def test_compiled_by_default(self):
        assert use_compiled()
        assert Object({"x": parse_int}).compiled

    def test_interpreted_in_context(self):
        with parsing_context(compiled=False):
            assert not use_compiled()
            parse_point = Object({"x": parse_int})
            parse_strict = ObjectStrict({"x": parse_int})
            parse_rgb = Record(["r"], parse_int)
        assert use_compiled()
        assert not parse_point.compiled
        assert not parse_strict.compiled
        assert not parse_rgb.compiled
        assert parse_point({"x": 1}).value == {"x": 1}

    def test_nested_contexts(self):
        with parsing_context(compiled=False):
            with parsing_context(compiled=True):
                assert use_compiled()
            assert not use_compiled()

    def test_reset_on_error(self):
        try:
            with parsing_context(compiled=False):
                raise KeyError("boom")
        except KeyError:
            pass
        assert use_compiled()


class TestCompilerLogging:
    def test_synthesized_source_is_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="typeshape.compiler"):
            Object({"x": parse_int})
        assert "def parse_object_" in caplog.text
