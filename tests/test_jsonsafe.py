"""Tests for the safe JSON decoder."""

import pytest

from core.errors import FailureKind, QueryRejected
from core.jsonsafe import MISSING, safe_json_parse


class TestSafeJsonParse:

    @pytest.mark.parametrize("raw", [None, "", "   ", "\n\t"])
    def test_blank_input_is_missing(self, raw):
        assert safe_json_parse(raw) is MISSING

    def test_null_is_not_missing(self):
        assert safe_json_parse("null") is None

    def test_object(self):
        assert safe_json_parse('{"a":1}') == {"a": 1}

    def test_array(self):
        assert safe_json_parse('[1, "two", null, true]') == [1, "two", None, True]

    @pytest.mark.parametrize("raw", ["{not json", "[1,", "'single'", "NaN", "[Infinity]"])
    def test_malformed_input(self, raw):
        with pytest.raises(QueryRejected) as exc_info:
            safe_json_parse(raw)
        assert exc_info.value.kind == FailureKind.INVALID_JSON

    def test_error_message_does_not_echo_input(self):
        with pytest.raises(QueryRejected) as exc_info:
            safe_json_parse('{"secret": "hunter2"')
        assert exc_info.value.message == "Invalid JSON in params"
        assert "hunter2" not in str(exc_info.value)

    def test_missing_is_falsy_singleton(self):
        assert not MISSING
        assert type(MISSING)() is MISSING

    def test_deeply_nested_input(self):
        with pytest.raises(QueryRejected) as exc_info:
            safe_json_parse("[" * 100000)
        assert exc_info.value.kind == FailureKind.INVALID_JSON
        assert exc_info.value.message == "Invalid JSON in params"
