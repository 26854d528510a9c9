"""Tests for model response unwrapping: fence stripping and JSON parsing."""

from __future__ import annotations

import pytest

from flyerlib.extraction.parser import ResponseParseError, strip_code_fence, unwrap_response


class TestStripCodeFence:
    """Markdown fences around model JSON are removed."""

    def test_json_tagged_fence(self):
        assert strip_code_fence('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_untagged_fence(self):
        assert strip_code_fence('```\n{"a": 1}\n```') == '{"a": 1}'

    def test_surrounding_whitespace_trimmed(self):
        assert strip_code_fence('  \n```json {"a": 1} ```  \n') == '{"a": 1}'

    def test_unfenced_text_unchanged(self):
        assert strip_code_fence('{"a": 1}') == '{"a": 1}'

    def test_only_opening_fence(self):
        """A response truncated before the closing fence still loses the opener."""
        assert strip_code_fence('```json\n{"a": 1}') == '{"a": 1}'


class TestUnwrapResponse:
    """Parsing into a loose field map."""

    def test_plain_json_object(self):
        assert unwrap_response('{"eventName": "Foo"}') == {"eventName": "Foo"}

    def test_fenced_json_object(self, fenced_response, ticketed_fields):
        assert unwrap_response(fenced_response) == ticketed_fields

    def test_unknown_keys_preserved(self):
        """No schema is applied at this stage."""
        assert unwrap_response('{"bogus": [1, 2]}') == {"bogus": [1, 2]}

    def test_not_json_raises(self):
        with pytest.raises(ResponseParseError):
            unwrap_response("not json")

    def test_empty_text_raises(self):
        with pytest.raises(ResponseParseError):
            unwrap_response("```json\n```")

    def test_top_level_array_raises(self):
        with pytest.raises(ResponseParseError, match="list"):
            unwrap_response('[{"eventName": "Foo"}]')

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            unwrap_response("{")

    def test_deeply_nested_json_raises(self):
        """Nesting past the decoder's recursion limit is a parse error, not a crash."""
        with pytest.raises(ResponseParseError):
            unwrap_response("[" * 100000 + "]" * 100000)
