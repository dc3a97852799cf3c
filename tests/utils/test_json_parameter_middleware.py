"""Tests for JSON Parameter Middleware."""

import asyncio
import os
import sys

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "..", "src"))

from tsschema.utils.json_parameter_middleware import JSONParameterMiddleware, json_convert


class TestJSONParameterMiddleware:
    """Test JSONParameterMiddleware conversion rules."""

    def setup_method(self):
        """Set up test fixtures."""
        self.middleware = JSONParameterMiddleware()

    def test_list_from_json_string(self):
        assert self.middleware._convert_value('["a.ts", "b.ts"]', list[str], "patterns") == ["a.ts", "b.ts"]

    def test_non_string_values_untouched(self):
        assert self.middleware._convert_value(["a.ts"], list[str], "patterns") == ["a.ts"]
        assert self.middleware._convert_value(None, list[str], "patterns") is None

    def test_union_prefers_collection_for_json_text(self):
        assert self.middleware._convert_value('["src/*.ts"]', str | list[str], "patterns") == ["src/*.ts"]

    def test_union_keeps_plain_string(self):
        assert self.middleware._convert_value("src/**/*.ts", str | list[str], "patterns") == "src/**/*.ts"

    def test_union_keeps_leading_brace_glob(self):
        pattern = "{models,api}/*.ts"
        assert self.middleware._convert_value(pattern, str | list[str], "glob_patterns") == pattern

    def test_union_keeps_unparseable_bracket_text(self):
        pattern = "[abc]*.ts"
        assert self.middleware._convert_value(pattern, str | list[str], "glob_patterns") == pattern

    def test_union_without_str_still_reports_invalid_json(self):
        try:
            self.middleware._convert_value("[broken", list[str] | None, "patterns")
        except ValueError as e:
            assert "Invalid JSON in parameter 'patterns'" in str(e)
        else:
            raise AssertionError("Expected ValueError")

    def test_plain_str_parameter_is_never_parsed(self):
        text = '[{"file_path": "a.ts", "declarations": []}]'
        assert self.middleware._convert_value(text, str, "declarations_json") == text
        assert self.middleware._convert_value(text, str | None, "declarations_json") == text

    def test_invalid_json_raises(self):
        try:
            self.middleware._convert_value("[not json", list[str], "patterns")
        except ValueError as e:
            assert "Invalid JSON in parameter 'patterns'" in str(e)
        else:
            raise AssertionError("Expected ValueError")

    def test_wrong_json_type_raises(self):
        try:
            self.middleware._convert_value('{"a": 1}', list[str], "patterns")
        except ValueError as e:
            assert "must be a list" in str(e)
        else:
            raise AssertionError("Expected ValueError")


class TestJsonConvertDecorator:
    """Test the decorator on sync and async tools."""

    def test_sync_function(self):
        @json_convert
        def count(patterns: str | list[str]) -> int:
            return len(patterns) if isinstance(patterns, list) else 1

        assert count('["a", "b", "c"]') == 3
        assert count("a") == 1
        assert count("{models,api}/*.ts") == 1

    def test_async_function(self):
        @json_convert
        async def first(patterns: list[str], limit: int = 1) -> list[str]:
            return patterns[:limit]

        assert asyncio.run(first('["x", "y"]')) == ["x"]

    def test_error_response_instead_of_call(self):
        calls = []

        @json_convert
        def tool(patterns: list[str]) -> list[str]:
            calls.append(patterns)
            return patterns

        result = tool("[broken")

        assert result["error"]["code"] == "INVALID_INPUT"
        assert calls == []

    def test_metadata_preserved(self):
        @json_convert
        def documented(patterns: list[str]) -> list[str]:
            """Docs."""
            return patterns

        assert documented.__name__ == "documented"
        assert documented.__doc__ == "Docs."
