"""Tests for JSON Parameter Middleware."""

import logging
import sys
from pathlib import Path
from typing import Any, Optional

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from kindgraph.utils.json_parameter_middleware import JSONParameterMiddleware, json_convert


class TestJSONParameterMiddleware:
    """Test JSONParameterMiddleware value conversion."""

    def setup_method(self):
        """Set up test fixtures."""
        self.middleware = JSONParameterMiddleware()

    def test_init_default(self):
        assert JSONParameterMiddleware().debug is False
        assert JSONParameterMiddleware(debug=True).debug is True

    def test_convert_value_dict_from_json(self):
        result = self.middleware._convert_value('{"types": ["Theme"]}', dict, "filter")
        assert result == {"types": ["Theme"]}

    def test_convert_value_list_from_json(self):
        result = self.middleware._convert_value('[{"types": ["Theme"]}]', list[dict], "filter")
        assert result == [{"types": ["Theme"]}]

    def test_convert_value_set_and_tuple(self):
        assert self.middleware._convert_value('["a", "b", "a"]', set[str], "names") == {"a", "b"}
        assert self.middleware._convert_value("[1, 2]", tuple[int, ...], "pair") == (1, 2)

    def test_convert_value_int_from_string(self):
        assert self.middleware._convert_value("120", int, "position") == 120
        assert self.middleware._convert_value(" 7 ", int, "position") == 7

    def test_convert_value_invalid_int(self):
        with pytest.raises(ValueError, match="Parameter 'position' must be a int"):
            self.middleware._convert_value("abc", int, "position")

    def test_convert_value_none_handling(self):
        assert self.middleware._convert_value(None, dict | None, "filter") is None

    def test_convert_value_passes_native_values_through(self):
        value = {"types": ["Theme"]}
        assert self.middleware._convert_value(value, dict, "filter") is value
        assert self.middleware._convert_value(5, int, "position") == 5

    def test_convert_value_plain_strings_untouched(self):
        assert self.middleware._convert_value("src/Button.tsx", str, "file_path") == "src/Button.tsx"

    def test_convert_value_union_picks_matching_member(self):
        union = dict | list[dict] | None

        assert self.middleware._convert_value('{"types": []}', union, "filter") == {"types": []}
        assert self.middleware._convert_value('[{"types": []}]', union, "filter") == [{"types": []}]

    def test_convert_value_typing_optional(self):
        assert self.middleware._convert_value('{"a": 1}', Optional[dict], "filter") == {"a": 1}

    def test_convert_value_invalid_json_error(self):
        with pytest.raises(ValueError, match="Invalid JSON in parameter 'filter'"):
            self.middleware._convert_value("{not json}", dict, "filter")

    def test_convert_value_type_mismatch_error(self):
        with pytest.raises(ValueError, match="Parameter 'filter' must be a dict, got list from JSON"):
            self.middleware._convert_value("[1, 2]", dict, "filter")


class TestConvertDecorator:
    """Test the convert decorator on sync and async tools."""

    def setup_method(self):
        self.middleware = JSONParameterMiddleware()

    def test_converts_before_call(self):
        @self.middleware.convert
        def tool(file_path: str, position: int, filter: dict | list[dict] | None = None) -> dict:
            return {"file_path": file_path, "position": position, "filter": filter}

        result = tool("button.ts", "42", '{"types": ["Theme"]}')

        assert result == {"file_path": "button.ts", "position": 42, "filter": {"types": ["Theme"]}}

    def test_defaults_are_applied(self):
        @self.middleware.convert
        def tool(position: int, filter: dict | None = None) -> dict:
            return {"position": position, "filter": filter}

        assert tool(position=3) == {"position": 3, "filter": None}

    def test_error_response(self):
        @self.middleware.convert
        def tool(filter: dict) -> dict:
            return {"filter": filter}

        result = tool("{broken")

        assert result["error"]["code"] == "INVALID_INPUT"
        assert "filter" in result["error"]["message"]

    def test_untyped_parameters_are_untouched(self):
        @self.middleware.convert
        def tool(typed: list[str], untyped):
            return {"typed": typed, "untyped": untyped}

        result = tool('["a"]', '["b"]')

        assert result == {"typed": ["a"], "untyped": '["b"]'}

    def test_preserves_metadata(self):
        @self.middleware.convert
        def resolve_something(items: list[str]) -> dict[str, Any]:
            """Docstring kept."""
            return {}

        assert resolve_something.__name__ == "resolve_something"
        assert resolve_something.__doc__ == "Docstring kept."

    @pytest.mark.asyncio
    async def test_async_function(self):
        @self.middleware.convert
        async def tool(items: list[str]) -> dict:
            return {"count": len(items)}

        assert await tool('["a", "b"]') == {"count": 2}

    @pytest.mark.asyncio
    async def test_async_error_response(self):
        @self.middleware.convert
        async def tool(items: list[str]) -> dict:
            return {"count": len(items)}

        result = await tool('{"a": 1}')

        assert result["error"]["code"] == "INVALID_INPUT"

    def test_debug_mode_logs_conversions(self, caplog):
        middleware = JSONParameterMiddleware(debug=True)

        @middleware.convert
        def tool(items: list[str]) -> dict:
            return {"count": len(items)}

        with caplog.at_level(logging.DEBUG, logger="kindgraph.utils.json_parameter_middleware"):
            tool('["a"]')

        assert "Converted items from JSON string to list" in caplog.text


class TestJsonConvert:
    def test_json_convert_decorator(self):
        @json_convert
        def tool(items: list[str]) -> dict[str, int]:
            return {"count": len(items)}

        assert tool('["a", "b", "c"]') == {"count": 3}
        assert tool(["a"]) == {"count": 1}

    def test_nested_json_structures(self):
        @json_convert
        def tool(filter: dict) -> dict:
            return filter

        payload = '{"moduleSpecifier": "ui", "types": [{"name": "Theme", "properties": ["color"]}]}'

        assert tool(payload)["types"][0]["properties"] == ["color"]

    def test_empty_json_structures(self):
        @json_convert
        def tool(items: list[str], mapping: dict[str, Any]) -> dict:
            return {"items": items, "mapping": mapping}

        assert tool("[]", "{}") == {"items": [], "mapping": {}}
