"""JSON parameter conversion for FastMCP tools.

Some MCP clients send structured arguments (lists, objects, numbers) as JSON
strings. ``json_convert`` wraps a tool function and decodes those strings
according to the function's annotations before the call.
"""

import functools
import inspect
import json
import logging
import types
from collections.abc import Callable, Mapping, Sequence
from typing import Any, TypeVar, Union, get_args, get_origin, get_type_hints

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

_CONTAINERS = (list, dict, set, tuple)


class JSONParameterMiddleware:
    """
    Converts JSON-string arguments to the types a tool function declares.

    Usage:
        middleware = JSONParameterMiddleware()

        @mcp.tool
        @middleware.convert
        def resolve(position: int, filter: dict | list[dict] | None = None) -> dict:
            ...

    Invalid arguments short-circuit the call with an ``INVALID_INPUT`` error
    payload instead of raising.
    """

    def __init__(self, debug: bool = False):
        self.debug = debug

    def _container_origin(self, expected_type: Any) -> type | None:
        origin = get_origin(expected_type) or expected_type
        if not isinstance(origin, type):
            return None
        if origin in _CONTAINERS or (origin is not str and issubclass(origin, Mapping | Sequence)):
            return origin
        return None

    def _matches(self, parsed: Any, origin: type) -> bool:
        if origin in (list, set, tuple) or (origin is not dict and issubclass(origin, Sequence)):
            return isinstance(parsed, list)
        return isinstance(parsed, dict)

    def _convert_value(self, value: Any, expected_type: Any, param_name: str) -> Any:
        """
        Convert one argument.

        Raises:
            ValueError: If the value is malformed JSON or decodes to the wrong shape
        """
        if value is None:
            return None

        if get_origin(expected_type) in (types.UnionType, Union):
            last_error: Exception | None = None
            for arg_type in get_args(expected_type):
                if arg_type is type(None):
                    continue
                try:
                    return self._convert_value(value, arg_type, param_name)
                except ValueError as e:
                    last_error = e
            if last_error is not None:
                raise last_error
            return value

        if not isinstance(value, str):
            return value

        if expected_type in (int, float) and not isinstance(value, bool):
            try:
                return expected_type(value.strip())
            except ValueError as e:
                raise ValueError(f"Parameter '{param_name}' must be a {expected_type.__name__}, got {value!r}") from e

        origin = self._container_origin(expected_type)
        if origin is None:
            return value

        try:
            parsed = json.loads(value)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in parameter '{param_name}': {e}") from e

        if not self._matches(parsed, origin):
            raise ValueError(f"Parameter '{param_name}' must be a {origin.__name__}, got {type(parsed).__name__} from JSON")
        if self.debug:
            logger.debug("Converted %s from JSON string to %s", param_name, type(parsed).__name__)
        if origin in (set, tuple):
            return origin(parsed)
        return parsed

    def _convert_arguments(self, sig: inspect.Signature, type_hints: dict[str, Any], args, kwargs) -> dict[str, Any]:
        bound_args = sig.bind(*args, **kwargs)
        bound_args.apply_defaults()
        converted = {}
        for param_name, param_value in bound_args.arguments.items():
            if param_name in type_hints:
                param_value = self._convert_value(param_value, type_hints[param_name], param_name)
            converted[param_name] = param_value
        return converted

    def convert(self, func: F) -> F:
        """Wrap ``func`` (sync or async) so its arguments are converted before the call."""
        sig = inspect.signature(func)
        type_hints = get_type_hints(func)
        type_hints.pop("return", None)

        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs):
                try:
                    converted = self._convert_arguments(sig, type_hints, args, kwargs)
                except ValueError as e:
                    return {"error": {"code": "INVALID_INPUT", "message": str(e)}}
                return await func(**converted)

            return async_wrapper  # type: ignore

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                converted = self._convert_arguments(sig, type_hints, args, kwargs)
            except ValueError as e:
                return {"error": {"code": "INVALID_INPUT", "message": str(e)}}
            return func(**converted)

        return wrapper  # type: ignore


_default_middleware = JSONParameterMiddleware()


def json_convert(func: F) -> F:
    """
    Shorthand for ``JSONParameterMiddleware().convert``.

    Usage:
        @mcp.tool
        @json_convert
        def my_tool(items: list[str]) -> dict:
            return {"count": len(items)}
    """
    return _default_middleware.convert(func)
