"""JSON Parameter Middleware for FastMCP.

MCP clients sometimes pass list parameters as JSON strings, e.g. a tool
declared with `glob_patterns: str | list[str]` receiving '["src/*.ts"]'. The
`json_convert` decorator turns such strings back into Python lists before the
tool runs. Plain `str` parameters are never touched, so JSON documents passed
as text (such as exported declarations) arrive unchanged.
"""

import functools
import inspect
import json
import types
from collections.abc import Callable
from typing import Any, TypeVar, get_args, get_origin, get_type_hints

# Type variable for generic function signatures
F = TypeVar("F", bound=Callable[..., Any])

_JSON_OPENERS = {list: "[", dict: "{"}


class JSONParameterMiddleware:
    """
    Converts JSON string arguments into lists or dicts where the signature asks for them.

    Usage:
        mcp = FastMCP("my-server")
        middleware = JSONParameterMiddleware()

        @mcp.tool
        @middleware.convert
        def list_things(patterns: str | list[str]) -> dict:
            ...
    """

    def _collection_origin(self, expected_type: Any) -> type | None:
        origin = get_origin(expected_type) or expected_type
        if origin in (list, dict):
            return origin
        return None

    def _convert_value(self, value: Any, expected_type: Any, param_name: str) -> Any:
        """
        Convert a value to the expected type, parsing JSON if necessary.

        Raises:
            ValueError: If a collection parameter receives malformed JSON
        """
        if not isinstance(value, str):
            return value

        if get_origin(expected_type) is types.UnionType:
            # Collections first, a plain `str` member keeps the raw value
            members = get_args(expected_type)
            stripped = value.strip()
            for arg_type in members:
                collection = self._collection_origin(arg_type)
                if collection is None or not stripped.startswith(_JSON_OPENERS[collection]):
                    continue
                try:
                    return self._convert_value(value, arg_type, param_name)
                except ValueError:
                    # e.g. bracket globs such as "[abc]*.ts"
                    if str in members:
                        return value
                    raise
            return value

        collection = self._collection_origin(expected_type)
        if collection is None:
            return value

        try:
            parsed = json.loads(value)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in parameter '{param_name}': {e}") from e

        if not isinstance(parsed, collection):
            raise ValueError(
                f"Parameter '{param_name}' must be a {collection.__name__}, got {type(parsed).__name__} from JSON"
            )
        return parsed

    def _convert_arguments(self, sig: inspect.Signature, type_hints: dict[str, Any], args, kwargs) -> dict[str, Any]:
        bound_args = sig.bind(*args, **kwargs)
        bound_args.apply_defaults()

        converted_kwargs = {}
        for param_name, param_value in bound_args.arguments.items():
            # Skip special parameters like 'ctx' (Context)
            if param_name not in type_hints:
                converted_kwargs[param_name] = param_value
                continue
            converted_kwargs[param_name] = self._convert_value(param_value, type_hints[param_name], param_name)
        return converted_kwargs

    def convert(self, func: F) -> F:
        """
        Decorator that wraps a function to automatically convert JSON parameters.

        Invalid parameters produce a structured error response instead of a call.
        """
        sig = inspect.signature(func)
        type_hints = get_type_hints(func)

        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs):
                try:
                    converted_kwargs = self._convert_arguments(sig, type_hints, args, kwargs)
                except ValueError as e:
                    return {"error": {"code": "INVALID_INPUT", "message": str(e)}}
                return await func(**converted_kwargs)

            return async_wrapper  # type: ignore

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                converted_kwargs = self._convert_arguments(sig, type_hints, args, kwargs)
            except ValueError as e:
                return {"error": {"code": "INVALID_INPUT", "message": str(e)}}
            return func(**converted_kwargs)

        return wrapper  # type: ignore


# Global middleware instance for convenience
_default_middleware = JSONParameterMiddleware()


def json_convert(func: F) -> F:
    """
    Convenience decorator that applies JSON parameter conversion to a function.

    Usage:
        @mcp.tool
        @json_convert
        def my_tool(items: list[str]) -> dict:
            return {"count": len(items)}
    """
    return _default_middleware.convert(func)
