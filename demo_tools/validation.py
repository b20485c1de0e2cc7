"""Argument validation against a tool input schema.

Only the scalar JSON types are checked. Keys missing from the schema's
properties and properties declared as object/array pass through untouched.
"""

from typing import TYPE_CHECKING, Any

from demo_tools.exceptions import ToolValidationError

if TYPE_CHECKING:
    from demo_tools.base import InputSchema


def _is_number(value: Any) -> bool:
    # bool is a subclass of int, but JSON true/false is not a number
    return isinstance(value, (int, float)) and not isinstance(value, bool)


_TYPE_CHECKS = {
    "number": _is_number,
    "string": lambda value: isinstance(value, str),
    "boolean": lambda value: isinstance(value, bool),
}


def validate_arguments(schema: "InputSchema", arguments: Any) -> dict[str, Any]:
    """Validate decoded JSON arguments.

    Args:
        schema: Tool input schema
        arguments: Value of params.arguments from the request

    Returns:
        The arguments, unchanged

    Raises:
        ToolValidationError: Arguments missing, not an object, missing a
            required key or carrying a value of the wrong scalar type
    """
    if not isinstance(arguments, dict):
        raise ToolValidationError("Arguments must be an object")

    for field in schema.required:
        if field not in arguments:
            raise ToolValidationError(f"Missing required argument: {field}")

    for key, value in arguments.items():
        prop = schema.properties.get(key)
        if prop is None:
            continue
        check = _TYPE_CHECKS.get(prop.type)
        if check is not None and not check(value):
            raise ToolValidationError(f'Argument "{key}" must be a {prop.type}')

    return arguments
