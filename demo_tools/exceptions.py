"""Tool exceptions.

Custom exception hierarchy shared by the registry, the validator and every
adapter. The dispatcher turns any of these into an error envelope; the
message text is what the client sees.
"""


class ToolError(Exception):
    """Base exception for tool lookup, validation and execution."""

    pass


class ToolNotFoundError(ToolError):
    """No tool registered under the requested name."""

    def __init__(self, name: str):
        super().__init__(f'Tool "{name}" not found')
        self.name = name


class ToolValidationError(ToolError):
    """Arguments do not satisfy the tool's input schema."""

    pass


class ToolExecutionError(ToolError):
    """Tool accepted its arguments but could not produce a result."""

    pass


class InvalidOperationError(ToolExecutionError):
    """Operation is known but cannot be applied to these operands."""

    pass


class UnknownOperationError(ToolExecutionError):
    """Value of the `operation` argument is not supported by the tool."""

    def __init__(self, operation):
        super().__init__(f"Unknown operation: {operation}")
        self.operation = operation
