"""Tool Interface & Definitions.

Every tool describes itself with a ToolDefinition (name, description,
inputSchema), validates raw JSON arguments against that schema and executes
asynchronously, returning a ToolResult.
"""

from abc import ABC, abstractmethod
from typing import Any, Literal, Protocol

from pydantic import BaseModel, ConfigDict, Field, model_validator

from demo_tools.validation import validate_arguments


class SchemaProperty(BaseModel):
    """Single property of a tool input schema."""

    model_config = ConfigDict(frozen=True)

    type: str
    enum: list[Any] | None = None
    description: str | None = None


class InputSchema(BaseModel):
    """Declarative object schema for tool arguments."""

    model_config = ConfigDict(frozen=True)

    type: Literal["object"] = "object"
    properties: dict[str, SchemaProperty] = Field(default_factory=dict)
    required: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _required_are_declared(self) -> "InputSchema":
        undeclared = [name for name in self.required if name not in self.properties]
        if undeclared:
            raise ValueError(f"Required properties not declared: {', '.join(undeclared)}")
        return self


class ToolDefinition(BaseModel):
    """Public description of a tool, as returned by tools/list."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    description: str
    input_schema: InputSchema = Field(..., alias="inputSchema")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class ToolResult(BaseModel):
    """Outcome of one tool execution."""

    success: bool
    data: Any = None
    error: str | None = None

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class Tool(Protocol):
    """Tool interface."""

    name: str
    description: str
    input_schema: InputSchema

    def definition(self) -> ToolDefinition:
        """Describe the tool."""
        ...

    def validate_arguments(self, arguments: Any) -> dict[str, Any]:
        """Check raw arguments against the input schema."""
        ...

    async def execute(self, ctx: dict, arguments: dict[str, Any]) -> ToolResult:
        """Execute tool action."""
        ...


class BaseTool(ABC):
    """Shared definition/validation behaviour for concrete tools.

    Subclasses set `name`, `description` and `input_schema` as class
    attributes and implement `execute`.
    """

    name: str
    description: str
    input_schema: InputSchema

    def definition(self) -> ToolDefinition:
        return ToolDefinition(
            name=self.name,
            description=self.description,
            input_schema=self.input_schema,
        )

    def validate_arguments(self, arguments: Any) -> dict[str, Any]:
        return validate_arguments(self.input_schema, arguments)

    @abstractmethod
    async def execute(self, ctx: dict, arguments: dict[str, Any]) -> ToolResult:
        """Run the tool on validated arguments."""
