"""Calculator adapter schemas.

Input schema advertised over the wire and the output payload model.
"""

from typing import Literal

from pydantic import BaseModel

from demo_tools.base import InputSchema, SchemaProperty

OPERATIONS = ("add", "subtract", "multiply", "divide")


CALCULATOR_INPUT_SCHEMA = InputSchema(
    properties={
        "operation": SchemaProperty(
            type="string",
            enum=list(OPERATIONS),
            description="The mathematical operation to perform",
        ),
        "a": SchemaProperty(type="number", description="First number"),
        "b": SchemaProperty(type="number", description="Second number"),
    },
    required=["operation", "a", "b"],
)


class Operands(BaseModel):
    """Operands echoed back with the result."""

    a: int | float
    b: int | float


class CalculationOutput(BaseModel):
    """Output payload for CalculatorTool."""

    operation: Literal["add", "subtract", "multiply", "divide"]
    operands: Operands
    result: int | float
