"""Calculator Tool.

Basic arithmetic on two numbers.
"""

import operator
from typing import Any

from demo_tools.base import BaseTool, ToolResult
from demo_tools.exceptions import InvalidOperationError, UnknownOperationError

from .schemas import CALCULATOR_INPUT_SCHEMA, CalculationOutput, Operands

_OPERATORS = {
    "add": operator.add,
    "subtract": operator.sub,
    "multiply": operator.mul,
    "divide": operator.truediv,
}


class CalculatorTool(BaseTool):
    """Tool for basic arithmetic.

    Use Cases:
    - "What is 6 times 7?"
    - "Subtract 12.5 from 40"
    """

    name = "calculator"
    description = "Perform basic mathematical calculations (add, subtract, multiply, divide)"
    input_schema = CALCULATOR_INPUT_SCHEMA

    async def execute(self, ctx: dict, arguments: dict[str, Any]) -> ToolResult:
        """Execute calculation.

        Args:
            ctx: Execution context (request_id)
            arguments: Validated arguments matching CALCULATOR_INPUT_SCHEMA

        Returns:
            ToolResult with a CalculationOutput payload

        Raises:
            InvalidOperationError: Division by zero
            UnknownOperationError: Operation outside add/subtract/multiply/divide
        """
        op = arguments["operation"]
        a = arguments["a"]
        b = arguments["b"]

        func = _OPERATORS.get(op)
        if func is None:
            raise UnknownOperationError(op)
        if op == "divide" and b == 0:
            raise InvalidOperationError("Division by zero is not allowed")

        output = CalculationOutput(
            operation=op,
            operands=Operands(a=a, b=b),
            result=func(a, b),
        )
        return ToolResult(success=True, data=output.model_dump())
