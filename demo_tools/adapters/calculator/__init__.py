"""Calculator adapter.

Usage:
    from demo_tools.adapters.calculator import register_calculator_tools
    from demo_tools.registry import ToolRegistry

    registry = ToolRegistry()
    register_calculator_tools(registry)
"""

from .schemas import CALCULATOR_INPUT_SCHEMA, CalculationOutput, Operands
from .tool import CalculatorTool

__all__ = [
    "CALCULATOR_INPUT_SCHEMA",
    "CalculationOutput",
    "Operands",
    "CalculatorTool",
]


def register_calculator_tools(registry) -> None:
    """Register the calculator with the tool registry."""
    registry.register(CalculatorTool())
