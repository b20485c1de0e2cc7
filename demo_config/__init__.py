"""
MCP Server Demo Configuration Package.

Provides Pydantic Settings loaded from environment variables.
"""

from demo_config.settings import Settings

__all__ = ["Settings"]
