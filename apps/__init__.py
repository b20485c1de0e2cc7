"""
MCP Server Demo Applications Package.

Contains:
- mcp_server: JSON-RPC tool server over stdio
"""

__version__ = "1.0.0"
