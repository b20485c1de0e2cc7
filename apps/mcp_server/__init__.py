"""MCP stdio server application."""
