"""MCP server exposing the Apple documentation client as tools."""
