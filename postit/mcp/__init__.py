"""
MCP Surface.

FastMCP server exposing the board as tools over Streamable HTTP.
"""
