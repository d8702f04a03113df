"""
Post-it Board.

- backend/: Note store, services, REST API, configuration
- mcp/: MCP tool server (FastMCP, Streamable HTTP)
- cli/: Command-line client (Typer + Rich)
"""
