"""Domain modules of the SSP MCP server."""
