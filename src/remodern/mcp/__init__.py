"""Line-delimited MCP server."""
