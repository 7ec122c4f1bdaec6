"""remodern - pluggable tool registry with a line-delimited JSON-RPC server."""

__version__ = "0.1.0"
