"""Tool framework.

Provides the tool protocol, the result model, the registry that owns
tool identity and execution, and the built-in tools.
"""
