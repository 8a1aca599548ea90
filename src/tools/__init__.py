"""Tools exposed to the chat orchestration layer.

Each tool has a ToolDefinition (name, description, parameters) and a handler
that takes untyped arguments and returns a ToolResult. Failures come back as
error results rather than exceptions.
"""
