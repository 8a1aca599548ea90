"""Schemas for tool definitions, invocations, and results."""

from typing import Any

from pydantic import BaseModel, Field


class ToolParameter(BaseModel):
    """A single string parameter accepted by a tool."""

    name: str
    description: str = ""
    required: bool = False


class ToolDefinition(BaseModel):
    """Metadata describing a callable tool."""

    name: str
    description: str
    parameters: list[ToolParameter] = Field(default_factory=list)


class ToolInvocation(BaseModel):
    """Request body for invoking a tool."""

    arguments: dict[str, Any] = Field(default_factory=dict)


class ToolResult(BaseModel):
    """Outcome of a tool call: text content, or an error message."""

    content: str
    is_error: bool = False

    @classmethod
    def text(cls, content: str) -> "ToolResult":
        return cls(content=content)

    @classmethod
    def error(cls, message: str) -> "ToolResult":
        return cls(content=message, is_error=True)
