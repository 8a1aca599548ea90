"""Tool registry - definitions and handlers for the tools this service exposes."""

import logging
from typing import Any, Callable, Optional

from src.runninghub.runner import WorkflowRunner
from src.tools import novel_to_script
from src.tools.schemas import ToolDefinition, ToolResult

logger = logging.getLogger(__name__)

ToolHandler = Callable[[dict[str, Any], WorkflowRunner], ToolResult]


class ToolRegistry:
    """Registry of tools keyed by name.

    Tools are registered in code at startup; see get_tool_registry().
    """

    def __init__(self):
        self._tools: dict[str, tuple[ToolDefinition, ToolHandler]] = {}

    def register(self, definition: ToolDefinition, handler: ToolHandler) -> None:
        if definition.name in self._tools:
            raise ValueError(f"Tool already registered: {definition.name}")
        self._tools[definition.name] = (definition, handler)
        logger.debug(f"Registered tool: {definition.name}")

    def get(self, name: str) -> Optional[ToolDefinition]:
        """Get tool definition by name."""
        entry = self._tools.get(name)
        return entry[0] if entry else None

    def list_all(self) -> list[ToolDefinition]:
        return [definition for definition, _ in self._tools.values()]

    def count(self) -> int:
        return len(self._tools)

    def invoke(self, name: str, arguments: dict[str, Any], runner: WorkflowRunner) -> ToolResult:
        """Call a tool by name.

        Raises:
            KeyError: If no tool is registered under `name`
        """
        if name not in self._tools:
            raise KeyError(name)
        _, handler = self._tools[name]
        logger.info(f"Invoking tool {name}")
        return handler(arguments, runner)


# Global registry instance
_registry: Optional[ToolRegistry] = None


def get_tool_registry() -> ToolRegistry:
    """Get the global tool registry instance."""
    global _registry
    if _registry is None:
        _registry = ToolRegistry()
        _registry.register(novel_to_script.DEFINITION, novel_to_script.novel_to_script)
    return _registry
