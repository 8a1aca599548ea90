"""Tool API routes for the chat orchestration layer.

Endpoints:
    GET  /v1/tools             List tool definitions
    GET  /v1/tools/{name}      Get one tool definition
    POST /v1/tools/{name}      Invoke a tool with {"arguments": {...}}

Invocation blocks until the tool finishes (a RunningHub run can take
minutes), so the handler is a plain def and runs in FastAPI's threadpool.
Tool failures are returned as ToolResult(is_error=True), not HTTP errors.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from src.runninghub.runner import WorkflowRunner
from src.tools.registry import get_tool_registry
from src.tools.schemas import ToolDefinition, ToolInvocation, ToolResult

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tools", tags=["tools"])


def get_workflow_runner(request: Request) -> WorkflowRunner:
    """Build a runner over the app's shared RunningHub transport."""
    return WorkflowRunner(request.app.state.runninghub_transport)


@router.get("", response_model=list[ToolDefinition])
async def list_tools():
    """List all tool definitions."""
    return get_tool_registry().list_all()


@router.get("/{name}", response_model=ToolDefinition)
async def get_tool(name: str):
    """Get a tool definition by name."""
    definition = get_tool_registry().get(name)
    if definition is None:
        raise HTTPException(status_code=404, detail=f"Tool not found: {name}")
    return definition


@router.post("/{name}", response_model=ToolResult)
def invoke_tool(
    name: str,
    invocation: ToolInvocation,
    runner: WorkflowRunner = Depends(get_workflow_runner),
):
    """Invoke a tool and return its result."""
    registry = get_tool_registry()
    if registry.get(name) is None:
        raise HTTPException(status_code=404, detail=f"Tool not found: {name}")

    result = registry.invoke(name, invocation.arguments, runner)
    if result.is_error:
        logger.warning(f"Tool {name} returned error: {result.content}")
    return result
