"""Novel-to-script tool: turns novel prose into a screenplay via RunningHub.

Submits the text to the novel-to-script workflow, waits for the task to
finish, and returns the downloaded script text.

Requires environment variables:
    RUNNINGHUB_API_KEY: RunningHub OpenAPI key
"""

import logging
import math
import os
from typing import Any, Optional

from src.runninghub.errors import ArtifactDownloadError, NoTextOutputError, RunError
from src.runninghub.runner import WorkflowRunner
from src.runninghub.schemas import JobSpec, NodeInfo
from src.tools.schemas import ToolDefinition, ToolParameter, ToolResult

logger = logging.getLogger(__name__)

RUNNINGHUB_API_KEY_ENV = "RUNNINGHUB_API_KEY"

NOVEL_TO_SCRIPT_WORKFLOW_ID = "2014935539987783681"

# Workflow nodes: 8 takes the novel text, 6 takes the (optional) seed
TEXT_NODE_ID = "8"
SEED_NODE_ID = "6"

DEFINITION = ToolDefinition(
    name="novel_to_script",
    description=(
        "Novel to script: submits novel text to the RunningHub novel-to-script "
        "workflow, waits for the task to finish and returns the script. "
        f"The API key is read from {RUNNINGHUB_API_KEY_ENV}."
    ),
    parameters=[
        ToolParameter(name="text", description="Novel text", required=True),
        ToolParameter(name="seed", description="Optional random seed"),
        ToolParameter(
            name="timeout_seconds",
            description="Optional limit on how long to wait for the task",
        ),
    ],
)


def get_runninghub_api_key() -> Optional[str]:
    """Get the RunningHub API key, or None if not configured."""
    return os.environ.get(RUNNINGHUB_API_KEY_ENV) or None


def build_job_spec(api_key: str, text: str, seed: str = "") -> JobSpec:
    """Build the JobSpec for a novel-to-script run."""
    parameters = [NodeInfo(node_id=TEXT_NODE_ID, field_name="text", field_value=text)]
    if seed:
        parameters.append(
            NodeInfo(node_id=SEED_NODE_ID, field_name="seed", field_value=seed)
        )
    return JobSpec(
        credential=api_key,
        workflow_id=NOVEL_TO_SCRIPT_WORKFLOW_ID,
        parameters=tuple(parameters),
    )


def novel_to_script(
    arguments: dict[str, Any],
    runner: WorkflowRunner,
    api_key: Optional[str] = None,
) -> ToolResult:
    """Run the novel-to-script workflow for `arguments["text"]`.

    Args:
        arguments: Untyped tool arguments (text, seed, timeout_seconds)
        runner: Runner bound to a RunningHub transport
        api_key: Overrides RUNNINGHUB_API_KEY when given

    Returns:
        ToolResult with the script text, or an error result
    """
    api_key = api_key or get_runninghub_api_key()
    if not api_key:
        return ToolResult.error(f"Environment variable {RUNNINGHUB_API_KEY_ENV} is not set")

    text = arguments.get("text")
    if not isinstance(text, str) or not text:
        return ToolResult.error("Required argument 'text' must be a non-empty string")

    seed = arguments.get("seed")
    if seed is None:
        seed = ""
    elif isinstance(seed, bool) or not isinstance(seed, (str, int)):
        return ToolResult.error("Argument 'seed' must be a string or an integer")

    deadline = None
    timeout = arguments.get("timeout_seconds")
    if timeout is not None:
        try:
            timeout = float(timeout)
        except (TypeError, ValueError):
            return ToolResult.error("Argument 'timeout_seconds' must be a number")
        if not math.isfinite(timeout) or timeout <= 0:
            return ToolResult.error("Argument 'timeout_seconds' must be a positive finite number")
        deadline = runner.deadline_after(timeout)

    spec = build_job_spec(api_key, text, str(seed))
    try:
        content = runner.run_workflow(spec, deadline=deadline)
    except (ArtifactDownloadError, NoTextOutputError) as e:
        logger.error(f"novel_to_script output download failed: {e}")
        return ToolResult.error(f"Failed to download output files: {e}")
    except RunError as e:
        logger.error(f"novel_to_script failed: {e}" + (f" (payload: {e.payload})" if e.payload else ""))
        return ToolResult.error(str(e))

    return ToolResult.text(content)
