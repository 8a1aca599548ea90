"""RunningHub Bridge - workflow execution service for chat-model tools.

This service runs remote RunningHub workflows on behalf of a chat model:
- Workflow runner (create task, poll to completion, fetch outputs)
- Output aggregation (download text artifacts, assemble the result)
- Tool definitions exposed over HTTP for the orchestration layer
"""

__version__ = "0.1.0"
