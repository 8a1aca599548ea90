"""Schemas for RunningHub task submission, status, and outputs.

JobSpec/NodeInfo describe what the caller wants to run. JobHandle and
JobStatus describe a task once RunningHub has accepted it. OutputItem is one
downloadable artifact from a finished task.

Wire names are camelCase (nodeId, fileUrl, ...); models accept both the wire
name and the Python field name.
"""

import threading
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class JobStatus(str, Enum):
    """Task lifecycle states reported by RunningHub."""
    QUEUED = "QUEUED"
    RUNNING = "RUNNING"
    SUCCEEDED = "SUCCESS"
    FAILED = "FAILED"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_remote(cls, value: str) -> "JobStatus":
        """Map a remote status string; unrecognized or empty values are UNKNOWN."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.SUCCEEDED, JobStatus.FAILED)


class NodeInfo(BaseModel):
    """One workflow node parameter override."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    node_id: str = Field(alias="nodeId")
    field_name: str = Field(alias="fieldName")
    field_value: str = Field(alias="fieldValue")


class JobSpec(BaseModel):
    """A workflow execution request. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    credential: str = Field(description="RunningHub API key")
    workflow_id: str
    parameters: tuple[NodeInfo, ...] = Field(
        default=(),
        description="Ordered node parameter overrides",
    )

    def to_create_request(self) -> dict[str, Any]:
        """Request body for POST /task/openapi/create."""
        return {
            "apiKey": self.credential,
            "workflowId": self.workflow_id,
            "nodeInfoList": [p.model_dump(by_alias=True) for p in self.parameters],
        }


class JobHandle(BaseModel):
    """Correlation key for a created task."""

    model_config = ConfigDict(frozen=True)

    task_id: str

    def to_task_request(self, credential: str) -> dict[str, str]:
        """Request body shared by the status and outputs calls."""
        return {"apiKey": credential, "taskId": self.task_id}


class OutputItem(BaseModel):
    """A downloadable output file from a finished task."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    file_url: str = Field(default="", alias="fileUrl")
    file_type: str = Field(default="", alias="fileType")
    node_id: str = Field(default="", alias="nodeId")


class CancellationToken:
    """Cooperative cancellation signal for a single run.

    The runner checks it once per poll iteration; an in-flight HTTP call is
    allowed to finish first.
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()
