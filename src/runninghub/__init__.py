"""Client for RunningHub's long-running workflow tasks.

Takes a JobSpec, runs it remotely to completion, and returns the text the
workflow produced.

Architecture (bottom-up):
- schemas: JobSpec, JobHandle, JobStatus, OutputItem, CancellationToken
- errors: RunError taxonomy (creation, status, failure, timeout, outputs)
- transport: JSON-over-HTTP POSTs and artifact downloads (httpx)
- envelope: Decodes the {code, msg, data} envelope and task status
- aggregator: Selects text artifacts, downloads and concatenates them
- runner: create -> poll until terminal -> fetch outputs -> aggregate
"""

from src.runninghub.errors import (
    ArtifactDownloadError,
    NoTextOutputError,
    OutputFetchError,
    RunError,
    StatusQueryError,
    TaskCreationError,
    TaskFailedError,
    TaskTimeoutError,
    TransportError,
)
from src.runninghub.runner import WorkflowRunner
from src.runninghub.schemas import (
    CancellationToken,
    JobHandle,
    JobSpec,
    JobStatus,
    NodeInfo,
    OutputItem,
)
from src.runninghub.transport import RunningHubTransport

__all__ = [
    "ArtifactDownloadError",
    "CancellationToken",
    "JobHandle",
    "JobSpec",
    "JobStatus",
    "NodeInfo",
    "NoTextOutputError",
    "OutputFetchError",
    "OutputItem",
    "RunError",
    "RunningHubTransport",
    "StatusQueryError",
    "TaskCreationError",
    "TaskFailedError",
    "TaskTimeoutError",
    "TransportError",
    "WorkflowRunner",
]
