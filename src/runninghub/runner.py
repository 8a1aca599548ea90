"""Runs a RunningHub workflow to completion and returns its text output.

The runner is the single entry point for executing a JobSpec. It:

1. Creates the task (POST /task/openapi/create)
2. Polls task status at a fixed interval until SUCCESS or FAILED,
   within a deadline (caller-supplied, or RUNNINGHUB_RUN_TIMEOUT)
3. Fetches the output descriptor list (POST /task/openapi/outputs)
4. Downloads and assembles the text artifacts

Runs synchronously on the calling thread. Cancellation and the deadline are
checked at the top of each poll iteration and again after the wait, so no
network call is made once either has fired. An HTTP call already in flight
is allowed to finish.

Nothing is retried. A transport error while polling ends the run
immediately, same as one during creation.
"""

import logging
import os
import time
from typing import Callable, Optional

from src.runninghub.aggregator import fetch_output_text
from src.runninghub.envelope import (
    EnvelopeError,
    decode_envelope,
    parse_output_items,
    parse_task_id,
    parse_task_status,
)
from src.runninghub.errors import (
    OutputFetchError,
    StatusQueryError,
    TaskCreationError,
    TaskFailedError,
    TaskTimeoutError,
)
from src.runninghub.schemas import (
    CancellationToken,
    JobHandle,
    JobSpec,
    JobStatus,
    OutputItem,
)
from src.runninghub.transport import RunningHubTransport

logger = logging.getLogger(__name__)

# Seconds between status polls
POLL_INTERVAL = float(os.environ.get("RUNNINGHUB_POLL_INTERVAL", "2"))

# Upper bound for a run when the caller gives no deadline (10 minutes)
DEFAULT_RUN_TIMEOUT = float(os.environ.get("RUNNINGHUB_RUN_TIMEOUT", "600"))


def _as_text(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace")


class WorkflowRunner:
    """Creates a task, waits for it, and assembles its text output.

    Holds no per-run state, so one instance can serve concurrent runs.
    `clock` and `sleep` default to time.monotonic and time.sleep; deadlines
    passed to run_workflow() are absolute values on `clock`.
    """

    def __init__(
        self,
        transport: RunningHubTransport,
        poll_interval: float = POLL_INTERVAL,
        default_timeout: float = DEFAULT_RUN_TIMEOUT,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.transport = transport
        self.poll_interval = poll_interval
        self.default_timeout = default_timeout
        self._clock = clock
        self._sleep = sleep

    def deadline_after(self, seconds: float) -> float:
        """Absolute deadline `seconds` from now on this runner's clock."""
        return self._clock() + seconds

    def run_workflow(
        self,
        spec: JobSpec,
        deadline: Optional[float] = None,
        cancellation: Optional[CancellationToken] = None,
    ) -> str:
        """Run `spec` to completion and return the assembled text.

        Args:
            spec: Workflow ID, credential and node parameters
            deadline: Absolute time on the runner's clock; defaults to
                now + default_timeout, measured before the create call
            cancellation: Optional token checked once per poll iteration

        Returns:
            The stripped text of every selected artifact, joined by a blank line

        Raises:
            RunError: One of its subclasses; see src.runninghub.errors
        """
        if deadline is None:
            deadline = self.deadline_after(self.default_timeout)

        handle = self._create_task(spec)
        self._wait_for_success(spec, handle, deadline, cancellation)
        items = self._fetch_outputs(spec, handle)
        return fetch_output_text(self.transport, items)

    # --- Steps ---

    def _create_task(self, spec: JobSpec) -> JobHandle:
        raw, status_code = self.transport.create_task(spec)
        if status_code != 200:
            raise TaskCreationError(
                f"Create API returned {status_code}", payload=_as_text(raw)
            )
        try:
            envelope = decode_envelope(raw)
        except EnvelopeError as e:
            raise TaskCreationError(
                f"Bad create response: {e}", payload=_as_text(raw)
            ) from e

        task_id = parse_task_id(envelope.data)
        if not task_id:
            raise TaskCreationError(
                "Create response has no taskId", payload=_as_text(raw)
            )

        logger.info(f"Created task {task_id} for workflow {spec.workflow_id}")
        return JobHandle(task_id=task_id)

    def _wait_for_success(
        self,
        spec: JobSpec,
        handle: JobHandle,
        deadline: float,
        cancellation: Optional[CancellationToken],
    ) -> None:
        polls = 0
        last_status: Optional[JobStatus] = None
        while True:
            self._check_deadline(handle, deadline, cancellation, polls)
            remaining = deadline - self._clock()
            self._sleep(min(self.poll_interval, max(remaining, 0.0)))
            self._check_deadline(handle, deadline, cancellation, polls)

            raw, status_code = self.transport.task_status(spec.credential, handle)
            polls += 1
            status = self._decode_status(handle, raw, status_code)

            if status != last_status:
                logger.info(f"Task {handle.task_id} status → {status.value} (poll {polls})")
                last_status = status

            if status.is_terminal:
                if status == JobStatus.FAILED:
                    raise TaskFailedError(
                        f"Task {handle.task_id} failed", payload=_as_text(raw)
                    )
                return

    def _check_deadline(
        self,
        handle: JobHandle,
        deadline: float,
        cancellation: Optional[CancellationToken],
        polls: int,
    ) -> None:
        if cancellation is not None and cancellation.cancelled:
            logger.info(f"Task {handle.task_id} cancelled after {polls} poll(s)")
            raise TaskTimeoutError(
                f"Task {handle.task_id} cancelled", cancelled=True
            )
        if self._clock() >= deadline:
            logger.warning(f"Task {handle.task_id} timed out after {polls} poll(s)")
            raise TaskTimeoutError(
                f"Task {handle.task_id} did not finish before the deadline"
            )

    def _decode_status(self, handle: JobHandle, raw: bytes, status_code: int) -> JobStatus:
        if status_code != 200:
            raise StatusQueryError(
                f"Status API returned {status_code} for task {handle.task_id}",
                payload=_as_text(raw),
            )
        try:
            envelope = decode_envelope(raw)
        except EnvelopeError as e:
            raise StatusQueryError(
                f"Bad status response for task {handle.task_id}: {e}",
                payload=_as_text(raw),
            ) from e
        return parse_task_status(envelope.data)

    def _fetch_outputs(self, spec: JobSpec, handle: JobHandle) -> list[OutputItem]:
        raw, status_code = self.transport.task_outputs(spec.credential, handle)
        if status_code != 200:
            raise OutputFetchError(
                f"Outputs API returned {status_code} for task {handle.task_id}",
                payload=_as_text(raw),
            )
        try:
            items = parse_output_items(decode_envelope(raw).data)
        except EnvelopeError as e:
            raise OutputFetchError(
                f"Bad outputs response for task {handle.task_id}: {e}",
                payload=_as_text(raw),
            ) from e

        if not items:
            raise OutputFetchError(
                f"Outputs API listed no files for task {handle.task_id}",
                payload=_as_text(raw),
            )

        logger.info(f"Task {handle.task_id} produced {len(items)} output item(s)")
        return items
