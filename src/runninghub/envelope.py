"""Decoding of RunningHub response envelopes.

Every job-control response is wrapped as:

    { "code": 0, "msg": "success", "data": ... }

where `data` depends on the call:
- create:  { "taskId": "...", "taskStatus": "RUNNING", ... }
- status:  "SUCCESS"  or  { "taskStatus": "SUCCESS" }
- outputs: [ { "fileUrl": "...", "fileType": "txt", "nodeId": "9", ... } ]

The status endpoint has been seen returning both shapes, so status decoding
tries each shape in order and falls back to UNKNOWN instead of raising.
"""

import json
import logging
from typing import Any

from pydantic import BaseModel, StrictStr, TypeAdapter, ValidationError

from src.runninghub.schemas import JobStatus, OutputItem

logger = logging.getLogger(__name__)


class EnvelopeError(ValueError):
    """Raised when a response body is not a usable envelope."""


class Envelope(BaseModel):
    """Outer {code, msg, data} structure of a job-control response."""

    code: int
    msg: str = ""
    data: Any = None


class _StatusObject(BaseModel):
    taskStatus: StrictStr


class _CreateData(BaseModel):
    taskId: StrictStr = ""


_STATUS_STRING = TypeAdapter(StrictStr)
_OUTPUT_ITEMS = TypeAdapter(list[OutputItem])


def decode_envelope(raw: bytes) -> Envelope:
    """Parse raw response bytes into an Envelope.

    Raises:
        EnvelopeError: If the body is not JSON, not an envelope object,
            or carries a non-zero code
    """
    try:
        document = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise EnvelopeError(f"Malformed JSON response: {e}") from e

    try:
        envelope = Envelope.model_validate(document)
    except ValidationError as e:
        raise EnvelopeError(f"Response is not an envelope: {e}") from e

    if envelope.code != 0:
        raise EnvelopeError(f"RunningHub returned code={envelope.code} msg={envelope.msg}")
    return envelope


def parse_task_status(data: Any) -> JobStatus:
    """Extract the task status from a status envelope's `data`.

    Tries a bare string first, then an object with `taskStatus`.
    Never raises: anything unrecognized is JobStatus.UNKNOWN.
    """
    try:
        value = _STATUS_STRING.validate_python(data)
    except ValidationError:
        try:
            value = _StatusObject.model_validate(data).taskStatus
        except ValidationError:
            logger.debug(f"Unrecognized status data: {data!r}")
            return JobStatus.UNKNOWN
    return JobStatus.from_remote(value)


def parse_task_id(data: Any) -> str:
    """Extract `taskId` from a create envelope's `data`, or "" if absent."""
    try:
        return _CreateData.model_validate(data).taskId
    except ValidationError:
        return ""


def parse_output_items(data: Any) -> list[OutputItem]:
    """Parse an outputs envelope's `data` into OutputItems (order preserved).

    Raises:
        EnvelopeError: If `data` is not a list of descriptor objects
    """
    try:
        return _OUTPUT_ITEMS.validate_python(data)
    except ValidationError as e:
        raise EnvelopeError(f"Malformed outputs list: {e}") from e
