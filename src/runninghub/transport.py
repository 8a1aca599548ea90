"""JSON-over-HTTP transport for the RunningHub OpenAPI.

The transport never looks inside response bodies: it returns raw bytes and
the HTTP status code and leaves interpretation to the caller. Non-200 codes
are returned, not raised. Only network-level failures (DNS, connect, read
timeouts) raise, as TransportError.

One instance wraps one httpx.Client, so connections are reused across calls
and across runs that share the instance. Construct it explicitly and pass it
to the WorkflowRunner.
"""

import logging
import os
from typing import Any, Optional

import httpx

from src.runninghub.errors import TransportError
from src.runninghub.schemas import JobHandle, JobSpec

logger = logging.getLogger(__name__)

RUNNINGHUB_BASE_URL = os.environ.get("RUNNINGHUB_BASE_URL", "https://www.runninghub.ai")
REQUEST_TIMEOUT = float(os.environ.get("RUNNINGHUB_REQUEST_TIMEOUT", "30"))

CREATE_PATH = "/task/openapi/create"
STATUS_PATH = "/task/openapi/status"
OUTPUTS_PATH = "/task/openapi/outputs"


class RunningHubTransport:
    """POSTs JSON bodies to RunningHub and downloads artifacts."""

    def __init__(
        self,
        base_url: str = RUNNINGHUB_BASE_URL,
        timeout: float = REQUEST_TIMEOUT,
        http_client: Optional[httpx.Client] = None,
    ):
        self.base_url = base_url.rstrip("/")
        if http_client is None:
            http_client = httpx.Client(
                timeout=timeout,
                headers={"Content-Type": "application/json"},
            )
        self._client = http_client

    def post(self, path: str, body: Any) -> tuple[bytes, int]:
        """POST `body` as JSON to base_url + path.

        Returns:
            Tuple of (raw_response_bytes, http_status_code)

        Raises:
            TransportError: If the request could not be completed
        """
        url = f"{self.base_url}{path}"
        try:
            response = self._client.post(url, json=body)
            return response.content, response.status_code
        except httpx.RequestError as e:
            logger.warning(f"POST {path} failed: {e}")
            raise TransportError(f"POST {path} failed: {e}") from e

    def download_artifact(self, url: str) -> tuple[bytes, int]:
        """GET an absolute artifact URL, following redirects to the file host."""
        try:
            response = self._client.get(url, follow_redirects=True)
            return response.content, response.status_code
        except httpx.RequestError as e:
            logger.warning(f"GET {url} failed: {e}")
            raise TransportError(f"GET {url} failed: {e}") from e

    # --- RunningHub calls ---

    def create_task(self, spec: JobSpec) -> tuple[bytes, int]:
        return self.post(CREATE_PATH, spec.to_create_request())

    def task_status(self, credential: str, handle: JobHandle) -> tuple[bytes, int]:
        return self.post(STATUS_PATH, handle.to_task_request(credential))

    def task_outputs(self, credential: str, handle: JobHandle) -> tuple[bytes, int]:
        return self.post(OUTPUTS_PATH, handle.to_task_request(credential))

    # --- Lifecycle ---

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "RunningHubTransport":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
