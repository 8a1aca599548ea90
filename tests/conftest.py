"""Shared fixtures: a scripted RunningHub stub and a fake clock."""

import json
from typing import Any, Optional

import httpx
import pytest

from src.runninghub.runner import WorkflowRunner
from src.runninghub.transport import RunningHubTransport

BASE_URL = "https://runninghub.test"


def envelope(data: Any, code: int = 0, msg: str = "success") -> dict:
    return {"code": code, "msg": msg, "data": data}


class FakeClock:
    """Monotonic clock whose sleep() advances time instantly."""

    def __init__(self):
        self.now = 0.0
        self.sleeps: list[float] = []

    def monotonic(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class FakeRunningHub:
    """Scripted stand-in for the RunningHub OpenAPI and artifact host.

    Each response is (status_code, body) where body is a dict/list (sent as
    JSON), a str/bytes (sent raw). A prepared httpx.Response is returned
    as is, and an Exception is raised instead of responding.
    """

    def __init__(self):
        self.create_response: Any = (200, envelope({"taskId": "task-1", "taskStatus": "QUEUED"}))
        self.status_responses: list[Any] = []
        self.outputs_response: Any = (200, envelope([]))
        self.files: dict[str, Any] = {}
        self.calls: list[tuple[str, str, Optional[dict]]] = []

    def set_statuses(self, *statuses: str) -> None:
        self.status_responses = [(200, envelope(s)) for s in statuses]

    def set_outputs(self, *items: dict) -> None:
        self.outputs_response = (200, envelope(list(items)))

    def calls_to(self, path: str) -> list[tuple[str, str, Optional[dict]]]:
        return [c for c in self.calls if c[1] == path]

    def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else None
        path = request.url.path if request.url.host == "runninghub.test" else str(request.url)
        self.calls.append((request.method, path, body))

        if path == "/task/openapi/create":
            scripted = self.create_response
        elif path == "/task/openapi/status":
            if not self.status_responses:
                raise AssertionError("Unexpected status call")
            scripted = self.status_responses.pop(0)
        elif path == "/task/openapi/outputs":
            scripted = self.outputs_response
        elif path in self.files:
            scripted = self.files[path]
        else:
            return httpx.Response(404, text="not found")

        if isinstance(scripted, Exception):
            raise scripted
        if isinstance(scripted, httpx.Response):
            return scripted
        status_code, payload = scripted
        if isinstance(payload, (dict, list)):
            return httpx.Response(status_code, json=payload)
        if isinstance(payload, str):
            payload = payload.encode("utf-8")
        return httpx.Response(status_code, content=payload)


@pytest.fixture
def hub() -> FakeRunningHub:
    return FakeRunningHub()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def transport(hub: FakeRunningHub):
    client = httpx.Client(transport=httpx.MockTransport(hub.handler))
    with RunningHubTransport(base_url=BASE_URL, http_client=client) as t:
        yield t


@pytest.fixture
def runner(transport: RunningHubTransport, clock: FakeClock) -> WorkflowRunner:
    return WorkflowRunner(
        transport,
        poll_interval=2.0,
        default_timeout=600.0,
        clock=clock.monotonic,
        sleep=clock.sleep,
    )
