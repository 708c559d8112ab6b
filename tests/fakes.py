# tests/fakes.py

from __future__ import annotations

import json
from typing import Callable, Union

import httpx

from core.domain.models import ConversionResult

API_BASE_URL = "https://api.test"
STDOUT_URL = "https://artifacts.test/stdout"
SAMPLE_STDOUT = "Uncertain conversion rate: 0.85\nConverted Amount: 85.00"

Override = Union[httpx.Response, Callable[[httpx.Request], httpx.Response]]


class FakeSignaloid:
    """
    In-memory stand-in for the Signaloid task API, used as an httpx.MockTransport handler.

    Status responses are consumed in order, one per GET /tasks/{id}.
    """

    def __init__(
        self,
        *,
        task_id: str = "12345",
        statuses: list[str] | None = None,
        stdout: str = SAMPLE_STDOUT,
        outputs: dict | None = None,
    ) -> None:
        self.task_id = task_id
        self.statuses = list(statuses if statuses is not None else ["Completed"])
        self.stdout = stdout
        self.outputs = outputs if outputs is not None else {"Stdout": STDOUT_URL}
        self.requests: list[httpx.Request] = []
        self._overrides: dict[tuple[str, str, str], Override] = {}

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def override(self, method: str, path: str, response: Override, *, host: str = "api.test") -> None:
        self._overrides[(method, host, path)] = response

    def calls(self) -> list[tuple[str, str]]:
        return [(r.method, r.url.path) for r in self.requests]

    def requests_to(self, host: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == host]

    def submitted_body(self) -> dict:
        posts = [r for r in self.requests if r.method == "POST"]
        assert posts, "no task was submitted"
        return json.loads(posts[0].content)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        override = self._overrides.get((request.method, request.url.host, request.url.path))
        if override is not None:
            return override(request) if callable(override) else override

        if request.url.host == "artifacts.test":
            return httpx.Response(200, text=self.stdout)

        path = request.url.path
        if request.method == "POST" and path == "/tasks":
            return httpx.Response(200, json={"TaskID": self.task_id})
        if request.method == "GET" and path == f"/tasks/{self.task_id}/outputs":
            return httpx.Response(200, json=self.outputs)
        if request.method == "GET" and path == f"/tasks/{self.task_id}":
            return httpx.Response(200, json={"Status": self.statuses.pop(0)})
        return httpx.Response(404, json={"message": "not found"})


class FakeTaskApi:
    """RemoteTaskApi fake that records the order of calls."""

    def __init__(
        self,
        *,
        task_id: str = "12345",
        statuses: list[str] | None = None,
        result: ConversionResult | None = None,
        wait_error: Exception | None = None,
    ) -> None:
        self.task_id = task_id
        self.statuses = statuses if statuses is not None else ["InProgress", "Completed"]
        self.result = result or ConversionResult(rate=0.85, converted_amount=85.0)
        self.wait_error = wait_error
        self.calls: list[tuple] = []

    async def __aenter__(self) -> "FakeTaskApi":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.calls.append(("close",))

    async def submit_task(self, code: str, arguments: str) -> str:
        self.calls.append(("submit", code, arguments))
        return self.task_id

    async def wait_for_completion(self, task_id, *, cancel_event=None, on_status=None):
        self.calls.append(("wait", task_id))
        for status in self.statuses:
            if on_status is not None:
                on_status(status)
        if self.wait_error is not None:
            raise self.wait_error
        return list(self.statuses)

    async def get_task_output(self, task_id: str) -> ConversionResult:
        self.calls.append(("output", task_id))
        return self.result
