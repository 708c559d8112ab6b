# tests/test_conversion_pipeline.py

from __future__ import annotations

import pytest

from adapters.signaloid_client import SignaloidTaskClient
from cli.ui_components import format_conversion_lines
from core.domain.models import ConversionRequest, ConversionResult
from core.errors import TaskTerminatedError
from core.interfaces.task_api import RemoteTaskApi
from core.services.conversion_pipeline import PipelineHooks, execute_task, run_conversion

from .fakes import FakeSignaloid, FakeTaskApi


def _request() -> ConversionRequest:
    return ConversionRequest.create(
        source_currency="USD",
        target_currency="EUR",
        amount=100,
        rate_min=0.8,
        rate_max=0.9,
    )


@pytest.mark.asyncio
async def test_implementations_satisfy_protocol(settings) -> None:
    assert isinstance(FakeTaskApi(), RemoteTaskApi)
    async with SignaloidTaskClient(settings, transport=FakeSignaloid().transport) as api:
        assert isinstance(api, RemoteTaskApi)


@pytest.mark.asyncio
async def test_execute_task_runs_steps_in_order() -> None:
    api = FakeTaskApi(task_id="t-1")
    submitted: list[str] = []
    statuses: list[str] = []

    execution = await execute_task(
        api,
        "code",
        "0.8 0.9 100",
        hooks=PipelineHooks(submitted=submitted.append, status=statuses.append),
    )

    assert [c[0] for c in api.calls] == ["submit", "wait", "output"]
    assert api.calls[0] == ("submit", "code", "0.8 0.9 100")
    assert execution.task_id == "t-1"
    assert execution.statuses == ["InProgress", "Completed"]
    assert submitted == ["t-1"]
    assert statuses == ["InProgress", "Completed"]


@pytest.mark.asyncio
async def test_execute_task_terminal_failure_skips_output() -> None:
    api = FakeTaskApi(statuses=["Stopped"], wait_error=TaskTerminatedError("12345", "Stopped"))

    with pytest.raises(TaskTerminatedError):
        await execute_task(api, "code", "args")

    assert [c[0] for c in api.calls] == ["submit", "wait"]


@pytest.mark.asyncio
async def test_run_conversion_end_to_end(settings) -> None:
    fake = FakeSignaloid(statuses=["InProgress", "Completed"])

    async with SignaloidTaskClient(settings, transport=fake.transport) as api:
        outcome = await run_conversion(_request(), api=api, program="int main() { return 0; }")

    assert fake.calls() == [
        ("POST", "/tasks"),
        ("GET", "/tasks/12345"),
        ("GET", "/tasks/12345"),
        ("GET", "/tasks/12345/outputs"),
        ("GET", "/stdout"),
    ]
    assert fake.submitted_body()["SourceCode"]["Arguments"] == "0.8 0.9 100"
    assert outcome.task_id == "12345"
    assert outcome.result == ConversionResult(rate=0.85, converted_amount=85.0)
    assert outcome.statuses == ["InProgress", "Completed"]
    assert format_conversion_lines(outcome) == [
        "Converted 100 USD to 85.00 EUR.",
        "Conversion Rate: 0.85",
    ]


@pytest.mark.asyncio
async def test_run_conversion_cancelled_task_never_fetches_output(settings) -> None:
    fake = FakeSignaloid(statuses=["InProgress", "Cancelled"])

    async with SignaloidTaskClient(settings, transport=fake.transport) as api:
        with pytest.raises(TaskTerminatedError):
            await run_conversion(_request(), api=api, program="code")

    assert ("GET", "/tasks/12345/outputs") not in fake.calls()
