"""Tests for step orchestrator."""

import logging
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import AsyncMock, call

import pytest

from scenario_harness.artifacts import ArtifactStore
from scenario_harness.context import Scheduler, StepContext
from scenario_harness.models.result import StepError, Verdict
from scenario_harness.models.scenario import Navigate, Scenario, Snapshot, Step
from scenario_harness.orchestrator import (
    CRITICAL_ERROR,
    TEARDOWN_ERROR,
    StepOrchestrator,
)
from scenario_harness.testing.factories import VerdictFactory
from scenario_harness.testing.fakes import FakeAutomationClient

FIXED_TIME = datetime(2099, 1, 1, 12, 0, tzinfo=timezone.utc)


def passing(name: str, details: str = "") -> Step:
    """Create a step that always passes."""

    async def action(ctx: StepContext) -> Verdict:
        return Verdict(passed=True, details=details)

    return Step(name=name, action=action, wait_after_ms=0)


def raising(name: str, exc: Exception) -> Step:
    """Create a step whose action raises."""

    async def action(ctx: StepContext) -> Verdict:
        raise exc

    return Step(name=name, action=action, wait_after_ms=0)


def scenario_of(*items: Step | Navigate | Snapshot) -> Scenario:
    """Create a scenario from items."""
    return Scenario(
        name="test-scenario",
        title="TEST REPORT",
        report_filename="report.txt",
        items=list(items),
    )


@pytest.fixture
def client() -> FakeAutomationClient:
    """Create fake automation client."""
    return FakeAutomationClient()


@pytest.fixture
def sleep_mock() -> AsyncMock:
    """Create sleep mock for the scheduler."""
    return AsyncMock()


@pytest.fixture
def orchestrator(
    client: FakeAutomationClient, sleep_mock: AsyncMock, tmp_path: Path
) -> StepOrchestrator:
    """Create orchestrator launching the fake client."""
    return StepOrchestrator(
        launcher=AsyncMock(return_value=client),
        store=ArtifactStore(output_dir=tmp_path),
        scheduler=Scheduler(sleep=sleep_mock),
        clock=lambda: FIXED_TIME,
    )


async def test_records_one_outcome_per_step(orchestrator: StepOrchestrator) -> None:
    """Records every step verdict in execution order."""
    report = await orchestrator.run(
        scenario_of(passing("A"), passing("B", "ok"), passing("C"))
    )

    assert [o.name for o in report.outcomes] == ["A", "B", "C"]
    assert report.outcomes[1].details == "ok"
    assert report.summary.total == 3
    assert report.summary.passed == 3


async def test_step_failure_does_not_stop_following_steps(
    orchestrator: StepOrchestrator,
) -> None:
    """A raising step is recorded as failed and the next step still runs."""
    report = await orchestrator.run(
        scenario_of(
            passing("Step 1"),
            raising("Step 2", RuntimeError("element missing")),
            passing("Step 3"),
        )
    )

    assert [(o.name, o.passed) for o in report.outcomes] == [
        ("Step 1", True),
        ("Step 2", False),
        ("Step 3", True),
    ]
    assert report.outcomes[1].details == "element missing"
    assert "1. Step 2 - element missing" in report.report
    assert "2. Step 3" in report.report


async def test_failing_verdict_is_recorded(orchestrator: StepOrchestrator) -> None:
    """Records a failed outcome when the step verdict fails."""

    async def action(ctx: StepContext) -> Verdict:
        return Verdict(passed=False, details="Button not found")

    report = await orchestrator.run(
        scenario_of(Step(name="Alert", action=action, wait_after_ms=0))
    )

    assert report.outcomes[0].passed is False
    assert report.outcomes[0].details == "Button not found"


async def test_failure_before_first_step_records_critical_error(
    orchestrator: StepOrchestrator, client: FakeAutomationClient
) -> None:
    """Navigation failure skips every step but still releases the client."""
    client.navigate_error = RuntimeError("net::ERR_NAME_NOT_RESOLVED")

    report = await orchestrator.run(
        scenario_of(Navigate(url="https://example.test"), passing("A"), passing("B"))
    )

    assert [(o.name, o.passed) for o in report.outcomes] == [(CRITICAL_ERROR, False)]
    assert report.outcomes[0].details == "net::ERR_NAME_NOT_RESOLVED"
    assert client.quit_count == 1


async def test_failure_between_steps_skips_remaining_items(
    orchestrator: StepOrchestrator,
    client: FakeAutomationClient,
    tmp_path: Path,
) -> None:
    """A failing snapshot aborts the remaining items."""
    client.screenshot = AsyncMock(side_effect=OSError("capture failed"))  # type: ignore[method-assign]

    report = await orchestrator.run(
        scenario_of(passing("A"), Snapshot(filename="shot.png"), passing("B"))
    )

    assert [o.name for o in report.outcomes] == ["A", CRITICAL_ERROR]
    assert not (tmp_path / "shot.png").exists()
    assert client.quit_count == 1


async def test_launch_failure_records_critical_error(tmp_path: Path) -> None:
    """Records a critical error when the client cannot be acquired."""
    orchestrator = StepOrchestrator(
        launcher=AsyncMock(side_effect=ConnectionError("connection refused")),
        store=ArtifactStore(output_dir=tmp_path),
        scheduler=Scheduler(sleep=AsyncMock()),
    )

    report = await orchestrator.run(scenario_of(passing("A")))

    assert [o.name for o in report.outcomes] == [CRITICAL_ERROR]
    assert report.outcomes[0].details == "connection refused"
    assert (tmp_path / "report.txt").exists()


async def test_release_failure_is_recorded_and_report_written(
    orchestrator: StepOrchestrator,
    client: FakeAutomationClient,
    tmp_path: Path,
) -> None:
    """A failing release is recorded as teardown error without propagating."""
    client.quit_error = RuntimeError("session already closed")

    report = await orchestrator.run(scenario_of(passing("A")))

    assert [(o.name, o.passed) for o in report.outcomes] == [
        ("A", True),
        (TEARDOWN_ERROR, False),
    ]
    assert client.quit_count == 1
    assert report.report_path == tmp_path / "report.txt"
    assert "Teardown Error - session already closed" in report.report_path.read_text()


async def test_client_released_once_on_success(
    orchestrator: StepOrchestrator, client: FakeAutomationClient
) -> None:
    """Releases the client exactly once after all items ran."""
    await orchestrator.run(scenario_of(passing("A"), passing("B")))

    assert client.quit_count == 1
    assert client.calls[-1] == ("quit",)


async def test_evaluate_results_are_normalized(
    orchestrator: StepOrchestrator, client: FakeAutomationClient
) -> None:
    """Steps receive evaluate results without wrapper envelopes."""
    client.evaluate_results = [{"value": {"title": {"value": "Practice Page"}}}]
    seen: list[object] = []

    async def action(ctx: StepContext) -> Verdict:
        seen.append(await ctx.evaluate("return document.title;"))
        return Verdict(passed=True)

    await orchestrator.run(scenario_of(Step(name="Title", action=action)))

    assert seen == [{"title": "Practice Page"}]


async def test_waits_around_steps_and_checkpoints(
    orchestrator: StepOrchestrator, sleep_mock: AsyncMock, tmp_path: Path
) -> None:
    """Waits the configured durations in item order."""

    async def action(ctx: StepContext) -> Verdict:
        return Verdict(passed=True)

    await orchestrator.run(
        scenario_of(
            Navigate(url="https://example.test", wait_after_ms=3000),
            Step(name="A", action=action, wait_before_ms=500, wait_after_ms=1000),
            Snapshot(filename="shot.png", wait_after_ms=250),
        )
    )

    assert sleep_mock.await_args_list == [call(3.0), call(0.5), call(1.0), call(0.25)]
    assert (tmp_path / "shot.png").read_bytes().startswith(b"\x89PNG")


async def test_report_is_rendered_with_scenario_layout(
    orchestrator: StepOrchestrator, tmp_path: Path
) -> None:
    """Persists the rendered report listing scenario snapshots."""
    report = await orchestrator.run(
        scenario_of(passing("A"), Snapshot(filename="final.png", wait_after_ms=0))
    )

    assert report.report_path is not None
    text = report.report_path.read_text(encoding="utf-8")
    assert text == report.report
    assert text.startswith("TEST REPORT\n===========\n")
    assert "1. final.png" in text
    assert f"Start Time: {FIXED_TIME.isoformat()}" in text


class TestExecuteStep:
    """Tests for execute_step method."""

    async def test_returns_verdict(
        self, orchestrator: StepOrchestrator, client: FakeAutomationClient
    ) -> None:
        """Returns the verdict of a completed action."""
        context = StepContext(client=client, scheduler=orchestrator.scheduler)

        result = await orchestrator.execute_step(context, passing("A", "done"))

        assert result == Verdict(passed=True, details="done")

    async def test_returns_step_error(
        self, orchestrator: StepOrchestrator, client: FakeAutomationClient
    ) -> None:
        """Wraps a raised exception into a StepError."""
        context = StepContext(client=client, scheduler=orchestrator.scheduler)

        result = await orchestrator.execute_step(
            context, raising("A", KeyError("title"))
        )

        assert result == StepError(message="'title'")

    async def test_uses_exception_name_without_message(
        self, orchestrator: StepOrchestrator, client: FakeAutomationClient
    ) -> None:
        """Falls back to the exception type name for empty messages."""
        context = StepContext(client=client, scheduler=orchestrator.scheduler)

        result = await orchestrator.execute_step(context, raising("A", TimeoutError()))

        assert result == StepError(message="TimeoutError")


@pytest.mark.parametrize("passed", [True, False])
async def test_records_verdict_as_returned(
    orchestrator: StepOrchestrator, passed: bool
) -> None:
    """Records the verdict of an action unchanged."""
    verdict = VerdictFactory.build(passed=passed, details="checked")

    async def action(ctx: StepContext) -> Verdict:
        return verdict

    report = await orchestrator.run(
        scenario_of(Step(name="Check", action=action, wait_after_ms=0))
    )

    assert [(o.name, o.passed, o.details) for o in report.outcomes] == [
        ("Check", passed, "checked")
    ]


async def test_critical_error_recorded_before_teardown_error(
    orchestrator: StepOrchestrator, client: FakeAutomationClient
) -> None:
    """Lists the aborting failure ahead of the release failure it caused."""
    client.navigate_error = RuntimeError("net::ERR_CONNECTION_RESET")
    client.quit_error = RuntimeError("session already closed")

    report = await orchestrator.run(
        scenario_of(Navigate(url="https://example.test"), passing("A"))
    )

    assert [(o.name, o.details) for o in report.outcomes] == [
        (CRITICAL_ERROR, "net::ERR_CONNECTION_RESET"),
        (TEARDOWN_ERROR, "session already closed"),
    ]


async def test_deep_remote_value_fails_only_its_step(
    client: FakeAutomationClient, tmp_path: Path
) -> None:
    """Records a depth failure for a cyclic result with a large depth limit."""
    cyclic: list[object] = []
    cyclic.append(cyclic)
    client.evaluate_results = [cyclic]
    orchestrator = StepOrchestrator(
        launcher=AsyncMock(return_value=client),
        store=ArtifactStore(output_dir=tmp_path),
        scheduler=Scheduler(sleep=AsyncMock()),
        max_depth=5000,
    )

    async def read_rows(ctx: StepContext) -> Verdict:
        rows = await ctx.evaluate("return rows;")
        return Verdict(passed=bool(rows))

    report = await orchestrator.run(
        scenario_of(
            Step(name="Rows", action=read_rows, wait_after_ms=0), passing("B")
        )
    )

    assert [(o.name, o.passed) for o in report.outcomes] == [
        ("Rows", False),
        ("B", True),
    ]
    assert "deeper than" in report.outcomes[0].details


async def test_non_verdict_return_fails_only_its_step(
    orchestrator: StepOrchestrator,
) -> None:
    """Records a step returning no verdict as failed and keeps running."""

    async def forgot_return(ctx: StepContext) -> Verdict:
        return None  # type: ignore[return-value]

    report = await orchestrator.run(
        scenario_of(
            Step(name="Broken", action=forgot_return, wait_after_ms=0), passing("B")
        )
    )

    assert [(o.name, o.passed) for o in report.outcomes] == [
        ("Broken", False),
        ("B", True),
    ]
    assert report.outcomes[0].details == "Step returned NoneType, expected Verdict"
    assert CRITICAL_ERROR not in report.report


async def test_navigation_logged_once(
    orchestrator: StepOrchestrator, caplog: pytest.LogCaptureFixture
) -> None:
    """Logs one navigation line per navigate item."""
    with caplog.at_level(logging.INFO):
        await orchestrator.run(scenario_of(Navigate(url="https://example.test")))

    assert caplog.messages.count("Navigating to: https://example.test") == 1
