"""Step orchestrator for running a scenario against one browser session."""

import logging
from collections.abc import AsyncGenerator, Awaitable, Callable, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime

from scenario_harness.artifacts import ArtifactStore
from scenario_harness.clients.base import AutomationClient
from scenario_harness.context import Scheduler, StepContext
from scenario_harness.models.report import RunReport
from scenario_harness.models.result import StepError, StepResult, Verdict
from scenario_harness.models.scenario import (
    Navigate,
    Scenario,
    ScenarioItem,
    Snapshot,
    Step,
)
from scenario_harness.normalizer import MAX_DEPTH
from scenario_harness.recorder import TestRecorder, utc_now

log = logging.getLogger(__name__)

CRITICAL_ERROR = "Critical Error"
TEARDOWN_ERROR = "Teardown Error"


def describe(exc: BaseException) -> str:
    """Return a readable message for an exception."""
    return str(exc) or type(exc).__name__


@dataclass(frozen=True, kw_only=True)
class StepOrchestrator:
    """Runs scenario items in order and records one outcome per step.

    A step failure is recorded and the run moves on. A failure anywhere else
    aborts the remaining items and is recorded once as ``Critical Error``.
    The client is released and the report persisted on every exit path; a
    failing release is recorded as ``Teardown Error`` and never propagates.
    """

    launcher: Callable[[], Awaitable[AutomationClient]]
    store: ArtifactStore
    scheduler: Scheduler = field(default_factory=Scheduler)
    clock: Callable[[], datetime] = utc_now
    max_depth: int = MAX_DEPTH

    async def run(self, scenario: Scenario) -> RunReport:
        """Run a scenario and return its finalized report.

        Args:
            scenario: Scenario to execute

        Returns:
            Summary, outcomes and rendered report of the run

        """
        recorder = TestRecorder(clock=self.clock)
        recorder.start()
        log.info(
            "Running scenario %s (%d step(s))", scenario.name, len(scenario.steps)
        )

        try:
            async with self.acquire_client(recorder) as client:
                try:
                    await self.run_items(client, scenario.items, recorder)
                except Exception as exc:
                    self.record_critical(recorder, exc)
        except Exception as exc:
            self.record_critical(recorder, exc)
        finally:
            recorder.finish()
            report = recorder.render(scenario.layout)
            report_path = self.store.save_report(scenario.report_filename, report)

        return RunReport(
            summary=recorder.summary(),
            outcomes=recorder.outcomes,
            report=report,
            report_path=report_path,
        )

    @asynccontextmanager
    async def acquire_client(
        self, recorder: TestRecorder
    ) -> AsyncGenerator[AutomationClient, None]:
        """Launch the client and guarantee a single release."""
        client = await self.launcher()
        try:
            yield client
        finally:
            log.info("🔚 Closing browser...")
            try:
                await client.quit()
            except Exception as exc:
                log.error("Failed to release automation client: %s", exc, exc_info=exc)
                recorder.record(TEARDOWN_ERROR, False, describe(exc))

    async def run_items(
        self,
        client: AutomationClient,
        items: Sequence[ScenarioItem],
        recorder: TestRecorder,
    ) -> None:
        """Run items in order; only step failures are contained."""
        context = StepContext(
            client=client, scheduler=self.scheduler, max_depth=self.max_depth
        )

        for item in items:
            if isinstance(item, Step):
                result = await self.execute_step(context, item)
                self.record_result(recorder, item.name, result)
                await self.scheduler.wait(item.wait_after_ms)
            elif isinstance(item, Navigate):
                log.info("Navigating to: %s", item.url)
                await client.navigate(item.url)
                await self.scheduler.wait(
                    item.wait_after_ms, "Waiting for page to load"
                )
            elif isinstance(item, Snapshot):
                data = await client.screenshot()
                self.store.save_snapshot(item.filename, data)
                await self.scheduler.wait(item.wait_after_ms)

    async def execute_step(self, context: StepContext, step: Step) -> StepResult:
        """Run a step action, converting any failure into a StepError."""
        log.info("📝 %s", step.name)
        try:
            if step.wait_before_ms:
                await context.wait(step.wait_before_ms)
            result = await step.action(context)
        except Exception as exc:
            log.warning("Step %s raised: %s", step.name, exc, exc_info=exc)
            return StepError(message=describe(exc))

        if not isinstance(result, Verdict):
            log.warning("Step %s returned %r instead of a Verdict", step.name, result)
            return StepError(
                message=f"Step returned {type(result).__name__}, expected Verdict"
            )
        return result

    @staticmethod
    def record_result(recorder: TestRecorder, name: str, result: StepResult) -> None:
        """Record the outcome of a step result."""
        match result:
            case Verdict(passed=passed, details=details):
                recorder.record(name, passed, details)
            case StepError(message=message):
                recorder.record(name, False, message)

    @staticmethod
    def record_critical(recorder: TestRecorder, exc: Exception) -> None:
        """Record a failure that aborted the scenario."""
        log.error("❌ CRITICAL ERROR: %s", exc, exc_info=exc)
        recorder.record(CRITICAL_ERROR, False, describe(exc))
