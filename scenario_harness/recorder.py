"""Recording of test outcomes and rendering of the run report."""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone

from scenario_harness.models.report import ReportLayout
from scenario_harness.models.result import RunSummary, TestOutcome

log = logging.getLogger(__name__)

PASSED_SYMBOL = "✅"
FAILED_SYMBOL = "❌"


def utc_now() -> datetime:
    """Return the current time in UTC."""
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime | None) -> str:
    """Format a run timestamp for the report."""
    return value.isoformat() if value is not None else "n/a"


@dataclass(kw_only=True)
class TestRecorder:
    """Accumulates pass/fail outcomes of a single test run.

    Created per run and mutated only through ``record``. The totals always
    satisfy ``total == passed + failed``.
    """

    __test__ = False

    clock: Callable[[], datetime] = utc_now
    started_at: datetime | None = field(default=None, init=False)
    finished_at: datetime | None = field(default=None, init=False)
    passed_count: int = field(default=0, init=False)
    failed_count: int = field(default=0, init=False)
    _outcomes: list[TestOutcome] = field(default_factory=list, init=False)

    @property
    def outcomes(self) -> Sequence[TestOutcome]:
        """Outcomes in recording order."""
        return tuple(self._outcomes)

    @property
    def total(self) -> int:
        """Number of recorded outcomes."""
        return self.passed_count + self.failed_count

    @property
    def finished(self) -> bool:
        """Whether the run was finalized."""
        return self.finished_at is not None

    def start(self) -> None:
        """Mark the start of the run."""
        self.started_at = self.clock()

    def finish(self) -> None:
        """Mark the end of the run.

        Raises:
            RuntimeError: If the run was already finished

        """
        if self.finished_at is not None:
            raise RuntimeError("Test run already finished")
        self.finished_at = self.clock()

    def record(self, name: str, passed: bool, details: str = "") -> TestOutcome:
        """Record the outcome of a test and log its status line."""
        outcome = TestOutcome(name=name, passed=passed, details=details)
        self._outcomes.append(outcome)

        suffix = f" - {details}" if details else ""
        if passed:
            self.passed_count += 1
            log.info("%s PASSED: %s%s", PASSED_SYMBOL, name, suffix)
        else:
            self.failed_count += 1
            log.info("%s FAILED: %s%s", FAILED_SYMBOL, name, suffix)

        return outcome

    def summary(self) -> RunSummary:
        """Return counters and pass rate; an empty run has a 0.0 pass rate."""
        total = self.total
        pass_rate = round(self.passed_count / total * 100, 2) if total else 0.0
        return RunSummary(
            total=total,
            passed=self.passed_count,
            failed=self.failed_count,
            pass_rate=pass_rate,
        )

    def render(self, layout: ReportLayout) -> str:
        """Render the plain-text report for the recorded run."""
        summary = self.summary()
        passed = [o for o in self._outcomes if o.passed]
        failed = [o for o in self._outcomes if not o.passed]

        lines = [
            layout.title,
            "=" * len(layout.title),
            f"Generated: {format_timestamp(self.finished_at)}",
            "",
            "SUMMARY:",
            "--------",
            f"Total Tests Run: {summary.total}",
            f"Passed: {summary.passed}",
            f"Failed: {summary.failed}",
            f"Success Rate: {summary.pass_rate:.2f}%",
            "",
            "PASSED TESTS:",
        ]
        lines.extend(_numbered(passed) or ["None"])

        if failed:
            lines.extend(["", "FAILED TESTS:"])
            lines.extend(_numbered(failed))

        lines.extend(
            [
                "",
                "TIMING:",
                "-------",
                f"Start Time: {format_timestamp(self.started_at)}",
                f"End Time: {format_timestamp(self.finished_at)}",
                "",
                "SCREENSHOTS:",
                "------------",
            ]
        )
        lines.extend(f"{idx}. {name}" for idx, name in enumerate(layout.artifacts, 1))
        lines.extend(["", layout.banner, ""])

        return "\n".join(lines)


def _numbered(outcomes: Sequence[TestOutcome]) -> list[str]:
    return [
        f"{idx}. {outcome.name}" + (f" - {outcome.details}" if outcome.details else "")
        for idx, outcome in enumerate(outcomes, 1)
    ]
