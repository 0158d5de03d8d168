"""Models describing the rendered test report."""

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from scenario_harness.models.result import RunSummary, TestOutcome


@dataclass(frozen=True, kw_only=True)
class ReportLayout:
    """Fixed text of a scenario report."""

    title: str
    artifacts: Sequence[str] = ()
    banner: str = "END OF REPORT"


@dataclass(frozen=True, kw_only=True)
class RunReport:
    """Everything a finished run hands back to its caller."""

    summary: RunSummary
    outcomes: Sequence[TestOutcome]
    report: str
    report_path: Path | None = None
