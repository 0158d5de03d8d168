"""Models for step verdicts and recorded test outcomes."""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class TestOutcome:
    """Recorded verdict of a single named test.

    Outcomes are immutable; their position in the recorder gives the ordering.
    """

    __test__ = False

    name: str
    passed: bool
    details: str = ""


@dataclass(frozen=True, kw_only=True)
class Verdict:
    """Verdict computed by a step that ran to completion."""

    passed: bool
    details: str = ""


@dataclass(frozen=True, kw_only=True)
class StepError:
    """Failure raised by a step action, captured at the step boundary."""

    message: str


type StepResult = Verdict | StepError


@dataclass(frozen=True, kw_only=True)
class RunSummary:
    """Aggregated counters of a test run."""

    total: int
    passed: int
    failed: int
    pass_rate: float
