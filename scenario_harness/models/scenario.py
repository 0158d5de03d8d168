"""Models for scenarios: ordered steps and checkpoints."""

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass

from scenario_harness.context import StepContext
from scenario_harness.models.report import ReportLayout
from scenario_harness.models.result import Verdict

type StepAction = Callable[[StepContext], Awaitable[Verdict]]


@dataclass(frozen=True, kw_only=True)
class Step:
    """Named interaction whose failure is isolated and recorded."""

    name: str
    action: StepAction
    wait_before_ms: int = 0
    wait_after_ms: int = 1000


@dataclass(frozen=True, kw_only=True)
class Navigate:
    """Load a page; failures abort the scenario."""

    url: str
    wait_after_ms: int = 3000


@dataclass(frozen=True, kw_only=True)
class Snapshot:
    """Capture and store a screenshot; failures abort the scenario."""

    filename: str
    wait_after_ms: int = 1000


type Checkpoint = Navigate | Snapshot
type ScenarioItem = Step | Checkpoint


@dataclass(frozen=True, kw_only=True)
class Scenario:
    """Ordered interactions against a single browser session."""

    name: str
    title: str
    report_filename: str
    items: Sequence[ScenarioItem]

    @property
    def steps(self) -> Sequence[Step]:
        """Recorded steps in execution order."""
        return [item for item in self.items if isinstance(item, Step)]

    @property
    def layout(self) -> ReportLayout:
        """Report layout listing every snapshot of the scenario."""
        return ReportLayout(
            title=self.title,
            artifacts=tuple(
                item.filename for item in self.items if isinstance(item, Snapshot)
            ),
        )
