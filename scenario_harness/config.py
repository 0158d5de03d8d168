"""Harness configuration."""

from pathlib import Path
from typing import Any

from pydantic import Field

from scenario_harness.models.base import Model
from scenario_harness.normalizer import MAX_DEPTH

CONFIG_FILENAME = "harness.json"


class HarnessConfig(Model):
    """Configuration of a harness run."""

    scenario: str = "automation-practice"
    client: str = "webdriver"
    client_config: dict[str, Any] = Field(default_factory=dict)
    output_dir: Path = Path(".")
    max_depth: int = Field(default=MAX_DEPTH, gt=0)


def load_config(path: Path = Path(CONFIG_FILENAME)) -> HarnessConfig:
    """Read the configuration file, falling back to defaults when absent."""
    if not path.is_file():
        return HarnessConfig()
    return HarnessConfig.model_validate_json(path.read_text(encoding="utf-8"))
