"""Scenarios shipped with the harness."""

from scenario_harness.scenarios.automation_practice import automation_practice
from scenario_harness.scenarios.window_tab import window_tab

__all__ = ["automation_practice", "window_tab"]
