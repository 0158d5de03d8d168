"""Loading of automation clients and scenarios from entry points."""

from importlib.metadata import entry_points
from typing import Any

from scenario_harness.clients.manifest import ClientManifest
from scenario_harness.models.scenario import Scenario

CLIENT_ENTRY_POINT_GROUP = "scenario_harness.clients"
SCENARIO_ENTRY_POINT_GROUP = "scenario_harness.scenarios"


class PluginNotFoundError(Exception):
    """Raised when no plugin is registered under a key."""


def load_entry_point(group: str, key: str) -> Any:
    """Load the object registered under key in an entry point group.

    Raises:
        PluginNotFoundError: If no entry point with the given key is found

    """
    entries = entry_points(group=group)

    for entry in entries:
        if entry.name == key:
            return entry.load()

    available = [e.name for e in entries]
    raise PluginNotFoundError(
        f"Plugin '{key}' not found in {group}. Available plugins: {available}"
    )


def load_client_manifest(key: str) -> ClientManifest[Any]:
    """Load an automation client manifest by key (e.g., "webdriver")."""
    manifest: ClientManifest[Any] = load_entry_point(CLIENT_ENTRY_POINT_GROUP, key)
    return manifest


def load_scenario(key: str) -> Scenario:
    """Load a scenario by key (e.g., "automation-practice")."""
    scenario: Scenario = load_entry_point(SCENARIO_ENTRY_POINT_GROUP, key)
    return scenario
