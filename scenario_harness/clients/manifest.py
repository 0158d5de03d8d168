"""Automation client manifest definition for the plugin system."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from pydantic import BaseModel

from scenario_harness.clients.base import AutomationClient


@dataclass(frozen=True, kw_only=True)
class ClientManifest[ConfigT: BaseModel]:
    """Manifest describing an automation client plugin.

    The manifest references the configuration class and the launch function
    so clients can be loaded lazily from their key.
    """

    config_cls: type[ConfigT]
    launcher: Callable[[ConfigT], Awaitable[AutomationClient]]
