"""Scheduling and client access available to scenario steps."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from scenario_harness.clients.base import AutomationClient, ElementHandle
from scenario_harness.normalizer import MAX_DEPTH, normalize

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class Scheduler:
    """Fixed-duration waits between browser interactions."""

    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep

    async def wait(self, duration_ms: int, message: str = "") -> None:
        """Yield to the browser for duration_ms milliseconds."""
        if message:
            log.info("⏳ %s (%dms)", message, duration_ms)
        await self.sleep(duration_ms / 1000)


@dataclass(frozen=True, kw_only=True)
class StepContext:
    """Client facade handed to step actions.

    Every value coming back from ``evaluate`` is normalized before the step
    sees it.
    """

    client: AutomationClient
    scheduler: Scheduler
    max_depth: int = MAX_DEPTH

    async def evaluate(self, script: str) -> Any:
        """Run a script body in the page and return its plain result."""
        raw = await self.client.evaluate(script)
        return normalize(raw, self.max_depth)

    async def find(self, selector: str) -> ElementHandle:
        """Locate the first element matching a CSS selector."""
        return await self.client.find(selector)

    async def wait(self, duration_ms: int, message: str = "") -> None:
        """Yield to the browser for duration_ms milliseconds."""
        await self.scheduler.wait(duration_ms, message)
