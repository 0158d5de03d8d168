"""Abstract base classes for browser automation clients."""

from abc import ABC, abstractmethod
from typing import Any, Self

from pydantic import BaseModel


class ElementHandle(ABC):
    """Handle to an element located in the current page."""

    @abstractmethod
    async def click(self) -> None:
        """Click the element."""

    @abstractmethod
    async def type(self, text: str) -> None:
        """Send text to the element as keystrokes."""

    @abstractmethod
    async def text(self) -> str:
        """Return the rendered text of the element."""


class AutomationClient(ABC):
    """Abstract base for browser automation clients.

    One instance owns one browser session, from ``launch`` until ``quit``.
    Results of ``evaluate`` are returned as the remote end produced them;
    callers normalize them before use.
    """

    @classmethod
    @abstractmethod
    async def launch(cls, config: BaseModel) -> Self:
        """Start a browser session.

        Args:
            config: Client specific configuration model

        Returns:
            Client bound to the new session

        """

    @abstractmethod
    async def navigate(self, url: str) -> None:
        """Load url in the current browsing context."""

    @abstractmethod
    async def find(self, selector: str) -> ElementHandle:
        """Locate the first element matching a CSS selector."""

    @abstractmethod
    async def evaluate(self, script: str) -> Any:
        """Run a script body in the page and return its raw result."""

    @abstractmethod
    async def screenshot(self) -> bytes:
        """Capture the viewport as PNG bytes."""

    @abstractmethod
    async def quit(self) -> None:
        """End the browser session and release its resources."""
