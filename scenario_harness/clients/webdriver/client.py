"""W3C WebDriver automation client implementation."""

import base64
import json
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

import aiohttp
from pydantic import ValidationError

from scenario_harness.clients.base import AutomationClient, ElementHandle
from scenario_harness.clients.webdriver.config import WebDriverConfig
from scenario_harness.clients.webdriver.models import (
    ElementResponse,
    ErrorResponse,
    NewSessionResponse,
    Response,
)

log = logging.getLogger(__name__)

VENDOR_OPTIONS: Mapping[str, str] = {
    "chrome": "goog:chromeOptions",
    "MicrosoftEdge": "ms:edgeOptions",
    "firefox": "moz:firefoxOptions",
}

HEADLESS_ARGUMENT: Mapping[str, str] = {
    "chrome": "--headless=new",
    "MicrosoftEdge": "--headless=new",
    "firefox": "-headless",
}


class WebDriverError(Exception):
    """Raised when the WebDriver server reports a failed command."""

    def __init__(self, error: str, message: str, status: int) -> None:
        super().__init__(f"{error}: {message}" if message else error)
        self.error = error
        self.message = message
        self.status = status

    @classmethod
    def from_response(cls, status: int, text: str) -> "WebDriverError":
        """Build the error from a failed response body."""
        try:
            details = ErrorResponse.model_validate_json(text).value
        except ValidationError:
            return cls("unknown error", f"HTTP {status} {text}".strip(), status)
        return cls(details.error, details.message, status)


def build_capabilities(config: WebDriverConfig) -> dict[str, Any]:
    """Build the new session payload for the configured browser."""
    arguments: list[str] = list(config.arguments)
    if config.headless and (headless := HEADLESS_ARGUMENT.get(config.browser_name)):
        arguments.append(headless)

    always_match: dict[str, Any] = {"browserName": config.browser_name}
    if arguments and (vendor_key := VENDOR_OPTIONS.get(config.browser_name)):
        always_match[vendor_key] = {"args": arguments}

    return {"capabilities": {"alwaysMatch": always_match}}


async def send_command(
    session: aiohttp.ClientSession,
    method: str,
    url: str,
    payload: Mapping[str, Any] | None = None,
) -> Any:
    """Send a WebDriver command and return the decoded response body."""
    async with session.request(method, url, json=payload) as response:
        text = await response.text()
        status = response.status

    if status != 200:
        raise WebDriverError.from_response(status, text)

    return json.loads(text) if text else {}


@dataclass(frozen=True, kw_only=True)
class WebDriverElement(ElementHandle):
    """Element handle bound to a WebDriver session."""

    client: "WebDriverClient" = field(repr=False)
    element_id: str

    @property
    def url(self) -> str:
        """Base URL of the element commands."""
        return f"/session/{self.client.session_id}/element/{self.element_id}"

    async def click(self) -> None:
        """Click the element."""
        await self.client.command("POST", f"{self.url}/click", {})

    async def type(self, text: str) -> None:
        """Send text to the element as keystrokes."""
        await self.client.command("POST", f"{self.url}/value", {"text": text})

    async def text(self) -> str:
        """Return the rendered text of the element."""
        data = await self.client.command("GET", f"{self.url}/text")
        return str(Response.model_validate(data).value or "")


@dataclass(frozen=True, kw_only=True)
class WebDriverClient(AutomationClient):
    """Automation client talking to a W3C WebDriver server."""

    config: WebDriverConfig
    session: aiohttp.ClientSession = field(repr=False)
    session_id: str

    @classmethod
    async def launch(cls, config: WebDriverConfig) -> "WebDriverClient":
        """Open the HTTP session and start a browser session."""
        session = aiohttp.ClientSession(base_url=config.server_url)
        try:
            data = await send_command(
                session, "POST", "/session", build_capabilities(config)
            )
            new_session = NewSessionResponse.model_validate(data).value
        except BaseException:
            await session.close()
            raise

        log.info(
            "Started %s session %s on %s",
            config.browser_name,
            new_session.session_id,
            config.server_url,
        )
        return cls(config=config, session=session, session_id=new_session.session_id)

    @property
    def url(self) -> str:
        """Base URL of the session commands."""
        return f"/session/{self.session_id}"

    async def command(
        self, method: str, url: str, payload: Mapping[str, Any] | None = None
    ) -> Any:
        """Send a command within this session."""
        return await send_command(self.session, method, url, payload)

    async def navigate(self, url: str) -> None:
        """Load url in the current browsing context."""
        await self.command("POST", f"{self.url}/url", {"url": url})

    async def find(self, selector: str) -> WebDriverElement:
        """Locate the first element matching a CSS selector."""
        data = await self.command(
            "POST",
            f"{self.url}/element",
            {"using": "css selector", "value": selector},
        )
        reference = ElementResponse.model_validate(data).value
        return WebDriverElement(client=self, element_id=reference.element_id)

    async def evaluate(self, script: str, args: Sequence[Any] = ()) -> Any:
        """Run a script body in the page.

        The response envelope is returned untouched; the payload sits under
        its ``value`` key.
        """
        return await self.command(
            "POST",
            f"{self.url}/execute/sync",
            {"script": script, "args": list(args)},
        )

    async def screenshot(self) -> bytes:
        """Capture the viewport as PNG bytes."""
        data = await self.command("GET", f"{self.url}/screenshot")
        return base64.b64decode(Response.model_validate(data).value)

    async def quit(self) -> None:
        """Delete the browser session and close the HTTP session."""
        try:
            await self.command("DELETE", self.url)
        finally:
            await self.session.close()
        log.info("Closed session %s", self.session_id)
