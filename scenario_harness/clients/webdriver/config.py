"""Configuration for the WebDriver automation client."""

from collections.abc import Sequence

from pydantic import BaseModel


class WebDriverConfig(BaseModel):
    """Configuration for a W3C WebDriver server."""

    server_url: str = "http://localhost:9515"
    browser_name: str = "chrome"
    headless: bool = False
    arguments: Sequence[str] = ()
