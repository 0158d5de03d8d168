"""W3C WebDriver client module."""

from scenario_harness.clients.webdriver.client import WebDriverClient, WebDriverError
from scenario_harness.clients.webdriver.config import WebDriverConfig
from scenario_harness.clients.webdriver.manifest import webdriver_manifest

__all__ = ["WebDriverClient", "WebDriverConfig", "WebDriverError", "webdriver_manifest"]
