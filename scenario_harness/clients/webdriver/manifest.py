"""WebDriver client manifest."""

from scenario_harness.clients.manifest import ClientManifest
from scenario_harness.clients.webdriver.client import WebDriverClient
from scenario_harness.clients.webdriver.config import WebDriverConfig

webdriver_manifest = ClientManifest(
    config_cls=WebDriverConfig,
    launcher=WebDriverClient.launch,
)
