from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from wingdisc_browser.config.model import GlobalConfig
from wingdisc_browser.core.dataset import WingDataset
from wingdisc_browser.core.view_registry import ViewRegistry


@dataclass
class AppConfig:
    """
    Shared state for the Dash app: config root, loaded tables and the view
    registry. Passed into layout + callback registration functions instead of
    module-level globals.
    """
    config_root: Path
    global_config: GlobalConfig
    dataset: WingDataset
    registry: Optional[ViewRegistry] = None

    def validate(self) -> None:
        """Ensure all required services are attached before the app starts."""
        if self.registry is None:
            raise RuntimeError("AppConfig.registry must be initialized.")
