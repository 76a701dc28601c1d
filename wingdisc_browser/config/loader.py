from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from wingdisc_browser.config.model import (
    DEFAULT_SUBTITLE,
    DEFAULT_UI_TITLE,
    GlobalConfig,
    SourceFiles,
)
from wingdisc_browser.core.exceptions import ConfigError

logger = logging.getLogger(__name__)


def load_global_config(root: Path | str) -> GlobalConfig:
    """
    Load configuration from a config directory.

    Expected structure:

        root/
            global.json

    Keys in global.json:

    - ui_title: title for the navbar, defaults to 'Wing Disc Browser'
    - subtitle: small text under the title
    - data_root: directory holding the CSV sources. Absolute paths are used as-is,
                 relative paths resolve against the config root. The env var
                 WINGDISC_BROWSER_DATA_ROOT overrides it.
    - sources: {"morphometrics": ..., "profiles": ..., "landmarks": ...} file names

    :param root: Directory containing 'global.json'.
    :return: A GlobalConfig instance.
    :raises ConfigError: if global.json does not exist or is not valid JSON.
    """
    root = Path(root)
    logger.info(
        "Loading global config",
        extra={"config_root": str(root)},
    )

    global_path = root / "global.json"
    if not global_path.is_file():
        raise ConfigError(f"File not found at {global_path}")

    try:
        with global_path.open() as f:
            raw_global = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {global_path}: {e}") from e

    if not isinstance(raw_global, dict):
        raise ConfigError(f"{global_path} must contain a JSON object")

    env_root = os.environ.get("WINGDISC_BROWSER_DATA_ROOT")
    data_root_raw = raw_global.get("data_root")
    if env_root:
        data_root = Path(env_root)
    elif data_root_raw is None:
        data_root = root
    else:
        data_root_path = Path(data_root_raw)
        if data_root_path.is_absolute():
            data_root = data_root_path
        else:
            data_root = (root / data_root_path).resolve()

    return GlobalConfig(
        ui_title=raw_global.get("ui_title", DEFAULT_UI_TITLE),
        subtitle=raw_global.get("subtitle", DEFAULT_SUBTITLE),
        data_root=data_root,
        sources=SourceFiles.from_raw(raw_global.get("sources")),
    )
