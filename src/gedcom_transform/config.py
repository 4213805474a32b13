import os
from pathlib import Path

import yaml

CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "gedcom_transform.yml"
CONFIG_ENV_VAR = "GEDCOM_TRANSFORM_CONFIG"

DEFAULT_GENERATOR = {
    "version": "5.5.1",
    "source_name": "gedcom-transform",
    "source_version": "1.0.0",
    "max_line_length": 255,
}


class GTConfig:
    def __init__(self, data):
        self.paths = data.get("paths", {})
        self.logging = data.get("logging", {})
        self.parser = data.get("parser", {})
        self.generator = {**DEFAULT_GENERATOR, **(data.get("generator") or {})}
        self.debug = data.get("debug", False)


def config_path() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR)
    return Path(override) if override else CONFIG_PATH


def load_config() -> 'GTConfig':
    path = config_path()
    if not path.exists():
        # Installed without the repo checkout: run on built-in defaults.
        return GTConfig({})

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return GTConfig(data)


_config_cache = None


def get_config() -> 'GTConfig':
    global _config_cache
    if _config_cache is None:
        _config_cache = load_config()
    return _config_cache
