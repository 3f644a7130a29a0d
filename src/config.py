"""Configuration from an optional YAML file and environment variables."""

import logging
import os
from dataclasses import dataclass

import yaml

from src.bucket import RotateMode
from src.writer import LogFlag, parse_flags

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Config:
    log_path: str = "./logs/app.log"
    prefix: str = ""
    flags: str = "date|time"
    rotate: str = "day"
    entry_interval_seconds: float = 0.05

    @property
    def log_flags(self) -> LogFlag:
        return parse_flags(self.flags)

    @property
    def rotate_mode(self) -> RotateMode:
        return RotateMode.from_string(self.rotate)


def load_yaml_config(path: str | None) -> dict:
    """Load the ``sink`` section of a YAML file. Returns empty dict if no path."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    logger.info("Loaded YAML config from %s", path)
    return data.get("sink", data)


def load_config(yaml_data: dict | None = None) -> Config:
    """Build Config: defaults, overridden by YAML data, overridden by env vars."""
    yaml_data = yaml_data or {}

    def pick(env_key: str, yaml_key: str, default):
        if env_key in os.environ:
            return os.environ[env_key]
        return yaml_data.get(yaml_key, default)

    cfg = Config(
        log_path=str(pick("LOG_PATH", "log_path", Config.log_path)),
        prefix=str(pick("LOG_PREFIX", "prefix", Config.prefix)),
        flags=str(pick("LOG_FLAGS", "flags", Config.flags)),
        rotate=str(pick("ROTATE", "rotate", Config.rotate)),
        entry_interval_seconds=float(
            pick("ENTRY_INTERVAL_SECONDS", "entry_interval_seconds",
                 Config.entry_interval_seconds)
        ),
    )
    # Fail early on a bad flags string rather than at sink construction
    parse_flags(cfg.flags)
    if cfg.rotate_mode is RotateMode.NONE and cfg.rotate not in ("", "none"):
        logger.warning("Unknown rotate value %r, rotation disabled", cfg.rotate)
    return cfg
