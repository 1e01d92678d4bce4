"""Constants and configuration defaults used in the project."""

import logging
import os
from enum import Enum
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    INVALID_INPUT = 2
    UNSATISFIED = 3


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_LEVEL = None
    LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    PRERELEASE_ORDERING = "semver"
    PRERELEASE_ORDERINGS = ["semver", "legacy"]
    ENV_CONFIG = "MODVER_CONFIG"
    CONFIG_LOCATIONS = [
        "modver.yml",
        "modver.yaml",
        os.path.join("~", ".config", "modver", "modver.yml"),
    ]


def _load_yaml_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load YAML configuration.

    Lookup order: ``path``, the MODVER_CONFIG environment variable, then
    Constants.CONFIG_LOCATIONS. Returns an empty dict when nothing is found.

    Raises:
        yaml.YAMLError: If a config file exists but cannot be parsed.
    """
    import yaml  # pylint: disable=import-outside-toplevel

    candidates = []
    if path:
        candidates.append(path)
    else:
        env_path = os.environ.get(Constants.ENV_CONFIG)
        if env_path:
            candidates.append(env_path)
        candidates.extend(Constants.CONFIG_LOCATIONS)

    for candidate in candidates:
        full_path = os.path.expanduser(candidate)
        if not os.path.isfile(full_path):
            if path:
                logger.warning("Config file not found: %s", full_path)
            continue
        with open(full_path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        if not isinstance(data, dict):
            logger.warning("Ignoring config %s: top level is not a mapping", full_path)
            return {}
        logger.debug("Loaded config from %s", full_path)
        return data
    return {}


def apply_config(cfg: Dict[str, Any]) -> None:
    """Apply recognised config keys onto Constants.

    Recognised keys: ``versioning.prerelease_ordering`` and ``logging.level``.
    Unknown or invalid values are logged and ignored.
    """
    versioning_cfg = cfg.get("versioning") or {}
    if isinstance(versioning_cfg, dict) and "prerelease_ordering" in versioning_cfg:
        ordering = str(versioning_cfg["prerelease_ordering"]).strip().lower()
        if ordering in Constants.PRERELEASE_ORDERINGS:
            Constants.PRERELEASE_ORDERING = ordering
        else:
            logger.warning("Unknown prerelease ordering in config: %r", ordering)

    logging_cfg = cfg.get("logging") or {}
    if isinstance(logging_cfg, dict) and "level" in logging_cfg:
        level = str(logging_cfg["level"]).strip().upper()
        if level in Constants.LOG_LEVELS:
            Constants.LOG_LEVEL = level
        else:
            logger.warning("Unknown log level in config: %r", level)
