# src/link_checker/utils/config_loader.py
import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from link_checker.model import LinkCheckSettings

logger = logging.getLogger(__name__)

# Option defaults that take part in merging. timeout, userAgent and
# parallelism fall back to the LinkCheckSettings field defaults.
DEFAULT_OPTIONS: Dict[str, Any] = {
    "html": {
        "pattern": "**/*.html",
        "tags": {
            "a": "href",
            "img": ["src", "data-src"],
            "link": "href",
            "script": "src",
        },
    },
    "ignore": [],
}


def deep_merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Returns a new dict with `overrides` merged over `base`.
    Dicts merge recursively, lists concatenate, everything else is replaced.
    """
    merged = copy.deepcopy(base)
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        elif isinstance(current, list) and isinstance(value, list):
            merged[key] = current + copy.deepcopy(value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def load_config_file(config_path: Union[str, Path]) -> Dict[str, Any]:
    """Loads options from a JSON settings file. A missing file yields an empty config."""
    config_path = Path(config_path)
    if not config_path.exists():
        logger.warning("Configuration file not found at %s. Using empty config.", config_path)
        return {}

    with open(config_path, "r", encoding="utf-8") as f:
        config = json.load(f)
    if not isinstance(config, dict):
        raise ValueError(f"{config_path}: expected a JSON object at the top level")
    logger.info("Configuration loaded from %s.", config_path)
    return config


def get_nested(config: Dict[str, Any], key_path: str, default: Optional[Any] = None) -> Any:
    """
    Safely retrieves a nested value, e.g. 'html.pattern'.
    """
    value = config
    for key in key_path.split('.'):
        if isinstance(value, dict):
            value = value.get(key)
        else:
            return default
    return value if value is not None else default


def build_settings(options: Optional[Dict[str, Any]] = None) -> LinkCheckSettings:
    """Merges `options` over the defaults and validates the result."""
    merged = deep_merge(DEFAULT_OPTIONS, options or {})
    settings = LinkCheckSettings.model_validate(merged)
    logger.debug(
        "Settings: pattern=%s, tags=%s, %d ignore patterns, timeout=%ss, parallelism=%d",
        settings.html.pattern, settings.html.tags, len(settings.ignore), settings.timeout, settings.parallelism
    )
    return settings
