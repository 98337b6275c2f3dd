"""
Configuration for the odds scraper.

Values are resolved in order: dataclass defaults, an optional YAML file,
environment variables (a ``.env`` file is honoured), then explicit overrides
such as command-line flags.
"""

import logging
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

import soupsieve
import yaml
from dotenv import load_dotenv

from .exceptions import ConfigurationError
from .extractor import MarketSelectors
from .fetcher import DEFAULT_WAIT_SELECTOR

logger = logging.getLogger(__name__)

NFL_URL = "https://sportsbook.draftkings.com/leagues/football/nfl"
SCRAPE_INTERVAL = 30.0  # seconds between cycle starts
PAGE_TIMEOUT = 120.0  # seconds allowed for one page fetch

# Environment variable -> config field
ENV_VARS = {
    "DK_SCRAPER_URL": "url",
    "DK_SCRAPER_INTERVAL": "interval",
    "DK_SCRAPER_TIMEOUT": "timeout",
    "DK_SCRAPER_WAIT_SELECTOR": "wait_selector",
    "DK_SCRAPER_HEADLESS": "headless",
    "LOG_LEVEL": "log_level",
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class ScraperConfig:
    """Scraper configuration"""

    url: str = NFL_URL
    interval: float = SCRAPE_INTERVAL
    timeout: float = PAGE_TIMEOUT
    wait_selector: str = DEFAULT_WAIT_SELECTOR
    headless: bool = True
    log_level: str = "INFO"
    selectors: MarketSelectors = field(default_factory=MarketSelectors)

    def __post_init__(self) -> None:
        if not self.url:
            raise ConfigurationError("url must not be empty")
        for name in ("interval", "timeout"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                raise ConfigurationError(f"{name} must be a positive number, got {value!r}")


def _parse_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {value!r}")


def _parse_number(name: str, value: Any) -> float:
    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from e


def _validate_selector(key: str, selector: Any) -> None:
    if not isinstance(selector, str) or not selector.strip():
        raise ConfigurationError(f"Selector {key!r} must be a non-empty string, got {selector!r}")
    try:
        soupsieve.compile(selector)
    except soupsieve.SelectorSyntaxError as e:
        raise ConfigurationError(f"Invalid CSS selector for {key!r}: {selector!r} ({e})") from e


def _coerce(name: str, value: Any) -> Any:
    if name in ("interval", "timeout"):
        return _parse_number(name, value)
    if name == "headless":
        return _parse_bool(name, value)
    if name == "selectors":
        if not isinstance(value, dict):
            raise ConfigurationError(f"selectors must be a mapping, got {value!r}")
        known = {f.name for f in fields(MarketSelectors)}
        unknown = set(value) - known
        if unknown:
            raise ConfigurationError(f"Unknown selector keys: {sorted(unknown)}")
        for key, selector in value.items():
            _validate_selector(key, selector)
        return MarketSelectors(**value)
    return str(value)


def load_yaml_config(path: Path) -> dict[str, Any]:
    """Load config values from a YAML file.

    Unknown keys are ignored with a warning.

    Raises:
        ConfigurationError: If the file is missing or malformed.
    """
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")

    known = {f.name for f in fields(ScraperConfig)}
    values = {}
    for key, value in data.items():
        if key not in known:
            logger.warning(f"Ignoring unknown config key {key!r} in {path}")
            continue
        values[key] = _coerce(key, value)
    return values


def load_env_config() -> dict[str, Any]:
    """Read config values from environment variables (and ``.env``)."""
    env_path = Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    values = {}
    for env_var, name in ENV_VARS.items():
        value = os.getenv(env_var)
        if value:
            values[name] = _coerce(name, value)
    return values


def load_config(path: str | Path | None = None, **overrides: Any) -> ScraperConfig:
    """Build the effective configuration.

    Args:
        path: Optional YAML config file.
        **overrides: Highest-precedence values; ``None`` values are ignored.

    Returns:
        Validated ScraperConfig.

    Raises:
        ConfigurationError: If any value is invalid.
    """
    values: dict[str, Any] = {}
    if path is not None:
        values.update(load_yaml_config(Path(path)))
    values.update(load_env_config())
    values.update({k: _coerce(k, v) for k, v in overrides.items() if v is not None})
    return replace(ScraperConfig(), **values)
