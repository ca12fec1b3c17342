"""
Runtime configuration, built once at startup.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional, Union


logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD_MONTHS = 36
THRESHOLD_ENV_VAR = "MONTHS_THRESHOLD"


class ConfigError(ValueError):
    """Raised when a configuration value cannot be used."""


@dataclass(frozen=True)
class Config:
    """Settings shared by the registry client and the report generator."""

    threshold_months: int = DEFAULT_THRESHOLD_MONTHS
    registry_url: str = "https://registry.npmjs.org"
    package_url: str = "https://www.npmjs.com/package"
    timeout: Optional[float] = None
    strict_versions: bool = False
    show_progress: bool = False


def parse_threshold(raw: Union[str, int]) -> int:
    """Parse a threshold in months, rejecting non-integer and non-positive values."""
    try:
        value = int(str(raw).strip())
    except ValueError:
        raise ConfigError(f"Threshold must be an integer number of months, got {raw!r}") from None
    if value <= 0:
        raise ConfigError(f"Threshold must be greater than 0, got {value}")
    return value


def load_config(
    env: Optional[Mapping[str, str]] = None,
    threshold: Optional[int] = None,
    **overrides,
) -> Config:
    """Build the configuration from the environment and explicit overrides.

    Args:
        env: Environment mapping (defaults to ``os.environ``)
        threshold: Threshold from the command line; wins over the environment
        **overrides: Any other ``Config`` field

    Returns:
        The resolved ``Config``
    """
    if env is None:
        env = os.environ

    threshold_months = DEFAULT_THRESHOLD_MONTHS
    raw = env.get(THRESHOLD_ENV_VAR)
    if raw is not None:
        try:
            threshold_months = parse_threshold(raw)
        except ConfigError as e:
            logger.warning("Ignoring %s: %s", THRESHOLD_ENV_VAR, e)

    if threshold is not None:
        threshold_months = parse_threshold(threshold)

    overrides = {key: value for key, value in overrides.items() if value is not None}
    return Config(threshold_months=threshold_months, **overrides)
