"""
npm registry client.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, Optional
from urllib.parse import quote

import requests

from .config import Config
from .interfaces import RegistryClient
from .time_utils import parse_timestamp
from .versions import is_strict_release, is_valid_version_tag, select_latest


logger = logging.getLogger(__name__)


class RegistryError(ValueError):
    """Raised when registry metadata is missing or malformed."""


class NpmRegistryClient(RegistryClient):
    """Fetch publish times from the npm registry, one request per package."""

    def __init__(self, config: Config, session: Optional[requests.Session] = None) -> None:
        self.config = config
        self.session = session or requests.Session()
        self.predicate = is_strict_release if config.strict_versions else is_valid_version_tag

    def package_url(self, package_name: str) -> str:
        # Scoped packages keep the "@" but need the "/" escaped.
        return f"{self.config.registry_url.rstrip('/')}/{quote(package_name, safe='@')}"

    def fetch_time_data(self, package_name: str) -> Dict[str, str]:
        url = self.package_url(package_name)
        logger.info("Fetching metadata for %s", package_name)
        with self.session.get(url, timeout=self.config.timeout) as response:
            response.raise_for_status()
            data = response.json()

        if not isinstance(data, dict):
            raise RegistryError(f"Unexpected metadata for {package_name}: not an object")
        time_data = data.get("time")
        if not isinstance(time_data, dict):
            raise RegistryError(f"No release times in metadata for {package_name}")
        return time_data

    def fetch_last_release_time(self, package_name: str) -> Optional[datetime]:
        try:
            time_data = self.fetch_time_data(package_name)
        except (requests.RequestException, ValueError) as e:
            # requests' JSONDecodeError and RegistryError are both ValueErrors.
            logger.warning("Failed to fetch data for package: %s: %s", package_name, e)
            return None

        latest = select_latest(time_data, self.predicate)
        if latest is None:
            logger.warning("Failed to fetch data for package: %s: no valid versions found", package_name)
            return None

        released_at = parse_timestamp(time_data[latest])
        if released_at is None:
            logger.warning(
                "Failed to fetch data for package: %s: bad timestamp %r for %s",
                package_name,
                time_data[latest],
                latest,
            )
            return None

        logger.debug("Latest version of %s is %s, released %s", package_name, latest, released_at)
        return released_at
