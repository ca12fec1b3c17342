"""
Interfaces for registry clients.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, Optional, Protocol


class RegistryClient(Protocol):
    """Look up release history for packages of one registry."""

    def fetch_time_data(self, package_name: str) -> Dict[str, str]:
        ...

    def fetch_last_release_time(self, package_name: str) -> Optional[datetime]:
        ...
