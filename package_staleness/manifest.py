"""
Read the project manifest (package.json).
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Union

from .models import Manifest


logger = logging.getLogger(__name__)

DEFAULT_MANIFEST = "package.json"


class ManifestError(ValueError):
    """Raised when the manifest cannot be read or parsed."""


def load_manifest(path: Union[str, Path] = DEFAULT_MANIFEST) -> Manifest:
    """Load and validate a package.json file.

    Args:
        path: Path to the manifest

    Returns:
        The parsed ``Manifest``

    Raises:
        ManifestError: If the file is unreadable, not JSON, or malformed
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ManifestError(f"Error reading {path}: {e}") from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ManifestError(f"Error parsing {path}: {e}") from e

    if not isinstance(data, dict):
        raise ManifestError(f"Error parsing {path}: top level must be an object")

    dependencies = data.get("dependencies") or {}
    if not isinstance(dependencies, dict):
        raise ManifestError(f"Error parsing {path}: 'dependencies' must be an object")

    name = data.get("name")
    return Manifest(name=name if isinstance(name, str) else None, dependencies=dict(dependencies))


def read_manifest(path: Union[str, Path] = DEFAULT_MANIFEST) -> Manifest:
    """Load the manifest or exit the process with status 1."""
    try:
        return load_manifest(path)
    except ManifestError as e:
        logger.error("%s", e)
        sys.exit(1)
