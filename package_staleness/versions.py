"""
Version ordering and latest-version selection.
"""

from __future__ import annotations

import re
from functools import cmp_to_key
from typing import Callable, Iterable, List, Optional, Tuple

from packaging.version import InvalidVersion, Version


VERSION_TAG_PATTERN = re.compile(r"(\d+\.)?(\d+\.)?(\*|\d+)", re.ASCII)


def is_valid_version_tag(value: str) -> bool:
    """Loose check: one to three numeric components, the last may be ``*``."""
    return bool(VERSION_TAG_PATTERN.fullmatch(value))


def is_strict_release(value: str) -> bool:
    """Stricter check: a canonical MAJOR.MINOR.PATCH final release."""
    try:
        parsed = Version(value)
    except InvalidVersion:
        return False
    # Canonical form rejects "v" prefixes, leading zeros and npm-style suffixes.
    if str(parsed) != value or len(parsed.release) != 3 or parsed.epoch:
        return False
    return not (parsed.is_prerelease or parsed.is_postrelease or parsed.local)


def version_components(value: str) -> Tuple[int, int, int]:
    """Major, minor and patch of a version; missing or ``*`` parts count as 0."""
    parts = value.split(".")[:3]
    numbers = [int(part) if part.isascii() and part.isdigit() else 0 for part in parts]
    numbers.extend([0] * (3 - len(numbers)))
    return numbers[0], numbers[1], numbers[2]


def compare_versions(a: str, b: str) -> int:
    """Compare for a descending sort: negative when ``a`` is newer than ``b``."""
    parts_a = version_components(a)
    parts_b = version_components(b)
    for left, right in zip(parts_a, parts_b):
        if left > right:
            return -1
        if left < right:
            return 1
    return 0


def sort_versions(versions: Iterable[str]) -> List[str]:
    """Sort version strings newest first; ties keep their original order."""
    return sorted(versions, key=cmp_to_key(compare_versions))


def select_latest(
    candidates: Iterable[str],
    predicate: Callable[[str], bool] = is_valid_version_tag,
) -> Optional[str]:
    """Return the newest candidate accepted by ``predicate``, or None."""
    valid = [candidate for candidate in candidates if predicate(candidate)]
    if not valid:
        return None
    return sort_versions(valid)[0]
