"""
Staleness report generation and export utilities.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

import pandas as pd
from tqdm import tqdm

from .config import Config
from .interfaces import RegistryClient
from .manifest import DEFAULT_MANIFEST, read_manifest
from .models import Manifest, Report, StaleDependency
from .registry import NpmRegistryClient
from .time_utils import format_date, months_since, utc_now


logger = logging.getLogger(__name__)


def is_stale(months: float, threshold_months: int) -> bool:
    """Only time strictly beyond the threshold counts as stale."""
    return months / threshold_months > 1


def format_stale_line(dep: StaleDependency, threshold_months: int) -> str:
    return (
        f"- [{dep.name}]({dep.url}) has not been updated in the last "
        f"{threshold_months} months. Last update: {format_date(dep.last_release)}"
    )


def render_markdown(report: Report) -> str:
    if report.checked == 0:
        return "No dependencies to check."
    output = "## Outdated Packages\n"
    for dep in report.stale:
        output += format_stale_line(dep, report.threshold_months) + "\n"
    return output


def build_report(
    manifest: Manifest,
    client: RegistryClient,
    config: Config,
    now: Optional[datetime] = None,
) -> Report:
    """Check every dependency of the manifest, one registry lookup at a time.

    Args:
        manifest: Parsed manifest
        client: Registry client used for the lookups
        config: Resolved configuration
        now: Reference time (defaults to the current UTC time)

    Returns:
        Report with stale dependencies in declaration order
    """
    if now is None:
        now = utc_now()

    names = manifest.dependency_names
    report = Report(checked=len(names), threshold_months=config.threshold_months)

    for name in tqdm(names, desc="Checking", unit="pkg", disable=not config.show_progress):
        released_at = client.fetch_last_release_time(name)
        if released_at is None:
            report.skipped.append(name)
            continue

        months = months_since(released_at, now)
        logger.debug("%s last released %.1f months ago", name, months)
        if is_stale(months, config.threshold_months):
            report.stale.append(StaleDependency(
                name=name,
                last_release=released_at,
                months_since_release=months,
                url=f"{config.package_url.rstrip('/')}/{name}",
            ))

    if report.skipped:
        logger.info("Skipped %d dependencies: %s", len(report.skipped), ", ".join(report.skipped))
    return report


def run(
    config: Config,
    manifest_path: Union[str, Path] = DEFAULT_MANIFEST,
    client: Optional[RegistryClient] = None,
    now: Optional[datetime] = None,
) -> Report:
    """Read the manifest, check every dependency and print the markdown report."""
    manifest = read_manifest(manifest_path)
    if client is None:
        client = NpmRegistryClient(config)

    print(f"Checking updates for {len(manifest.dependency_names)} dependencies...\n")
    report = build_report(manifest, client, config, now=now)
    print(render_markdown(report))
    return report


def save_report_markdown(report: Report, path: Union[str, Path]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_markdown(report), encoding="utf-8")
    return path


def export_stale_csv(report: Report, path: Union[str, Path]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    columns = [
        "package",
        "last_release",
        "months_since_release",
        "threshold_months",
        "url",
    ]
    df = pd.DataFrame(
        [
            {
                "package": dep.name,
                "last_release": format_date(dep.last_release),
                "months_since_release": round(dep.months_since_release, 2),
                "threshold_months": report.threshold_months,
                "url": dep.url,
            }
            for dep in report.stale
        ],
        columns=columns,
    )
    df.to_csv(path, index=False)
    return path
