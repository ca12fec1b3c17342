"""
Command-line interface for the staleness report.
"""

import argparse
import logging
import sys

from .config import ConfigError, load_config, parse_threshold
from .manifest import DEFAULT_MANIFEST
from .reporting import export_stale_csv, run, save_report_markdown


logger = logging.getLogger(__name__)


def _threshold_arg(value: str) -> int:
    try:
        return parse_threshold(value)
    except ConfigError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stale-packages",
        description="Report npm dependencies that have not been released within a threshold"
    )

    parser.add_argument(
        "--manifest",
        default=DEFAULT_MANIFEST,
        help="Path to the project manifest. Default: package.json"
    )

    parser.add_argument(
        "--threshold",
        type=_threshold_arg,
        default=None,
        help="Staleness threshold in months. Overrides MONTHS_THRESHOLD. Default: 36"
    )

    parser.add_argument(
        "--registry-url",
        default=None,
        help="Registry base URL. Default: https://registry.npmjs.org"
    )

    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Registry request timeout in seconds. Default: no timeout"
    )

    parser.add_argument(
        "--strict-versions",
        action="store_true",
        help="Only consider canonical MAJOR.MINOR.PATCH releases"
    )

    parser.add_argument(
        "--progress",
        action="store_true",
        help="Show a progress bar on stderr"
    )

    parser.add_argument(
        "--output",
        default=None,
        help="Also write the markdown report to this file"
    )

    parser.add_argument(
        "--csv",
        default=None,
        help="Write the stale dependencies to this CSV file"
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging"
    )

    return parser


def main(argv=None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    config = load_config(
        threshold=args.threshold,
        registry_url=args.registry_url,
        timeout=args.timeout,
        strict_versions=args.strict_versions,
        show_progress=args.progress,
    )
    logger.debug("Using %s", config)

    report = run(config, manifest_path=args.manifest)

    if args.output:
        output_file = save_report_markdown(report, args.output)
        logger.info("Report saved to: %s", output_file)

    if args.csv:
        csv_file = export_stale_csv(report, args.csv)
        logger.info("Stale dependencies saved to: %s", csv_file)

    return 0


if __name__ == "__main__":
    sys.exit(main())
