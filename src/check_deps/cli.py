# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Command-line interface for resolving check dependencies."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from check_deps.config import CONFIG_FILENAME, Config
from check_deps.errors import DependencyResolutionError
from check_deps.logging_setup import setup_logging
from check_deps.resolver import DependencyResolver

logger = logging.getLogger(__name__)


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="check-deps",
        description="Resolve every local file and package a check entrypoint depends on.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  check-deps checks/home.spec.js                  # JSON file set on stdout
  check-deps checks/api.check.ts --allow axios    # Permit an extra package
  check-deps checks/home.spec.js -f paths         # Only list resolved paths
        """,
    )
    parser.add_argument("entrypoint", help="Entrypoint file (.js or .ts)")
    parser.add_argument(
        "--allow",
        nargs="+",
        default=[],
        metavar="NAME",
        help="Additional package names available in the runtime",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Configuration file (default: ./{CONFIG_FILENAME})",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "paths"],
        default="json",
        help="Output format (default: json)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output file (default: stdout)",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        default=None,
        help="Directory for structured JSON logs (default: no log file)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log progress to stderr",
    )
    return parser.parse_args(args)


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point.

    Returns:
        0 on success, 1 if resolution failed or output could not be written.
    """
    parsed = parse_args(args)

    setup_logging(
        log_dir=parsed.log_dir,
        log_level=logging.DEBUG if parsed.verbose else logging.WARNING,
        console_output=parsed.verbose,
    )

    config = Config(config_path=parsed.config)
    if parsed.allow:
        config = config.with_allowed_packages(parsed.allow)

    resolver = DependencyResolver.from_config(config)
    try:
        files = resolver.resolve(parsed.entrypoint)
    except DependencyResolutionError as e:
        if parsed.format == "json":
            print(e.to_json(indent=2), file=sys.stderr)
        else:
            print(e.format_report(), file=sys.stderr)
        return 1

    if parsed.format == "paths":
        output = "\n".join(sorted(files))
    else:
        output = json.dumps({"entrypoint": parsed.entrypoint, "files": files}, indent=2)

    if parsed.output:
        try:
            parsed.output.write_text(output + "\n", encoding="utf-8")
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
        logger.info(f"Output written to: {parsed.output}")
    else:
        print(output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
