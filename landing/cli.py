"""
Landing Page Generator CLI

Generates static product landing pages from a local JSON fixture or from
the landing products API.

Usage:
    python3 scripts/generate_landing_pages.py
    python3 scripts/generate_landing_pages.py --input data/test-product.json --output demo.html
    python3 scripts/generate_landing_pages.py --source api --api-base-url https://api.example.com \
        --api-token $LANDING_PAGE_TOKEN --max-pages 2
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from .common.config_loader import PROJECT_ROOT
from .common.log_config import setup_logging
from .common.settings import SOURCES, ConfigurationError, resolve_settings
from .generation import LandingPageGenerator

logger = logging.getLogger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of exiting with status 2."""

    def error(self, message):
        raise ConfigurationError(message)


def positive_int(name: str):
    def parse(value: str) -> int:
        try:
            parsed = int(value)
        except ValueError:
            parsed = 0
        if parsed <= 0:
            raise argparse.ArgumentTypeError(f"--{name} must be a positive integer.")
        return parsed
    return parse


def non_negative_int(name: str):
    def parse(value: str) -> int:
        try:
            parsed = int(value)
        except ValueError:
            parsed = -1
        if parsed < 0:
            raise argparse.ArgumentTypeError(f"--{name} must be a non-negative integer.")
        return parsed
    return parse


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        description="Generate static product landing pages from a JSON fixture or the landing API"
    )
    parser.add_argument(
        "--input",
        help="Input JSON file, relative to the project root (default: data/test-product.json)"
    )
    parser.add_argument(
        "--site-url",
        help="Public site URL (default: $SITE_URL or https://discor.com.ar)"
    )
    parser.add_argument(
        "--output",
        help="Output file name for a single product (file source only)"
    )
    parser.add_argument(
        "--source",
        choices=SOURCES,
        help="Product source (default: api when an API base URL is set, else file)"
    )
    parser.add_argument(
        "--api-base-url",
        help="Landing API base URL (default: $LANDING_PAGE_API_BASE_URL)"
    )
    parser.add_argument(
        "--api-path",
        help="Landing API path (default: $LANDING_PAGE_API_PATH or /api/products/landing/pages)"
    )
    parser.add_argument(
        "--api-token",
        help="Landing API bearer token (default: $LANDING_PAGE_TOKEN)"
    )
    parser.add_argument(
        "--image-base-url",
        help="Base URL for product images (default: $LANDING_PAGE_IMAGE_BASE_URL or the site URL)"
    )
    parser.add_argument(
        "--limit",
        type=positive_int("limit"),
        help="Products per API page, capped at 100 (default: 100)"
    )
    parser.add_argument(
        "--max-pages",
        type=positive_int("max-pages"),
        help="Stop after this many API pages (default: all)"
    )
    parser.add_argument(
        "--retries",
        type=non_negative_int("retries"),
        help="Retries for 429/5xx API responses (default: 5)"
    )
    parser.add_argument(
        "--retry-delay-ms",
        type=positive_int("retry-delay-ms"),
        help="Base retry delay in milliseconds, doubled per attempt (default: 1200)"
    )
    parser.add_argument(
        "--root-dir",
        help="Project root holding templates/, data/ and products/ (default: repository root)"
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) logging"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress info messages, show only warnings and errors"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the generator.

    Returns:
        Exit code: 0 on success, 1 on any error
    """
    parser = build_parser()
    setup_logging()

    try:
        args = parser.parse_args(argv)
        setup_logging(verbose=args.verbose, quiet=args.quiet)

        root_dir = Path(args.root_dir) if args.root_dir else PROJECT_ROOT
        load_dotenv(root_dir / ".env")

        settings = resolve_settings(vars(args), root_dir=root_dir)
        LandingPageGenerator(settings).run()
    except Exception as e:
        logger.error("%s", e)
        logger.debug("Generation failed", exc_info=True)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
