#!/usr/bin/env python3
"""
Registration E2E Runner

Runs the browser scenarios with the run configuration applied:
- Parallel workers, retries and max failures
- Per-test timeout
- Browser target and HTML report

Usage:
    registration-e2e
    registration-e2e --headed --workers 1
    registration-e2e -k keyboard -- -x
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Dict, List, Optional

import pytest

from .config import RunConfig

logger = logging.getLogger(__name__)

E2E_TESTS_DIR = Path("tests") / "e2e"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="registration-e2e",
        description="Run the registration form end-to-end scenarios",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="Arguments after -- are passed to pytest unchanged.",
    )
    parser.add_argument("--base-url", help="Base URL of the application under test")
    parser.add_argument("--workers", type=int, help="Number of parallel workers")
    parser.add_argument("--retries", type=int, help="Retries for a failed scenario")
    parser.add_argument("--max-failures", type=int, help="Stop after this many failures")
    parser.add_argument("--browser", help="Browser to run (chromium, firefox, webkit)")
    parser.add_argument("--headed", action="store_true", help="Show the browser window")
    parser.add_argument("-k", "--grep", help="Only run scenarios matching this expression")
    parser.add_argument("--list", action="store_true", help="List scenarios without running them")
    parser.add_argument("--tests-dir", default=str(E2E_TESTS_DIR), help="E2E tests directory")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def env_overrides(args: argparse.Namespace) -> Dict[str, str]:
    """Map CLI options to environment variables, so xdist workers see them too."""
    overrides = {}
    if args.base_url:
        overrides["E2E_BASE_URL"] = args.base_url
    if args.workers is not None:
        overrides["E2E_WORKERS"] = str(args.workers)
    if args.retries is not None:
        overrides["E2E_RETRIES"] = str(args.retries)
    if args.max_failures is not None:
        overrides["E2E_MAX_FAILURES"] = str(args.max_failures)
    if args.browser:
        overrides["E2E_BROWSER"] = args.browser
    if args.headed:
        overrides["E2E_HEADLESS"] = "false"
    return overrides


def build_pytest_args(
    config: RunConfig, args: argparse.Namespace, passthrough: Optional[List[str]] = None
) -> List[str]:
    pytest_args = [args.tests_dir, "--e2e", "-v"]

    if args.list:
        pytest_args.append("--collect-only")
    else:
        pytest_args.extend(config.to_pytest_args())

    if args.grep:
        pytest_args.extend(["-k", args.grep])

    pytest_args.extend(passthrough or [])
    return pytest_args


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    passthrough: List[str] = []
    if "--" in argv:
        split = argv.index("--")
        argv, passthrough = argv[:split], argv[split + 1 :]

    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    os.environ.update(env_overrides(args))
    try:
        config = RunConfig.from_env()
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    logger.debug(f"Run configuration: {config.to_dict()}")

    pytest_args = build_pytest_args(config, args, passthrough)
    logger.info(f"pytest {' '.join(pytest_args)}")
    return int(pytest.main(pytest_args))


if __name__ == "__main__":
    sys.exit(main())
