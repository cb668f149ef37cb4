"""
Pytest fixtures and hooks for the registration suite tests
"""
import importlib.util
import os
import sys

import pytest

pytest_plugins = ["pytester"]

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from registration_suite.config import RunConfig  # noqa: E402
from registration_suite.errors import FixtureError, ServerNotReadyError  # noqa: E402
from registration_suite.loader import get_store  # noqa: E402
from registration_suite.server import WebServer  # noqa: E402

web_server_key = pytest.StashKey[WebServer]()

# Exit code when the application under test never became ready, outside pytest's 0-5
SERVER_NOT_READY_EXIT_CODE = 6


def _playwright_available() -> bool:
    return importlib.util.find_spec("playwright.sync_api") is not None


def _is_xdist_worker(config) -> bool:
    return hasattr(config, "workerinput")


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--e2e",
        action="store_true",
        default=False,
        help="Run browser scenarios against the application under test",
    )


def pytest_configure(config):
    """Register markers and, for browser runs, prepare fixtures and the web server."""
    config.addinivalue_line("markers", "e2e: browser scenarios (require --e2e and playwright)")
    config.addinivalue_line("markers", "smoke: marks tests as smoke tests")
    config.addinivalue_line("markers", "accessibility: keyboard and labelling checks")

    if not config.getoption("--e2e") or not _playwright_available():
        return

    try:
        run_config = RunConfig.from_env()
    except ValueError as e:
        raise pytest.UsageError(f"Invalid E2E configuration: {e}") from e

    # A broken fixture file aborts the run before any scenario starts
    try:
        get_store()
    except FixtureError as e:
        raise pytest.UsageError(f"Cannot load registration fixtures: {e}") from e

    from playwright.sync_api import expect

    expect.set_options(timeout=run_config.expect_timeout)

    # Only the controlling process owns the server, workers reuse it
    if _is_xdist_worker(config) or config.option.collectonly:
        return
    if not run_config.web_server_command:
        return

    server = WebServer(
        command=run_config.web_server_command,
        url=run_config.web_server_url,
        timeout_ms=run_config.web_server_timeout,
        reuse_existing=run_config.reuse_existing_server,
    )
    try:
        server.start()
    except ServerNotReadyError as e:
        pytest.exit(f"Application under test is not available: {e}", returncode=SERVER_NOT_READY_EXIT_CODE)
    config.stash[web_server_key] = server


def pytest_unconfigure(config):
    """Stop the web server started by this process."""
    server = config.stash.get(web_server_key, None)
    if server is not None:
        server.stop()


def pytest_collection_modifyitems(config, items):
    """Skip browser scenarios unless --e2e is given and playwright is installed."""
    if not config.getoption("--e2e"):
        reason = "Browser scenarios need --e2e"
    elif not _playwright_available():
        reason = "Playwright not installed"
    else:
        return

    skip_e2e = pytest.mark.skip(reason=reason)
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip_e2e)
