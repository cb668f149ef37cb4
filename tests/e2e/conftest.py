"""
Playwright E2E Test Configuration and Fixtures

This module provides shared fixtures, configuration, and utilities
for end-to-end browser testing with Playwright.
"""
from typing import Any, Dict, Generator

import pytest

# Skip entire module if playwright not installed
pytest.importorskip("playwright")

from playwright.sync_api import Browser, BrowserContext, Page, Playwright  # noqa: E402

from registration_suite.artifacts import ArtifactRecorder  # noqa: E402
from registration_suite.config import RunConfig  # noqa: E402

from .pages import RegistrationPage  # noqa: E402

# =============================================================================
# Configuration
# =============================================================================


@pytest.fixture(scope="session")
def run_config() -> RunConfig:
    """E2E run configuration, read from the environment."""
    return RunConfig.from_env()


# =============================================================================
# Browser Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def browser_type_launch_args(browser_type_launch_args: Dict, run_config: RunConfig) -> Dict[str, Any]:
    """Browser launch arguments, with E2E_HEADLESS and SLOWMO taking precedence when set."""
    return {
        **browser_type_launch_args,
        **run_config.launch_overrides,
    }


@pytest.fixture(scope="session")
def browser_context_args(
    browser_context_args: Dict, playwright: Playwright, run_config: RunConfig
) -> Dict[str, Any]:
    """Browser context arguments."""
    args = dict(browser_context_args)

    if run_config.device:
        device = dict(playwright.devices[run_config.device])
        device.pop("default_browser_type", None)
        args.update(device)

    args["base_url"] = run_config.base_url
    args["ignore_https_errors"] = True
    return args


@pytest.fixture
def context(
    browser: Browser, browser_context_args: Dict, run_config: RunConfig, request
) -> Generator[BrowserContext, None, None]:
    """Create a new browser context for each test attempt."""
    # pytest-rerunfailures counts attempts from 1
    attempt = getattr(request.node, "execution_count", 1)
    recorder = ArtifactRecorder(run_config, request.node.nodeid, attempt)

    context = browser.new_context(**{**browser_context_args, **recorder.context_args()})
    context.set_default_timeout(run_config.test_timeout)
    context.set_default_navigation_timeout(run_config.navigation_timeout)
    recorder.start(context)

    yield context

    failed = any(
        getattr(request.node, f"rep_{when}", None) is not None
        and getattr(request.node, f"rep_{when}").failed
        for when in ("setup", "call")
    )
    recorder.finish(context, failed)


@pytest.fixture
def page(context: BrowserContext) -> Page:
    """Create a new page for each test (closed with its context)."""
    return context.new_page()


@pytest.fixture
def registration_page(page: Page, run_config: RunConfig) -> RegistrationPage:
    """Return the page object, already on the registration form."""
    return RegistrationPage(page, run_config.base_url).navigate()


# =============================================================================
# Hooks
# =============================================================================


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Store test results for use in fixtures."""
    outcome = yield
    rep = outcome.get_result()
    setattr(item, f"rep_{rep.when}", rep)
