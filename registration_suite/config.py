"""
Run Configuration

Timeouts, retry policy, parallelism, browser target, artifact capture and
the dependent web server, read from environment variables.
"""

import os
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Mapping, Optional

SCREENSHOT_MODES = ("off", "on", "only-on-failure")
VIDEO_MODES = ("off", "on", "retain-on-failure")
TRACE_MODES = ("off", "on", "retain-on-failure", "on-first-retry")

TRUE_VALUES = ("1", "true", "yes", "on")


def _is_true(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in TRUE_VALUES


def _int(environ: Mapping[str, str], name: str, default: Optional[int]) -> Optional[int]:
    raw = environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _choice(environ: Mapping[str, str], name: str, default: str, choices: tuple) -> str:
    value = environ.get(name) or default
    if value not in choices:
        raise ValueError(f"{name} must be one of {', '.join(choices)}, got {value!r}")
    return value


@dataclass
class RunConfig:
    """E2E run configuration."""

    # Application under test
    base_url: str = "http://localhost:3000"

    # Timeouts (milliseconds)
    test_timeout: int = 20000
    expect_timeout: int = 5000
    navigation_timeout: int = 20000

    # Retries and parallelism
    retries: int = 1
    workers: int = 3
    max_failures: Optional[int] = None

    # Browser settings
    browser: str = "chromium"
    device: Optional[str] = "Desktop Chrome"
    headless: bool = True
    slow_mo: int = 0

    # Screenshots, videos and traces
    screenshot: str = "only-on-failure"
    video: str = "retain-on-failure"
    trace: str = "on-first-retry"
    output_dir: str = "test-results"
    report_path: str = "playwright-report/index.html"

    # Dependent web server
    web_server_command: Optional[str] = "npm start"
    web_server_url: Optional[str] = None
    web_server_timeout: int = 60000
    reuse_existing_server: bool = False

    # Launch options set explicitly through the environment
    launch_overrides: Dict[str, Any] = field(default_factory=dict, repr=False)

    ci: bool = field(default=False, repr=False)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "RunConfig":
        """Build the configuration, switching to CI defaults when CI is set."""
        env = os.environ if environ is None else environ
        ci = _is_true(env.get("CI"))

        base_url = env.get("E2E_BASE_URL", cls.base_url)
        test_timeout = _int(env, "E2E_TEST_TIMEOUT", cls.test_timeout)

        command = env.get("E2E_WEB_SERVER_COMMAND", cls.web_server_command)

        headless = _is_true(env.get("E2E_HEADLESS", "true"))
        slow_mo = _int(env, "SLOWMO", 0)
        launch_overrides = {}
        if env.get("E2E_HEADLESS"):
            launch_overrides["headless"] = headless
        if env.get("SLOWMO"):
            launch_overrides["slow_mo"] = slow_mo

        return cls(
            base_url=base_url,
            test_timeout=test_timeout,
            expect_timeout=_int(env, "E2E_EXPECT_TIMEOUT", cls.expect_timeout),
            navigation_timeout=_int(env, "E2E_NAVIGATION_TIMEOUT", test_timeout),
            retries=_int(env, "E2E_RETRIES", 1),
            workers=_int(env, "E2E_WORKERS", 1 if ci else 3),
            max_failures=_int(env, "E2E_MAX_FAILURES", 3 if ci else None),
            browser=env.get("E2E_BROWSER", cls.browser),
            device=env.get("E2E_DEVICE", cls.device) or None,
            headless=headless,
            slow_mo=slow_mo,
            screenshot=_choice(env, "E2E_SCREENSHOT", cls.screenshot, SCREENSHOT_MODES),
            video=_choice(env, "E2E_VIDEO", cls.video, VIDEO_MODES),
            trace=_choice(env, "E2E_TRACE", cls.trace, TRACE_MODES),
            output_dir=env.get("E2E_OUTPUT_DIR", cls.output_dir),
            report_path=env.get("E2E_REPORT", cls.report_path),
            web_server_command=command or None,
            web_server_url=env.get("E2E_WEB_SERVER_URL") or base_url,
            web_server_timeout=_int(env, "E2E_WEB_SERVER_TIMEOUT", cls.web_server_timeout),
            reuse_existing_server=_is_true(env.get("E2E_REUSE_SERVER", "false")),
            launch_overrides=launch_overrides,
            ci=ci,
        )

    @property
    def test_timeout_seconds(self) -> int:
        # pytest-timeout works in whole seconds
        return max(1, -(-self.test_timeout // 1000))

    def to_pytest_args(self) -> List[str]:
        """
        Build pytest arguments for the options handled by pytest plugins.

        Returns:
            List of pytest arguments
        """
        pytest_args = []

        if self.workers and self.workers > 1:
            pytest_args.extend(["-n", str(self.workers)])

        if self.retries:
            pytest_args.extend(["--reruns", str(self.retries)])
            # Fixture errors are deterministic, a retry cannot fix them
            pytest_args.extend(["--rerun-except", "FixtureError"])

        pytest_args.append(f"--timeout={self.test_timeout_seconds}")

        if self.max_failures:
            pytest_args.append(f"--maxfail={self.max_failures}")

        pytest_args.extend(["--browser", self.browser])

        if self.report_path:
            pytest_args.extend([f"--html={self.report_path}", "--self-contained-html"])

        return pytest_args

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
