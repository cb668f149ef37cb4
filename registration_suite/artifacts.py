"""
Failure Artifacts

Screenshots, videos and traces captured per test attempt according to the
run configuration.
"""

import logging
import re
from pathlib import Path
from typing import Any, Dict, List

from .config import RunConfig

logger = logging.getLogger(__name__)


def artifact_dir_name(test_name: str, attempt: int = 1) -> str:
    """Filesystem-safe directory name for one test attempt."""
    name = re.sub(r"[^A-Za-z0-9_.-]+", "-", test_name).strip("-") or "test"
    if attempt > 1:
        name = f"{name}-retry{attempt - 1}"
    return name


class ArtifactRecorder:
    """Captures diagnostics for one browser context."""

    def __init__(self, config: RunConfig, test_name: str, attempt: int = 1):
        self.config = config
        self.test_name = test_name
        self.attempt = attempt
        self.output_dir = Path(config.output_dir) / artifact_dir_name(test_name, attempt)
        self._tracing = False

    def context_args(self) -> Dict[str, Any]:
        """Extra browser context arguments (video recording)."""
        if self.config.video == "off":
            return {}
        return {"record_video_dir": str(self.output_dir / "videos")}

    def should_trace(self) -> bool:
        if self.config.trace in ("on", "retain-on-failure"):
            return True
        return self.config.trace == "on-first-retry" and self.attempt == 2

    def should_screenshot(self, failed: bool) -> bool:
        if self.config.screenshot == "on":
            return True
        return self.config.screenshot == "only-on-failure" and failed

    def start(self, context) -> None:
        """Start tracing on the context when the policy asks for it."""
        if self.should_trace():
            context.tracing.start(screenshots=True, snapshots=True, sources=True)
            self._tracing = True

    def finish(self, context, failed: bool) -> List[Path]:
        """
        Save the artifacts the policy keeps and close the context.

        Args:
            context: Playwright browser context of the test
            failed: Whether any phase of the test failed

        Returns:
            Paths of the artifacts kept on disk
        """
        kept: List[Path] = []

        videos = []
        if self.config.video != "off":
            videos = [page.video for page in context.pages if page.video]

        try:
            if self.should_screenshot(failed):
                for index, page in enumerate(context.pages):
                    path = self.output_dir / f"screenshot-{index}.png"
                    self.output_dir.mkdir(parents=True, exist_ok=True)
                    try:
                        page.screenshot(path=str(path), full_page=True)
                        kept.append(path)
                    except Exception as e:
                        logger.warning(f"Could not capture screenshot for {self.test_name}: {e}")

            if self._tracing:
                self._tracing = False
                if self.config.trace == "retain-on-failure" and not failed:
                    context.tracing.stop()
                else:
                    path = self.output_dir / "trace.zip"
                    self.output_dir.mkdir(parents=True, exist_ok=True)
                    context.tracing.stop(path=str(path))
                    kept.append(path)
        finally:
            # Videos are only written once the context is closed
            context.close()

            for video in videos:
                path = Path(video.path())
                if self.config.video == "retain-on-failure" and not failed:
                    path.unlink(missing_ok=True)
                else:
                    kept.append(path)

        for path in kept:
            logger.info(f"Artifact saved: {path}")
        return kept
