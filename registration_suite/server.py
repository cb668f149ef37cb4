"""
Dependent Web Server

Launches the application under test and waits until its readiness URL
answers before any scenario runs.
"""

import logging
import shlex
import signal
import subprocess
import tempfile
import time
from typing import Optional

import requests

from .errors import ServerNotReadyError

logger = logging.getLogger(__name__)

POLL_INTERVAL = 0.5


class WebServer:
    """Application server process managed for the duration of a run."""

    def __init__(
        self,
        command: str,
        url: str,
        timeout_ms: int = 60000,
        reuse_existing: bool = False,
        cwd: Optional[str] = None,
    ):
        self.command = command
        self.url = url
        self.timeout = timeout_ms / 1000
        self.reuse_existing = reuse_existing
        self.cwd = cwd

        self.proc: Optional[subprocess.Popen] = None
        self.reused = False
        self._output = None

    def is_ready(self) -> bool:
        """Check whether the readiness URL answers with a non-error status."""
        try:
            resp = requests.get(self.url, timeout=1)
            return resp.status_code < 400
        except requests.exceptions.RequestException:
            return False

    def start(self) -> "WebServer":
        """
        Start the server and wait for it to be ready.

        Raises:
            ServerNotReadyError: command cannot be run, URL already in use without reuse, process
                exited early, or readiness timeout elapsed
        """
        if self.is_ready():
            if not self.reuse_existing:
                raise ServerNotReadyError(
                    f"{self.url} is already used, make sure no other server is running "
                    f"or allow reusing it (E2E_REUSE_SERVER=true)"
                )
            logger.info(f"Reusing existing server at {self.url}")
            self.reused = True
            return self

        logger.info(f"Starting web server: {self.command}")
        # Output goes to a file so a chatty server never blocks on a full pipe
        self._output = tempfile.TemporaryFile()
        try:
            self.proc = subprocess.Popen(
                shlex.split(self.command),
                stdout=self._output,
                stderr=subprocess.STDOUT,
                cwd=self.cwd,
            )
        except (OSError, ValueError) as e:
            self._output.close()
            self._output = None
            raise ServerNotReadyError(f"Cannot run web server command {self.command!r}: {e}") from e

        deadline = time.monotonic() + self.timeout
        while time.monotonic() < deadline:
            if self.is_ready():
                logger.info(f"Web server ready at {self.url}")
                return self
            if self.proc.poll() is not None:
                self._fail(f"Web server exited with code {self.proc.returncode} before becoming ready")
            time.sleep(POLL_INTERVAL)

        self._fail(f"Web server failed to start within {self.timeout:g}s")

    def _fail(self, reason: str) -> None:
        if self.proc.poll() is None:
            self.proc.kill()
        self.proc.wait()
        self.proc = None
        raise ServerNotReadyError(f"{reason}\noutput: {self._read_output()}")

    def _read_output(self) -> str:
        if self._output is None:
            return ""
        self._output.seek(0)
        output = self._output.read().decode(errors="replace")
        self._output.close()
        self._output = None
        return output

    def stop(self) -> None:
        """Stop the server process if this run launched it."""
        if self.proc is None:
            return

        logger.info("Stopping web server...")
        self.proc.send_signal(signal.SIGTERM)
        try:
            self.proc.wait(timeout=10)
        except subprocess.TimeoutExpired:
            logger.warning("Web server did not stop after SIGTERM, killing it")
            self.proc.kill()
            self.proc.wait()
        self.proc = None
        self._read_output()

    def __enter__(self) -> "WebServer":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
