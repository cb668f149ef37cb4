"""
Registration Suite Errors

Failures that abort the run instead of being retried.
"""


class RegistrationSuiteError(Exception):
    """Base class for suite errors."""


class FixtureError(RegistrationSuiteError):
    """Unknown scenario name or malformed fixture resource."""


class ServerNotReadyError(RegistrationSuiteError, RuntimeError):
    """The application under test did not become reachable."""
