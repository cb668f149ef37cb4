"""
Registration Form E2E Suite

Browser scenarios for the registration form, driven by fixture data.

Scenario Data Structure:
- data/registrationData.json: one user record per named scenario
- Records are loaded once and are read-only
- Test code refers to scenarios by name, never by inline values
"""

from .config import RunConfig
from .errors import FixtureError, RegistrationSuiteError, ServerNotReadyError
from .loader import get_test_data, load_test_data
from .models import FieldErrorState, FieldId, Messages, ScenarioName, UserRecord

__all__ = [
    "RunConfig",
    "FixtureError",
    "RegistrationSuiteError",
    "ServerNotReadyError",
    "get_test_data",
    "load_test_data",
    "FieldErrorState",
    "FieldId",
    "Messages",
    "ScenarioName",
    "UserRecord",
]
