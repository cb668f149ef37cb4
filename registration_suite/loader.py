"""
Fixture Loader

Loads the registration scenarios from the fixture file (JSON).
The store is parsed once per process and is read-only afterwards.
"""

import json
import logging
import os
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Union

from .errors import FixtureError
from .models import ScenarioName, UserRecord

logger = logging.getLogger(__name__)

# Default fixture file, shipped with the package
DEFAULT_DATA_PATH = Path(__file__).parent / "data" / "registrationData.json"

DATA_PATH_ENV = "REGISTRATION_DATA_PATH"

_store: Optional[Mapping[str, UserRecord]] = None


def data_path() -> Path:
    """Fixture file location, honouring the environment override."""
    override = os.environ.get(DATA_PATH_ENV)
    return Path(override) if override else DEFAULT_DATA_PATH


def load_test_data(file_path: Union[str, Path, None] = None) -> Mapping[str, UserRecord]:
    """
    Load every scenario from a fixture file.

    Args:
        file_path: Path to the JSON file (defaults to the shipped fixture)

    Returns:
        Read-only mapping of scenario name to UserRecord

    Raises:
        FixtureError: file missing, invalid JSON, or a malformed scenario
    """
    path = Path(file_path) if file_path else data_path()

    if not path.exists():
        logger.error(f"Fixture file not found: {path}")
        raise FixtureError(f"Fixture file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.error(f"Invalid JSON in fixture file {path}: {e}")
        raise FixtureError(f"Invalid JSON in fixture file {path}: {e}") from e
    except OSError as e:
        logger.error(f"Cannot read fixture file {path}: {e}")
        raise FixtureError(f"Cannot read fixture file {path}: {e}") from e

    if not isinstance(data, dict):
        raise FixtureError(f"Fixture file {path} must contain an object keyed by scenario name")

    records = {name: UserRecord.from_dict(value, name) for name, value in data.items()}

    missing = [s.value for s in ScenarioName if s.value not in records]
    if missing:
        raise FixtureError(f"Fixture file {path} is missing scenarios: {', '.join(missing)}")

    logger.debug(f"Loaded {len(records)} scenarios from {path}")
    return MappingProxyType(records)


def get_store() -> Mapping[str, UserRecord]:
    """Return the process-wide store, loading it on first use."""
    global _store
    if _store is None:
        _store = load_test_data()
    return _store


def get_test_data(name: Union[ScenarioName, str]) -> UserRecord:
    """
    Get the record for one scenario.

    Args:
        name: Scenario name, exact match

    Raises:
        FixtureError: the name is not in the fixture file
    """
    key = name.value if isinstance(name, ScenarioName) else name
    store = get_store()
    try:
        return store[key]
    except KeyError:
        known = ", ".join(sorted(store))
        raise FixtureError(f"Unknown scenario '{key}'. Known scenarios: {known}") from None


def reset_cache() -> None:
    """Forget the loaded store (tests only)."""
    global _store
    _store = None
