"""
Registration Suite Models

Data structures for the registration scenarios.
Scenario inputs come from the fixture file, NOT from test code.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from .errors import FixtureError


class ScenarioName(str, Enum):
    """Named scenarios present in the fixture file."""

    VALID_USER = "validUser"
    INVALID_EMAIL = "invalidEmail"
    PASSWORD_MISMATCH = "passwordMismatch"
    NON_NUMERIC_AGE = "nonNumericAge"
    NEGATIVE_AGE = "negativeAge"
    DUPLICATE_EMAIL = "duplicateEmail"
    INVALID_NAME = "invalidName"
    SHORT_PASSWORD = "shortPassword"
    KEYBOARD_NAVIGATION = "keyboardNavigation"


class FieldId:
    """DOM ids of the form fields, used for the ``<id>-error`` elements."""

    FULL_NAME = "fullname"
    EMAIL = "email"
    AGE = "age"
    PASSWORD = "password"
    CONFIRM_PASSWORD = "confirmPassword"

    REQUIRED = (FULL_NAME, EMAIL, PASSWORD, CONFIRM_PASSWORD)


class Messages:
    """User-facing copy rendered by the application under test."""

    SUCCESS_TEMPLATE = "Registro exitoso. Bienvenido/a, {name}!"

    INVALID_EMAIL = "El email no es válido"
    DUPLICATE_EMAIL = "Este email ya está registrado"
    PASSWORD_MISMATCH = "Las contraseñas no coinciden"
    INVALID_AGE = "La edad debe ser un número"
    INVALID_NAME = "El nombre solo puede contener letras y espacios"
    SHORT_PASSWORD = "La contraseña debe tener al menos 6 caracteres"

    @classmethod
    def success(cls, name: str) -> str:
        return cls.SUCCESS_TEMPLATE.format(name=name)


# Fixture key -> UserRecord attribute
FIELD_KEYS = {
    "fullName": "full_name",
    "email": "email",
    "age": "age",
    "password": "password",
    "confirmPassword": "confirm_password",
}

REQUIRED_KEYS = ("fullName", "email", "password", "confirmPassword")


@dataclass(frozen=True)
class UserRecord:
    """
    One candidate submission of the registration form.

    Loaded from the fixture file and never mutated afterwards.
    """

    full_name: str
    email: str
    password: str
    confirm_password: str
    age: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], name: str = "<record>") -> "UserRecord":
        """Create from dictionary (loaded from the fixture file)."""
        if not isinstance(data, dict):
            raise FixtureError(f"Scenario '{name}' must be an object, got {type(data).__name__}")

        missing = [key for key in REQUIRED_KEYS if key not in data]
        if missing:
            raise FixtureError(f"Scenario '{name}' is missing fields: {', '.join(missing)}")

        for key in FIELD_KEYS:
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                raise FixtureError(
                    f"Scenario '{name}' field '{key}' must be a string, got {type(value).__name__}"
                )

        return cls(
            full_name=data["fullName"],
            email=data["email"],
            password=data["password"],
            confirm_password=data["confirmPassword"],
            age=data.get("age"),
        )

    def to_form_data(self) -> Dict[str, str]:
        """Return the defined fields keyed like the fixture file."""
        form_data = {}
        for key, attr in FIELD_KEYS.items():
            value = getattr(self, attr)
            if value is not None:
                form_data[key] = value
        return form_data


@dataclass
class FieldErrorState:
    """Error indicator state of one field, read from the live page."""

    field_id: str
    visible: bool
    text: Optional[str] = None
