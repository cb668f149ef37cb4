"""
Page Object Models for Playwright E2E Tests

This package provides page objects that encapsulate UI interactions
and provide a clean API for test code.
"""

from .base_page import BasePage
from .registration_page import RegistrationPage

__all__ = [
    "BasePage",
    "RegistrationPage",
]
