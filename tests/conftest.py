"""
Shared pytest fixtures for the bigrational test suite.

This module provides:
- Settings isolation (each test starts from a fresh, env-derived Settings)
- A helper to override settings through environment variables
- Helpers for Pydantic validation errors and canonical-form checks
"""

import math
from typing import Any, Type

import pytest
from pydantic import BaseModel, ValidationError

from bigrational.config import get_settings
from bigrational.fraction import Fraction


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop cached settings before and after every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings_env(monkeypatch):
    """Override settings via BIGRATIONAL_* environment variables."""
    def _set(**values: Any):
        for key, value in values.items():
            monkeypatch.setenv(f"BIGRATIONAL_{key}", str(value))
        get_settings.cache_clear()
        return get_settings()
    return _set


@pytest.fixture
def assert_validation_error():
    """Helper to assert that validating raw data raises ValidationError."""
    def _assert_validation(
        model_class: Type[BaseModel],
        data: dict[str, Any],
        expected_field: str | None = None,
    ) -> ValidationError:
        """
        Assert that validating ``data`` against a model raises ValidationError.

        Args:
            model_class: The Pydantic model class
            data: Invalid data to validate
            expected_field: Expected field name in error (optional)

        Returns:
            The ValidationError that was raised
        """
        with pytest.raises(ValidationError) as exc_info:
            model_class.model_validate(data)

        error = exc_info.value
        if expected_field:
            field_errors = [e for e in error.errors() if e['loc'][0] == expected_field]
            assert len(field_errors) > 0, f"Expected error for field '{expected_field}' not found"

        return error

    return _assert_validation


@pytest.fixture
def assert_canonical():
    """Helper to assert that a Fraction is in lowest terms with a positive denominator."""
    def _assert_canonical(value: Fraction) -> None:
        assert value.denominator > 0, f"{value!r} has a non-positive denominator"
        assert math.gcd(value.numerator, value.denominator) == 1, f"{value!r} is not reduced"
    return _assert_canonical
