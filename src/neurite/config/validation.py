"""
Configuration validation for Neurite.

This module provides validation functions and declarative validation patterns
to catch configuration errors before a channel, integration mode or
coincidence detector is constructed.

Validation Features:
- Declarative validation rules via ValidatedConfig mixin
- Predefined validators (positive, finite, range, etc.)
- Biological plausibility constraints expressed as range rules

Author: Neurite Project
Date: March 2026
"""

from __future__ import annotations

import math
from typing import Any, Callable, Dict, List, Tuple

from neurite.errors import ConfigurationError


# =============================================================================
# DECLARATIVE VALIDATION FRAMEWORK
# =============================================================================


class ValidatorRegistry:
    """Registry of predefined validation rules.

    Usage:
        validator = ValidatorRegistry.get_validator('positive')
        validator(20.0, 'membrane_time_constant_ms')  # Passes
        validator(-1.0, 'membrane_time_constant_ms')  # Raises ConfigurationError
    """

    _validators: Dict[str, Callable[[Any, str], None]] = {}

    @classmethod
    def register(cls, name: str, validator: Callable[[Any, str], None]) -> None:
        """Register a validation function."""
        cls._validators[name] = validator

    @classmethod
    def get_validator(cls, rule: str) -> Callable[[Any, str], None]:
        """Get validator by name or parse compound rule."""
        # Handle range rules: range(min, max)
        if rule.startswith('range('):
            return cls._parse_range_rule(rule)

        if rule in cls._validators:
            return cls._validators[rule]

        raise ValueError(f"Unknown validation rule: {rule}")

    @classmethod
    def _parse_range_rule(cls, rule: str) -> Callable[[Any, str], None]:
        """Parse range(min, max) rules."""
        inner = rule[6:-1]  # Remove "range(" and ")"
        parts = [p.strip() for p in inner.split(',')]

        if len(parts) != 2:
            raise ValueError(f"Invalid range rule format: {rule}")

        min_val = float(parts[0])
        max_val = float(parts[1])

        def range_validator(value: Any, name: str) -> None:
            _require_number(value, name)
            if not (min_val <= value <= max_val):
                raise ConfigurationError(
                    f"{name}={value} outside valid range [{min_val}, {max_val}]"
                )

        return range_validator


def _require_number(value: Any, name: str) -> None:
    # bool is an int subclass but never a meaningful biophysical quantity
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"{name} must be numeric, got {type(value).__name__}")


def _register_builtin_validators() -> None:
    """Register standard validation rules."""

    def positive(value: Any, name: str) -> None:
        """Value must be > 0."""
        _require_number(value, name)
        if value <= 0:
            raise ConfigurationError(f"{name}={value} must be positive")

    def non_negative(value: Any, name: str) -> None:
        """Value must be >= 0."""
        _require_number(value, name)
        if value < 0:
            raise ConfigurationError(f"{name}={value} must be non-negative")

    def finite(value: Any, name: str) -> None:
        """Value must be finite (not inf or nan)."""
        _require_number(value, name)
        if not math.isfinite(value):
            raise ConfigurationError(f"{name}={value} must be finite (not inf/nan)")

    def positive_integer(value: Any, name: str) -> None:
        """Value must be a positive integer."""
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigurationError(f"{name} must be integer, got {type(value).__name__}")
        if value <= 0:
            raise ConfigurationError(f"{name}={value} must be positive integer")

    ValidatorRegistry.register('positive', positive)
    ValidatorRegistry.register('non_negative', non_negative)
    ValidatorRegistry.register('finite', finite)
    ValidatorRegistry.register('positive_integer', positive_integer)


_register_builtin_validators()


class ValidatedConfig:
    """Mixin for declarative config validation.

    Usage:
        @dataclass
        class MyConfig(ValidatedConfig):
            tau_ms: float = 20.0
            noise: float = 0.01

            _validation_rules = {
                'tau_ms': ('positive', 'finite'),
                'noise': ('non_negative',),
            }

            def __post_init__(self):
                self.validate_config()
    """

    _validation_rules: Dict[str, Tuple[str, ...]] = {}

    def validate_config(self) -> None:
        """Validate configuration based on _validation_rules.

        Should be called from __post_init__() or manually.

        Raises:
            ConfigurationError: If any validation fails
        """
        errors: List[str] = []

        for field_name, rules in self._validation_rules.items():
            if not hasattr(self, field_name):
                errors.append(f"Validation rule for non-existent field: {field_name}")
                continue

            value = getattr(self, field_name)

            for rule in rules:
                try:
                    validator = ValidatorRegistry.get_validator(rule)
                    validator(value, field_name)
                except ConfigurationError as e:
                    errors.append(str(e))

        if errors:
            error_msg = (
                f"{self.__class__.__name__} validation failed:\n"
                + "\n".join(f"  • {err}" for err in errors)
            )
            raise ConfigurationError(error_msg)
