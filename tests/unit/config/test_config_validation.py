"""
Tests for the declarative config validation framework.

These tests verify that the predefined rules accept boundary values, reject
bad ones with a message naming the field, and that ``ValidatedConfig``
collects every failure into one ``ConfigurationError``.
"""

from dataclasses import dataclass

import pytest

from neurite.config.validation import ValidatedConfig, ValidatorRegistry
from neurite.errors import ConfigurationError, NeuriteError


@dataclass
class _ExampleConfig(ValidatedConfig):
    tau_ms: float = 20.0
    noise: float = 0.01
    count: int = 3
    v_half: float = -40.0

    _validation_rules = {
        'tau_ms': ('positive', 'finite'),
        'noise': ('non_negative',),
        'count': ('positive_integer',),
        'v_half': ('range(-80, -20)',),
    }

    def __post_init__(self):
        self.validate_config()


@pytest.mark.unit
class TestValidatorRegistry:
    """Predefined rules."""

    @pytest.mark.parametrize("rule,value", [
        ('positive', 1e-9),
        ('non_negative', 0.0),
        ('finite', -1e300),
        ('positive_integer', 1),
        ('range(-80, -20)', -80.0),
        ('range(-80, -20)', -20),
    ])
    def test_accepts(self, rule, value):
        ValidatorRegistry.get_validator(rule)(value, "field")

    @pytest.mark.parametrize("rule,value", [
        ('positive', 0.0),
        ('non_negative', -0.1),
        ('finite', float("nan")),
        ('positive_integer', 2.0),
        ('positive_integer', True),
        ('range(-80, -20)', -10.0),
        ('positive', "1.0"),
    ])
    def test_rejects(self, rule, value):
        with pytest.raises(ConfigurationError, match="field"):
            ValidatorRegistry.get_validator(rule)(value, "field")

    def test_unknown_rule(self):
        with pytest.raises(ValueError, match="Unknown validation rule"):
            ValidatorRegistry.get_validator("prime")

    def test_malformed_range(self):
        with pytest.raises(ValueError, match="Invalid range rule"):
            ValidatorRegistry.get_validator("range(1)")

    def test_register_custom_rule(self):
        def even(value, name):
            if value % 2:
                raise ConfigurationError(f"{name}={value} must be even")

        ValidatorRegistry.register('even', even)
        ValidatorRegistry.get_validator('even')(4, "n")
        with pytest.raises(ConfigurationError):
            ValidatorRegistry.get_validator('even')(3, "n")


@pytest.mark.unit
class TestValidatedConfig:
    """Mixin behaviour."""

    def test_valid_config(self):
        _ExampleConfig()

    def test_errors_are_collected(self):
        with pytest.raises(ConfigurationError) as exc_info:
            _ExampleConfig(tau_ms=-1.0, count=0, v_half=0.0)
        message = str(exc_info.value)
        assert message.startswith("_ExampleConfig validation failed:")
        assert message.count("  • ") == 3

    def test_configuration_error_is_neurite_error(self):
        with pytest.raises(NeuriteError):
            _ExampleConfig(v_half=-100.0)

    def test_rule_for_missing_field(self):
        @dataclass
        class Broken(ValidatedConfig):
            x: float = 1.0
            _validation_rules = {'y': ('positive',)}

        with pytest.raises(ConfigurationError, match="non-existent field: y"):
            Broken().validate_config()
