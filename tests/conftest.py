"""Shared test fixtures and configuration."""

import dataclasses

import pytest
import torch
import numpy as np

from neurite.components.dendrites.biological_config import BiologicalConfig
from neurite.units import ms_to_ns


@pytest.fixture(autouse=True)
def set_random_seed():
    """Ensure reproducible tests by setting all random seeds.

    This fixture runs automatically for every test to ensure deterministic behavior.
    Tests that explicitly need different seeds can override this.
    """
    torch.manual_seed(42)
    np.random.seed(42)


class FakeClock:
    """Manually advanced nanosecond clock for integration modes and channels."""

    def __init__(self, start_ns: int = 1_000_000_000_000):
        self.now_ns = start_ns

    def __call__(self) -> int:
        return self.now_ns

    def advance_ms(self, duration_ms: float) -> None:
        self.now_ns += ms_to_ns(duration_ms)


@pytest.fixture
def clock():
    """Fresh fake clock."""
    return FakeClock()


@pytest.fixture
def quiet_config():
    """Biological config without noise, jitter or spatial attenuation (τ = 20 ms)."""
    return BiologicalConfig(
        membrane_time_constant_ms=20.0,
        spatial_decay_factor=0.0,
        membrane_noise=0.0,
        temporal_jitter_ms=0.0,
    )


@pytest.fixture
def make_quiet_config(quiet_config):
    """Variant of ``quiet_config`` with field overrides."""
    def _make(**overrides):
        return dataclasses.replace(quiet_config, **overrides)
    return _make
