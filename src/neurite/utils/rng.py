"""Random number utilities for Neurite: deterministic membrane noise and Gaussian timing jitter."""

from __future__ import annotations

import math
import time
from typing import Optional

import torch

LCG_MULTIPLIER = 1103515245
LCG_INCREMENT = 12345
LCG_MODULUS = 1 << 31


def gaussian_from_uniform(u1: torch.Tensor, u2: torch.Tensor) -> torch.Tensor:
    """Convert two independent uniform(0,1) tensors to a standard Gaussian(0,1) tensor using Box-Muller."""
    return torch.sqrt(-2.0 * torch.log(u1)) * torch.cos(2.0 * math.pi * u2)


def make_generator(seed: Optional[int] = None) -> torch.Generator:
    """Create a CPU torch.Generator, seeded explicitly or from the global torch RNG."""
    generator = torch.Generator()
    if seed is None:
        seed = int(torch.randint(0, 2**62, (1,)).item())
    generator.manual_seed(seed % (2**63))
    return generator


def gaussian_sample(generator: torch.Generator, std: float) -> float:
    """Draw a single N(0, std²) sample from ``generator``."""
    if std <= 0:
        return 0.0
    # Shift away from 0 so log() stays finite
    u = torch.rand(2, generator=generator, dtype=torch.float64).clamp_min(1e-12)
    return float(gaussian_from_uniform(u[0], u[1]).item()) * std


class MembraneNoiseGenerator:
    """Deterministic pseudo-noise for thermal and channel-gating fluctuations.

    Each sample mixes three sinusoidal taps of the input's arrival timestamp,
    the current seed and the batch size, averages them and scales by the
    configured noise level. The seed then advances with a linear congruential
    step, so two generators started from the same seed and fed the same
    timestamps produce identical sequences.

    This is a noise *model*, not a statistical RNG: samples are bounded by
    ``±2 × level`` and roughly zero-centered.
    """

    def __init__(self, level: float, seed: Optional[int] = None):
        self.level = level
        self.seed = time.time_ns() if seed is None else int(seed)

    @property
    def enabled(self) -> bool:
        return self.level > 0

    def sample(self, arrival_time_ns: int, batch_size: int, advance: bool = True) -> float:
        """Return one noise sample and (optionally) advance the seed.

        Args:
            arrival_time_ns: Arrival timestamp of the input the noise is added to
            batch_size: Number of inputs in the batch being processed
            advance: Step the LCG after sampling
        """
        if not self.enabled:
            return 0.0

        t = float(arrival_time_ns)
        seed_factor = float(self.seed % 1_000_000)

        noise1 = math.sin(t * 1e-9 * 11.0 + seed_factor * 1e-6)
        noise2 = math.cos(t * 1e-9 * 17.0 + seed_factor * 1e-5)
        noise3 = math.sin(seed_factor * 0.001 + batch_size * 0.1)
        noise = (noise1 + noise2 + noise3) / 3.0 * self.level * 2.0

        if advance:
            self.advance()
        return noise

    def advance(self) -> int:
        """Step the linear congruential seed and return the new value."""
        self.seed = (self.seed * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        return self.seed
