"""Shared utilities for Neurite."""

from neurite.utils.rng import (
    MembraneNoiseGenerator,
    gaussian_from_uniform,
    gaussian_sample,
    make_generator,
)

__all__ = [
    "MembraneNoiseGenerator",
    "gaussian_from_uniform",
    "gaussian_sample",
    "make_generator",
]
