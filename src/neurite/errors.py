"""
Custom exception classes for Neurite.

This module provides:
1. Hierarchical exception classes for different error categories
2. Consistent error message formatting

Exception Hierarchy:
====================
NeuriteError (base) - Base exception for all Neurite-specific errors
├── ConfigurationError - Invalid configuration parameters

Design Philosophy:
==================
- The integration core itself never raises for biological reasons: a blocked
  signal is a channel veto, an insignificant tick is ``None``, and runaway
  values are clamped.
- Exceptions are reserved for construction-time mistakes (bad configs, wrong
  config types), so they surface before a simulation starts.

Author: Neurite Project
Date: March 2026
"""

from __future__ import annotations

# =============================================================================
# Exception Hierarchy
# =============================================================================


class NeuriteError(Exception):
    """Base exception for all Neurite-specific errors.

    All custom exceptions in Neurite inherit from this class, enabling
    code to catch Neurite errors specifically.
    """


class ConfigurationError(NeuriteError):
    """Invalid configuration parameters.

    Raised when configuration values are out of valid range or incompatible
    with each other, or when a component receives a config of the wrong type.
    """
