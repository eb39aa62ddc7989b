"""Unit types for dimensional analysis in dendritic computations.

Prevents mixing incompatible quantities (currents vs conductances vs voltages).
Uses Python's NewType for zero-runtime-cost type checking with mypy/pyright.

Unlike a normalized point-neuron model, the dendritic integration core works
in physiological units: membrane voltages in mV, conductances in pS,
concentrations in µM and durations in ms. Currents are expressed in the same
abstract "current units" as synaptic signal values so that channel currents
and synaptic drive can be summed directly.

Example usage:
    from neurite.units import Conductance, Current, Voltage

    def channel_current(g: Conductance, v: Voltage, e_rev: Voltage) -> Current:
        return conductance_to_current(g, v, e_rev)
"""

from typing import NewType

# =============================================================================
# ELECTRICAL UNITS
# =============================================================================

Voltage = NewType("Voltage", float)
"""Membrane or reversal potential (mV).

- Resting potential ≈ -70 mV
- Sodium reversal ≈ +60 mV
- Potassium reversal ≈ -90 mV
"""

Conductance = NewType("Conductance", float)
"""Channel conductance (pS), always in [0, g_max]."""

Current = NewType("Current", float)
"""Membrane current (current units, same scale as synaptic signal values).

- Positive = depolarizing (inward for cations)
- Negative = hyperpolarizing (outward)

Physical interpretation: I = g × (E - V)
"""

Concentration = NewType("Concentration", float)
"""Ion or ligand concentration (µM for Ca2+/ligands, mM for Na+/K+)."""

# =============================================================================
# TEMPORAL UNITS
# =============================================================================

TimeMS = NewType("TimeMS", float)
"""Duration in milliseconds."""

TimestampNS = NewType("TimestampNS", int)
"""Absolute timestamp in nanoseconds (``time.time_ns()`` domain)."""

NS_PER_MS = 1_000_000
"""Nanoseconds per millisecond."""

# =============================================================================
# CONVERSION FUNCTIONS
# =============================================================================


def conductance_to_current(g: Conductance, v_mem: Voltage, e_reversal: Voltage) -> Current:
    """Convert conductance to current using Ohm's law.

    I = g × (E - V)

    Args:
        g: Conductance
        v_mem: Membrane potential
        e_reversal: Reversal potential for this conductance

    Returns:
        Current (positive = depolarizing)
    """
    return Current(g * (e_reversal - v_mem))


def ns_to_ms(duration_ns: int) -> TimeMS:
    """Convert a nanosecond duration to milliseconds."""
    return TimeMS(duration_ns / NS_PER_MS)


def ms_to_ns(duration_ms: float) -> int:
    """Convert a millisecond duration to whole nanoseconds."""
    return int(round(duration_ms * NS_PER_MS))
