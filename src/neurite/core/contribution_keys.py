"""Standard key names for ``IntegratedPotential.channel_contributions``.

Every integration mode reports the mechanisms that shaped a result under these
keys, so tests and analysis code can inspect a tick without knowing which mode
produced it. Per-channel currents are reported under the channel's own name.

Usage:
======
    from neurite.core.contribution_keys import ContributionKeys as CK

    result = mode.process(snapshot)
    if result is not None:
        print(result.channel_contributions.get(CK.SHUNT_FACTOR))

Author: Neurite Project
Date: March 2026
"""

from __future__ import annotations


class ContributionKeys:
    """Standard contribution key names."""

    # =========================================================================
    # Summation
    # =========================================================================
    EXCITATION = "excitation"
    """Decayed excitatory drive before shunting."""

    INHIBITION = "inhibition"
    """Decayed inhibitory drive (stored as a positive magnitude)."""

    NOISE = "membrane_noise"
    """Total membrane noise added this tick."""

    INPUT_COUNT = "input_count"
    """Number of buffered inputs that contributed."""

    # =========================================================================
    # Nonlinearities
    # =========================================================================
    SHUNT_FACTOR = "shunt_factor"
    """Divisive inhibition factor applied to excitation (floor..1)."""

    SATURATED_INPUTS = "saturated_inputs"
    """Number of inputs clamped to the maximum synaptic effect."""

    NMDA_SPIKE = "nmda_spike"
    """Fixed NMDA-like boost added by the fallback dendritic spike rule."""

    COINCIDENCE_CURRENT = "coincidence_current"
    """Additional current contributed by a coincidence detector."""

    CALCIUM_INFLUX = "calcium_influx"
    """Calcium influx associated with a dendritic spike."""


__all__ = ["ContributionKeys"]
