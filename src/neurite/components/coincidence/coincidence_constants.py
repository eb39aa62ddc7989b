"""
Standard coincidence detection parameter values used across Neurite.

This module defines biologically-motivated constants for the coincidence
detectors that gate dendritic spikes in ``ActiveDendriteMode``.

Biological Basis:
=================

NMDA Receptors as Coincidence Detectors:
----------------------------------------
NMDA receptors conduct only when two conditions hold at once:
- Presynaptic glutamate is bound (ligand presence)
- The membrane is depolarized enough to expel the Mg2+ block
  (roughly above -45 mV, or during a back-propagating action potential)

When several clustered inputs arrive within a few milliseconds of each other
and the branch is depolarized, the resulting NMDA plateau amplifies the local
response and admits calcium that drives plasticity.

Temporal Windows:
-----------------
- SHORT (2ms): Sub-millisecond-precise auditory coincidence detectors
- DEFAULT (5ms): Typical cortical coincidence window
- LONG (10ms): Broad integration on distal branches

References:
-----------
- Schiller et al. (2000): NMDA spikes in basal dendrites of cortical pyramidal neurons
- Larkum et al. (2009): Synaptic integration in tuft dendrites of layer 5 pyramidal neurons
- Jahr & Stevens (1990): Voltage dependence of NMDA-activated macroscopic conductances

Usage:
======
    from neurite.components.coincidence.coincidence_constants import (
        COINCIDENCE_TEMPORAL_WINDOW_MS, COINCIDENCE_VOLTAGE_THRESHOLD,
    )

Author: Neurite Project
Date: March 2026
"""

# =============================================================================
# TEMPORAL WINDOWS (milliseconds)
# =============================================================================

COINCIDENCE_TEMPORAL_WINDOW_MS = 5.0
"""Default coincidence window (ms)."""

COINCIDENCE_TEMPORAL_WINDOW_SHORT_MS = 2.0
"""Narrow coincidence window (ms)."""

COINCIDENCE_TEMPORAL_WINDOW_LONG_MS = 10.0
"""Broad coincidence window (ms)."""

BACKPROP_WINDOW_MS = 5.0
"""How long after a somatic spike a back-propagating action potential keeps
NMDA receptors unblocked (ms)."""

# =============================================================================
# INPUT REQUIREMENTS
# =============================================================================

COINCIDENCE_MIN_INPUTS = 2
"""Minimum number of inputs inside the window."""

COINCIDENCE_CURRENT_THRESHOLD = 1.8
"""Summed excitatory drive needed for NMDA activation (ligand presence)."""

COINCIDENCE_MINIMUM_SUMMED_VALUE = 0.5
"""Summed drive needed by the simple temporal detector."""

# =============================================================================
# VOLTAGE (mV)
# =============================================================================

COINCIDENCE_VOLTAGE_THRESHOLD = -45.0
"""Membrane voltage above which the Mg2+ block is relieved (mV)."""

NMDA_VOLTAGE_THRESHOLD_MIN = -80.0
"""Lowest accepted NMDA unblock threshold (mV)."""

NMDA_VOLTAGE_THRESHOLD_MAX = -20.0
"""Highest accepted NMDA unblock threshold (mV)."""

# =============================================================================
# AMPLIFICATION
# =============================================================================

COINCIDENCE_AMPLIFICATION_FACTOR = 1.2
"""Multiplicative boost applied to the net current on detection."""

COINCIDENCE_CURRENT_BOOST = 1.0
"""Additive current contributed by the dendritic spike."""

COINCIDENCE_CALCIUM_BOOST = 0.5
"""Calcium influx associated with a detected coincidence."""
