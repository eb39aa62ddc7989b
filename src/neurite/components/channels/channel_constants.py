"""
Standard ion channel parameter values used across Neurite.

This module defines biologically-motivated constants for the voltage- and
ligand-gated channel families modelled in ``neurite.components.channels``.

Biological Basis:
=================

Channel Families:
-----------------
- Nav1.6 (sodium): fast activation (m), slow inactivation (h); g ∝ m³h
- Kv4.2 / delayed rectifier (potassium): single activation gate; g ∝ n⁴
- Cav1.2 (L-type calcium): activation gate with Ca²⁺-dependent inactivation; g ∝ m²
- GABA-A (ligand-gated chloride): Hill binding with slow desensitization

Reversal Potentials (mV):
-------------------------
Nernst potentials for typical mammalian concentrations:
- E_Na ≈ +60 mV, E_K ≈ -90 mV, E_Ca ≈ +120 mV, E_Cl ≈ -70 mV

References:
-----------
- Hodgkin & Huxley (1952): A quantitative description of membrane current
- Hille (2001): Ion Channels of Excitable Membranes, 3rd ed.
- Catterall (2000): From ionic currents to molecular mechanisms (Nav)
- Hoffman et al. (1997): K+ channel regulation of signal propagation in dendrites
- Farrant & Nusser (2005): Variations on an inhibitory theme (GABA-A)

Usage:
======
    from neurite.components.channels.channel_constants import (
        NAV_CONDUCTANCE_PS, NAV_REVERSAL_MV, NAV_ACTIVATION_V_HALF,
    )

Author: Neurite Project
Date: March 2026
"""

# =============================================================================
# GENERIC CHANNEL TIME CONSTANTS (milliseconds)
# =============================================================================

CHANNEL_ACTIVATION_TAU_MS = 1.0
"""Default activation time constant (ms)."""

CHANNEL_DEACTIVATION_TAU_MS = 2.0
"""Default deactivation time constant (ms)."""

CHANNEL_INACTIVATION_TAU_MS = 10.0
"""Default inactivation time constant (ms)."""

CHANNEL_RECOVERY_TAU_MS = 5.0
"""Default recovery-from-inactivation time constant (ms)."""

# =============================================================================
# INTRACELLULAR CONCENTRATIONS
# =============================================================================

CALCIUM_BASELINE_UM = 0.1
"""Resting intracellular free calcium (µM).

Also the half-inactivation concentration for calcium-dependent inactivation
of L-type channels.
"""

SODIUM_INTRACELLULAR_MM = 10.0
"""Resting intracellular sodium (mM)."""

POTASSIUM_INTRACELLULAR_MM = 140.0
"""Resting intracellular potassium (mM)."""

ATP_BASELINE = 1.0
"""Normalized resting ATP level."""

# =============================================================================
# SODIUM CHANNEL (Nav1.6)
# =============================================================================

NAV_CONDUCTANCE_PS = 20.0
"""Maximum Nav1.6 conductance (pS)."""

NAV_REVERSAL_MV = 60.0
"""Sodium reversal potential (mV)."""

NAV_ACTIVATION_V_HALF = -40.0
"""Half-activation voltage of the m gate (mV)."""

NAV_ACTIVATION_SLOPE = 5.0
"""Slope factor of the m gate (mV)."""

NAV_INACTIVATION_V_HALF = -60.0
"""Half-inactivation voltage of the h gate (mV)."""

NAV_INACTIVATION_SLOPE = 5.0
"""Slope factor of the h gate (mV)."""

NAV_ACTIVATION_TAU_MS = 1.0
"""Activation (m) time constant (ms)."""

NAV_INACTIVATION_TAU_MS = 10.0
"""Inactivation (h) time constant (ms)."""

NAV_GATE_CONDUCTION_MIN = 0.01
"""m and h must both exceed this before any sodium current flows."""

NAV_USE_DEPENDENT_DECAY = 0.98
"""Factor applied to the fast inactivation gate h after each firing contribution."""

NAV_SLOW_INACTIVATION_STEP = 0.1
"""Fraction of the distance to the floor that availability loses per firing contribution."""

NAV_AVAILABILITY_FLOOR = 0.5
"""Lower bound of use-dependent sodium availability.

Repeated firing drives slow inactivation toward this floor but never past it,
so the channel keeps its depolarizing character.
"""

NAV_SLOW_RECOVERY_TAU_MS = 500.0
"""Recovery time constant from use-dependent (slow) inactivation (ms)."""

NAV_OPEN_PROBABILITY_MIN = 0.1
"""m·h product above which the channel opens."""

# =============================================================================
# POTASSIUM CHANNEL (Kv4.2 / delayed rectifier)
# =============================================================================

KV_CONDUCTANCE_PS = 10.0
"""Maximum Kv conductance (pS)."""

KV_REVERSAL_MV = -90.0
"""Potassium reversal potential (mV)."""

KV_ACTIVATION_V_HALF = -30.0
"""Half-activation voltage of the n gate (mV)."""

KV_ACTIVATION_SLOPE = 10.0
"""Slope factor of the n gate (mV)."""

KV_ACTIVATION_TAU_MS = 5.0
"""Activation (n) time constant (ms)."""

KV_OPEN_THRESHOLD = 0.1
"""n gate level above which the channel is reported open."""

# =============================================================================
# CALCIUM CHANNEL (Cav1.2, L-type)
# =============================================================================

CAV_CONDUCTANCE_PS = 5.0
"""Baseline Cav1.2 conductance before facilitation (pS)."""

CAV_MAX_CONDUCTANCE_PS = 7.5
"""Conductance ceiling reached by full calcium-dependent facilitation (pS)."""

CAV_REVERSAL_MV = 120.0
"""Calcium reversal potential (mV)."""

CAV_ACTIVATION_V_HALF = -20.0
"""Half-activation voltage of the m gate (mV)."""

CAV_ACTIVATION_SLOPE = 8.0
"""Slope factor of the m gate (mV)."""

CAV_ACTIVATION_TAU_MS = 3.0
"""Activation (m) time constant (ms)."""

CAV_FACILITATION_RATE = 0.05
"""Fraction of the remaining facilitation headroom gained per influx event."""

CAV_OPEN_THRESHOLD = 0.2
"""m gate level above which the channel may open."""

CAV_CDI_OPEN_MIN = 0.5
"""Minimum calcium-dependent availability for the channel to open."""

# =============================================================================
# GABA-A RECEPTOR (ligand-gated chloride)
# =============================================================================

GABAA_CONDUCTANCE_PS = 15.0
"""Maximum GABA-A conductance (pS)."""

GABAA_REVERSAL_MV = -70.0
"""Chloride reversal potential (mV)."""

GABAA_KD_UM = 5.0
"""Half-maximal GABA concentration (µM)."""

GABAA_HILL_COEFFICIENT = 2.0
"""Binding cooperativity (two GABA binding sites)."""

GABAA_ACTIVATION_TAU_MS = 2.0
"""Activation time constant (ms)."""

GABAA_DESENSITIZATION_TAU_MS = 100.0
"""Desensitization time constant (ms)."""

GABAA_MAX_DESENSITIZATION = 0.8
"""Maximum fraction of receptors that can desensitize."""

GABAA_DESENSITIZATION_KD_UM = 10.0
"""Half-maximal concentration for desensitization (µM)."""

GABAA_OPEN_GATE_MIN = 0.1
"""Ligand-activation gate level above which the receptor is reported open."""

GABAA_USE_DEPENDENT_DECAY = 0.999
"""Fraction of remaining sensitivity kept after each firing contribution."""

GABAA_SENSITIVITY_FLOOR = 0.5
"""Lower bound of use-dependent GABA-A sensitivity."""
