"""
Standard dendritic integration parameter values used across Neurite.

This module defines biologically-motivated constants for dendritic
integration modes, eliminating magic numbers scattered throughout the
integration code.

Biological Basis:
=================

Membrane Time Constants (τ = Rm × Cm):
--------------------------------------
- CORTICAL (20ms): Layer 2/3 and layer 5 pyramidal neurons
- HIPPOCAMPAL (35ms): CA1 pyramidal neurons
- INTERNEURON (8ms): Fast-spiking (parvalbumin+) interneurons

Branch Attenuation:
-------------------
Passive cable filtering attenuates inputs with electrotonic distance:
- PROXIMAL (1.0): Perisomatic inputs arrive essentially unattenuated
- BASAL (0.8): Slight attenuation on basal dendrites
- APICAL (0.7): Moderate attenuation along the apical trunk
- DISTAL (0.5): Tuft inputs lose about half their amplitude

Nonlinearities:
---------------
- Saturation (2.0): Maximum effect of a single synapse (receptor saturation)
- Shunting (0.5 strength, 0.1 floor): Divisive GABA-A inhibition
- Dendritic spike (1.5 threshold, 1.0 amplitude): NMDA plateau boost

References:
-----------
- Spruston (2008): Pyramidal neurons: dendritic structure and synaptic integration
- Magee (2000): Dendritic integration of excitatory synaptic input
- Koch, Poggio & Torre (1983): Nonlinear interactions in a dendritic tree
- Schiller et al. (2000): NMDA spikes in basal dendrites of cortical pyramidal neurons

Usage:
======
    from neurite.components.dendrites.dendrite_constants import (
        TAU_MEMBRANE_CORTICAL_MS, SPATIAL_WEIGHT_DISTAL, SHUNTING_FLOOR,
    )

Author: Neurite Project
Date: March 2026
"""

# =============================================================================
# VOLTAGES (mV)
# =============================================================================

V_REST_CORTICAL = -70.0
"""Typical cortical resting potential (mV)."""

V_REST_HIPPOCAMPAL = -65.0
"""Hippocampal CA1 resting potential (mV)."""

V_REST_INTERNEURON = -75.0
"""Fast-spiking interneuron resting potential (mV)."""

V_DENDRITIC_SPIKE_THRESHOLD = -40.0
"""Somatic accumulator level above which the fallback dendritic spike may fire (mV)."""

V_DENDRITIC_SPIKE_THRESHOLD_STRICT = -45.0
"""More restrictive dendritic spike threshold (mV)."""

# =============================================================================
# MEMBRANE TIME CONSTANTS (milliseconds)
# =============================================================================

TAU_MEMBRANE_CORTICAL_MS = 20.0
"""Cortical pyramidal membrane time constant (ms)."""

TAU_MEMBRANE_HIPPOCAMPAL_MS = 35.0
"""Hippocampal CA1 membrane time constant (ms)."""

TAU_MEMBRANE_INTERNEURON_MS = 8.0
"""Fast-spiking interneuron membrane time constant (ms)."""

TAU_APICAL_MS = 25.0
"""Apical dendrite time constant (ms)."""

TAU_BASAL_MS = 15.0
"""Basal dendrite time constant (ms)."""

TAU_DISTAL_MS = 30.0
"""Distal branch time constant (ms)."""

TAU_PROXIMAL_MS = 10.0
"""Proximal branch time constant (ms)."""

TAU_APICAL_HIPPOCAMPAL_MS = 45.0
"""CA1 apical dendrite time constant (ms)."""

TAU_BASAL_HIPPOCAMPAL_MS = 25.0
"""CA1 basal dendrite time constant (ms)."""

TAU_DISTAL_HIPPOCAMPAL_MS = 50.0
"""CA1 distal tuft time constant (ms)."""

TAU_PROXIMAL_HIPPOCAMPAL_MS = 15.0
"""CA1 proximal time constant (ms)."""

# =============================================================================
# TIMING
# =============================================================================

JITTER_CORTICAL_MS = 0.5
"""Cortical arrival-time jitter (standard deviation, ms)."""

JITTER_HIPPOCAMPAL_MS = 0.3
"""Hippocampal arrival-time jitter (ms)."""

JITTER_INTERNEURON_MS = 1.0
"""Interneuron arrival-time jitter (ms)."""

RECENT_INPUT_WINDOW_MS = 5.0
"""Reference-time heuristic window (ms).

When a tick runs within this window of the most recent buffered arrival,
input ages are measured relative to that arrival instead of the tick time,
so variable delay between enqueue and tick does not add spurious decay.
"""

# =============================================================================
# CURRENTS (current units)
# =============================================================================

MAX_SYNAPTIC_EFFECT = 2.0
"""Default saturation of a single input in ActiveDendriteMode."""

DENDRITIC_SPIKE_THRESHOLD = 1.5
"""Default net current needed for the fallback dendritic spike."""

NMDA_SPIKE_AMPLITUDE = 1.0
"""Default current added by the fallback dendritic spike."""

DENDRITIC_SPIKE_CALCIUM_BOOST = 0.5
"""Calcium current added alongside a fallback dendritic spike."""

CURRENT_MAX_BIOLOGICAL = 100.0
"""Upper clamp of net integrated current."""

CURRENT_MIN_BIOLOGICAL = -100.0
"""Lower clamp of net integrated current."""

CURRENT_NOISE_FLOOR = 0.001
"""Minimum |net current| reported as a result; smaller nets yield None."""

# =============================================================================
# SPATIAL FACTORS
# =============================================================================

SPATIAL_DECAY_CORTICAL = 0.1
"""Default spatial decay factor (cortex)."""

SPATIAL_DECAY_HIPPOCAMPAL = 0.05
"""Weak spatial decay (compact CA1 integration)."""

SPATIAL_DECAY_INTERNEURON = 0.2
"""Strong spatial decay (interneuron)."""

SPATIAL_WEIGHT_PROXIMAL = 1.0
"""No attenuation for proximal inputs."""

SPATIAL_WEIGHT_BASAL = 0.8
"""Slight attenuation for basal inputs."""

SPATIAL_WEIGHT_APICAL = 0.7
"""Moderate attenuation for apical inputs; also the default for unlabeled sources."""

SPATIAL_WEIGHT_DISTAL = 0.5
"""Strong attenuation for distal inputs."""

SPATIAL_WEIGHTS = {
    "proximal": SPATIAL_WEIGHT_PROXIMAL,
    "basal": SPATIAL_WEIGHT_BASAL,
    "apical": SPATIAL_WEIGHT_APICAL,
    "distal": SPATIAL_WEIGHT_DISTAL,
}
"""Branch label → spatial weight."""

# =============================================================================
# SHUNTING
# =============================================================================

SHUNTING_STRENGTH = 0.5
"""Default shunting strength (inhibition → divisive factor)."""

SHUNTING_STRENGTH_STRONG = 0.8
"""Strong shunting."""

SHUNTING_FLOOR = 0.1
"""Minimum shunt factor; inhibition never fully silences excitation."""

# =============================================================================
# NOISE
# =============================================================================

NOISE_CORTICAL = 0.01
"""Cortical membrane noise level."""

NOISE_HIPPOCAMPAL = 0.005
"""Hippocampal membrane noise level."""

NOISE_INTERNEURON = 0.02
"""Interneuron membrane noise level."""

NOISE_DISABLED = 0.0
"""No noise (deterministic tests)."""
