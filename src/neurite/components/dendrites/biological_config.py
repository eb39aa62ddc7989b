"""
Configuration for dendritic integration modes.

- ``BiologicalConfig``: membrane and branch parameters shared by the buffering
  modes (time constants, spatial attenuation, noise, arrival jitter)
- ``ActiveDendriteConfig``: nonlinearity parameters of ``ActiveDendriteMode``
- Presets for the three cell types characterised in the literature:
  cortical pyramidal, hippocampal CA1 pyramidal and fast-spiking interneuron

Biological basis:
- Membrane time constant τ = Rm × Cm sets how long a PSP lingers
  (8 ms in fast-spiking interneurons, ~35 ms in CA1 pyramids)
- Different branches filter differently: thin distal tufts integrate slowly,
  perisomatic compartments quickly
- Arrival jitter reflects axonal and synaptic release variability

References:
- Spruston (2008): Pyramidal neurons: dendritic structure and synaptic integration
- Magee (2000): Dendritic integration of excitatory synaptic input
- Hu et al. (2014): Fast-spiking, parvalbumin+ GABAergic interneurons
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from typing import Dict, Optional, Union

from neurite.components.coincidence.detector import BaseDetectorConfig, CoincidenceDetector
from neurite.components.dendrites.dendrite_constants import (
    DENDRITIC_SPIKE_CALCIUM_BOOST,
    DENDRITIC_SPIKE_THRESHOLD,
    JITTER_CORTICAL_MS,
    JITTER_HIPPOCAMPAL_MS,
    JITTER_INTERNEURON_MS,
    MAX_SYNAPTIC_EFFECT,
    NMDA_SPIKE_AMPLITUDE,
    NOISE_CORTICAL,
    NOISE_HIPPOCAMPAL,
    NOISE_INTERNEURON,
    SHUNTING_FLOOR,
    SHUNTING_STRENGTH,
    SPATIAL_DECAY_CORTICAL,
    SPATIAL_DECAY_HIPPOCAMPAL,
    SPATIAL_DECAY_INTERNEURON,
    TAU_APICAL_HIPPOCAMPAL_MS,
    TAU_APICAL_MS,
    TAU_BASAL_HIPPOCAMPAL_MS,
    TAU_BASAL_MS,
    TAU_DISTAL_HIPPOCAMPAL_MS,
    TAU_DISTAL_MS,
    TAU_MEMBRANE_CORTICAL_MS,
    TAU_MEMBRANE_HIPPOCAMPAL_MS,
    TAU_MEMBRANE_INTERNEURON_MS,
    TAU_PROXIMAL_HIPPOCAMPAL_MS,
    TAU_PROXIMAL_MS,
    V_DENDRITIC_SPIKE_THRESHOLD,
    V_REST_CORTICAL,
    V_REST_HIPPOCAMPAL,
    V_REST_INTERNEURON,
)
from neurite.config.validation import ValidatedConfig
from neurite.errors import ConfigurationError


@dataclass
class BiologicalConfig(ValidatedConfig):
    """Membrane parameters of a buffering integration mode.

    Attributes:
        membrane_time_constant_ms: Default decay τ for inputs whose branch has
            no time constant of its own. τ = 0 makes buffered inputs decay
            away completely.
        resting_potential: Voltage the channel chain sees before the first
            snapshot arrives (mV)
        branch_time_constants: τ per source id or branch label
            ('apical', 'basal', 'distal', 'proximal', ...)
        spatial_decay_factor: Enables branch-label attenuation when > 0; at
            <= 0 every input keeps its full amplitude
        membrane_noise: Noise level; 0 disables noise
        temporal_jitter_ms: Standard deviation of Gaussian arrival jitter
        leak_conductance: Legacy per-ms leak factor. Decay is computed
            exactly from τ, so this value is ignored; setting it warns.
        noise_seed: Fixed seed for membrane noise and jitter (reproducible
            runs); None seeds from the clock
    """

    membrane_time_constant_ms: float = TAU_MEMBRANE_CORTICAL_MS
    resting_potential: float = V_REST_CORTICAL
    branch_time_constants: Dict[str, float] = field(default_factory=dict)
    spatial_decay_factor: float = SPATIAL_DECAY_CORTICAL
    membrane_noise: float = NOISE_CORTICAL
    temporal_jitter_ms: float = JITTER_CORTICAL_MS
    leak_conductance: Optional[float] = None
    noise_seed: Optional[int] = None

    _validation_rules = {
        'membrane_time_constant_ms': ('non_negative', 'finite'),
        'resting_potential': ('finite', 'range(-120, 0)'),
        'spatial_decay_factor': ('finite',),
        'membrane_noise': ('non_negative', 'finite'),
        'temporal_jitter_ms': ('non_negative', 'finite'),
    }

    def __post_init__(self) -> None:
        self.validate_config()
        for branch, tau in self.branch_time_constants.items():
            if isinstance(tau, bool) or not isinstance(tau, (int, float)) or tau < 0:
                raise ConfigurationError(
                    f"branch_time_constants[{branch!r}]={tau!r} must be a non-negative number"
                )
        if self.leak_conductance is not None:
            warnings.warn(
                "BiologicalConfig.leak_conductance is ignored; decay is computed "
                "exactly from membrane_time_constant_ms",
                DeprecationWarning,
                stacklevel=3,
            )


@dataclass
class ActiveDendriteConfig:
    """Nonlinearity parameters of ``ActiveDendriteMode``.

    Non-positive values of the first four fields fall back to their defaults
    when the mode is constructed.

    Attributes:
        max_synaptic_effect: Per-input saturation bound (±)
        shunting_strength: Inhibition → divisive factor
        dendritic_spike_threshold: Net current needed for the fallback spike
        nmda_spike_amplitude: Current added by the fallback spike
        voltage_threshold: Accumulator level the fallback spike requires (mV)
        calcium_boost: Calcium current added by the fallback spike
        shunting_floor: Lower bound of the shunt factor
        coincidence_detector: Detector config (built at construction) or a
            ready detector instance; None uses the fallback spike rule
    """

    max_synaptic_effect: float = MAX_SYNAPTIC_EFFECT
    shunting_strength: float = SHUNTING_STRENGTH
    dendritic_spike_threshold: float = DENDRITIC_SPIKE_THRESHOLD
    nmda_spike_amplitude: float = NMDA_SPIKE_AMPLITUDE
    voltage_threshold: float = V_DENDRITIC_SPIKE_THRESHOLD
    calcium_boost: float = DENDRITIC_SPIKE_CALCIUM_BOOST
    shunting_floor: float = SHUNTING_FLOOR
    coincidence_detector: Optional[Union[BaseDetectorConfig, CoincidenceDetector]] = None

    def with_defaults(self) -> ActiveDendriteConfig:
        """Copy with non-positive core parameters replaced by their defaults."""
        return ActiveDendriteConfig(
            max_synaptic_effect=self.max_synaptic_effect if self.max_synaptic_effect > 0 else MAX_SYNAPTIC_EFFECT,
            shunting_strength=self.shunting_strength if self.shunting_strength > 0 else SHUNTING_STRENGTH,
            dendritic_spike_threshold=(
                self.dendritic_spike_threshold if self.dendritic_spike_threshold > 0 else DENDRITIC_SPIKE_THRESHOLD
            ),
            nmda_spike_amplitude=self.nmda_spike_amplitude if self.nmda_spike_amplitude > 0 else NMDA_SPIKE_AMPLITUDE,
            voltage_threshold=self.voltage_threshold,
            calcium_boost=max(0.0, self.calcium_boost),
            shunting_floor=min(1.0, max(0.0, self.shunting_floor)),
            coincidence_detector=self.coincidence_detector,
        )


# =============================================================================
# Presets
# =============================================================================


def cortical_pyramidal_config() -> BiologicalConfig:
    """Layer 2/3 / layer 5 cortical pyramidal neuron.

    τ = 20 ms, moderate spatial decay and noise, 0.5 ms jitter; apical and
    distal branches integrate more slowly than basal and proximal ones.
    """
    return BiologicalConfig(
        membrane_time_constant_ms=TAU_MEMBRANE_CORTICAL_MS,
        resting_potential=V_REST_CORTICAL,
        branch_time_constants={
            "apical": TAU_APICAL_MS,
            "basal": TAU_BASAL_MS,
            "distal": TAU_DISTAL_MS,
            "proximal": TAU_PROXIMAL_MS,
        },
        spatial_decay_factor=SPATIAL_DECAY_CORTICAL,
        membrane_noise=NOISE_CORTICAL,
        temporal_jitter_ms=JITTER_CORTICAL_MS,
    )


def hippocampal_config() -> BiologicalConfig:
    """CA1 pyramidal neuron: slow membrane (τ = 35 ms) and compact integration."""
    return BiologicalConfig(
        membrane_time_constant_ms=TAU_MEMBRANE_HIPPOCAMPAL_MS,
        resting_potential=V_REST_HIPPOCAMPAL,
        branch_time_constants={
            "apical": TAU_APICAL_HIPPOCAMPAL_MS,
            "basal": TAU_BASAL_HIPPOCAMPAL_MS,
            "distal": TAU_DISTAL_HIPPOCAMPAL_MS,
            "proximal": TAU_PROXIMAL_HIPPOCAMPAL_MS,
        },
        spatial_decay_factor=SPATIAL_DECAY_HIPPOCAMPAL,
        membrane_noise=NOISE_HIPPOCAMPAL,
        temporal_jitter_ms=JITTER_HIPPOCAMPAL_MS,
    )


def interneuron_config() -> BiologicalConfig:
    """Fast-spiking interneuron: leaky membrane (τ = 8 ms), a single compact dendrite."""
    return BiologicalConfig(
        membrane_time_constant_ms=TAU_MEMBRANE_INTERNEURON_MS,
        resting_potential=V_REST_INTERNEURON,
        branch_time_constants={
            "dendrite": TAU_MEMBRANE_INTERNEURON_MS,
        },
        spatial_decay_factor=SPATIAL_DECAY_INTERNEURON,
        membrane_noise=NOISE_INTERNEURON,
        temporal_jitter_ms=JITTER_INTERNEURON_MS,
    )
