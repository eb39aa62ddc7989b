"""
Shared data model for dendritic integration.

- ``MembraneSnapshot``: read-only somatic context the neuron hands to
  ``process()`` once per tick.
- ``TimestampedInput``: a buffered synaptic input, created by ``handle()``
  and drained by ``process()``.
- ``IntegratedPotential``: the single result object of ``handle()`` /
  ``process()``. ``None`` means "nothing significant this call", which is
  distinct from a zero-valued result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from neurite.components.channels.channel_constants import (
    ATP_BASELINE,
    CALCIUM_BASELINE_UM,
    POTASSIUM_INTRACELLULAR_MM,
    SODIUM_INTRACELLULAR_MM,
)
from neurite.components.dendrites.dendrite_constants import V_REST_CORTICAL
from neurite.signals import NeuralSignal


@dataclass(frozen=True)
class MembraneSnapshot:
    """Somatic state at the time of a tick.

    Attributes:
        accumulator: Somatic membrane accumulator (mV scale)
        current_threshold: Dynamic firing threshold
        resting_potential: Resting membrane potential (mV)
        intracellular_calcium: [Ca2+]i (µM)
        intracellular_sodium: [Na+]i (mM)
        intracellular_potassium: [K+]i (mM)
        last_spike_time_ns: Timestamp of the last somatic spike (0 = never)
        recent_spike_count: Spikes within the neuron's recent history window
        back_propagating_spike: A somatic spike is currently back-propagating
            into the dendrites (relieves Mg2+ block of NMDA receptors)
        atp_level: Normalized ATP availability
        metabolic_stress: Normalized metabolic stress (0 = none)
    """

    accumulator: float = V_REST_CORTICAL
    current_threshold: float = 1.0
    resting_potential: float = V_REST_CORTICAL
    intracellular_calcium: float = CALCIUM_BASELINE_UM
    intracellular_sodium: float = SODIUM_INTRACELLULAR_MM
    intracellular_potassium: float = POTASSIUM_INTRACELLULAR_MM
    last_spike_time_ns: int = 0
    recent_spike_count: int = 0
    back_propagating_spike: bool = False
    atp_level: float = ATP_BASELINE
    metabolic_stress: float = 0.0


@dataclass(frozen=True)
class TimestampedInput:
    """A synaptic input waiting in an integration mode's buffer.

    Attributes:
        signal: The signal as it left the channel chain
        arrival_time_ns: Arrival time (possibly jittered) in nanoseconds
        spatial_weight: Distance attenuation applied to the signal value
        channel_currents: Current each channel contributed while the signal
            passed through the chain, by channel name
    """

    signal: NeuralSignal
    arrival_time_ns: int
    spatial_weight: float = 1.0
    channel_currents: Dict[str, float] = field(default_factory=dict)

    @property
    def value(self) -> float:
        return self.signal.value

    @property
    def total_channel_current(self) -> float:
        return sum(self.channel_currents.values())


@dataclass(frozen=True)
class IntegratedPotential:
    """Result of dendritic integration delivered to the soma.

    Attributes:
        net_current: Net current delivered to the somatic accumulator,
            clamped to [-100, 100]
        sodium_current: Sodium channel contribution
        potassium_current: Potassium channel contribution
        calcium_current: Calcium contribution (channels plus dendritic spikes)
        chloride_current: Chloride (GABA-A) contribution
        dendritic_spike: A regenerative dendritic event occurred this tick
        nonlinear_amplification: Multiplicative amplification actually applied
            (1.0 when none)
        channel_contributions: Named per-channel and per-mechanism values for
            introspection (see ``ContributionKeys``)
    """

    net_current: float
    sodium_current: float = 0.0
    potassium_current: float = 0.0
    calcium_current: float = 0.0
    chloride_current: float = 0.0
    dendritic_spike: bool = False
    nonlinear_amplification: float = 1.0
    channel_contributions: Dict[str, float] = field(default_factory=dict)
