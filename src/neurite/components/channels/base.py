"""
Ion channel base classes and shared gating kinetics.

Every channel family in Neurite is a stateful gating unit that sits in a
dendritic integration mode's channel chain. For each arriving synaptic signal
the mode calls ``modulate_current()``; the channel relaxes its gates toward
the steady state implied by the current membrane voltage (and ligand or
calcium concentration), and returns the signal together with the channel
current it produces at that voltage. A channel may veto a signal
(``continue=False``), modelling a shunt or block: no later channel runs and
the signal is never buffered.

Gating model (Hodgkin-Huxley style):
- Steady state follows Boltzmann sigmoids:
      x_inf(V) = 1 / (1 + exp(-(V - V_half) / k))   activation (increasing in V)
      x_inf(V) = 1 / (1 + exp((V - V_half) / k))    inactivation (decreasing in V)
- Transients relax exactly toward steady state:
      x(t + dt) = x_inf + (x(t) - x_inf) * exp(-dt / tau)
  with tau chosen by direction: activation/deactivation for activation gates,
  inactivation/recovery for inactivation gates.
- Gating variables are sanitized to [0, 1] (NaN/inf become 0).

Current convention: I = g_eff × (E_rev - V). Positive currents depolarize,
negative currents hyperpolarize, matching the sign of synaptic signal values.

Thread safety: ``handle()`` on an integration mode may run on many threads at
once, so every channel guards its own state with a re-entrant lock.

References:
- Hodgkin & Huxley (1952): A quantitative description of membrane current
- Hille (2001): Ion Channels of Excitable Membranes
"""

from __future__ import annotations

import copy
import logging
import math
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, ClassVar, Dict, Optional, Tuple

from neurite.components.channels.channel_constants import (
    CALCIUM_BASELINE_UM,
    CHANNEL_ACTIVATION_TAU_MS,
    CHANNEL_DEACTIVATION_TAU_MS,
    CHANNEL_INACTIVATION_TAU_MS,
    CHANNEL_RECOVERY_TAU_MS,
)
from neurite.config.validation import ValidatedConfig
from neurite.errors import ConfigurationError
from neurite.signals import NeuralSignal
from neurite.units import conductance_to_current

logger = logging.getLogger(__name__)


class IonType(Enum):
    """Ion selectivity of a channel."""

    SODIUM = "sodium"
    POTASSIUM = "potassium"
    CALCIUM = "calcium"
    CHLORIDE = "chloride"


# =============================================================================
# Channel metadata
# =============================================================================


@dataclass(frozen=True)
class ChannelTrigger:
    """Immutable gating parameters of a channel instance.

    Built once from the channel's config at construction and never mutated
    afterwards; ``get_trigger()`` always returns the same values.
    """

    activation_voltage: float = 0.0
    inactivation_voltage: float = 0.0
    voltage_slope: float = 0.0
    ligand_threshold: float = 0.0
    hill_coefficient: float = 1.0
    calcium_threshold: float = 0.0
    activation_tau_ms: float = CHANNEL_ACTIVATION_TAU_MS
    deactivation_tau_ms: float = CHANNEL_DEACTIVATION_TAU_MS
    inactivation_tau_ms: float = CHANNEL_INACTIVATION_TAU_MS
    recovery_tau_ms: float = CHANNEL_RECOVERY_TAU_MS


@dataclass
class ChannelState:
    """Snapshot of a channel's conformation.

    Attributes:
        is_open: Whether the channel is currently conducting
        conductance: Effective (gating-weighted) conductance, in [0, g_max]
        equilibrium_potential: Reversal potential (mV)
        membrane_voltage: Voltage last seen by the channel (mV)
        calcium_level: Intracellular calcium last seen by the channel (µM)
        opened_at_ns: Timestamp of the last closed→open transition (0 = never)
        inactivated_at_ns: Timestamp of the last inactivation (0 = never)
        gates: Current gating variables by name
    """

    is_open: bool = False
    conductance: float = 0.0
    equilibrium_potential: float = 0.0
    membrane_voltage: float = 0.0
    calcium_level: float = 0.0
    opened_at_ns: int = 0
    inactivated_at_ns: int = 0
    gates: Dict[str, float] = field(default_factory=dict)


@dataclass
class ChannelFeedback:
    """One-shot activity feedback consumed by ``update_kinetics()``.

    Attributes:
        contributed_to_firing: The channel's current helped trigger a spike
        calcium_influx: Calcium entering the cell with the spike (µM)
        current_contribution: Channel current during the spike
        camkii_activity: CaMKII activity proxy (0-1)
        pka_activity: PKA activity proxy (0-1)
        timestamp_ns: When the feedback was generated
    """

    contributed_to_firing: bool = False
    calcium_influx: float = 0.0
    current_contribution: float = 0.0
    camkii_activity: float = 0.0
    pka_activity: float = 0.0
    timestamp_ns: int = 0


@dataclass
class ChannelConfig(ValidatedConfig):
    """Biophysical parameters of one channel instance.

    Families provide their defaults through ``default_config()``; this class
    only holds the generic parameter set.

    Attributes:
        max_conductance: Hard ceiling of effective conductance (pS)
        reversal_potential: Reversal potential of the permeant ion (mV)
        activation_v_half: Half-activation voltage (mV)
        activation_slope: Activation slope factor (mV, > 0)
        inactivation_v_half: Half-inactivation voltage (mV)
        inactivation_slope: Inactivation slope factor (mV, > 0)
        activation_tau_ms: Time constant for activation gates opening
        deactivation_tau_ms: Time constant for activation gates closing
        inactivation_tau_ms: Time constant for inactivation gates closing
        recovery_tau_ms: Time constant for inactivation gates reopening
        ligand_threshold: Ligand concentration for half activation (µM)
        hill_coefficient: Ligand binding cooperativity
        calcium_threshold: Calcium level relevant to calcium-dependent gating (µM)
        block_threshold: When set, the channel vetoes a signal whenever its
            open probability reaches this value (channel-mediated shunt)
    """

    max_conductance: float = 10.0
    reversal_potential: float = 0.0
    activation_v_half: float = -40.0
    activation_slope: float = 5.0
    inactivation_v_half: float = -60.0
    inactivation_slope: float = 5.0
    activation_tau_ms: float = CHANNEL_ACTIVATION_TAU_MS
    deactivation_tau_ms: float = CHANNEL_DEACTIVATION_TAU_MS
    inactivation_tau_ms: float = CHANNEL_INACTIVATION_TAU_MS
    recovery_tau_ms: float = CHANNEL_RECOVERY_TAU_MS
    ligand_threshold: float = 0.0
    hill_coefficient: float = 1.0
    calcium_threshold: float = CALCIUM_BASELINE_UM
    block_threshold: Optional[float] = None

    _validation_rules = {
        'max_conductance': ('non_negative', 'finite'),
        'reversal_potential': ('finite', 'range(-200, 200)'),
        'activation_v_half': ('finite',),
        'activation_slope': ('positive', 'finite'),
        'inactivation_v_half': ('finite',),
        'inactivation_slope': ('positive', 'finite'),
        'activation_tau_ms': ('positive', 'finite'),
        'deactivation_tau_ms': ('positive', 'finite'),
        'inactivation_tau_ms': ('positive', 'finite'),
        'recovery_tau_ms': ('positive', 'finite'),
        'ligand_threshold': ('non_negative',),
        'hill_coefficient': ('positive',),
        'calcium_threshold': ('non_negative',),
    }

    def __post_init__(self) -> None:
        self.validate_config()
        if self.block_threshold is not None and not (0.0 < self.block_threshold <= 1.0):
            raise ConfigurationError(
                f"block_threshold={self.block_threshold} must be in (0, 1]"
            )

    def to_trigger(self) -> ChannelTrigger:
        """Freeze the gating parameters of this config."""
        return ChannelTrigger(
            activation_voltage=self.activation_v_half,
            inactivation_voltage=self.inactivation_v_half,
            voltage_slope=self.activation_slope,
            ligand_threshold=self.ligand_threshold,
            hill_coefficient=self.hill_coefficient,
            calcium_threshold=self.calcium_threshold,
            activation_tau_ms=self.activation_tau_ms,
            deactivation_tau_ms=self.deactivation_tau_ms,
            inactivation_tau_ms=self.inactivation_tau_ms,
            recovery_tau_ms=self.recovery_tau_ms,
        )


# =============================================================================
# Gating helpers
# =============================================================================


def sanitize_gate(value: float) -> float:
    """Clamp a gating variable to [0, 1]; NaN and inf become 0."""
    if not math.isfinite(value):
        return 0.0
    return min(1.0, max(0.0, value))


def boltzmann_activation(voltage: float, v_half: float, slope: float) -> float:
    """Steady-state activation: 1 / (1 + exp(-(V - V_half) / k))."""
    x = -(voltage - v_half) / slope
    if x > 700.0:  # exp overflow
        return 0.0
    return 1.0 / (1.0 + math.exp(x))


def boltzmann_inactivation(voltage: float, v_half: float, slope: float) -> float:
    """Steady-state inactivation: 1 / (1 + exp((V - V_half) / k))."""
    return boltzmann_activation(-voltage, -v_half, slope)


def hill(concentration: float, kd: float, n: float) -> float:
    """Hill binding occupancy: c^n / (Kd^n + c^n)."""
    if concentration <= 0:
        return 0.0
    cn = concentration ** n
    return cn / (kd ** n + cn)


def relax(gate: float, gate_inf: float, dt_ms: float, tau_ms: float) -> float:
    """Exact first-order relaxation of ``gate`` toward ``gate_inf`` over ``dt_ms``."""
    if dt_ms <= 0:
        return sanitize_gate(gate)
    if tau_ms <= 0:
        return sanitize_gate(gate_inf)
    return sanitize_gate(gate_inf + (gate - gate_inf) * math.exp(-dt_ms / tau_ms))


# =============================================================================
# IonChannel base class
# =============================================================================


class IonChannel(ABC):
    """Abstract base class for all channel families.

    Subclasses declare their gates and provide the family-specific pieces:
    steady-state gate values, the conductance fraction (cooperativity), the
    open criterion and the response to activity feedback. The base class owns
    the lock, the relaxation loop, current computation, blocking and state
    bookkeeping.
    """

    ion_type: ClassVar[IonType]
    channel_kind: ClassVar[str]

    activation_gates: ClassVar[Tuple[str, ...]] = ()
    """Gates whose steady state increases with their driving variable."""

    inactivation_gates: ClassVar[Tuple[str, ...]] = ()
    """Gates whose steady state decreases with their driving variable."""

    def __init__(
        self,
        name: str,
        config: Optional[ChannelConfig] = None,
        clock: Callable[[], int] = time.time_ns,
    ):
        if config is None:
            config = self.default_config()
        if not isinstance(config, ChannelConfig):
            raise ConfigurationError(
                f"{type(self).__name__} expects a ChannelConfig, got {type(config).__name__}"
            )

        self._name = name
        self.config = config
        self._trigger = config.to_trigger()
        self._clock = clock
        self._lock = threading.RLock()
        self._closed = False

        self._gates: Dict[str, float] = self._initial_gates()
        self._last_calcium = CALCIUM_BASELINE_UM
        self._was_inactivated = False
        self._state = ChannelState(
            equilibrium_potential=config.reversal_potential,
            calcium_level=CALCIUM_BASELINE_UM,
        )

    # -------------------------------------------------------------------------
    # Family hooks
    # -------------------------------------------------------------------------

    @classmethod
    @abstractmethod
    def default_config(cls) -> ChannelConfig:
        """Default biophysical parameters of this family."""

    @abstractmethod
    def _initial_gates(self) -> Dict[str, float]:
        """Gate values of a freshly constructed channel."""

    @abstractmethod
    def steady_state(
        self,
        voltage: float,
        ligand: float = 0.0,
        calcium: float = CALCIUM_BASELINE_UM,
    ) -> Dict[str, float]:
        """Steady-state value of every gate under the given conditions."""

    @abstractmethod
    def _conductance_fraction(self, for_current: bool = False) -> float:
        """Fraction of max conductance currently available (cooperativity).

        When ``for_current`` is True, families may apply conduction
        thresholds that suppress numerically negligible currents.
        """

    @abstractmethod
    def _open_probability(self, calcium: float) -> float:
        """Open probability in [0, 1] from the current gate values."""

    @abstractmethod
    def _is_open(self, calcium: float) -> bool:
        """Open criterion from the current gate values."""

    @abstractmethod
    def _expected_open_duration_ms(self) -> float:
        """Typical open dwell time of this family (ms)."""

    def _apply_feedback(self, feedback: Optional[ChannelFeedback], dt_ms: float) -> None:
        """Use-dependent modulation; families without any leave this as a no-op.

        Called on every kinetics update, with ``feedback`` None when there was
        no activity to report, so families can also recover over ``dt_ms``.
        """

    def _ligand_from_signal(self, signal: NeuralSignal) -> float:
        """Ligand concentration carried by ``signal`` for ligand-gated families."""
        return 0.0

    def _is_inactivated(self) -> bool:
        return False

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def channel_type(self) -> str:
        return self.channel_kind

    def modulate_current(
        self,
        signal: NeuralSignal,
        voltage: float,
        calcium: float,
    ) -> Tuple[Optional[NeuralSignal], bool, float]:
        """Run one synaptic signal through this channel.

        Gates are relaxed by one activation time step at ``voltage`` before
        the current is computed.

        Returns:
            Tuple of:
                - The (possibly modified) signal, or None when blocked
                - Whether the chain should continue
                - Channel current at ``voltage`` (positive = depolarizing)
        """
        with self._lock:
            ligand = self._ligand_from_signal(signal)
            self._relax_gates(voltage, ligand, calcium, self._trigger.activation_tau_ms)

            fraction = self._conductance_fraction(for_current=True)
            current = float(
                conductance_to_current(
                    self.config.max_conductance * fraction,
                    voltage,
                    self.config.reversal_potential,
                )
            )

            p_open = self._open_probability(calcium)
            self._record_state(voltage, calcium)

            block = self.config.block_threshold
            if block is not None and p_open >= block:
                logger.debug(
                    "%s blocked signal from %r (p_open=%.3f >= %.3f)",
                    self._name, signal.source_id, p_open, block,
                )
                return None, False, current

            return signal, True, current

    def should_open(
        self,
        voltage: float,
        ligand_conc: float,
        calcium: float,
        dt_ms: float,
    ) -> Tuple[bool, float, float]:
        """Relax gates for ``dt_ms`` and report the opening decision.

        Returns:
            Tuple of (open, expected open duration in ms, open probability)
        """
        with self._lock:
            self._relax_gates(voltage, abs(ligand_conc), calcium, dt_ms)
            p_open = sanitize_gate(self._open_probability(calcium))
            is_open = self._is_open(calcium)
            self._record_state(voltage, calcium)
            return is_open, self._expected_open_duration_ms(), p_open

    def update_kinetics(
        self,
        feedback: Optional[ChannelFeedback],
        dt_ms: float,
        voltage: float,
    ) -> None:
        """Evolve gates for ``dt_ms`` and apply use-dependent modulation."""
        with self._lock:
            self._relax_gates(voltage, self._kinetics_ligand(), self._last_calcium, dt_ms)
            self._apply_feedback(feedback, dt_ms)
            self._record_state(voltage, self._last_calcium)

    def get_state(self) -> ChannelState:
        """Return a copy of the current channel state."""
        with self._lock:
            state = copy.copy(self._state)
            state.gates = dict(self._gates)
            state.conductance = self._effective_conductance()
            return state

    def get_trigger(self) -> ChannelTrigger:
        return self._trigger

    def get_conductance(self) -> float:
        """Effective (gating-weighted) conductance in [0, max_conductance]."""
        with self._lock:
            return self._effective_conductance()

    def get_reversal_potential(self) -> float:
        return self.config.reversal_potential

    def get_ion_selectivity(self) -> IonType:
        return self.ion_type

    def close(self) -> None:
        """Release the channel. Further use is undefined."""
        with self._lock:
            self._closed = True
            self._state.is_open = False

    @property
    def closed(self) -> bool:
        return self._closed

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r})"

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _kinetics_ligand(self) -> float:
        return 0.0

    def _relax_gates(self, voltage: float, ligand: float, calcium: float, dt_ms: float) -> None:
        targets = self.steady_state(voltage, ligand, calcium)
        trig = self._trigger
        for gate, target in targets.items():
            current = self._gates.get(gate, 0.0)
            if gate in self.inactivation_gates:
                tau = trig.inactivation_tau_ms if target < current else trig.recovery_tau_ms
            else:
                tau = trig.activation_tau_ms if target > current else trig.deactivation_tau_ms
            self._gates[gate] = relax(current, target, dt_ms, tau)

    def _effective_conductance(self) -> float:
        g_max = self.config.max_conductance
        return min(g_max, max(0.0, g_max * self._conductance_fraction()))

    def _record_state(self, voltage: float, calcium: float) -> None:
        now = self._clock()
        was_open = self._state.is_open
        inactivated = self._is_inactivated()

        self._state.is_open = self._is_open(calcium)
        self._state.membrane_voltage = voltage
        self._state.calcium_level = calcium
        self._last_calcium = calcium
        if self._state.is_open and not was_open:
            self._state.opened_at_ns = now
        if inactivated and not self._was_inactivated:
            self._state.inactivated_at_ns = now
        self._was_inactivated = inactivated
