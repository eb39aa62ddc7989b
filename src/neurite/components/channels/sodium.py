"""
Voltage-gated sodium channel (Nav1.6).

Nav1.6 is the dominant sodium channel of the axon initial segment and is
also expressed along dendrites, where it supports back-propagating action
potentials and local dendritic spikes.

Gating:
- m (activation): V½ = -40 mV, k = 5 mV, τ ≈ 1 ms
- h (inactivation): V½ = -60 mV, k = 5 mV, τ ≈ 10 ms
- g = g_max × m³ × h × availability

Use-dependent inactivation:
Every spike the channel contributed to scales h by 0.98 and moves a slow
availability factor a tenth of the way toward a floor (0.5). Availability
recovers toward 1.0 with a slow time constant when there is no firing
activity. The channel therefore weakens under sustained firing, yet never
stops being a depolarizing conductance.

References:
- Hu et al. (2009): Distinct contributions of Nav1.6 and Nav1.2 in action
  potential initiation and backpropagation
- Mickus et al. (1999): Properties of slow, cumulative sodium channel inactivation
"""

from __future__ import annotations

import math
from typing import Dict, Optional

from neurite.components.channels.base import (
    ChannelConfig,
    ChannelFeedback,
    IonChannel,
    IonType,
    boltzmann_activation,
    boltzmann_inactivation,
)
from neurite.components.channels.channel_constants import (
    CALCIUM_BASELINE_UM,
    NAV_ACTIVATION_SLOPE,
    NAV_ACTIVATION_TAU_MS,
    NAV_ACTIVATION_V_HALF,
    NAV_AVAILABILITY_FLOOR,
    NAV_CONDUCTANCE_PS,
    NAV_GATE_CONDUCTION_MIN,
    NAV_INACTIVATION_SLOPE,
    NAV_INACTIVATION_TAU_MS,
    NAV_INACTIVATION_V_HALF,
    NAV_OPEN_PROBABILITY_MIN,
    NAV_REVERSAL_MV,
    NAV_SLOW_INACTIVATION_STEP,
    NAV_SLOW_RECOVERY_TAU_MS,
    NAV_USE_DEPENDENT_DECAY,
)


class SodiumChannel(IonChannel):
    """Nav1.6-like fast sodium channel with use-dependent inactivation."""

    ion_type = IonType.SODIUM
    channel_kind = "nav1.6"
    activation_gates = ("m",)
    inactivation_gates = ("h",)

    @classmethod
    def default_config(cls) -> ChannelConfig:
        return ChannelConfig(
            max_conductance=NAV_CONDUCTANCE_PS,
            reversal_potential=NAV_REVERSAL_MV,
            activation_v_half=NAV_ACTIVATION_V_HALF,
            activation_slope=NAV_ACTIVATION_SLOPE,
            inactivation_v_half=NAV_INACTIVATION_V_HALF,
            inactivation_slope=NAV_INACTIVATION_SLOPE,
            activation_tau_ms=NAV_ACTIVATION_TAU_MS,
            deactivation_tau_ms=NAV_ACTIVATION_TAU_MS,
            inactivation_tau_ms=NAV_INACTIVATION_TAU_MS,
            recovery_tau_ms=NAV_INACTIVATION_TAU_MS,
        )

    def _initial_gates(self) -> Dict[str, float]:
        self.availability = 1.0
        return {"m": 0.0, "h": 1.0}  # closed, not inactivated

    def steady_state(
        self,
        voltage: float,
        ligand: float = 0.0,
        calcium: float = CALCIUM_BASELINE_UM,
    ) -> Dict[str, float]:
        cfg = self.config
        return {
            "m": boltzmann_activation(voltage, cfg.activation_v_half, cfg.activation_slope),
            "h": boltzmann_inactivation(voltage, cfg.inactivation_v_half, cfg.inactivation_slope),
        }

    def _conductance_fraction(self, for_current: bool = False) -> float:
        m, h = self._gates["m"], self._gates["h"]
        if for_current and (m <= NAV_GATE_CONDUCTION_MIN or h <= NAV_GATE_CONDUCTION_MIN):
            return 0.0
        return m ** 3 * h * self.availability

    def _open_probability(self, calcium: float) -> float:
        return self._gates["m"] * self._gates["h"]

    def _is_open(self, calcium: float) -> bool:
        return self._open_probability(calcium) > NAV_OPEN_PROBABILITY_MIN

    def _is_inactivated(self) -> bool:
        return self._gates["h"] < 0.1

    def _expected_open_duration_ms(self) -> float:
        return self._trigger.activation_tau_ms

    def _apply_feedback(self, feedback: Optional[ChannelFeedback], dt_ms: float) -> None:
        floor = NAV_AVAILABILITY_FLOOR
        if feedback is not None and feedback.contributed_to_firing:
            self._gates["h"] *= NAV_USE_DEPENDENT_DECAY
            self.availability -= (self.availability - floor) * NAV_SLOW_INACTIVATION_STEP
        elif dt_ms > 0:
            self.availability = 1.0 + (self.availability - 1.0) * math.exp(
                -dt_ms / NAV_SLOW_RECOVERY_TAU_MS
            )
