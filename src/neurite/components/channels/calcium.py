"""
Voltage-gated L-type calcium channel (Cav1.2).

Cav1.2 channels open at depolarized potentials and carry the calcium that
couples dendritic electrical activity to plasticity signalling (CaMKII, PKA).

Gating:
- m (activation): V½ = -20 mV, k = 8 mV, τ ≈ 3 ms
- g = g_max × m² × facilitation
- Calcium-dependent inactivation (CDI) scales open probability:
      CDI([Ca]) = 1 / (1 + [Ca] / [Ca]_0),  [Ca]_0 = 0.1 µM

Facilitation:
Each kinetics update that reports calcium influx moves the facilitation
factor a fixed fraction of the way toward 1.0, so conductance rises strictly
from its baseline (5 pS) toward the configured ceiling and never beyond it.

References:
- Catterall (2011): Voltage-gated calcium channels
- Dolmetsch et al. (2001): Signaling to the nucleus by an L-type calcium channel
"""

from __future__ import annotations

import time
from typing import Callable, Dict, Optional

from neurite.components.channels.base import (
    ChannelConfig,
    ChannelFeedback,
    IonChannel,
    IonType,
    boltzmann_activation,
)
from neurite.components.channels.channel_constants import (
    CALCIUM_BASELINE_UM,
    CAV_ACTIVATION_SLOPE,
    CAV_ACTIVATION_TAU_MS,
    CAV_ACTIVATION_V_HALF,
    CAV_CDI_OPEN_MIN,
    CAV_CONDUCTANCE_PS,
    CAV_FACILITATION_RATE,
    CAV_MAX_CONDUCTANCE_PS,
    CAV_OPEN_THRESHOLD,
    CAV_REVERSAL_MV,
)


class CalciumChannel(IonChannel):
    """Cav1.2-like L-type calcium channel with m² gating and facilitation."""

    ion_type = IonType.CALCIUM
    channel_kind = "cav1.2"
    activation_gates = ("m",)

    def __init__(
        self,
        name: str,
        config: Optional[ChannelConfig] = None,
        clock: Callable[[], int] = time.time_ns,
        baseline_conductance: float = CAV_CONDUCTANCE_PS,
    ):
        super().__init__(name, config, clock)
        g_max = self.config.max_conductance
        self.facilitation = min(1.0, baseline_conductance / g_max) if g_max > 0 else 1.0

    @classmethod
    def default_config(cls) -> ChannelConfig:
        return ChannelConfig(
            max_conductance=CAV_MAX_CONDUCTANCE_PS,
            reversal_potential=CAV_REVERSAL_MV,
            activation_v_half=CAV_ACTIVATION_V_HALF,
            activation_slope=CAV_ACTIVATION_SLOPE,
            activation_tau_ms=CAV_ACTIVATION_TAU_MS,
            deactivation_tau_ms=CAV_ACTIVATION_TAU_MS,
            calcium_threshold=CALCIUM_BASELINE_UM,
        )

    def _initial_gates(self) -> Dict[str, float]:
        return {"m": 0.0}

    def steady_state(
        self,
        voltage: float,
        ligand: float = 0.0,
        calcium: float = CALCIUM_BASELINE_UM,
    ) -> Dict[str, float]:
        cfg = self.config
        return {"m": boltzmann_activation(voltage, cfg.activation_v_half, cfg.activation_slope)}

    def calcium_dependent_inactivation(self, calcium: float) -> float:
        """Fraction of channels not inactivated by intracellular calcium."""
        ca0 = self.config.calcium_threshold
        if ca0 <= 0:
            return 1.0
        return 1.0 / (1.0 + max(0.0, calcium) / ca0)

    def _conductance_fraction(self, for_current: bool = False) -> float:
        m = self._gates["m"]
        if for_current and m <= 0.01:
            return 0.0
        return m ** 2 * self.facilitation

    def _open_probability(self, calcium: float) -> float:
        return self._gates["m"] * self.calcium_dependent_inactivation(calcium)

    def _is_open(self, calcium: float) -> bool:
        return (
            self._gates["m"] > CAV_OPEN_THRESHOLD
            and self.calcium_dependent_inactivation(calcium) >= CAV_CDI_OPEN_MIN
        )

    def _expected_open_duration_ms(self) -> float:
        return self._trigger.activation_tau_ms

    def _apply_feedback(self, feedback: Optional[ChannelFeedback], dt_ms: float) -> None:
        if feedback is not None and feedback.calcium_influx > 0:
            self.facilitation += (1.0 - self.facilitation) * CAV_FACILITATION_RATE
