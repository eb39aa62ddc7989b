"""
Voltage-gated potassium channel (Kv4.2 / delayed rectifier).

Dendritic A-type potassium channels dampen back-propagating action potentials
and restrict the spread of local depolarization, shaping where dendritic
spikes can be initiated.

Gating:
- n (activation): V½ = -30 mV, k = 10 mV, τ ≈ 5 ms
- g = g_max × n⁴ (four independent voltage-sensing subunits)

References:
- Hoffman et al. (1997): K+ channel regulation of signal propagation in
  dendrites of hippocampal pyramidal neurons
"""

from __future__ import annotations

from typing import Dict

from neurite.components.channels.base import (
    ChannelConfig,
    IonChannel,
    IonType,
    boltzmann_activation,
)
from neurite.components.channels.channel_constants import (
    CALCIUM_BASELINE_UM,
    KV_ACTIVATION_SLOPE,
    KV_ACTIVATION_TAU_MS,
    KV_ACTIVATION_V_HALF,
    KV_CONDUCTANCE_PS,
    KV_OPEN_THRESHOLD,
    KV_REVERSAL_MV,
)


class PotassiumChannel(IonChannel):
    """Kv-like potassium channel with n⁴ activation and no inactivation."""

    ion_type = IonType.POTASSIUM
    channel_kind = "kv4.2"
    activation_gates = ("n",)

    @classmethod
    def default_config(cls) -> ChannelConfig:
        return ChannelConfig(
            max_conductance=KV_CONDUCTANCE_PS,
            reversal_potential=KV_REVERSAL_MV,
            activation_v_half=KV_ACTIVATION_V_HALF,
            activation_slope=KV_ACTIVATION_SLOPE,
            activation_tau_ms=KV_ACTIVATION_TAU_MS,
            deactivation_tau_ms=KV_ACTIVATION_TAU_MS,
        )

    def _initial_gates(self) -> Dict[str, float]:
        return {"n": 0.0}

    def steady_state(
        self,
        voltage: float,
        ligand: float = 0.0,
        calcium: float = CALCIUM_BASELINE_UM,
    ) -> Dict[str, float]:
        cfg = self.config
        return {"n": boltzmann_activation(voltage, cfg.activation_v_half, cfg.activation_slope)}

    def _conductance_fraction(self, for_current: bool = False) -> float:
        n = self._gates["n"]
        if for_current and n <= 0.01:
            return 0.0
        return n ** 4

    def _open_probability(self, calcium: float) -> float:
        return self._gates["n"]

    def _is_open(self, calcium: float) -> bool:
        return self._gates["n"] > KV_OPEN_THRESHOLD

    def _expected_open_duration_ms(self) -> float:
        return self._trigger.deactivation_tau_ms
