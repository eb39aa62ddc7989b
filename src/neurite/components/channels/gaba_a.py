"""
Ligand-gated chloride channel (GABA-A receptor).

GABA-A receptors mediate fast synaptic inhibition. Their gating is decoupled
from voltage: two GABA molecules bind cooperatively, the channel opens within
a couple of milliseconds, and sustained exposure desensitizes it over ~100 ms.
Because E_Cl sits near rest, the main effect is a conductance increase that
shunts nearby excitation rather than a large hyperpolarizing current.

Gating:
- a (ligand activation): Hill equation a_inf = [L]^n / (Kd^n + [L]^n),
  Kd = 5 µM, n = 2, τ ≈ 2 ms
- d (desensitization, 1 = fully available):
  d_inf = 1 - 0.8 × [L] / ([L] + 10 µM), τ ≈ 100 ms
- g = g_max × a × d × sensitivity

Only GABA signals carry ligand; the concentration is |signal.value| in µM.

References:
- Jones & Westbrook (1995): Desensitized states prolong GABA-A channel responses
- Farrant & Nusser (2005): Variations on an inhibitory theme
"""

from __future__ import annotations

from typing import Dict, Optional

from neurite.components.channels.base import (
    ChannelConfig,
    ChannelFeedback,
    IonChannel,
    IonType,
    hill,
)
from neurite.components.channels.channel_constants import (
    CALCIUM_BASELINE_UM,
    GABAA_ACTIVATION_TAU_MS,
    GABAA_CONDUCTANCE_PS,
    GABAA_DESENSITIZATION_KD_UM,
    GABAA_DESENSITIZATION_TAU_MS,
    GABAA_HILL_COEFFICIENT,
    GABAA_KD_UM,
    GABAA_MAX_DESENSITIZATION,
    GABAA_OPEN_GATE_MIN,
    GABAA_REVERSAL_MV,
    GABAA_SENSITIVITY_FLOOR,
    GABAA_USE_DEPENDENT_DECAY,
)
from neurite.signals import LigandType, NeuralSignal


class GabaAChannel(IonChannel):
    """GABA-A receptor: Hill-gated chloride conductance with desensitization."""

    ion_type = IonType.CHLORIDE
    channel_kind = "gaba_a"
    activation_gates = ("a",)
    inactivation_gates = ("d",)

    @classmethod
    def default_config(cls) -> ChannelConfig:
        return ChannelConfig(
            max_conductance=GABAA_CONDUCTANCE_PS,
            reversal_potential=GABAA_REVERSAL_MV,
            activation_tau_ms=GABAA_ACTIVATION_TAU_MS,
            deactivation_tau_ms=GABAA_ACTIVATION_TAU_MS,
            inactivation_tau_ms=GABAA_DESENSITIZATION_TAU_MS,
            recovery_tau_ms=GABAA_DESENSITIZATION_TAU_MS,
            ligand_threshold=GABAA_KD_UM,
            hill_coefficient=GABAA_HILL_COEFFICIENT,
        )

    def _initial_gates(self) -> Dict[str, float]:
        self.sensitivity = 1.0
        self._ligand = 0.0
        return {"a": 0.0, "d": 1.0}

    def steady_state(
        self,
        voltage: float,
        ligand: float = 0.0,
        calcium: float = CALCIUM_BASELINE_UM,
    ) -> Dict[str, float]:
        cfg = self.config
        ligand = abs(ligand)
        if ligand > 0:
            desensitized = ligand / (ligand + GABAA_DESENSITIZATION_KD_UM)
            d_inf = 1.0 - GABAA_MAX_DESENSITIZATION * desensitized
        else:
            d_inf = 1.0
        return {
            "a": hill(ligand, cfg.ligand_threshold, cfg.hill_coefficient),
            "d": d_inf,
        }

    def _ligand_from_signal(self, signal: NeuralSignal) -> float:
        if signal.neurotransmitter is LigandType.GABA:
            return abs(signal.value)
        return 0.0

    def _relax_gates(self, voltage: float, ligand: float, calcium: float, dt_ms: float) -> None:
        self._ligand = ligand
        super()._relax_gates(voltage, ligand, calcium, dt_ms)

    def _kinetics_ligand(self) -> float:
        return self._ligand

    def _conductance_fraction(self, for_current: bool = False) -> float:
        a, d = self._gates["a"], self._gates["d"]
        if for_current and (not self._is_open(0.0) or self._is_inactivated() or a <= 0.01):
            return 0.0
        return a * d * self.sensitivity

    def _open_probability(self, calcium: float) -> float:
        return self._gates["a"] * self._gates["d"]

    def _is_open(self, calcium: float) -> bool:
        return self._gates["a"] > GABAA_OPEN_GATE_MIN and self._gates["d"] > 0.1

    def _is_inactivated(self) -> bool:
        return self._gates["d"] < 0.2

    def _expected_open_duration_ms(self) -> float:
        return self._trigger.deactivation_tau_ms * 2

    def _apply_feedback(self, feedback: Optional[ChannelFeedback], dt_ms: float) -> None:
        if feedback is not None and feedback.contributed_to_firing:
            floor = GABAA_SENSITIVITY_FLOOR
            self.sensitivity = floor + (self.sensitivity - floor) * GABAA_USE_DEPENDENT_DECAY
