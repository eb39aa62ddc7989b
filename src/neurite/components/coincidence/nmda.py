"""
NMDA-like coincidence detection.

NMDA receptors are the canonical molecular coincidence detector: glutamate
must be bound AND the membrane must be depolarized enough to expel the Mg2+
ion that plugs the pore at rest. Clustered excitatory inputs on a depolarized
branch therefore trigger a regenerative NMDA spike, while the same inputs at
rest do nothing.

Rule (applied to the windowed batch):
1. At least ``min_inputs_required`` inputs inside the window
2. Σ value × spatial_weight over excitatory inputs >= ``current_threshold``
3. accumulator >= ``voltage_threshold``, or a back-propagating action
   potential is present (snapshot flag, or a somatic spike within
   ``backprop_window_ms`` of the most recent arrival)

References:
- Schiller et al. (2000): NMDA spikes in basal dendrites of cortical pyramidal neurons
- Jahr & Stevens (1990): Voltage dependence of NMDA-activated macroscopic conductances
- Stuart & Häusser (2001): Dendritic coincidence detection of EPSPs and action potentials
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from neurite.components.coincidence.detector import (
    CoincidenceDetector,
    CoincidenceResult,
    NMDADetectorConfig,
    summed_drive,
)
from neurite.units import ms_to_ns

if TYPE_CHECKING:
    from neurite.components.dendrites.integration_types import (
        MembraneSnapshot,
        TimestampedInput,
    )


class NMDACoincidenceDetector(CoincidenceDetector):
    """Ligand- and voltage-gated coincidence detector."""

    config_type = NMDADetectorConfig

    def _evaluate(
        self,
        windowed: List[TimestampedInput],
        t_ref: int,
        snapshot: MembraneSnapshot,
        config: NMDADetectorConfig,
    ) -> CoincidenceResult:
        drive = summed_drive(windowed, excitatory_only=True)
        if drive < config.current_threshold:
            return CoincidenceResult(
                debug_info=(
                    f"insufficient current: {drive:.3f} < {config.current_threshold:.3f}"
                )
            )

        bap = self._backprop_present(snapshot, t_ref, config)
        voltage = snapshot.accumulator
        if voltage < config.voltage_threshold and not bap:
            return CoincidenceResult(
                debug_info=(
                    f"voltage below threshold: {voltage:.1f}mV < "
                    f"{config.voltage_threshold:.1f}mV (Mg2+ block)"
                )
            )

        if voltage >= config.voltage_threshold:
            gate = f"voltage {voltage:.1f}mV >= {config.voltage_threshold:.1f}mV"
        else:
            gate = "bAP relieved Mg2+ block"
        return self._detected(
            config,
            f"NMDA coincidence: {len(windowed)} inputs, current {drive:.3f}, {gate}",
        )

    @staticmethod
    def _backprop_present(
        snapshot: MembraneSnapshot,
        t_ref: int,
        config: NMDADetectorConfig,
    ) -> bool:
        if snapshot.back_propagating_spike:
            return True
        last_spike = snapshot.last_spike_time_ns
        if last_spike <= 0:
            return False
        return abs(t_ref - last_spike) <= ms_to_ns(config.backprop_window_ms)
