"""Count-and-sum temporal coincidence detection.

The simplest coincidence rule: enough inputs inside the window whose summed
drive (value × spatial weight) reaches a minimum. Voltage plays no part, which
makes this detector useful for non-NMDA dendritic nonlinearities and for
testing the amplification path in isolation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from neurite.components.coincidence.detector import (
    CoincidenceDetector,
    CoincidenceResult,
    SimpleTemporalDetectorConfig,
    summed_drive,
)

if TYPE_CHECKING:
    from neurite.components.dendrites.integration_types import (
        MembraneSnapshot,
        TimestampedInput,
    )


class SimpleTemporalCoincidenceDetector(CoincidenceDetector):
    """Detects a coincidence from input count and summed drive alone."""

    config_type = SimpleTemporalDetectorConfig

    def _evaluate(
        self,
        windowed: List[TimestampedInput],
        t_ref: int,
        snapshot: MembraneSnapshot,
        config: SimpleTemporalDetectorConfig,
    ) -> CoincidenceResult:
        drive = summed_drive(windowed)
        if drive < config.minimum_summed_value:
            return CoincidenceResult(
                debug_info=(
                    f"insufficient summed value: {drive:.3f} < "
                    f"{config.minimum_summed_value:.3f}"
                )
            )
        return self._detected(
            config,
            f"temporal coincidence: {len(windowed)} inputs summing to {drive:.3f}",
        )
