"""Passive membrane integration: every signal reaches the soma immediately.

Models a compact cell (or direct somatic input) where dendritic filtering is
negligible. Nothing is buffered, no channels run and ``process()`` never has
anything to report.
"""

from __future__ import annotations

from typing import Optional

from neurite.components.dendrites.integration_mode import (
    DendriticIntegrationMode,
    clamp_current,
)
from neurite.components.dendrites.integration_types import (
    IntegratedPotential,
    MembraneSnapshot,
)
from neurite.signals import NeuralSignal


class PassiveMembraneMode(DendriticIntegrationMode):
    """Immediate pass-through of signal values."""

    mode_name = "PassiveMembrane"

    def handle(self, signal: NeuralSignal) -> Optional[IntegratedPotential]:
        return IntegratedPotential(net_current=clamp_current(signal.value))

    def process(self, snapshot: MembraneSnapshot) -> Optional[IntegratedPotential]:
        return None

    def close(self) -> None:
        pass
