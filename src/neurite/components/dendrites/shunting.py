"""
Shunting (divisive) inhibition on top of biological temporal summation.

GABA-A receptors open a chloride conductance near the resting potential. The
inhibitory current itself is small, but the extra conductance lowers the input
resistance of the dendrite, so excitatory currents are divided rather than
subtracted:

    shunt = max(floor, 1 - inhibition × strength)
    net   = excitation × shunt

The floor keeps some of the excitatory path open for arbitrarily strong
inhibition, so inhibition alone never silences a branch completely.

References:
- Koch, Poggio & Torre (1983): Nonlinear interactions in a dendritic tree
- Mitchell & Silver (2003): Shunting inhibition modulates neuronal gain
"""

from __future__ import annotations

import time
from typing import Callable, Iterable, List, Optional

from neurite.components.channels.base import IonChannel
from neurite.components.dendrites.biological import BiologicalTemporalSummationMode
from neurite.components.dendrites.biological_config import BiologicalConfig
from neurite.components.dendrites.dendrite_constants import (
    CURRENT_NOISE_FLOOR,
    SHUNTING_FLOOR,
    SHUNTING_STRENGTH,
)
from neurite.components.dendrites.integration_mode import (
    DendriticIntegrationMode,
    clamp_current,
)
from neurite.components.dendrites.integration_types import (
    IntegratedPotential,
    MembraneSnapshot,
)
from neurite.core.contribution_keys import ContributionKeys as CK
from neurite.signals import NeuralSignal


def shunting_factor(inhibition: float, strength: float, floor: float = SHUNTING_FLOOR) -> float:
    """Divisive factor applied to excitation, never below ``floor``."""
    return max(floor, 1.0 - inhibition * strength)


def is_negligible(excitation: float, inhibition: float) -> bool:
    """True when neither component clears the noise floor."""
    return abs(excitation) < CURRENT_NOISE_FLOOR and abs(inhibition) < CURRENT_NOISE_FLOOR


class ShuntingInhibitionMode(DendriticIntegrationMode):
    """Biological summation with divisive instead of subtractive inhibition.

    Args:
        strength: Inhibition → shunt scaling; non-positive values use 0.5
        config: Membrane parameters for the underlying summation
        channels: Initial channel chain (ownership passes to the mode)
        clock: Nanosecond clock
        floor: Lower bound of the shunt factor
    """

    mode_name = "ShuntingInhibition"

    def __init__(
        self,
        strength: float = SHUNTING_STRENGTH,
        config: Optional[BiologicalConfig] = None,
        channels: Optional[Iterable[IonChannel]] = None,
        clock: Callable[[], int] = time.time_ns,
        floor: float = SHUNTING_FLOOR,
    ):
        self.strength = strength if strength > 0 else SHUNTING_STRENGTH
        self.floor = min(1.0, max(0.0, floor))
        self._summation = BiologicalTemporalSummationMode(config, channels=channels, clock=clock)

    @property
    def config(self) -> BiologicalConfig:
        return self._summation.config

    def handle(self, signal: NeuralSignal) -> Optional[IntegratedPotential]:
        return self._summation.handle(signal)

    def process(self, snapshot: MembraneSnapshot) -> Optional[IntegratedPotential]:
        self._summation.observe(snapshot)
        decayed = self._summation.drain_and_decay()
        if decayed is None or is_negligible(decayed.excitation, decayed.inhibition):
            return None

        shunt = shunting_factor(decayed.inhibition, self.strength, self.floor)
        net = clamp_current(decayed.excitation * shunt)
        return decayed.to_potential(net, extra_contributions={CK.SHUNT_FACTOR: shunt})

    def set_channels(self, channels: Iterable[IonChannel]) -> None:
        self._summation.set_channels(channels)

    def add_channel(self, channel: IonChannel) -> None:
        self._summation.add_channel(channel)

    @property
    def channels(self) -> List[IonChannel]:
        return self._summation.channels

    @property
    def buffer_size(self) -> int:
        return self._summation.buffer_size

    def close(self) -> None:
        self._summation.close()

    def __repr__(self) -> str:
        return f"ShuntingInhibitionMode(strength={self.strength}, floor={self.floor})"
