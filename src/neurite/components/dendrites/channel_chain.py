"""
Channel chain owned by a buffering integration mode.

Every arriving signal passes through the chain in order. Each channel sees
the membrane voltage and calcium from the most recent tick (the resting
potential and baseline calcium before the first tick), contributes its
current, and may veto the signal, in which case no later channel runs and the
signal is never buffered.

The chain owns its channels: replacing the chain closes the previous
channels, and closing the chain closes every channel exactly once.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Iterable, List, Optional, Tuple

from neurite.components.channels.base import IonChannel, IonType
from neurite.components.channels.channel_constants import CALCIUM_BASELINE_UM
from neurite.components.dendrites.dendrite_constants import V_REST_CORTICAL
from neurite.components.dendrites.integration_types import MembraneSnapshot
from neurite.signals import NeuralSignal

logger = logging.getLogger(__name__)


class ChannelChain:
    """Ordered, thread-safe list of channels plus the membrane context they see."""

    def __init__(
        self,
        channels: Optional[Iterable[IonChannel]] = None,
        resting_potential: float = V_REST_CORTICAL,
    ):
        self._lock = threading.Lock()
        self._channels: List[IonChannel] = list(channels or [])
        self._ion_types: Dict[str, IonType] = {}
        self._voltage = resting_potential
        self._calcium = CALCIUM_BASELINE_UM
        self._closed = False
        for channel in self._channels:
            self._ion_types[channel.name] = channel.get_ion_selectivity()

    @property
    def channels(self) -> List[IonChannel]:
        with self._lock:
            return list(self._channels)

    def __len__(self) -> int:
        with self._lock:
            return len(self._channels)

    def set_channels(self, channels: Iterable[IonChannel]) -> None:
        """Replace the chain, closing every channel that is not carried over."""
        new_channels = list(channels)
        with self._lock:
            old_channels = self._channels
            self._channels = new_channels
            for channel in new_channels:
                self._ion_types[channel.name] = channel.get_ion_selectivity()

        kept = {id(channel) for channel in new_channels}
        for channel in old_channels:
            if id(channel) not in kept:
                channel.close()

    def add_channel(self, channel: IonChannel) -> None:
        """Append ``channel``; the chain takes ownership."""
        with self._lock:
            self._channels.append(channel)
            self._ion_types[channel.name] = channel.get_ion_selectivity()

    def ion_type_of(self, channel_name: str) -> Optional[IonType]:
        """Ion selectivity of a channel that has been part of this chain."""
        with self._lock:
            return self._ion_types.get(channel_name)

    def observe(self, snapshot: MembraneSnapshot) -> None:
        """Record the membrane context for subsequent signals."""
        with self._lock:
            self._voltage = snapshot.accumulator
            self._calcium = snapshot.intracellular_calcium

    def run(self, signal: NeuralSignal) -> Optional[Tuple[NeuralSignal, Dict[str, float]]]:
        """Pass ``signal`` through every channel.

        Returns:
            Tuple of (signal as modified by the chain, current per channel
            name), or None when a channel vetoed the signal
        """
        with self._lock:
            channels = list(self._channels)
            voltage, calcium = self._voltage, self._calcium

        currents: Dict[str, float] = {}
        current_signal = signal
        for channel in channels:
            modified, keep_going, extra_current = channel.modulate_current(
                current_signal, voltage, calcium
            )
            if not keep_going or modified is None:
                logger.debug(
                    "Signal from %r vetoed by channel %s", signal.source_id, channel.name
                )
                return None
            currents[channel.name] = currents.get(channel.name, 0.0) + extra_current
            current_signal = modified
        return current_signal, currents

    def close(self) -> None:
        """Close every channel once and empty the chain."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            channels, self._channels = self._channels, []
        for channel in channels:
            channel.close()
