"""
Temporal summation without decay.

Signals that arrive between two ticks are buffered and summed linearly when
the tick comes. Buffering removes the ordering race of immediate integration:
an excitatory and an inhibitory input arriving in the same window are always
combined before the soma sees either of them.

There is no membrane decay in this mode; an input buffered just after the
previous tick counts as much as one buffered just before the current tick.
"""

from __future__ import annotations

import threading
import time
from typing import Callable, Iterable, List, Optional

from neurite.components.channels.base import IonChannel
from neurite.components.dendrites.channel_chain import ChannelChain
from neurite.components.dendrites.integration_mode import (
    DendriticIntegrationMode,
    clamp_current,
)
from neurite.components.dendrites.integration_types import (
    IntegratedPotential,
    MembraneSnapshot,
    TimestampedInput,
)
from neurite.core.contribution_keys import ContributionKeys as CK
from neurite.signals import NeuralSignal


class TemporalSummationMode(DendriticIntegrationMode):
    """Buffered linear summation of everything that arrived since the last tick."""

    mode_name = "TemporalSummation"

    def __init__(
        self,
        channels: Optional[Iterable[IonChannel]] = None,
        clock: Callable[[], int] = time.time_ns,
    ):
        self._chain = ChannelChain(channels)
        self._clock = clock
        self._buffer_lock = threading.Lock()
        self._buffer: List[TimestampedInput] = []
        self._closed = False

    def handle(self, signal: NeuralSignal) -> Optional[IntegratedPotential]:
        passed = self._chain.run(signal)
        if passed is None:
            return None
        signal, currents = passed

        entry = TimestampedInput(
            signal=signal,
            arrival_time_ns=self._clock(),
            channel_currents=currents,
        )
        with self._buffer_lock:
            self._buffer.append(entry)
        return None

    def process(self, snapshot: MembraneSnapshot) -> Optional[IntegratedPotential]:
        self._chain.observe(snapshot)
        with self._buffer_lock:
            batch, self._buffer = self._buffer, []
        if not batch:
            return None

        total = 0.0
        contributions = {}
        for inp in batch:
            total += inp.value + inp.total_channel_current
            for channel_name, current in inp.channel_currents.items():
                contributions[channel_name] = contributions.get(channel_name, 0.0) + current
        contributions[CK.INPUT_COUNT] = float(len(batch))

        return IntegratedPotential(
            net_current=clamp_current(total),
            channel_contributions=contributions,
        )

    def set_channels(self, channels: Iterable[IonChannel]) -> None:
        self._chain.set_channels(channels)

    def add_channel(self, channel: IonChannel) -> None:
        self._chain.add_channel(channel)

    @property
    def channels(self) -> List[IonChannel]:
        return self._chain.channels

    @property
    def buffer_size(self) -> int:
        with self._buffer_lock:
            return len(self._buffer)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._chain.close()
        with self._buffer_lock:
            self._buffer = []
