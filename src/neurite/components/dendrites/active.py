"""
Active dendrite integration: saturation, shunting and dendritic spikes.

Models a pyramidal-cell dendrite as an active computational unit rather than
a passive cable. On top of biological temporal summation each tick applies:

1. Synaptic saturation: every input value is clamped to ±max_synaptic_effect
   before decay, so no single synapse dominates the branch
2. Shunting inhibition: net = excitation × max(floor, 1 - inhibition × strength)
3. Dendritic spike, by exactly one of two rules:
   - Coincidence detector (when configured): the detector sees a copy of the
     very batch that was integrated; on detection
         net = net × amplification + additional_current
     and the detector's calcium influx is added
   - Fallback rule (no detector): when net >= spike threshold and the soma
     is depolarized above the voltage threshold, a fixed NMDA-like current
     and calcium boost are added

References:
- Schiller et al. (2000): NMDA spikes in basal dendrites of cortical pyramidal neurons
- Larkum et al. (2009): Synaptic integration in tuft dendrites of layer 5 pyramidal neurons
- London & Häusser (2005): Dendritic computation

Author: Neurite Project
Date: March 2026
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Iterable, List, Optional

from neurite.components.channels.base import IonChannel
from neurite.components.coincidence.detector import BaseDetectorConfig, CoincidenceDetector
from neurite.components.coincidence.detector_factory import create_coincidence_detector
from neurite.components.dendrites.biological import BiologicalTemporalSummationMode
from neurite.components.dendrites.biological_config import (
    ActiveDendriteConfig,
    BiologicalConfig,
)
from neurite.components.dendrites.integration_mode import (
    DendriticIntegrationMode,
    clamp_current,
)
from neurite.components.dendrites.integration_types import (
    IntegratedPotential,
    MembraneSnapshot,
)
from neurite.components.dendrites.shunting import is_negligible, shunting_factor
from neurite.core.contribution_keys import ContributionKeys as CK
from neurite.signals import NeuralSignal

logger = logging.getLogger(__name__)


class ActiveDendriteMode(DendriticIntegrationMode):
    """Nonlinear dendritic integration with optional coincidence detection.

    Args:
        config: Nonlinearity parameters; non-positive core values fall back
            to defaults. A detector config in ``config.coincidence_detector``
            is built into a detector here; a detector instance is adopted.
        bio_config: Membrane parameters for the underlying summation
        channels: Initial channel chain (ownership passes to the mode)
        clock: Nanosecond clock

    Example:
        >>> mode = ActiveDendriteMode(
        ...     ActiveDendriteConfig(coincidence_detector=NMDADetectorConfig()),
        ...     cortical_pyramidal_config(),
        ... )
    """

    mode_name = "ActiveDendrite"

    def __init__(
        self,
        config: Optional[ActiveDendriteConfig] = None,
        bio_config: Optional[BiologicalConfig] = None,
        channels: Optional[Iterable[IonChannel]] = None,
        clock: Callable[[], int] = time.time_ns,
    ):
        self.config = (config if config is not None else ActiveDendriteConfig()).with_defaults()
        self._summation = BiologicalTemporalSummationMode(bio_config, channels=channels, clock=clock)

        self._detector_lock = threading.Lock()
        self._detector: Optional[CoincidenceDetector] = None
        self._closed = False

        requested = self.config.coincidence_detector
        if isinstance(requested, BaseDetectorConfig):
            self._detector = create_coincidence_detector(requested)
        elif isinstance(requested, CoincidenceDetector):
            self._detector = requested

    @property
    def bio_config(self) -> BiologicalConfig:
        return self._summation.config

    @property
    def coincidence_detector(self) -> Optional[CoincidenceDetector]:
        with self._detector_lock:
            return self._detector

    def set_coincidence_detector(self, detector: Optional[CoincidenceDetector]) -> None:
        """Install ``detector`` (or None for the fallback rule), closing the previous one."""
        with self._detector_lock:
            previous, self._detector = self._detector, detector
        if previous is not None and previous is not detector:
            previous.close()

    def handle(self, signal: NeuralSignal) -> Optional[IntegratedPotential]:
        return self._summation.handle(signal)

    def saturate(self, value: float) -> float:
        """Clamp a single input value to ±max_synaptic_effect."""
        limit = self.config.max_synaptic_effect
        return max(-limit, min(limit, value))

    def process(self, snapshot: MembraneSnapshot) -> Optional[IntegratedPotential]:
        self._summation.observe(snapshot)
        decayed = self._summation.drain_and_decay(processor=self.saturate)
        if decayed is None or is_negligible(decayed.excitation, decayed.inhibition):
            return None

        cfg = self.config
        shunt = shunting_factor(decayed.inhibition, cfg.shunting_strength, cfg.shunting_floor)
        net = decayed.excitation * shunt
        contributions = {
            CK.SHUNT_FACTOR: shunt,
            CK.SATURATED_INPUTS: float(decayed.processed_inputs),
        }

        detector = self.coincidence_detector
        if detector is not None:
            result = detector.detect(list(decayed.batch), snapshot)
            if not result.coincidence_detected:
                return decayed.to_potential(clamp_current(net), extra_contributions=contributions)

            net = net * result.amplification_factor + result.additional_current
            contributions[CK.COINCIDENCE_CURRENT] = result.additional_current
            contributions[CK.CALCIUM_INFLUX] = result.associated_calcium_influx
            logger.debug("Dendritic spike via %s: %s", detector.name, result.debug_info)
            return decayed.to_potential(
                clamp_current(net),
                dendritic_spike=True,
                nonlinear_amplification=result.amplification_factor,
                extra_calcium=result.associated_calcium_influx,
                extra_contributions=contributions,
            )

        if net >= cfg.dendritic_spike_threshold and snapshot.accumulator > cfg.voltage_threshold:
            net += cfg.nmda_spike_amplitude
            contributions[CK.NMDA_SPIKE] = cfg.nmda_spike_amplitude
            contributions[CK.CALCIUM_INFLUX] = cfg.calcium_boost
            logger.debug(
                "Dendritic spike (fallback): net %.3f, accumulator %.1f mV",
                net, snapshot.accumulator,
            )
            return decayed.to_potential(
                clamp_current(net),
                dendritic_spike=True,
                extra_calcium=cfg.calcium_boost,
                extra_contributions=contributions,
            )

        return decayed.to_potential(clamp_current(net), extra_contributions=contributions)

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
        """Close the detector and the underlying summation once."""
        with self._detector_lock:
            if self._closed:
                return
            self._closed = True
            detector, self._detector = self._detector, None
        if detector is not None:
            detector.close()
        self._summation.close()

    def __repr__(self) -> str:
        detector = self.coincidence_detector
        return f"ActiveDendriteMode(detector={detector.name if detector else None!r})"
