"""
Dendritic Integration Modes: Pluggable Synaptic Integration Strategies.

This module defines the Strategy interface a neuron uses to turn arriving
synaptic signals into the current delivered to its soma.

Design Philosophy:
==================
The neuron does not sum its inputs itself. It hands each arriving signal to
its integration mode and, once per tick, asks the mode for the integrated
result:

    mode = BiologicalTemporalSummationMode(cortical_pyramidal_config())
    mode.handle(signal)                 # message-delivery path, any thread
    result = mode.process(snapshot)     # per-neuron tick, one driver thread
    if result is not None:
        accumulator += result.net_current

Every mode owns the channels and detector it is given and closes them exactly
once when it is itself closed. A mode that has no use for a detector closes it
as soon as it receives it.

Supported Modes:
================
- PassiveMembraneMode: immediate pass-through, no buffering
- TemporalSummationMode: buffered linear sum, no decay
- BiologicalTemporalSummationMode: exponential decay, spatial weights, noise
- ShuntingInhibitionMode: divisive GABA-A inhibition on top of decay
- ActiveDendriteMode: saturation, shunting and dendritic spikes
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import ClassVar, Optional

from neurite.components.coincidence.detector import CoincidenceDetector
from neurite.components.dendrites.dendrite_constants import (
    CURRENT_MAX_BIOLOGICAL,
    CURRENT_MIN_BIOLOGICAL,
    SPATIAL_WEIGHTS,
)
from neurite.components.dendrites.integration_types import (
    IntegratedPotential,
    MembraneSnapshot,
)
from neurite.signals import NeuralSignal

logger = logging.getLogger(__name__)


def clamp_current(value: float) -> float:
    """Clamp a net current to the biological range [-100, 100]."""
    return min(CURRENT_MAX_BIOLOGICAL, max(CURRENT_MIN_BIOLOGICAL, value))


def resolve_branch_label(source_id: str) -> Optional[str]:
    """Branch label carried by ``source_id``, if any.

    A source matches a label exactly ('distal') or as a prefix followed by an
    underscore ('distal_3'). Returns None for unlabeled sources.
    """
    if source_id in SPATIAL_WEIGHTS:
        return source_id
    for label in SPATIAL_WEIGHTS:
        if source_id.startswith(label + "_"):
            return label
    return None


class DendriticIntegrationMode(ABC):
    """Abstract base class for dendritic integration strategies.

    ``handle()`` may be called concurrently from many threads; ``process()``
    is called from a single driver thread and never concurrently with itself.
    """

    mode_name: ClassVar[str] = "DendriticIntegration"

    @abstractmethod
    def handle(self, signal: NeuralSignal) -> Optional[IntegratedPotential]:
        """Accept one synaptic signal.

        Returns:
            An immediate result for modes that do not buffer, otherwise None
        """

    @abstractmethod
    def process(self, snapshot: MembraneSnapshot) -> Optional[IntegratedPotential]:
        """Integrate everything buffered since the last tick.

        Returns:
            The integrated result, or None when nothing significant happened
        """

    def set_coincidence_detector(self, detector: Optional[CoincidenceDetector]) -> None:
        """Hand a detector to this mode.

        The default implementation takes ownership and closes the detector
        immediately, since the mode has no use for it.
        """
        if detector is not None:
            logger.debug(
                "%s does not use coincidence detectors; closing %s",
                self.mode_name, detector.name,
            )
            detector.close()

    @property
    def name(self) -> str:
        return self.mode_name

    @abstractmethod
    def close(self) -> None:
        """Release every owned resource. Safe to call more than once."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
