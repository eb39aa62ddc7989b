"""
Coincidence Detectors: Pluggable Dendritic Spike Triggers.

This module implements a Strategy pattern for coincidence detection, letting an
``ActiveDendriteMode`` decide whether a tick's batch of inputs constitutes a
regenerative dendritic event without hard-coding any one biological rule.

Design Philosophy:
==================
A detector is stateless per call: it receives a copy of exactly the batch the
mode is about to integrate together with the somatic snapshot, and returns a
``CoincidenceResult`` describing whether (and how strongly) the mode should
amplify the tick. Configuration is strongly typed per detector family and can
be swapped at runtime with ``update_config()``.

    detector = NMDACoincidenceDetector("apical_nmda", NMDADetectorConfig())
    result = detector.detect(batch, snapshot)
    if result.coincidence_detected:
        net = net * result.amplification_factor + result.additional_current

Supported Detectors:
====================
- NMDACoincidenceDetector: ligand AND depolarization (Mg2+ unblock)
- SimpleTemporalCoincidenceDetector: enough inputs with enough summed drive

Shared Window Rule:
===================
Only inputs whose arrival lies within ``temporal_window_ms`` of the most recent
arrival in the batch count toward a coincidence.
"""

from __future__ import annotations

import dataclasses
import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, List, Optional, Sequence, Tuple, Type

from neurite.components.coincidence.coincidence_constants import (
    BACKPROP_WINDOW_MS,
    COINCIDENCE_AMPLIFICATION_FACTOR,
    COINCIDENCE_CALCIUM_BOOST,
    COINCIDENCE_CURRENT_BOOST,
    COINCIDENCE_CURRENT_THRESHOLD,
    COINCIDENCE_MIN_INPUTS,
    COINCIDENCE_MINIMUM_SUMMED_VALUE,
    COINCIDENCE_TEMPORAL_WINDOW_MS,
    COINCIDENCE_VOLTAGE_THRESHOLD,
    NMDA_VOLTAGE_THRESHOLD_MAX,
    NMDA_VOLTAGE_THRESHOLD_MIN,
)
from neurite.config.validation import ValidatedConfig
from neurite.errors import ConfigurationError
from neurite.units import ms_to_ns

if TYPE_CHECKING:
    from neurite.components.dendrites.integration_types import (
        MembraneSnapshot,
        TimestampedInput,
    )

logger = logging.getLogger(__name__)


# =============================================================================
# Detector Configuration Dataclasses
# =============================================================================

@dataclass
class BaseDetectorConfig(ValidatedConfig):
    """Parameters shared by every detector family.

    Configs are plain mutable dataclasses so callers can tweak a clone and hand
    it to ``update_config()``; ``validate()`` runs whenever a detector accepts
    a config.
    """
    detector_type: ClassVar[str] = "base"

    min_inputs_required: int = COINCIDENCE_MIN_INPUTS
    temporal_window_ms: float = COINCIDENCE_TEMPORAL_WINDOW_MS
    amplification_factor: float = COINCIDENCE_AMPLIFICATION_FACTOR   # Multiplicative boost on detection
    additional_current_boost: float = COINCIDENCE_CURRENT_BOOST      # Additive current on detection
    calcium_boost: float = COINCIDENCE_CALCIUM_BOOST                 # Calcium influx on detection

    _validation_rules = {
        'min_inputs_required': ('positive_integer',),
        'temporal_window_ms': ('positive', 'finite'),
        'amplification_factor': ('positive', 'finite'),
        'additional_current_boost': ('non_negative', 'finite'),
        'calcium_boost': ('non_negative', 'finite'),
    }

    def validate(self) -> None:
        """Raise ``ConfigurationError`` if any parameter is invalid."""
        self.validate_config()

    def clone(self) -> BaseDetectorConfig:
        """Independent copy of this config."""
        return dataclasses.replace(self)

    @property
    def temporal_window_ns(self) -> int:
        return ms_to_ns(self.temporal_window_ms)


@dataclass
class NMDADetectorConfig(BaseDetectorConfig):
    """Configuration for NMDA-like coincidence detection.

    NMDA receptors need ligand AND depolarization:
        drive   = Σ value × spatial_weight  (excitatory inputs in the window)
        ligand  = drive >= current_threshold
        unblock = accumulator >= voltage_threshold  or  bAP present
    """
    detector_type: ClassVar[str] = "nmda"

    voltage_threshold: float = COINCIDENCE_VOLTAGE_THRESHOLD     # Mg2+ unblock (mV)
    current_threshold: float = COINCIDENCE_CURRENT_THRESHOLD     # Summed drive for ligand presence
    backprop_window_ms: float = BACKPROP_WINDOW_MS               # bAP influence after a somatic spike

    _validation_rules = {
        **BaseDetectorConfig._validation_rules,
        'voltage_threshold': (
            'finite',
            f'range({NMDA_VOLTAGE_THRESHOLD_MIN}, {NMDA_VOLTAGE_THRESHOLD_MAX})',
        ),
        'current_threshold': ('non_negative', 'finite'),
        'backprop_window_ms': ('non_negative', 'finite'),
    }


@dataclass
class SimpleTemporalDetectorConfig(BaseDetectorConfig):
    """Configuration for count-and-sum temporal coincidence detection."""
    detector_type: ClassVar[str] = "simple_temporal"

    minimum_summed_value: float = COINCIDENCE_MINIMUM_SUMMED_VALUE

    _validation_rules = {
        **BaseDetectorConfig._validation_rules,
        'minimum_summed_value': ('non_negative', 'finite'),
    }


def default_nmda_detector_config() -> NMDADetectorConfig:
    """NMDA detector config with cortical defaults (2 inputs, 5 ms, -45 mV, 1.8)."""
    return NMDADetectorConfig()


def default_simple_temporal_detector_config() -> SimpleTemporalDetectorConfig:
    """Simple temporal detector config with defaults (2 inputs, 5 ms, 0.5)."""
    return SimpleTemporalDetectorConfig()


# =============================================================================
# Result
# =============================================================================

@dataclass(frozen=True)
class CoincidenceResult:
    """Outcome of one ``detect()`` call.

    Attributes:
        coincidence_detected: Whether the batch triggers a dendritic event
        amplification_factor: Multiplier for the net current (1.0 when none)
        additional_current: Current added after amplification
        associated_calcium_influx: Calcium entering with the event
        debug_info: Human-readable reason for the decision
    """
    coincidence_detected: bool = False
    amplification_factor: float = 1.0
    additional_current: float = 0.0
    associated_calcium_influx: float = 0.0
    debug_info: str = ""


# =============================================================================
# Window helpers
# =============================================================================

def window_inputs(
    inputs: Sequence[TimestampedInput],
    window_ms: float,
) -> Tuple[List[TimestampedInput], int]:
    """Select the inputs that arrived within ``window_ms`` of the most recent one.

    Returns:
        Tuple of (windowed inputs, most recent arrival in ns)
    """
    if not inputs:
        return [], 0
    t_ref = max(inp.arrival_time_ns for inp in inputs)
    window_ns = ms_to_ns(window_ms)
    windowed = [inp for inp in inputs if t_ref - inp.arrival_time_ns <= window_ns]
    return windowed, t_ref


def summed_drive(inputs: Sequence[TimestampedInput], excitatory_only: bool = False) -> float:
    """Σ value × spatial_weight over ``inputs``."""
    total = 0.0
    for inp in inputs:
        if excitatory_only and inp.value <= 0:
            continue
        total += inp.value * inp.spatial_weight
    return total


# =============================================================================
# Base Detector
# =============================================================================

class CoincidenceDetector(ABC):
    """Abstract base class for coincidence detectors.

    Subclasses declare the config class they accept and implement
    ``_evaluate()`` on the windowed batch. The base class validates configs,
    guards them with a lock so ``update_config()`` can run while another
    thread detects, and handles the empty-batch case.
    """

    config_type: ClassVar[Type[BaseDetectorConfig]] = BaseDetectorConfig

    def __init__(self, name: str, config: Optional[BaseDetectorConfig]):
        if config is None:
            raise ConfigurationError(f"{type(self).__name__} requires a config, got None")
        self._check_config(config)

        self._name = name
        self._config = config.clone()
        self._lock = threading.Lock()
        self._closed = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def closed(self) -> bool:
        return self._closed

    def detect(
        self,
        inputs: Sequence[TimestampedInput],
        snapshot: MembraneSnapshot,
    ) -> CoincidenceResult:
        """Decide whether ``inputs`` form a coincidence under ``snapshot``."""
        with self._lock:
            config = self._config

        if not inputs:
            return CoincidenceResult(debug_info="no inputs")

        windowed, t_ref = window_inputs(inputs, config.temporal_window_ms)
        if len(windowed) < config.min_inputs_required:
            return CoincidenceResult(
                debug_info=(
                    f"insufficient inputs: {len(windowed)} within "
                    f"{config.temporal_window_ms:g}ms, need {config.min_inputs_required}"
                )
            )
        return self._evaluate(windowed, t_ref, snapshot, config)

    @abstractmethod
    def _evaluate(
        self,
        windowed: List[TimestampedInput],
        t_ref: int,
        snapshot: MembraneSnapshot,
        config: BaseDetectorConfig,
    ) -> CoincidenceResult:
        """Apply the family rule to a batch that already meets the input count."""

    def get_config(self) -> BaseDetectorConfig:
        """Return a copy of the active config."""
        with self._lock:
            return self._config.clone()

    def update_config(self, config: BaseDetectorConfig) -> None:
        """Replace the active config.

        Raises:
            ConfigurationError: If ``config`` has the wrong type or invalid values
        """
        self._check_config(config)
        with self._lock:
            self._config = config.clone()

    def close(self) -> None:
        """Release the detector. Safe to call more than once."""
        self._closed = True

    def _check_config(self, config: BaseDetectorConfig) -> None:
        if not isinstance(config, self.config_type):
            raise ConfigurationError(
                f"{type(self).__name__} expects {self.config_type.__name__}, "
                f"got {type(config).__name__}"
            )
        config.validate()

    def _detected(self, config: BaseDetectorConfig, reason: str) -> CoincidenceResult:
        logger.debug("%s: coincidence detected (%s)", self._name, reason)
        return CoincidenceResult(
            coincidence_detected=True,
            amplification_factor=config.amplification_factor,
            additional_current=config.additional_current_boost,
            associated_calcium_influx=config.calcium_boost,
            debug_info=reason,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r})"
