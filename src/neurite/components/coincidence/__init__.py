"""
Coincidence detectors for active dendrites.

Detectors decide whether a tick's batch of inputs triggers a dendritic spike
in ``ActiveDendriteMode``.
"""

from neurite.components.coincidence.detector import (
    BaseDetectorConfig,
    CoincidenceDetector,
    CoincidenceResult,
    NMDADetectorConfig,
    SimpleTemporalDetectorConfig,
    default_nmda_detector_config,
    default_simple_temporal_detector_config,
    summed_drive,
    window_inputs,
)
from neurite.components.coincidence.detector_factory import (
    DETECTOR_FAMILIES,
    create_coincidence_detector,
    create_nmda_coincidence_detector,
    create_simple_temporal_coincidence_detector,
)
from neurite.components.coincidence.nmda import NMDACoincidenceDetector
from neurite.components.coincidence.simple_temporal import SimpleTemporalCoincidenceDetector

__all__ = [
    # Configs
    "BaseDetectorConfig",
    "NMDADetectorConfig",
    "SimpleTemporalDetectorConfig",
    "default_nmda_detector_config",
    "default_simple_temporal_detector_config",
    # Detectors
    "CoincidenceDetector",
    "CoincidenceResult",
    "NMDACoincidenceDetector",
    "SimpleTemporalCoincidenceDetector",
    # Helpers
    "summed_drive",
    "window_inputs",
    # Factory
    "DETECTOR_FAMILIES",
    "create_coincidence_detector",
    "create_nmda_coincidence_detector",
    "create_simple_temporal_coincidence_detector",
]
