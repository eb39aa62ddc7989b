"""
Factory functions for creating coincidence detectors.

Detectors can be built from a config instance (the family follows the config
type) or from a family name with keyword overrides.

Usage:
======
    from neurite.components.coincidence import create_coincidence_detector

    nmda = create_coincidence_detector(NMDADetectorConfig(), name="apical_nmda")
    simple = create_coincidence_detector("simple-temporal", minimum_summed_value=0.8)

Unlike the detector constructors, the factories fill in default configs when
given None.

Author: Neurite Project
Date: March 2026
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Type, Union

from neurite.components.coincidence.detector import (
    BaseDetectorConfig,
    CoincidenceDetector,
    NMDADetectorConfig,
    SimpleTemporalDetectorConfig,
)
from neurite.components.coincidence.nmda import NMDACoincidenceDetector
from neurite.components.coincidence.simple_temporal import SimpleTemporalCoincidenceDetector
from neurite.errors import ConfigurationError

DETECTOR_FAMILIES: Dict[str, Type[CoincidenceDetector]] = {
    NMDADetectorConfig.detector_type: NMDACoincidenceDetector,
    SimpleTemporalDetectorConfig.detector_type: SimpleTemporalCoincidenceDetector,
}


def create_coincidence_detector(
    config: Union[BaseDetectorConfig, str, None] = None,
    name: Optional[str] = None,
    **config_kwargs: Any,
) -> CoincidenceDetector:
    """Create a coincidence detector.

    Args:
        config: A detector config (family chosen by its type), a family name
            ('nmda', 'simple_temporal'), or None for an NMDA detector with
            default parameters
        name: Detector name; defaults to the family name
        **config_kwargs: Config fields, only accepted together with a family name

    Returns:
        Configured detector

    Raises:
        ValueError: If the family name is unknown
        ConfigurationError: If the config is invalid or of an unsupported type

    Example:
        detector = create_coincidence_detector('nmda', current_threshold=1.0)
    """
    if config is None:
        config = NMDADetectorConfig.detector_type

    if isinstance(config, str):
        family = config.lower().replace('-', '_').replace(' ', '_')
        if family not in DETECTOR_FAMILIES:
            raise ValueError(
                f"Unknown coincidence detector: {config}. "
                f"Must be one of: {sorted(DETECTOR_FAMILIES)}"
            )
        detector_cls = DETECTOR_FAMILIES[family]
        config = detector_cls.config_type(**config_kwargs)
    elif config_kwargs:
        raise TypeError("config_kwargs are only accepted together with a detector family name")

    detector_cls = DETECTOR_FAMILIES.get(config.detector_type)
    if detector_cls is None:
        raise ConfigurationError(
            f"No coincidence detector accepts {type(config).__name__}"
        )
    return detector_cls(name or config.detector_type, config)


def create_nmda_coincidence_detector(
    name: str,
    config: Optional[NMDADetectorConfig] = None,
) -> NMDACoincidenceDetector:
    """Create an NMDA detector, using default parameters when ``config`` is None."""
    return NMDACoincidenceDetector(name, config if config is not None else NMDADetectorConfig())


def create_simple_temporal_coincidence_detector(
    name: str,
    config: Optional[SimpleTemporalDetectorConfig] = None,
) -> SimpleTemporalCoincidenceDetector:
    """Create a simple temporal detector, using default parameters when ``config`` is None."""
    if config is None:
        config = SimpleTemporalDetectorConfig()
    return SimpleTemporalCoincidenceDetector(name, config)
