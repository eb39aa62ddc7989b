"""
NEURITE - Dendritic integration for event-driven spiking neurons

Quick Start:
============

    from neurite import (
        ActiveDendriteConfig, ActiveDendriteMode, MembraneSnapshot,
        NMDADetectorConfig, NeuralSignal, cortical_pyramidal_config,
    )

    mode = ActiveDendriteMode(
        ActiveDendriteConfig(coincidence_detector=NMDADetectorConfig()),
        cortical_pyramidal_config(),
    )
    mode.handle(NeuralSignal(value=1.1, source_id="proximal_1"))
    result = mode.process(MembraneSnapshot(accumulator=-40.0))

Internal code should import from the defining module:

    from neurite.components.dendrites.biological import BiologicalTemporalSummationMode
    from neurite.components.coincidence.nmda import NMDACoincidenceDetector
"""

__version__ = "0.1.0"

# ============================================================================
# PUBLIC API
# ============================================================================

# Errors
from neurite.errors import ConfigurationError, NeuriteError

# Signals and units
from neurite.signals import LigandType, NeuralSignal
from neurite.units import conductance_to_current, ms_to_ns, ns_to_ms

# Ion channels
from neurite.components.channels import (
    CalciumChannel,
    ChannelConfig,
    GabaAChannel,
    IonChannel,
    IonType,
    PotassiumChannel,
    SodiumChannel,
    create_channel,
    create_dendritic_channel_set,
)

# Coincidence detection
from neurite.components.coincidence import (
    CoincidenceDetector,
    CoincidenceResult,
    NMDACoincidenceDetector,
    NMDADetectorConfig,
    SimpleTemporalCoincidenceDetector,
    SimpleTemporalDetectorConfig,
    create_coincidence_detector,
)

# Dendritic integration
from neurite.components.dendrites import (
    ActiveDendriteConfig,
    ActiveDendriteMode,
    BiologicalConfig,
    BiologicalTemporalSummationMode,
    DendriticIntegrationMode,
    IntegratedPotential,
    MembraneSnapshot,
    PassiveMembraneMode,
    ShuntingInhibitionMode,
    TemporalSummationMode,
    TimestampedInput,
    cortical_pyramidal_config,
    hippocampal_config,
    interneuron_config,
)

# Introspection
from neurite.core.contribution_keys import ContributionKeys

__all__ = [
    "__version__",
    # Errors
    "ConfigurationError",
    "NeuriteError",
    # Signals and units
    "LigandType",
    "NeuralSignal",
    "conductance_to_current",
    "ms_to_ns",
    "ns_to_ms",
    # Ion channels
    "ChannelConfig",
    "IonChannel",
    "IonType",
    "SodiumChannel",
    "PotassiumChannel",
    "CalciumChannel",
    "GabaAChannel",
    "create_channel",
    "create_dendritic_channel_set",
    # Coincidence detection
    "CoincidenceDetector",
    "CoincidenceResult",
    "NMDACoincidenceDetector",
    "NMDADetectorConfig",
    "SimpleTemporalCoincidenceDetector",
    "SimpleTemporalDetectorConfig",
    "create_coincidence_detector",
    # Dendritic integration
    "ActiveDendriteConfig",
    "ActiveDendriteMode",
    "BiologicalConfig",
    "BiologicalTemporalSummationMode",
    "DendriticIntegrationMode",
    "IntegratedPotential",
    "MembraneSnapshot",
    "PassiveMembraneMode",
    "ShuntingInhibitionMode",
    "TemporalSummationMode",
    "TimestampedInput",
    "cortical_pyramidal_config",
    "hippocampal_config",
    "interneuron_config",
    # Introspection
    "ContributionKeys",
]
