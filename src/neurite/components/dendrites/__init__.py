"""
Dendritic integration modes.

A neuron delegates synaptic integration to one of these strategies: it calls
``handle()`` for every arriving signal and ``process()`` once per tick.
"""

from neurite.components.dendrites.integration_types import (
    IntegratedPotential,
    MembraneSnapshot,
    TimestampedInput,
)
from neurite.components.dendrites.integration_mode import (
    DendriticIntegrationMode,
    clamp_current,
    resolve_branch_label,
)
from neurite.components.dendrites.biological_config import (
    ActiveDendriteConfig,
    BiologicalConfig,
    cortical_pyramidal_config,
    hippocampal_config,
    interneuron_config,
)
from neurite.components.dendrites.channel_chain import ChannelChain
from neurite.components.dendrites.passive import PassiveMembraneMode
from neurite.components.dendrites.temporal_summation import TemporalSummationMode
from neurite.components.dendrites.biological import (
    BiologicalTemporalSummationMode,
    DecayedBatch,
)
from neurite.components.dendrites.shunting import ShuntingInhibitionMode, shunting_factor
from neurite.components.dendrites.active import ActiveDendriteMode

__all__ = [
    # Data model
    "IntegratedPotential",
    "MembraneSnapshot",
    "TimestampedInput",
    # Configs
    "ActiveDendriteConfig",
    "BiologicalConfig",
    "cortical_pyramidal_config",
    "hippocampal_config",
    "interneuron_config",
    # Modes
    "DendriticIntegrationMode",
    "PassiveMembraneMode",
    "TemporalSummationMode",
    "BiologicalTemporalSummationMode",
    "ShuntingInhibitionMode",
    "ActiveDendriteMode",
    # Helpers
    "ChannelChain",
    "DecayedBatch",
    "clamp_current",
    "resolve_branch_label",
    "shunting_factor",
]
