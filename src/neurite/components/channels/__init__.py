"""
Ion channels for dendritic integration.

This module contains the voltage- and ligand-gated channel families that an
integration mode can run each synaptic signal through.
"""

from neurite.components.channels.base import (
    ChannelConfig,
    ChannelFeedback,
    ChannelState,
    ChannelTrigger,
    IonChannel,
    IonType,
    boltzmann_activation,
    boltzmann_inactivation,
    hill,
    relax,
    sanitize_gate,
)
from neurite.components.channels.calcium import CalciumChannel
from neurite.components.channels.channel_factory import (
    CHANNEL_FAMILIES,
    calcium_defaults,
    create_channel,
    create_dendritic_channel_set,
    gaba_a_defaults,
    potassium_defaults,
    sodium_defaults,
)
from neurite.components.channels.gaba_a import GabaAChannel
from neurite.components.channels.potassium import PotassiumChannel
from neurite.components.channels.sodium import SodiumChannel

__all__ = [
    # Base
    "ChannelConfig",
    "ChannelFeedback",
    "ChannelState",
    "ChannelTrigger",
    "IonChannel",
    "IonType",
    # Gating helpers
    "boltzmann_activation",
    "boltzmann_inactivation",
    "hill",
    "relax",
    "sanitize_gate",
    # Families
    "SodiumChannel",
    "PotassiumChannel",
    "CalciumChannel",
    "GabaAChannel",
    # Factory
    "CHANNEL_FAMILIES",
    "create_channel",
    "create_dendritic_channel_set",
    # Config presets
    "sodium_defaults",
    "potassium_defaults",
    "calcium_defaults",
    "gaba_a_defaults",
]
