"""
Factory functions for creating ion channels by family name.

Usage:
======
    from neurite.components.channels import create_channel

    nav = create_channel("sodium", "soma_nav")
    gaba = create_channel("gaba_a", "proximal_gaba", block_threshold=0.9)

    # Standard dendritic channel complement
    chain = create_dendritic_channel_set(prefix="apical")

Author: Neurite Project
Date: March 2026
"""

from __future__ import annotations

import dataclasses
import time
from typing import Any, Callable, Dict, List, Optional, Type

from neurite.components.channels.base import ChannelConfig, IonChannel
from neurite.components.channels.calcium import CalciumChannel
from neurite.components.channels.gaba_a import GabaAChannel
from neurite.components.channels.potassium import PotassiumChannel
from neurite.components.channels.sodium import SodiumChannel

CHANNEL_FAMILIES: Dict[str, Type[IonChannel]] = {
    "sodium": SodiumChannel,
    "potassium": PotassiumChannel,
    "calcium": CalciumChannel,
    "gaba_a": GabaAChannel,
}

_ALIASES = {
    "na": "sodium",
    "nav": "sodium",
    "nav1.6": "sodium",
    "k": "potassium",
    "kv": "potassium",
    "kv4.2": "potassium",
    "ca": "calcium",
    "cav": "calcium",
    "cav1.2": "calcium",
    "gaba": "gaba_a",
    "gabaa": "gaba_a",
    "chloride": "gaba_a",
}


def create_channel(
    kind: str,
    name: str,
    config: Optional[ChannelConfig] = None,
    clock: Callable[[], int] = time.time_ns,
    **overrides: Any,
) -> IonChannel:
    """Create a channel of the given family.

    Args:
        kind: Family name or alias ('sodium', 'kv', 'cav1.2', 'gaba_a', ...)
        name: Instance name, used as its key in channel contributions
        config: Full config; defaults to the family's defaults
        clock: Nanosecond clock used for state timestamps
        **overrides: Config fields to override on top of ``config``

    Returns:
        Configured channel instance

    Raises:
        ValueError: If ``kind`` is not a known channel family
        ConfigurationError: If the resulting config is invalid

    Example:
        >>> kv = create_channel("kv", "distal_kv", max_conductance=20.0)
    """
    key = kind.lower().replace('-', '_').replace(' ', '_')
    key = _ALIASES.get(key, key)
    if key not in CHANNEL_FAMILIES:
        raise ValueError(
            f"Unknown channel family '{kind}'. Must be one of: {sorted(CHANNEL_FAMILIES)}"
        )

    family = CHANNEL_FAMILIES[key]
    base = config if config is not None else family.default_config()
    if overrides:
        base = dataclasses.replace(base, **overrides)
    return family(name, base, clock=clock)


def create_dendritic_channel_set(prefix: str = "dendrite") -> List[IonChannel]:
    """Create the standard dendritic complement: Nav, Kv, Cav and GABA-A.

    Args:
        prefix: Prepended to each channel name ('<prefix>_nav', ...)
    """
    return [
        SodiumChannel(f"{prefix}_nav"),
        PotassiumChannel(f"{prefix}_kv"),
        CalciumChannel(f"{prefix}_cav"),
        GabaAChannel(f"{prefix}_gaba_a"),
    ]


# =============================================================================
# Config presets
# =============================================================================


def sodium_defaults() -> ChannelConfig:
    """Nav1.6-like dendritic sodium channel parameters."""
    return SodiumChannel.default_config()


def potassium_defaults() -> ChannelConfig:
    """Kv4.2-like A-type potassium channel parameters."""
    return PotassiumChannel.default_config()


def calcium_defaults() -> ChannelConfig:
    """Cav1.2-like L-type calcium channel parameters."""
    return CalciumChannel.default_config()


def gaba_a_defaults() -> ChannelConfig:
    """GABA-A receptor channel parameters."""
    return GabaAChannel.default_config()
