"""
Neurite configuration helpers.

Component configs live next to the components they configure
(``ChannelConfig`` in ``neurite.components.channels``, ``BiologicalConfig`` in
``neurite.components.dendrites`` and so on). This package only holds the
shared declarative validation framework they all build on.
"""

from neurite.config.validation import ValidatedConfig, ValidatorRegistry

__all__ = [
    "ValidatedConfig",
    "ValidatorRegistry",
]
