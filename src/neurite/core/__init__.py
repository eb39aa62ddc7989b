"""Core shared definitions."""

from neurite.core.contribution_keys import ContributionKeys

__all__ = ["ContributionKeys"]
