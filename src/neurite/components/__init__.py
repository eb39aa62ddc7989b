"""Neurite components: ion channels, coincidence detectors and dendritic integration."""
