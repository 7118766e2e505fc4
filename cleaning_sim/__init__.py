"""Cleaning robot simulation for a multi-floor teaching building."""

__version__ = "0.1.0"
