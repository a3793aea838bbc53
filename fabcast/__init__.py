"""Fabcast: broadcast lower-third overlay controller for FAB livestreams."""

__version__ = "0.1.0"
