"""Simple Workout Timer."""

__version__ = "0.1.0"
