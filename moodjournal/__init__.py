"""Mood journal: entry lifecycle, analytics and AI reflections."""

__version__ = "1.0.0"
