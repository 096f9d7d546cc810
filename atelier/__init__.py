"""Atelier appearance engine: theme import, customization and persistence."""

__version__ = "0.4.0"
