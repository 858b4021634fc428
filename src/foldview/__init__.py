"""Foldable terminal viewer for structured documents."""

__version__ = "0.1.0"
