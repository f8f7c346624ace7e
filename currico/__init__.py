"""Currico - seller levels and trust verification for the teaching-materials marketplace."""

__version__ = "0.1.0"
