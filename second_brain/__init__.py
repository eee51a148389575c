"""Semantic "similar notes" index for a markdown vault."""

__version__ = "0.1.0"
