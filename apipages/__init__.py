"""Render an API model tree into cross-linked markdown pages."""

__version__ = "0.1.0"
