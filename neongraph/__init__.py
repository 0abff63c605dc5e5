"""Render a GitHub contribution calendar as a neon bar or line chart."""

__version__ = "0.1.0"
