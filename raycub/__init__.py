"""Raycasting maze explorer driven by .cub scene files with XPM textures."""

__version__ = "0.1.0"