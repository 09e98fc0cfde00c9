"""Raycasting maze explorer for .cub scene files: parsing, raycasting, rendering and a pygame window."""

__version__ = "0.1.0"