"""Raycasting engine that loads .cub maze levels and renders them first-person."""

__version__ = "0.1.0"