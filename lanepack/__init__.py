"""Implementation packages for lanekit."""

__version__ = "0.1.0"
