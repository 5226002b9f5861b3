"""Command line interface for lanekit."""
