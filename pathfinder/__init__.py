"""Pathfinder: multi-source job aggregation and AI-assisted job matching."""

__version__ = "1.0.0"
