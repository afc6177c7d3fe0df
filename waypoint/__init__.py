"""Waypoint: service layer for location-based quest games."""

__version__ = "1.0.0"
