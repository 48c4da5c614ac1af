"""Client for the v2 service broker API."""

__version__ = "0.1.0"
