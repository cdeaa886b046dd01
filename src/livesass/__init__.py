"""Live stylesheet compilation for hosting applications."""

__version__ = "0.1.0"
