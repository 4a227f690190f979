"""HTTP API for the H Água operations store."""

__version__ = "1.0.0"
