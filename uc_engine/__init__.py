"""Day-ahead unit commitment and dispatch engine."""

__version__ = "0.1.0"
