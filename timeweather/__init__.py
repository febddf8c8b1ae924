"""Local time and current weather for a chosen city."""

__version__ = "0.1.0"
