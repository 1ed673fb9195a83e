"""namectl: reserved-name compiler CLI."""

__version__ = "0.1.0"
