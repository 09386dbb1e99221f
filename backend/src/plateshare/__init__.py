"""PlateShare - food donation coordination API."""

__version__ = "0.1.0"
