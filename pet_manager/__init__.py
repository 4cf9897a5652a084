"""pet-CLI: a terminal pet record manager."""

__version__ = "0.1.0"
