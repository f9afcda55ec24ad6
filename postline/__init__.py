"""Command-line HTTP request runner."""

__version__ = "0.1.0"
