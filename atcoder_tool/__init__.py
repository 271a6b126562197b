"""Command-line helpers for setting up AtCoder contests and testing solutions on their samples."""

__version__ = "0.1.0"
__all__ = ["__version__"]