"""License policy validation for Python dependency graphs."""

__version__ = "0.1.0"
