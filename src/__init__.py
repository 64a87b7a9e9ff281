"""FIX order message parsing and validation."""

__version__ = "0.1.0"
