"""Amazon delivery slot checker."""

__version__ = "0.1.0"
