"""Discovery and cached attribute access for devices exposed as attribute files."""

__version__ = "0.1.0"
