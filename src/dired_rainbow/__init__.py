"""Color directory listing entries by file type."""

__version__ = "0.1.0"
