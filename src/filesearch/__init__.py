"""FileSearch - find files by content and zip the matches."""

__version__ = "0.1.0"
