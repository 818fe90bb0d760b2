"""Typed exceptions for FileSearch."""


class FileSearchError(Exception):
    """Base exception for FileSearch failures."""


class ConfigError(FileSearchError):
    """Raised when scan settings are invalid."""


class PatternError(ConfigError):
    """Raised when the search pattern cannot be compiled."""


class WalkError(FileSearchError):
    """Raised when the scan root or one of its directories cannot be read."""


class ArchiveError(FileSearchError):
    """Raised for archive workflow failures."""
