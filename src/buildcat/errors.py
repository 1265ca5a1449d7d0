"""Exceptions raised by buildcat."""


class BuildcatError(Exception):
    """Base exception for buildcat errors."""


class UnknownPlatformError(BuildcatError, ValueError):
    """Raised when a platform token is not one buildcat knows how to build for."""


class VersionParseError(BuildcatError, ValueError):
    """Raised when an identifier has no numeric segment to order by."""


class ConfigError(BuildcatError):
    """Raised when the configuration file cannot be read or validated."""


class RecordLoadError(BuildcatError):
    """Raised when an upstream record batch or catalog file cannot be loaded."""
