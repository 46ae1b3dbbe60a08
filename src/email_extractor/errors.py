"""Custom exceptions for the extractor domain."""


class ExtractorError(Exception):
    """Base exception for this project."""


class ConfigError(ExtractorError):
    """Raised when runtime configuration is invalid."""
