"""
Errors raised while loading station configuration or running a station.
"""
from typing import Any, Iterable, Optional


class ConfigError(Exception):
    """Base class for configuration failures; always fatal for that station."""

    def __init__(self, message: str, source: Optional[str] = None):
        self.source = source
        if source:
            message = f"{message} (source: {source})"
        super().__init__(message)


class UnsupportedFormat(ConfigError):
    """The document is neither a JSON object nor an XML document."""

    def __init__(self, source: Optional[str] = None):
        super().__init__("Configuration must be a JSON object or an XML document", source)


class MissingKeys(ConfigError):
    """A recognized document lacks one or more channel keys."""

    def __init__(self, missing: Iterable[str], source: Optional[str] = None):
        self.missing = list(missing)
        super().__init__(f"Missing configuration keys: {', '.join(self.missing)}", source)


class InvalidValue(ConfigError):
    """A channel key is present but its value is not a boolean literal."""

    def __init__(self, key: str, value: Any, source: Optional[str] = None):
        self.key = key
        self.value = value
        super().__init__(f"Invalid value for '{key}': expected 'true' or 'false', got {value!r}", source)


class SourceUnreadable(ConfigError):
    """The configuration source could not be read."""

    def __init__(self, path: str, reason: Exception):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read configuration file: {reason}", path)


class SimulationInvariantError(AssertionError):
    """A channel left its value domain; this is a programming error."""
