"""Configuration errors: prefixes, settings, entity-graph input."""

from pathlib import PurePath
from typing import Any

from .base import DossierError


class ConfigurationError(DossierError):
    """Base class for configuration-related errors."""

    pass


class InvalidPathError(ConfigurationError):
    """Raised when a path does not sit where the configuration says it should."""

    def __init__(self, path: PurePath, reason: str):
        super().__init__(f"Invalid path: {path}", details={"path": str(path), "reason": reason})
        self.path = path
        self.reason = reason


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason


class InvalidGraphError(ConfigurationError):
    """Raised when the entity graph handed over by the front end is malformed."""

    def __init__(self, reason: str, location: str = ""):
        details = {"reason": reason}
        if location:
            details["location"] = location
        super().__init__(f"Invalid entity graph: {reason}", details=details)
        self.reason = reason
        self.location = location
