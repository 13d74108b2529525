"""Errors raised by the configuration store.

Filesystem failures are not wrapped: they surface as the ``OSError`` raised
by the underlying call.
"""

from __future__ import annotations

from typing import Optional


class ConfigError(Exception):
    """Base class for configuration store errors."""


class NotReadError(ConfigError):
    """Raised when the store is queried or mutated before a successful read."""

    def __init__(self, message: str = "Configuration was not read") -> None:
        super().__init__(message)


class ConfigFormatError(ConfigError):
    """Structural problem found while parsing configuration text."""

    def __init__(self, message: str, lineno: Optional[int] = None) -> None:
        if lineno is not None:
            message = f"{message} (line {lineno})"
        super().__init__(message)
        self.lineno = lineno


class DuplicateSectionError(ConfigFormatError):
    def __init__(self, section: str, lineno: Optional[int] = None) -> None:
        super().__init__(f"Configuration contains duplicate '{section}' section", lineno)
        self.section = section


class DuplicateKeyError(ConfigFormatError):
    def __init__(self, section: str, key: str, lineno: Optional[int] = None) -> None:
        super().__init__(f"Configuration section '{section}' contains duplicate key '{key}'", lineno)
        self.section = section
        self.key = key


class OrphanKeyError(ConfigFormatError):
    """A ``key=value`` line appeared before any ``[section]`` header."""

    def __init__(self, key: str, lineno: Optional[int] = None) -> None:
        super().__init__(f"Key '{key}' appears before any section header", lineno)
        self.key = key


class MissingSectionError(ConfigError):
    def __init__(self, section: str) -> None:
        super().__init__(f"Section '{section}' doesn't exist")
        self.section = section


class MissingKeyError(ConfigError):
    def __init__(self, section: str, key: str) -> None:
        super().__init__(f"Key '{key}' doesn't exist in section '{section}'")
        self.section = section
        self.key = key


class InconsistentStateError(ConfigError):
    """Internal contract violation (e.g. creation flag vs. file existence).

    This is a programming error; retrying will not help.
    """


__all__ = [
    "ConfigError",
    "ConfigFormatError",
    "DuplicateKeyError",
    "DuplicateSectionError",
    "InconsistentStateError",
    "MissingKeyError",
    "MissingSectionError",
    "NotReadError",
    "OrphanKeyError",
]
