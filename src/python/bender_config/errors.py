"""
Error types raised by bender-config.

All library failures derive from ConfigError so callers (and the CLI) can
handle them in one place. NotFoundError and IoError also derive from the
matching builtin exceptions.
"""

from typing import Optional


class ConfigError(Exception):
    """Base class for configuration errors."""


class NotFoundError(ConfigError, FileNotFoundError):
    """No configuration file exists at the requested path."""

    def __init__(self, path):
        self.path = str(path)
        super().__init__(f"Config file not found: {self.path}")

    def __str__(self) -> str:
        return f"Config file not found: {self.path}"


class ParseError(ConfigError):
    """The persisted content is not well-formed.

    Attributes:
        reason: Human readable description of the problem
        line: 1-based line number, if known
        column: 1-based column number, if known
    """

    def __init__(self, reason: str, line: Optional[int] = None, column: Optional[int] = None):
        self.reason = reason
        self.line = line
        self.column = column
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.line is not None:
            return f"Parse error at line {self.line}, column {self.column}: {self.reason}"
        return f"Parse error: {self.reason}"


class ValidationError(ConfigError, ValueError):
    """A field value is outside its allowed domain."""

    def __init__(self, key: str, value, reason: str):
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid value for '{key}': {value!r} ({reason})")


class UnknownKeyError(ValidationError):
    """The requested key is not a recognized configuration field."""

    def __init__(self, key: str):
        super().__init__(key, None, "unknown configuration key")

    def __str__(self) -> str:
        return f"Unknown configuration key: '{self.key}'"


class IoError(ConfigError, OSError):
    """Reading, writing or renaming the configuration file failed."""

    def __init__(self, path, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"I/O error on {self.path}: {reason}")

    def __str__(self) -> str:
        return f"I/O error on {self.path}: {self.reason}"
