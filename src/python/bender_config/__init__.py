"""
bender-config - configuration for the bender renderfarm.

This package reads, writes and creates the configuration shared by bender
render clients and servers. Saving and loading a configuration is lossless:
the same Config always serializes to the same text, and loading that text
gives back an equal Config.

Modules:
    config: Configuration model, YAML codec and file storage
    errors: Error types raised by the library
    wizard: Interactive configuration dialog
    cli: Command-line interface
    utils: Logging and file helpers

Example:
    >>> import bender_config
    >>> config = bender_config.default()
    >>> config.set('max_workers', 16)
    >>> bender_config.save(config, '/tmp/bender.yaml')
"""

from bender_config.__version__ import __version__
from bender_config.config import (
    Config,
    default,
    deserialize,
    load,
    save,
    serialize,
)
from bender_config.errors import (
    ConfigError,
    IoError,
    NotFoundError,
    ParseError,
    UnknownKeyError,
    ValidationError,
)

__all__ = [
    "__version__",
    # Model and codec
    "Config",
    "default",
    "load",
    "save",
    "serialize",
    "deserialize",
    # Errors
    "ConfigError",
    "IoError",
    "NotFoundError",
    "ParseError",
    "UnknownKeyError",
    "ValidationError",
]
