"""Configuration management for the bender renderfarm."""

__all__ = [
    "Config",
    "ServerConfig",
    "PathsConfig",
    "LimitsConfig",
    "LoggingConfig",
    "default",
    "load",
    "save",
    "serialize",
    "deserialize",
]

from .settings import (
    Config,
    ServerConfig,
    PathsConfig,
    LimitsConfig,
    LoggingConfig,
    default,
)
from .codec import serialize, deserialize
from .storage import load, save
