"""
Configuration settings for the bender renderfarm.

This module defines the in-memory configuration model. Settings are grouped
into sections, each a dataclass whose fields carry their default value and a
validator. Every assignment to a section field is validated, so a Config is
always internally consistent.

Classes:
    ServerConfig: Where render clients find the bender server
    PathsConfig: Filesystem locations used by the farm
    LimitsConfig: Numeric resource limits
    LoggingConfig: Log verbosity for bender tools
    Config: Main configuration class holding all sections

Functions:
    default: Build a Config populated entirely with defaults

Example:
    >>> from bender_config.config import default
    >>> config = default()
    >>> config.set('max_workers', 16)
    >>> config.get('limits.max_workers')
    16
"""

import copy
import logging
import os
from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Tuple

from bender_config.config import validators
from bender_config.errors import ParseError, UnknownKeyError, ValidationError
from bender_config.utils.file_utils import is_writable

logger = logging.getLogger(__name__)

ENV_PREFIX = 'BENDER_'


def setting(default: Any, validator: validators.Validator) -> Any:
    """Declare a section field with its default and domain validator."""
    return field(default=default, metadata={'validator': validator})


class Section:
    """Base for configuration sections.

    Validates every assignment to a declared field, including the ones made
    by the generated ``__init__``.
    """

    name: ClassVar[str] = ''

    def __setattr__(self, attr: str, value: Any) -> None:
        declared = self.__dataclass_fields__.get(attr)
        if declared is not None:
            declared.metadata['validator'](f'{self.name}.{attr}', value)
        super().__setattr__(attr, value)

    @classmethod
    def field_names(cls) -> List[str]:
        return [f.name for f in fields(cls)]

    def to_dict(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in self.field_names()}


@dataclass
class ServerConfig(Section):
    """Server endpoint settings.

    Attributes:
        host: Host name or IP address of the bender server
        port: TCP port the server listens on
    """
    name: ClassVar[str] = 'server'

    host: str = setting('127.0.0.1', validators.host)
    port: int = setting(5000, validators.integer(1, 65535))


@dataclass
class PathsConfig(Section):
    """Filesystem locations.

    Attributes:
        config: Where the configuration file itself lives
        private: Directory for private keys and state
        upload: Directory receiving uploaded job data
    """
    name: ClassVar[str] = 'paths'

    config: str = setting('/etc/bender/config.yaml', validators.path)
    private: str = setting('./private', validators.path)
    upload: str = setting('/data', validators.path)


@dataclass
class LimitsConfig(Section):
    """Resource limits.

    Attributes:
        upload: Maximum number of concurrent uploads
        max_workers: Maximum number of render workers per node
    """
    name: ClassVar[str] = 'limits'

    upload: int = setting(2, validators.integer(1, 64))
    max_workers: int = setting(4, validators.integer(1, 1024))


@dataclass
class LoggingConfig(Section):
    """Logging settings."""
    name: ClassVar[str] = 'logging'

    level: str = setting('INFO', validators.choice(validators.LOG_LEVELS))


SECTIONS: Tuple[type, ...] = (ServerConfig, PathsConfig, LimitsConfig, LoggingConfig)


def _canonical(value: Any) -> Any:
    """Deep-copy a value with every mapping sorted by key."""
    if isinstance(value, Mapping):
        return {k: _canonical(value[k]) for k in sorted(value, key=str)}
    if isinstance(value, list):
        return [_canonical(item) for item in value]
    return copy.deepcopy(value)


def _preserved_extra(extra: Mapping[str, Any]) -> Dict[str, Any]:
    """Canonical copy of unknown keys, minus anything that shadows a declared field.

    Raises:
        ValidationError: If an entry named after a section is not a mapping
    """
    result = _canonical(extra)
    for section_cls in SECTIONS:
        if section_cls.name not in result:
            continue
        unknown = result[section_cls.name]
        if not isinstance(unknown, Mapping):
            raise ValidationError(f'extra.{section_cls.name}', unknown,
                                  "unknown keys of a section must be a mapping")
        shadowed = [k for k in unknown if k in section_cls.field_names()]
        for key in shadowed:
            logger.warning("Dropping extra '%s.%s': it names a declared field",
                           section_cls.name, key)
            del unknown[key]
        if not unknown:
            del result[section_cls.name]
    return result


@dataclass
class Config:
    """Main configuration class for the bender renderfarm.

    Settings are organized into sections. Keys that are not recognized when
    loading are kept in ``extra`` and written back on save: unknown top-level
    keys are stored under their own name, unknown keys inside a known section
    under the section's name.

    Attributes:
        server: Server endpoint settings
        paths: Filesystem locations
        limits: Resource limits
        logging: Logging settings
        extra: Unrecognized keys preserved across load/save

    Example:
        >>> config = Config()
        >>> config.limits.max_workers = 8
        >>> config.get('max_workers')
        8
    """
    server: ServerConfig = field(default_factory=ServerConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)
    limits: LimitsConfig = field(default_factory=LimitsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    extra: Dict[str, Any] = field(default_factory=dict)

    def __setattr__(self, attr: str, value: Any) -> None:
        if attr == 'extra':
            value = _preserved_extra(value)
        super().__setattr__(attr, value)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Config':
        """Create a Config from a plain mapping.

        Missing sections and fields take their defaults.

        Raises:
            ParseError: If a section is present but is not a mapping
            ValidationError: If a recognized field is out of its domain
        """
        sections = {}
        extra: Dict[str, Any] = {}

        for section_cls in SECTIONS:
            raw = data.get(section_cls.name)
            if raw is None:
                raw = {}
            if not isinstance(raw, Mapping):
                raise ParseError(f"section '{section_cls.name}' must be a mapping, "
                                 f"got {type(raw).__name__}")

            known = section_cls.field_names()
            sections[section_cls.name] = section_cls(
                **{k: v for k, v in raw.items() if k in known}
            )
            unknown = {k: v for k, v in raw.items() if k not in known}
            if unknown:
                logger.debug("Preserving unknown keys in [%s]: %s",
                             section_cls.name, ', '.join(map(str, unknown)))
                extra[section_cls.name] = unknown

        section_names = {s.name for s in SECTIONS}
        for key, value in data.items():
            if key not in section_names:
                logger.debug("Preserving unknown top-level key '%s'", key)
                extra[key] = value

        return cls(extra=extra, **sections)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary in canonical order.

        Sections come in declaration order with their fields in declaration
        order, followed by preserved unknown keys sorted by name.
        """
        data: Dict[str, Any] = {}
        extra = _canonical(self.extra)
        for section_cls in SECTIONS:
            section = getattr(self, section_cls.name).to_dict()
            for key, value in extra.pop(section_cls.name, {}).items():
                section.setdefault(key, value)
            data[section_cls.name] = section
        data.update(extra)
        return data

    @staticmethod
    def keys() -> List[str]:
        """Return every recognized key as 'section.field', in canonical order."""
        return [f'{s.name}.{name}' for s in SECTIONS for name in s.field_names()]

    @staticmethod
    def resolve_key(key: str) -> Tuple[str, str]:
        """Split a key into (section, field).

        Accepts 'section.field' or a bare field name that is unique across
        sections.

        Raises:
            UnknownKeyError: If the key does not name exactly one field
        """
        if '.' in key:
            section, name = key.split('.', 1)
            for section_cls in SECTIONS:
                if section_cls.name == section and name in section_cls.field_names():
                    return section, name
            raise UnknownKeyError(key)

        matches = [s.name for s in SECTIONS if key in s.field_names()]
        if len(matches) != 1:
            raise UnknownKeyError(key)
        return matches[0], key

    def get(self, key: str) -> Any:
        section, name = self.resolve_key(key)
        return getattr(getattr(self, section), name)

    def set(self, key: str, value: Any) -> None:
        """Validate and assign a value.

        The config is left unchanged if validation fails.

        Raises:
            UnknownKeyError: If the key is not recognized
            ValidationError: If the value is outside the field's domain
        """
        section, name = self.resolve_key(key)
        setattr(getattr(self, section), name, value)
        logger.debug("Set %s.%s = %r", section, name, value)

    def parse_value(self, key: str, text: str) -> Any:
        """Convert text from the command line or environment to the field's type.

        Example:
            >>> Config().parse_value('server.port', '8080')
            8080
        """
        section, name = self.resolve_key(key)
        section_cls = type(getattr(self, section))
        field_type = next(f.type for f in fields(section_cls) if f.name == name)

        if field_type is int:
            try:
                return int(text.strip())
            except ValueError:
                raise ValidationError(f'{section}.{name}', text, "expected an integer") from None
        return text

    def is_default(self) -> bool:
        """Return True if every setting equals its default."""
        return self == Config()

    def update_from_env(self, environ: Optional[Mapping[str, str]] = None) -> None:
        """Update configuration from environment variables.

        Environment variables should be prefixed with 'BENDER_' and use
        double underscores to separate section and field. Variables that do
        not name a recognized field are ignored.

        Example:
            >>> config = Config()
            >>> config.update_from_env({'BENDER_LIMITS__MAX_WORKERS': '16'})
            >>> config.limits.max_workers
            16
        """
        if environ is None:
            environ = os.environ

        for var, text in sorted(environ.items()):
            if not var.startswith(ENV_PREFIX):
                continue
            parts = var[len(ENV_PREFIX):].lower().split('__')
            if len(parts) != 2:
                continue
            key = '.'.join(parts)
            if key not in self.keys():
                continue
            self.set(key, self.parse_value(key, text))
            logger.info("Overriding %s from %s", key, var)

    def check_paths(self) -> Dict[str, bool]:
        """Report whether each configured path can be written.

        Paths that fail with an error other than a permission problem are
        logged and reported as not writable.
        """
        results = {}
        for name in PathsConfig.field_names():
            value = getattr(self.paths, name)
            try:
                results[f'paths.{name}'] = is_writable(value)
            except OSError as e:
                logger.warning("Cannot check paths.%s (%s): %s", name, value, e)
                results[f'paths.{name}'] = False
        return results

    def write_changes(self) -> None:
        """Save the config to the location in ``paths.config``.

        Raises:
            IoError: If the file cannot be written
        """
        from bender_config.config.storage import save

        save(self, self.paths.config)

    def read_changes(self) -> None:
        """Replace this config in place with the file at ``paths.config``.

        On failure the config is left unchanged.

        Raises:
            NotFoundError, ParseError, ValidationError, IoError: As for load()
        """
        from bender_config.config.storage import load

        loaded = load(self.paths.config)
        for f in fields(self):
            setattr(self, f.name, getattr(loaded, f.name))


def default() -> Config:
    """Build a Config populated entirely with built-in defaults."""
    return Config()
