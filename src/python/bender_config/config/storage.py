"""
Loading and saving configuration files.

Functions:
    load: Read and validate a configuration file
    save: Atomically write a configuration file

Example:
    >>> from bender_config.config import default, load, save
    >>> config = default()
    >>> config.set('max_workers', 16)
    >>> save(config, '/tmp/bender.yaml')
    >>> load('/tmp/bender.yaml').get('max_workers')
    16
"""

import logging
from pathlib import Path
from typing import Union

from bender_config.config import codec
from bender_config.config.settings import Config
from bender_config.errors import IoError, NotFoundError
from bender_config.utils.file_utils import atomic_write_text

logger = logging.getLogger(__name__)


def load(path: Union[str, Path]) -> Config:
    """Load configuration from a YAML file.

    Args:
        path: Path to the configuration file

    Returns:
        Config with every field populated; missing fields take defaults

    Raises:
        NotFoundError: If no file exists at path
        ParseError: If the file is not well-formed YAML
        ValidationError: If a recognized field is out of its domain
        IoError: If the file exists but cannot be read
    """
    path = Path(path)
    logger.info("Loading config from %s", path)

    try:
        text = path.read_text(encoding='utf-8')
    except FileNotFoundError:
        raise NotFoundError(path) from None
    except UnicodeDecodeError as e:
        raise IoError(path, f"not valid UTF-8 ({e.reason})") from e
    except OSError as e:
        raise IoError(path, e.strerror or str(e)) from e

    return codec.deserialize(text)


def save(config: Config, path: Union[str, Path]) -> None:
    """Save configuration to a YAML file.

    The file is replaced atomically: after a crash it holds either the old
    content or the complete new content. Missing parent directories are
    created.

    Raises:
        IoError: If the file cannot be written
    """
    path = Path(path)
    text = codec.serialize(config)

    try:
        atomic_write_text(path, text)
    except OSError as e:
        raise IoError(path, e.strerror or str(e)) from e

    logger.info("Saved config to %s", path)
