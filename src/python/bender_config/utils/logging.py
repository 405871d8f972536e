"""
Logging setup for the bender-config command line.

Records go to stderr so that the YAML printed by 'show' and 'get' on stdout
stays parseable. Debug output adds timestamps; everything else stays short.

Example:
    >>> from bender_config.utils import setup_logging
    >>> setup_logging('INFO')
"""

import logging
import sys
from typing import Union

CONSOLE_FORMAT = '%(levelname)s - %(name)s - %(message)s'
DEBUG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: Union[str, int] = logging.WARNING) -> None:
    """Point the root logger at stderr with the given level.

    Calling it again replaces the previous handlers, so the CLI can first
    apply the -v/-q level and later the level from the loaded config.

    Args:
        level: Level name as stored in ``logging.level`` or a numeric level
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(DEBUG_FORMAT if level <= logging.DEBUG else CONSOLE_FORMAT))
    root_logger.addHandler(handler)
