"""
File utilities for bender-config.

Functions:
    create_directory: Safely create directories
    atomic_write_text: Replace a file's content without exposing partial writes
    is_writable: Check whether a file or directory path can be written

Example:
    >>> from bender_config.utils import atomic_write_text
    >>> atomic_write_text('/tmp/bender/config.yaml', 'limits:\\n  upload: 2\\n')
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)


def create_directory(path: Union[str, Path], exist_ok: bool = True) -> Path:
    """Safely create a directory and its parents.

    Args:
        path: Directory path to create
        exist_ok: Whether to raise exception if directory exists

    Returns:
        Path object for the created directory
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=exist_ok)
    return path


def _current_umask() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return umask


def _fsync_directory(directory: Path) -> None:
    """Flush a directory entry so a completed rename survives a crash."""
    if os.name == 'nt':
        return
    fd = os.open(directory, os.O_RDONLY)
    try:
        os.fsync(fd)
    finally:
        os.close(fd)


def atomic_write_text(path: Union[str, Path], text: str, encoding: str = 'utf-8') -> None:
    """Write text to a file atomically.

    The text goes to a temporary file in the target directory, which is
    flushed to disk and then renamed over the target. Readers see either the
    old file or the complete new one. On failure the temporary file is
    removed and the target is left untouched.

    A symlinked target is followed, so the file it points to is replaced and
    the link stays. An existing file keeps its mode; a new file gets the
    usual mode for the process umask (0644 under umask 022).

    Args:
        path: Destination file
        text: Full new content
        encoding: Text encoding

    Raises:
        OSError: If the directory or file cannot be written
    """
    path = Path(path).resolve()
    if not path.parent.exists():
        create_directory(path.parent)

    if path.exists():
        mode = path.stat().st_mode & 0o777
    else:
        mode = 0o666 & ~_current_umask()

    fd, tmp_name = tempfile.mkstemp(prefix=f'.{path.name}.', suffix='.tmp', dir=path.parent)
    try:
        with os.fdopen(fd, 'w', encoding=encoding, newline='\n') as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise

    _fsync_directory(path.parent)
    logger.debug("Wrote %d bytes to %s", len(text.encode(encoding)), path)


def is_writable(path: Union[str, Path]) -> bool:
    """Check whether a path can be written.

    Paths with a file extension are treated as files: the parent directory is
    created if needed and a scratch file is opened and removed again (an
    existing file is only opened for append). Other paths are treated as
    directories and created.

    Returns:
        True if writable, False if permission was denied

    Raises:
        OSError: For failures other than permission errors
    """
    path = Path(path)

    if path.suffix:
        if not path.parent.exists():
            logger.info("Trying to create path to %s", path.parent)
            try:
                create_directory(path.parent)
            except PermissionError:
                return False

        existed = path.exists()
        try:
            with open(path, 'a'):
                pass
        except PermissionError:
            return False
        if not existed:
            path.unlink()
        return True

    try:
        create_directory(path)
    except PermissionError:
        return False
    return os.access(path, os.W_OK)
