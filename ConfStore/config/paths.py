"""
Configuration file locations.

Resolves the per-application configuration directory following each
operating system's convention:

- Windows: ``~/AppData/Local/<name>``
- macOS and Linux: ``~/.config/<name>``
"""

import sys
from pathlib import Path
from typing import Optional, Union

from ConfStore.exceptions import InvalidArgumentError, UnsupportedPlatformError
from ConfStore.utils.logging import get_logger

logger = get_logger(__name__)


def validate_name(name: str) -> str:
    """
    Check that an application name can be used as a directory name.

    Raises:
        InvalidArgumentError: If name is not a non-empty string, or contains
            a dot, a slash or a backslash
    """
    if not isinstance(name, str) or not name:
        raise InvalidArgumentError(f"invalid name: {name!r}")
    if '.' in name:
        raise InvalidArgumentError(f"invalid name {name!r}: punctuation not allowed")
    if '/' in name or '\\' in name:
        raise InvalidArgumentError(f"invalid name {name!r}: slash not allowed")
    return name


def os_config_dir(name: str, platform: Optional[str] = None,
                  home: Optional[Union[str, Path]] = None) -> Path:
    """
    Get the configuration directory for an application.

    Args:
        name: Application name
        platform: Platform identifier as in sys.platform (default: current)
        home: Home directory (default: the current user's)

    Returns:
        Path: The directory; it is not created

    Raises:
        InvalidArgumentError: If name is invalid
        UnsupportedPlatformError: If the platform has no known convention
    """
    validate_name(name)
    platform = platform or sys.platform
    home = Path(home) if home is not None else Path.home()

    if platform == 'win32':
        return home / 'AppData' / 'Local' / name
    if platform == 'darwin' or platform.startswith('linux'):
        return home / '.config' / name
    raise UnsupportedPlatformError(
        f"unsupported platform: {platform}",
        context={"platform": platform}
    )


def os_config_path(name: str, filename: Optional[str] = None, mkdir: bool = False) -> Path:
    """
    Get the configuration directory, or a file inside it, for an application.

    Args:
        name: Application name
        filename: Optional file name appended to the directory
        mkdir: Create the directory if it does not exist

    Returns:
        Path: The directory or file path

    Examples:
        >>> os_config_path("myapp", "config.ini")  # on Linux
        PosixPath('/home/user/.config/myapp/config.ini')
    """
    directory = os_config_dir(name)

    if mkdir:
        logger.debug(f"creating configuration directory {directory}")
        directory.mkdir(parents=True, exist_ok=True)

    if filename is None:
        return directory
    return directory / filename
