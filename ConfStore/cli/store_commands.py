"""
Store-related commands for the ConfStore CLI.

This module provides the implementations behind the CLI commands: reading,
writing and deleting dotted keys, showing a configuration and converting it
between formats. Each function returns an exit code.
"""

import json
from typing import Any, Optional

import click
import yaml

from ConfStore.codecs import ini_codec
from ConfStore.config import Config
from ConfStore.exceptions import ConfStoreError
from ConfStore.store import Store, coerce_scalar, to_plain
from ConfStore.utils import format_json, log_error
from ConfStore.utils.logging import get_logger

# Get logger for this module
logger = get_logger(__name__)

def _open(name: str, file: Optional[str]) -> Config:
    return Config.load(name, path=file, ignore_not_found=True)

def _format_value(value: Any) -> str:
    """Render a value for the terminal: JSON for structures, plain text for strings."""
    if isinstance(value, str):
        return value
    if isinstance(value, (Store, list)):
        return format_json(to_plain(value))
    return json.dumps(value)

def _report(error: Exception, context: str) -> int:
    log_error(error, context)
    message = error.message if isinstance(error, ConfStoreError) else str(error)
    click.echo(f"Error: {message}", err=True)
    return 1

def store_path(name: str, file: Optional[str] = None) -> int:
    """
    Print the configuration file path.

    Args:
        name: Application name
        file: Optional explicit file path

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    try:
        click.echo(str(Config(name, path=file).path))
        return 0
    except ConfStoreError as e:
        return _report(e, "Error resolving configuration path")

def store_get(name: str, file: Optional[str], key: str) -> int:
    """
    Print the value stored under a dotted key.

    Returns:
        Exit code (0 for success, 1 if the key is missing or on error)
    """
    try:
        config = _open(name, file)
        if not config.has(key):
            click.echo(f"Error: Key '{key}' not found in configuration", err=True)
            return 1
        click.echo(_format_value(config.get(key)))
        return 0
    except (ConfStoreError, OSError) as e:
        return _report(e, "Error reading configuration")

def store_set(name: str, file: Optional[str], key: str, value: str, raw: bool = False) -> int:
    """
    Set a dotted key and save the configuration.

    Args:
        name: Application name
        file: Optional explicit file path
        key: Dotted key to set
        value: Value as typed on the command line
        raw: Store the text as-is instead of converting null/true/false

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    try:
        config = _open(name, file)
        config.set(key, value if raw else coerce_scalar(value))
        config.save()
        click.echo(f"Set '{key}' in {config.path}")
        return 0
    except (ConfStoreError, OSError) as e:
        return _report(e, "Error updating configuration")

def store_delete(name: str, file: Optional[str], key: str) -> int:
    """
    Delete a dotted key and save the configuration.

    Returns:
        Exit code (0 for success, 1 if nothing was deleted or on error)
    """
    try:
        config = _open(name, file)
        if not config.delete(key):
            click.echo(f"Error: Key '{key}' not found in configuration", err=True)
            return 1
        config.save()
        click.echo(f"Deleted '{key}' from {config.path}")
        return 0
    except (ConfStoreError, OSError) as e:
        return _report(e, "Error updating configuration")

def store_show(name: str, file: Optional[str], format_type: str = 'ini',
               section: Optional[str] = None) -> int:
    """
    Display a configuration or one of its sections.

    Args:
        name: Application name
        file: Optional explicit file path
        format_type: Output format (ini, json or yaml)
        section: Optional dotted path of a section to display

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    try:
        config = _open(name, file)

        # Get the entire config or just a section
        if section:
            data = config.query(section)
            if data is None:
                click.echo(f"Error: Section '{section}' not found in configuration", err=True)
                return 1
        else:
            data = config.data

        if not isinstance(data, Store):
            click.echo(_format_value(data))
            return 0

        format_type = format_type.lower()
        if format_type == 'json':
            click.echo(format_json(to_plain(data, drop_null=True)))
        elif format_type == 'yaml':
            click.echo(yaml.dump(to_plain(data), default_flow_style=False,
                                 sort_keys=False, allow_unicode=True), nl=False)
        else:
            click.echo(ini_codec.encode(data), nl=False)
        return 0
    except (ConfStoreError, OSError) as e:
        return _report(e, "Error displaying configuration")

def store_convert(name: str, source: str, destination: str) -> int:
    """
    Convert a configuration file to another format.

    The formats are chosen by the file extensions (.ini or .json).

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    try:
        config = Config.load(name, path=source)
        config.save(destination)
        click.echo(f"Converted {source} to {destination}")
        return 0
    except (ConfStoreError, OSError) as e:
        return _report(e, "Error converting configuration")
