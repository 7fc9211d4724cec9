"""
Command-line interface (CLI) commands for the ConfStore package.

This module provides CLI commands for reading and editing configuration
files from the command line.
"""

import sys

import click

from ConfStore.cli.store_commands import (
    store_convert,
    store_delete,
    store_get,
    store_path,
    store_set,
    store_show,
)
from ConfStore.utils import log_error
from ConfStore.utils.logging import configure_logging, get_logger, set_log_level

# Get a logger for this module
logger = get_logger(__name__)

DEFAULT_APP_NAME = 'confstore'

# Apply the log level if specified in the command options
def apply_log_level(ctx, param, value):
    if value:
        set_log_level(value)
    return value

# Common options
def name_option(f):
    return click.option('--name', default=DEFAULT_APP_NAME, show_default=True,
                        help='Application name, selects the default configuration directory')(f)

def file_option(f):
    return click.option('--file', 'file', type=click.Path(dir_okay=False),
                        help='Configuration file (.ini or .json) instead of the default location')(f)

# Add an option for setting the log level to all commands
def log_level_option(f):
    return click.option('--log-level',
                        type=click.Choice(['debug', 'info', 'warning', 'error', 'critical'], case_sensitive=False),
                        callback=apply_log_level,
                        help='Set the logging level')(f)

@click.group()
def cli():
    """ConfStore CLI for hierarchical INI/JSON configuration files."""
    pass

@cli.command('path')
@name_option
@file_option
@log_level_option
@click.pass_context
def path_command(ctx, name, file, log_level):
    """Print the configuration file path."""
    ctx.exit(store_path(name, file))

@cli.command('get')
@click.argument('key')
@name_option
@file_option
@log_level_option
@click.pass_context
def get_command(ctx, key, name, file, log_level):
    """Print the value stored under a dotted KEY."""
    ctx.exit(store_get(name, file, key))

@cli.command('set')
@click.argument('key')
@click.argument('value')
@click.option('--raw', is_flag=True, help='Store VALUE as text, without converting null/true/false')
@name_option
@file_option
@log_level_option
@click.pass_context
def set_command(ctx, key, value, raw, name, file, log_level):
    """Set a dotted KEY to VALUE and save the configuration."""
    ctx.exit(store_set(name, file, key, value, raw))

@cli.command('delete')
@click.argument('key')
@name_option
@file_option
@log_level_option
@click.pass_context
def delete_command(ctx, key, name, file, log_level):
    """Delete a dotted KEY and save the configuration."""
    ctx.exit(store_delete(name, file, key))

@cli.command('show')
@click.option('--format', 'format_type', type=click.Choice(['ini', 'json', 'yaml'], case_sensitive=False),
              default='ini', help='Output format (ini, json or yaml)')
@click.option('--section', help='Show only a specific configuration section (dotted path)')
@name_option
@file_option
@log_level_option
@click.pass_context
def show_command(ctx, format_type, section, name, file, log_level):
    """Display the configuration."""
    ctx.exit(store_show(name, file, format_type, section))

@cli.command('convert')
@click.argument('source', type=click.Path(dir_okay=False))
@click.argument('destination', type=click.Path(dir_okay=False))
@name_option
@log_level_option
@click.pass_context
def convert_command(ctx, source, destination, name, log_level):
    """Convert SOURCE to DESTINATION; formats follow the file extensions."""
    ctx.exit(store_convert(name, source, destination))

def main():
    """Main entry point for the ConfStore command-line interface."""
    # The command line owns the process, so ConfStore records go to stderr
    configure_logging(console=True)
    try:
        return cli(prog_name='confstore')
    except Exception as e:
        log_error(e, "Error in CLI command")
        return 1

if __name__ == '__main__':
    sys.exit(main())
