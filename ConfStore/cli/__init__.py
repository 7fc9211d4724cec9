"""
Command-line interface module for the ConfStore package.

This module provides a command-line interface for reading and editing
configuration files: getting, setting and deleting dotted keys, showing a
whole file in several formats and converting between INI and JSON.

Key Components:
- main: Main entry point for the CLI
- Commands: path, get, set, delete, show, convert
"""

from ConfStore.cli.commands import main

__all__ = ['main']
