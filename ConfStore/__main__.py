#!/usr/bin/env python3
"""
Main entry point for the ConfStore package when run as a module.

This module provides the entry point for running the ConfStore package as a module
using `python -m ConfStore`. It delegates to the CLI's main function.

Example:
    $ python -m ConfStore --name myapp get server.port
    $ python -m ConfStore --name myapp set server.port 8080
    $ python -m ConfStore convert settings.ini settings.json
"""

import sys
from ConfStore.utils.logging import get_logger

# Get a logger for this module
logger = get_logger(__name__)

def main():
    """Main entry point for the ConfStore package."""
    try:
        from ConfStore.cli.commands import main as cli_main
        return cli_main()
    except ImportError as e:
        from ConfStore.utils import log_error

        log_error(e, "Failed to start ConfStore")
        print("Error: Failed to start ConfStore. The application may be incorrectly installed.")
        print("Technical details have been logged.")
        sys.exit(1)

if __name__ == "__main__":
    main()
