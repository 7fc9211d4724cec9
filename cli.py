#!/usr/bin/env python3
"""
Entry point for the ConfStore CLI.
This allows running the CLI directly with `python cli.py`.
"""
from ConfStore.cli.commands import main

if __name__ == '__main__':
    main()
