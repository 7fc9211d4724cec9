"""
ConfStore configuration facade.

This package provides the Config class, which loads, edits and saves one
application's configuration file, and helpers that locate that file.

Usage:
    from ConfStore.config import Config

    # Load the configuration, starting empty if there is none yet
    config = Config.load("myapp", ignore_not_found=True)

    # Set a value and write the file back
    config.set("server.port", "8080")
    config.save()
"""

from ConfStore.config.manager import Config
from ConfStore.config.paths import os_config_dir, os_config_path, validate_name

__all__ = ["Config", "os_config_dir", "os_config_path", "validate_name"]
