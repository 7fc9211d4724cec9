"""
ConfStore - Hierarchical configuration storage backed by INI or JSON files.

Key Components:
- Store: In-memory key/value tree addressed with dotted paths
- Config: Per-application facade that loads and saves a Store
- codecs: INI and JSON encoders/decoders
- CLI: Command-line interface for inspecting and editing configuration files

Usage Examples:
    # Working with a Store directly
    from ConfStore import Store
    store = Store()
    store.set("server.port", "8080")

    # Loading and saving an application's configuration
    from ConfStore import Config
    config = Config.load("myapp", ignore_not_found=True)
    config.set("server.host", "localhost")
    config.save()

    # Setting the log level
    from ConfStore import set_log_level
    set_log_level('debug')  # Show more detailed logs
"""

__version__ = '1.0.0'

# Import and configure logging early
from ConfStore.utils.logging import get_logger, set_log_level, configure_logging

# Get a logger for the main package
logger = get_logger(__name__)

# These imports are done after logging configuration to ensure they use the configured logging
from ConfStore.store import Store
from ConfStore.config import Config
from ConfStore.codecs import ini_codec, json_codec, codec_for_path

# Export key functions for public API
__all__ = ['Store', 'Config', 'ini_codec', 'json_codec', 'codec_for_path', 'set_log_level']
