"""
Utility functions for the ConfStore package.

This module provides helpers shared by the CLI and the facade: JSON output
formatting and error reporting.
"""

import json
import traceback
from typing import Any, Optional

from ConfStore.utils.logging import get_logger

# Get a logger for this module
logger = get_logger(__name__)

def log_error(error: Exception, additional_context: Optional[str] = None) -> None:
    """
    Log an error with its traceback.

    The message is logged at error level; the traceback only at debug level.

    Args:
        error: The exception that occurred
        additional_context: Optional description of where the error occurred

    Example:
        >>> try:
        ...     Config.load("myapp", "settings.yaml")
        ... except ConfStoreError as e:
        ...     log_error(e, "Error loading configuration")
    """
    error_message = str(error)

    if additional_context:
        logger.error(f"{additional_context}: {error_message}")
    else:
        logger.error(f"Error: {error_message}")

    logger.debug(f"Traceback: {traceback.format_exc()}")

def format_json(data: Any, indent: int = 2, sort_keys: bool = False) -> str:
    """
    Format data as JSON string with proper encoding.

    Args:
        data: The data to format as JSON
        indent: Number of spaces for indentation (default: 2)
        sort_keys: Whether to sort dictionary keys (default: False)

    Returns:
        A formatted JSON string

    Example:
        >>> print(format_json({'server': {'port': '8080'}}))
        {
          "server": {
            "port": "8080"
          }
        }
    """
    return json.dumps(
        data,
        indent=indent,
        ensure_ascii=False,
        sort_keys=sort_keys,
        default=str  # Handle non-serializable types
    )
