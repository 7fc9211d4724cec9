"""
Custom exceptions for the ConfStore package.

This module defines a hierarchical exception system that provides:
1. Specific, technical error information for debugging and logging
2. User-friendly error messages for end-users
3. Error codes for consistent error identification
4. Optional context information for additional debugging
"""

from typing import Optional, Dict, Any
import traceback
import sys

class ConfStoreError(Exception):
    """Base exception for all ConfStore errors."""

    # Default values
    error_code = "CS-GENERIC-ERROR"
    user_message = "An unexpected error occurred."

    def __init__(
        self,
        message: str = None,
        user_message: str = None,
        error_code: str = None,
        context: Dict[str, Any] = None,
        cause: Exception = None,
        include_traceback: bool = True
    ):
        # Technical message for logs
        self.message = message or self.__class__.__doc__ or "An error occurred."
        super().__init__(self.message)

        # User-friendly message
        self.user_message = user_message or self.__class__.user_message

        self.error_code = error_code or self.__class__.error_code

        # Additional context
        self.context = context or {}
        self.cause = cause

        # Capture traceback if requested
        self.traceback = None
        if include_traceback:
            self.traceback = traceback.format_exc() if sys.exc_info()[0] else None

    def to_dict(self) -> Dict[str, Any]:
        """Convert the exception to a dictionary for reporting."""
        error_dict = {
            "error_code": self.error_code,
            "message": self.user_message,
        }

        # Include technical details only in debug mode or for logging
        if self.context.get('debug'):
            error_dict["technical_details"] = {
                "message": self.message,
                "context": self.context,
            }
            if self.traceback:
                error_dict["technical_details"]["traceback"] = self.traceback
            if self.cause:
                error_dict["technical_details"]["cause"] = str(self.cause)

        return error_dict


# Argument Errors - 1000 range
class InvalidArgumentError(ConfStoreError):
    """Exception raised when a key, path, value or option has the wrong type or shape."""
    error_code = "CS-ARG-1001"
    user_message = "An invalid argument was provided."


# Format Errors - 2000 range
class FormatError(ConfStoreError):
    """Base exception for all file-format errors."""
    error_code = "CS-FMT-2000"
    user_message = "The configuration file format could not be handled."


class UnsupportedFormatError(FormatError):
    """Exception raised when a file extension is neither .ini nor .json."""
    error_code = "CS-FMT-2001"
    user_message = "Unsupported configuration file format: only ini/json supported."


class ParseFailureError(FormatError):
    """Exception raised when INI or JSON text cannot be turned into a Store."""
    error_code = "CS-FMT-2002"
    user_message = "The configuration file could not be parsed."


# Storage Errors - 3000 range
class StorageError(ConfStoreError):
    """Base exception for all storage-related errors."""
    error_code = "CS-IO-3000"
    user_message = "A storage error occurred."


class NotFoundError(StorageError):
    """Exception raised when a configuration file does not exist."""
    error_code = "CS-IO-3001"
    user_message = "The configuration file could not be found."


# System Errors - 4000 range
class ConfStoreSystemError(ConfStoreError):
    """Base exception for all system-related errors."""
    error_code = "CS-SYS-4000"
    user_message = "A system error occurred."


class UnsupportedPlatformError(ConfStoreSystemError):
    """Exception raised when no configuration directory convention is known for the OS."""
    error_code = "CS-SYS-4001"
    user_message = "This operating system is not supported."
