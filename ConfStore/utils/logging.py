"""
Logging setup for the ConfStore package.

ConfStore is a library, so importing it must not change the host
application's logging. Only the ``ConfStore`` package logger is configured
here: by default it carries a NullHandler and propagates to whatever the
host has set up. Console or file output is attached only when asked for,
either through configure_logging() (the CLI does this) or through the
environment:

- ``CONFSTORE_LOG_LEVEL``: level name; also enables console output
- ``CONFSTORE_LOG_FORMAT``: ``json`` (default) or ``text``
- ``CONFSTORE_LOG_FILE``: path of a rotating log file
"""

import json
import logging
import os
import platform
import socket
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, List, Optional, Union

PACKAGE_LOGGER_NAME = 'ConfStore'

DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEFAULT_JSON_FORMAT = True
DEFAULT_LOG_LEVEL = logging.WARNING

LOG_LEVEL_ENV_VAR = 'CONFSTORE_LOG_LEVEL'
LOG_FORMAT_ENV_VAR = 'CONFSTORE_LOG_FORMAT'
LOG_FILE_ENV_VAR = 'CONFSTORE_LOG_FILE'

LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUPS = 3

LOG_LEVELS = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warning': logging.WARNING,
    'error': logging.ERROR,
    'critical': logging.CRITICAL,
}

_state = {
    'configured': False,
    'json': DEFAULT_JSON_FORMAT,
}

# Fields stamped on every JSON record
_process_fields = {
    'service_name': 'confstore',
    'hostname': socket.gethostname(),
    'os': platform.system(),
}


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    try:
        return LOG_LEVELS[level.lower()]
    except KeyError:
        valid_levels = ", ".join(LOG_LEVELS)
        raise ValueError(f"Invalid log level: {level}. Valid levels are: {valid_levels}")


class JsonFormatter(logging.Formatter):
    """Render each record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            'timestamp': self.formatTime(record, '%Y-%m-%dT%H:%M:%S'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        payload.update(_process_fields)

        context = getattr(record, 'context', None)
        if context:
            payload.update(context)

        if record.exc_info:
            exc_type, exc_value, _ = record.exc_info
            payload['exception'] = {
                'type': exc_type.__name__,
                'message': str(exc_value),
                'traceback': self.formatException(record.exc_info),
            }

        return json.dumps(payload, default=str)


class StructuredLoggerAdapter(logging.LoggerAdapter):
    """
    Logger adapter that carries bound context fields.

    Fields given at construction (e.g. the config name) are merged with any
    ``extra`` passed to a single call and exposed to JsonFormatter as the
    record's ``context`` attribute.
    """

    def __init__(self, logger: logging.Logger, extra: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(logger, dict(extra or {}))

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        context = dict(self.extra)
        context.update(kwargs.pop('extra', None) or {})
        kwargs['extra'] = {'context': context}
        return msg, kwargs


def package_logger() -> logging.Logger:
    """The parent logger of every ConfStore module logger."""
    return logging.getLogger(PACKAGE_LOGGER_NAME)


def configure_logging(level: Optional[Union[int, str]] = None,
                      format_str: Optional[str] = None,
                      use_json: Optional[bool] = None,
                      log_file: Optional[str] = None,
                      console: Optional[bool] = None) -> None:
    """
    Configure the ConfStore package logger.

    The root logger and any handlers owned by the host application are left
    untouched. Without console or file output the package logger gets a
    NullHandler and propagates, so records reach the host's handlers.

    Args:
        level: Level for the package logger (default: CONFSTORE_LOG_LEVEL,
            or WARNING when output handlers are attached)
        format_str: Format string for text output
        use_json: Emit JSON records (default: CONFSTORE_LOG_FORMAT, else True)
        log_file: Path of a rotating log file (default: CONFSTORE_LOG_FILE)
        console: Attach a stderr handler (default: when CONFSTORE_LOG_LEVEL is set)
    """
    nothing_requested = all(arg is None for arg in (level, format_str, use_json, log_file, console))
    if _state['configured'] and nothing_requested:
        return

    env_level = os.environ.get(LOG_LEVEL_ENV_VAR)
    if level is None and env_level:
        level = env_level
    if console is None:
        console = bool(env_level)
    if log_file is None:
        log_file = os.environ.get(LOG_FILE_ENV_VAR)
    if use_json is None:
        env_format = os.environ.get(LOG_FORMAT_ENV_VAR, '').lower()
        use_json = env_format != 'text' if env_format else DEFAULT_JSON_FORMAT

    logger = package_logger()
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers: List[logging.Handler] = []
    if console:
        handlers.append(logging.StreamHandler(sys.stderr))
    if log_file:
        try:
            handlers.append(RotatingFileHandler(
                log_file, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS
            ))
        except OSError as e:
            print(f"Warning: Could not create log file {log_file}: {e}", file=sys.stderr)

    formatter = JsonFormatter() if use_json else logging.Formatter(format_str or DEFAULT_LOG_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    if handlers:
        # Our own handlers print the records; the host's would duplicate them
        logger.propagate = False
        if level is None:
            level = DEFAULT_LOG_LEVEL
    else:
        logger.addHandler(logging.NullHandler())
        logger.propagate = True

    if level is not None:
        logger.setLevel(_resolve_level(level))

    _state['configured'] = True
    _state['json'] = use_json


def set_log_level(level: Union[int, str]) -> None:
    """
    Set the level of the ConfStore package logger.

    Example:
        >>> from ConfStore.utils.logging import set_log_level
        >>> set_log_level('debug')
    """
    level = _resolve_level(level)
    logger = package_logger()
    logger.setLevel(level)
    logger.debug(f"Log level set to: {logging.getLevelName(level)}")


def get_logger(name: str, extra: Optional[Dict[str, Any]] = None) -> Union[logging.Logger, StructuredLoggerAdapter]:
    """
    Get a module logger, wrapped in a StructuredLoggerAdapter for JSON output.

    Args:
        name: Logger name, normally the calling module's __name__
        extra: Context fields attached to every record of this logger

    Example:
        >>> logger = get_logger(__name__, {'config': 'myapp'})
        >>> logger.info("Saved configuration", extra={'path': '/tmp/config.ini'})
    """
    configure_logging()
    logger = logging.getLogger(name)
    if _state['json']:
        return StructuredLoggerAdapter(logger, extra)
    return logger


configure_logging()
