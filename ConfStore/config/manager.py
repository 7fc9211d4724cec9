"""
Configuration facade for ConfStore.

This module implements the Config class, which owns one Store per
application, tracks which keys were changed since the last save, and loads
and saves the Store as INI or JSON depending on the file extension.
"""

import asyncio
import functools
import os
import secrets
from pathlib import Path
from typing import Any, List, Optional, Union

from ConfStore.codecs import codec_for_path
from ConfStore.config.paths import os_config_path, validate_name
from ConfStore.exceptions import InvalidArgumentError, NotFoundError
from ConfStore.store.store import Store
from ConfStore.utils.logging import get_logger

logger = get_logger(__name__)

PathLike = Union[str, os.PathLike]


class Config:
    """
    Configuration for one application.

    Features:
    - Hierarchical key access (e.g., "server.tls.port")
    - Deep-copy isolation: values read from the Config never alias its data
    - Dirty tracking of keys changed since the last save
    - Loading and saving as INI or JSON, chosen by file extension
    - Blocking and asyncio-friendly load/save

    A Config assumes a single writer; it does no locking of its own.

    Attributes:
        config_fn (str): File name used inside the application's config directory
        id (str): Short random identifier used in logs and repr
    """
    config_fn = 'config.ini'

    def __init__(self, name: str, data: Optional[Any] = None,
                 directory: Optional[PathLike] = None,
                 path: Optional[PathLike] = None) -> None:
        """
        Create a Config.

        Args:
            name: Application name, used for the default config directory
            data: Optional Store or mapping with initial data (deep copied)
            directory: Optional directory overriding the OS convention
            path: Optional explicit configuration file

        Raises:
            InvalidArgumentError: If name or data is invalid
        """
        validate_name(name)
        self._name = name
        self._dir = Path(directory) if directory is not None else None
        self._path = Path(path) if path is not None else None
        self._store = Store(data)
        self._dirty: List[str] = []
        self.id = f"cfg_{secrets.token_hex(2)}"
        self.logger = get_logger(__name__, {"config": name, "config_id": self.id})

    @property
    def name(self) -> str:
        return self._name

    @property
    def dir(self) -> Optional[Path]:
        return self._dir

    @property
    def path(self) -> Path:
        """
        The configuration file used when save() or load() get no path.

        An explicit path wins, then ``directory / config_fn``, then the OS
        convention for the application name.
        """
        if self._path is not None:
            return self._path
        if self._dir is not None:
            return self._dir / self.config_fn
        return os_config_path(self._name, self.config_fn)

    @property
    def data(self) -> Store:
        """A deep copy of the whole Store."""
        return self._store.clone()

    @property
    def size(self) -> int:
        """Number of top-level keys."""
        return len(self._store)

    @property
    def dirty(self) -> int:
        """Number of distinct keys changed since the last save."""
        return len(self._dirty)

    @dirty.setter
    def dirty(self, value: Optional[List[str]]) -> None:
        if value is None:
            self._dirty = []
        elif isinstance(value, list):
            self._dirty = list(value)
        else:
            raise InvalidArgumentError(f"invalid parameter: {value!r}")

    @staticmethod
    def set_dirty(keys: List[str], key: str) -> None:
        """Record key in keys unless it is already there."""
        if not isinstance(keys, list):
            return
        if key in keys:
            return
        keys.append(key)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a value using dot notation.

        Examples:
            >>> config = Config("myapp")
            >>> config.set("server.port", "8080")
            True
            >>> config.get("server.port")
            '8080'
        """
        return self._store.get(key, default)

    def query(self, key: str, default: Any = None) -> Any:
        """Like get(), but accepts a leading dot; "." returns the whole Store."""
        return self._store.query(key, default)

    def set(self, key: str, value: Any) -> bool:
        """Set a value using dot notation and mark the key dirty."""
        result = self._store.set(key, value)
        Config.set_dirty(self._dirty, key)
        return result

    def delete(self, key: str) -> bool:
        """Delete a value using dot notation; a removed key is marked dirty."""
        result = self._store.delete(key)
        if result:
            Config.set_dirty(self._dirty, key[1:] if key.startswith('.') else key)
        return result

    def has(self, key: str) -> bool:
        """Whether get() would resolve key."""
        return self._store.has(key)

    def exists(self) -> bool:
        """Whether the configuration file exists."""
        return self.path.is_file()

    def save(self, path: Optional[PathLike] = None, **options: Any) -> bool:
        """
        Write the Store to a file and reset the dirty count.

        Args:
            path: Target file (default: self.path); .ini or .json
            **options: Passed to the codec's encode (e.g. whitespace=True)

        Returns:
            bool: True

        Raises:
            UnsupportedFormatError: If the extension is neither .ini nor .json
            InvalidArgumentError: If an option is unknown to the codec or invalid
            OSError: If the file cannot be written
        """
        target = Path(path) if path is not None else self.path
        codec = codec_for_path(target)
        try:
            text = codec.encode(self._store, **options)
        except TypeError as e:
            raise InvalidArgumentError(f"invalid option for {target.suffix} files: {e}", cause=e)

        target.parent.mkdir(parents=True, exist_ok=True)
        # newline='' keeps CRLF output from being translated twice
        with open(target, 'w', encoding='utf-8', newline='') as f:
            f.write(text)

        self.dirty = None
        self.logger.info(f"Saved configuration to {target}")
        return True

    async def save_async(self, path: Optional[PathLike] = None, **options: Any) -> bool:
        """Non-blocking save(); the write runs in the event loop's default executor."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, functools.partial(self.save, path, **options))

    @classmethod
    def load(cls, name: str, path: Optional[PathLike] = None,
             ignore_not_found: bool = False,
             directory: Optional[PathLike] = None, **options: Any) -> 'Config':
        """
        Load a Config from a file.

        Args:
            name: Application name
            path: File to read (default: the application's config path)
            ignore_not_found: Return an empty Config when the file is missing
            directory: Optional directory overriding the OS convention
            **options: Passed to the codec's decode (e.g. bracketed_array=False)

        Returns:
            Config: The loaded Config; its path is the file it was read from

        Raises:
            InvalidArgumentError: If name, path or a decode option is invalid
            UnsupportedFormatError: If the extension is neither .ini nor .json
            NotFoundError: If the file is missing and ignore_not_found is False
            ParseFailureError: If the file content cannot be parsed
            OSError: For any other error while reading
        """
        validate_name(name)
        if path is not None and not isinstance(path, (str, os.PathLike)):
            raise InvalidArgumentError(f"invalid option: {path!r}")

        config = cls(name, directory=directory, path=path)
        target = config.path
        codec = codec_for_path(target)

        try:
            with open(target, 'rb') as f:
                raw = f.read()
        except FileNotFoundError as e:
            if ignore_not_found:
                logger.warning(f"Configuration file not found, starting empty: {target}")
                return config
            raise NotFoundError(
                f"Configuration file not found: {target}",
                context={"path": str(target)},
                cause=e
            ) from e

        try:
            codec.decode(raw, into=config._store, **options)
        except TypeError as e:
            raise InvalidArgumentError(f"invalid option for {target.suffix} files: {e}", cause=e)
        config.logger.info(f"Loaded configuration from {target}")
        return config

    @classmethod
    async def load_async(cls, name: str, path: Optional[PathLike] = None,
                         ignore_not_found: bool = False,
                         directory: Optional[PathLike] = None, **options: Any) -> 'Config':
        """Non-blocking load(); the read runs in the event loop's default executor."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None,
            functools.partial(cls.load, name, path, ignore_not_found, directory, **options)
        )

    def __repr__(self) -> str:
        return f"<Config {self._name} {self.id.split('_')[1]}>"
