"""
File-format codecs for ConfStore.

Each codec module exposes ``encode(store, ...) -> str`` and
``decode(text, into=None, ...) -> Store``. The codec for a file is chosen by
its extension.

Usage:
    from ConfStore.codecs import codec_for_path

    codec = codec_for_path("settings.ini")
    text = codec.encode(store)
"""

from pathlib import Path
from types import ModuleType
from typing import Dict, Union

from ConfStore.codecs import ini_codec, json_codec
from ConfStore.exceptions import UnsupportedFormatError

CODECS: Dict[str, ModuleType] = {
    '.ini': ini_codec,
    '.json': json_codec,
}

def codec_for_path(path: Union[str, Path]) -> ModuleType:
    """
    Get the codec module for a file path.

    Args:
        path: File path whose extension selects the codec

    Returns:
        The ini_codec or json_codec module

    Raises:
        UnsupportedFormatError: If the extension is neither .ini nor .json
    """
    suffix = Path(path).suffix.lower()
    codec = CODECS.get(suffix)
    if codec is None:
        raise UnsupportedFormatError(
            f"only ini/json supported, got {suffix or 'no extension'!r} for {path}",
            context={"path": str(path)}
        )
    return codec

__all__ = ["CODECS", "codec_for_path", "ini_codec", "json_codec"]
