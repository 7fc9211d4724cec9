"""
INI codec for ConfStore.

Converts between INI text and Stores. The format understood here:

- ``key=value`` pairs, with ``key[]=value`` lines accumulating into arrays
- ``[name]`` section headers, where spaces in the name denote nesting
  (``[server tls]`` addresses the Store ``server`` -> ``tls``)
- full-line comments starting with ``;`` or ``#`` and inline comments after
  an unescaped ``;`` or ``#``
- double-quoted tokens decoded as JSON string literals, single-quoted tokens
  kept literally
- the bare literals ``null``, ``true`` and ``false`` decoded as None/True/False
"""

import json
import re
import sys
from dataclasses import dataclass, field, replace
from typing import Any, List, Mapping, Optional, Tuple, Union

from ConfStore.exceptions import InvalidArgumentError, ParseFailureError
from ConfStore.store.store import Store
from ConfStore.store.values import SCALAR_LITERALS, ValueKind, coerce_scalar, value_kind
from ConfStore.utils.logging import get_logger

logger = get_logger(__name__)

_LINE_SPLIT = re.compile(r'[\r\n]+')
_SKIP_LINE = re.compile(r'^\s*(?:[;#]|$)')
_SECTION_LINE = re.compile(r'^\s*\[([^\]]*)\]\s*$')
_NEEDS_QUOTING = re.compile(r'[=\r\n]')

_COMMENT_CHARS = ';#'
_ESCAPABLE_CHARS = '\\;#'
_ARRAY_SUFFIX = '[]'
_MISSING = object()


@dataclass
class IniOptions:
    """
    Options controlling INI encoding.

    Attributes:
        align: Pad keys to the longest key of their section (implies whitespace)
        newline: Add a blank line after each section header
        sort: Emit keys in lexicographic order instead of insertion order
        whitespace: Use " = " instead of "=" as separator
        platform: "win32" selects CRLF line endings, anything else LF
        bracketed_array: Write array keys as ``key[]`` instead of repeating ``key``
        section: Section path of the Store being encoded, used for the header
    """
    align: bool = False
    newline: bool = False
    sort: bool = False
    whitespace: bool = False
    platform: str = field(default_factory=lambda: sys.platform)
    bracketed_array: bool = True
    section: Optional[str] = None

    def __post_init__(self) -> None:
        for name in ('align', 'newline', 'sort', 'whitespace', 'bracketed_array'):
            if not isinstance(getattr(self, name), bool):
                raise InvalidArgumentError(f"invalid option {name}: {getattr(self, name)!r}")
        if not isinstance(self.platform, str):
            raise InvalidArgumentError(f"invalid option platform: {self.platform!r}")
        if self.section is not None and not isinstance(self.section, str):
            raise InvalidArgumentError(f"invalid option section: {self.section!r}")
        if self.align:
            self.whitespace = True

    @property
    def eol(self) -> str:
        return '\r\n' if self.platform == 'win32' else '\n'

    @property
    def separator(self) -> str:
        return ' = ' if self.whitespace else '='


def _is_quoted(token: str) -> bool:
    return len(token) > 1 and token[0] == token[-1] and token[0] in ('"', "'")


def escape(token: str) -> str:
    """
    Make a key, value or section name safe to write to an INI line.

    Tokens that contain ``=`` or line breaks, start with ``[`` or a quote
    character, are empty or carry leading/trailing whitespace are written
    as JSON string literals. Otherwise ``;`` and ``#`` are backslash-escaped, as is any
    backslash that would otherwise be read as an escape character.

    Examples:
        >>> escape("a;b")
        'a\\\\;b'
        >>> escape(" padded ")
        '" padded "'
    """
    if (not token
            or _NEEDS_QUOTING.search(token)
            or token[0] in '["\''
            or token != token.strip()):
        return json.dumps(token, ensure_ascii=False)

    out = []
    last = len(token) - 1
    for i, char in enumerate(token):
        if char in _COMMENT_CHARS:
            out.append('\\' + char)
        elif char == '\\' and i < last and token[i + 1] in _ESCAPABLE_CHARS:
            out.append('\\\\')
        else:
            out.append(char)
    return ''.join(out)


def _unescape(raw: Optional[str]) -> Tuple[str, bool]:
    token = (raw or '').strip()

    if _is_quoted(token):
        if token[0] == "'":
            return token[1:-1], True
        try:
            return json.loads(token), True
        except ValueError:
            return token, True

    out = []
    escaping = False
    for char in token:
        if escaping:
            if char in _ESCAPABLE_CHARS:
                out.append(char)
            else:
                out.append('\\' + char)
            escaping = False
        elif char in _COMMENT_CHARS:
            break
        elif char == '\\':
            escaping = True
        else:
            out.append(char)
    if escaping:
        out.append('\\')

    return ''.join(out).strip(), False


def unescape(raw: Optional[str]) -> str:
    """
    Reverse escape() for a raw key, value or section name.

    Examples:
        >>> unescape('value ; trailing comment')
        'value'
        >>> unescape('"  padded  "')
        '  padded  '
    """
    return _unescape(raw)[0]


def _closing_quote(body: str) -> Optional[int]:
    quote = body[0]
    i = 1
    while i < len(body):
        if body[i] == '\\' and quote == '"':
            i += 2
            continue
        if body[i] == quote:
            return i
        i += 1
    return None


def _split_pair(line: str) -> Tuple[str, Optional[str]]:
    """Split a line into its raw key and raw value (None for a bare key)."""
    body = line.lstrip()
    search_from = 0

    # A quote-wrapped key may itself contain '=', but only when the closing
    # quote is followed by the separator or the end of the line
    if body[:1] in ('"', "'"):
        end = _closing_quote(body)
        if end is not None and _is_quoted(body[:end + 1]):
            rest = body[end + 1:].lstrip()
            if not rest or rest[0] == '=':
                search_from = end + 1

    eq = body.find('=', search_from)
    if eq == -1:
        return body, None
    return body[:eq], body[eq + 1:]


def decode(text: Union[str, bytes], into: Optional[Store] = None,
           bracketed_array: bool = True) -> Store:
    """
    Parse INI text into a Store.

    Args:
        text: INI text (bytes are decoded as UTF-8)
        into: Optional Store to merge the parsed data into; it is returned
        bracketed_array: Treat ``key[]`` as array keys. When False, a key
            becomes an array once it repeats within the same section.

    Returns:
        Store: The populated Store

    Raises:
        InvalidArgumentError: If text is not str/bytes or into is not a Store
        ParseFailureError: If bytes are not valid UTF-8
    """
    if isinstance(text, bytes):
        try:
            text = text.decode('utf-8')
        except UnicodeDecodeError as e:
            raise ParseFailureError(f"INI input is not valid UTF-8: {e}", cause=e)
    if not isinstance(text, str):
        raise InvalidArgumentError(f"invalid parameter: must be string, got {type(text).__name__}")
    if into is not None and not isinstance(into, Store):
        raise InvalidArgumentError(f"invalid store: {type(into).__name__}")
    if not isinstance(bracketed_array, bool):
        raise InvalidArgumentError(f"invalid option bracketed_array: {bracketed_array!r}")

    target = into if into is not None else Store()
    if not text:
        return target

    # Parse into a copy so a failure leaves the caller's Store untouched
    work = target.clone()
    section = work
    section_path: Tuple[str, ...] = ()
    seen = {}

    for line in _LINE_SPLIT.split(text):
        if _SKIP_LINE.match(line):
            continue

        header = _SECTION_LINE.match(line)
        if header:
            name = unescape(header.group(1))
            logger.debug(f"found section: {name!r}")
            section = work
            parts = []
            for part in name.split(' '):
                if not part:
                    continue
                section = section._section(part)
                parts.append(part)
            section_path = tuple(parts)
            continue

        raw_key, raw_value = _split_pair(line)
        if not raw_key:
            continue
        key = unescape(raw_key)

        if bracketed_array:
            is_array = len(key) > 2 and key.endswith(_ARRAY_SUFFIX)
            if is_array:
                key = key[:-2]
        else:
            count = seen.get((section_path, key), 0) + 1
            seen[(section_path, key)] = count
            is_array = count > 1

        if raw_value is None:
            value = True
        else:
            value, quoted = _unescape(raw_value)
            if not quoted:
                value = coerce_scalar(value)

        current = section._raw(key, _MISSING)
        if is_array and not isinstance(current, list):
            current = [] if current is _MISSING else [current]
            section._put(key, current)

        # A key written without brackets keeps appending to an existing array
        if isinstance(current, list):
            current.append(value)
        else:
            section._put(key, value)

    target.clear()
    for key, value in work._entries():
        target._put(key, value)

    logger.debug(f"decoded {len(target)} top-level keys")
    return target


def _format_scalar(value: Any) -> str:
    kind = value_kind(value)
    if kind is ValueKind.STRING:
        # Keep strings that spell a literal from decoding as None/True/False
        if value in SCALAR_LITERALS:
            return json.dumps(value)
        return escape(value)
    if kind is ValueKind.BOOLEAN:
        return 'true' if value else 'false'
    if kind is ValueKind.NULL:
        return 'null'
    if kind is ValueKind.NUMBER:
        return json.dumps(value)
    raise InvalidArgumentError(
        f"cannot encode a nested {kind.value} inside an INI array",
        context={"value": repr(value)}
    )


def _encode_level(store: Store, opts: IniOptions) -> str:
    eol = opts.eol
    suffix = _ARRAY_SUFFIX if opts.bracketed_array else ''

    entries = [(key, value) for key, value in store._entries() if value is not None]
    if opts.sort:
        entries.sort(key=lambda entry: entry[0])

    lines: List[Tuple[str, List[str]]] = []
    children: List[Tuple[str, Store]] = []
    for key, value in entries:
        if isinstance(value, Store):
            children.append((key, value))
        elif isinstance(value, list):
            lines.append((escape(key + suffix), [_format_scalar(item) for item in value]))
        else:
            lines.append((escape(key), [_format_scalar(value)]))

    pad = max((len(key) for key, _ in lines), default=0) if opts.align else 0

    out = ''.join(
        key.ljust(pad) + opts.separator + value + eol
        for key, values in lines
        for value in values
    )

    if opts.section and out:
        out = '[' + escape(opts.section) + ']' + (eol + eol if opts.newline else eol) + out

    for key, child in children:
        section = f"{opts.section} {key}" if opts.section else key
        child_text = _encode_level(child, replace(opts, section=section))
        if out and child_text:
            out += eol
        out += child_text

    return out


def encode(store: Store, options: Optional[Union[IniOptions, Mapping[str, Any]]] = None,
           **kwargs: Any) -> str:
    """
    Serialize a Store to INI text.

    Scalar and array keys of each level come first, then every nested Store
    as its own ``[section]`` block. None values are left out.

    Args:
        store: The Store to encode
        options: IniOptions or a mapping of option names to values
        **kwargs: Individual options, overriding those in options

    Returns:
        str: The INI text ("" for an empty Store)

    Raises:
        InvalidArgumentError: If store is not a Store, an option is invalid,
            or an array holds a nested structure

    Examples:
        >>> encode(Store({"name": "value", "section": {"key1": "value1"}}), platform="linux")
        'name=value\\n\\n[section]\\nkey1=value1\\n'
    """
    if not isinstance(store, Store):
        raise InvalidArgumentError(f"invalid map: {type(store).__name__}")

    try:
        if options is None:
            opts = IniOptions(**kwargs)
        elif isinstance(options, IniOptions):
            opts = replace(options, **kwargs)
        elif isinstance(options, Mapping):
            opts = IniOptions(**{**options, **kwargs})
        else:
            raise InvalidArgumentError(f"invalid option: {options!r}")
    except TypeError as e:
        raise InvalidArgumentError(f"invalid option: {e}", cause=e)

    out = _encode_level(store, opts)
    logger.debug(f"encoded {len(store)} top-level keys into {len(out)} characters")
    return out
