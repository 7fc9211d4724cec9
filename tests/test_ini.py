"""
Tests for the ConfStore INI codec.
"""

import unittest

from ConfStore.codecs import ini_codec
from ConfStore.codecs.ini_codec import IniOptions, escape, unescape
from ConfStore.exceptions import InvalidArgumentError, ParseFailureError
from ConfStore.store import Store


class TestIniDecode(unittest.TestCase):
    """Test cases for parsing INI text."""

    def test_basic_values(self):
        store = ini_codec.decode("a=1\nb=true\nc=null\nd=false\n[sec]\ne=x\n")
        self.assertEqual(store.get("a"), "1")
        self.assertIs(store.get("b"), True)
        self.assertTrue(store.has("c"))
        self.assertIsNone(store.get("c"))
        self.assertIs(store.get("d"), False)
        self.assertEqual(store.get("sec.e"), "x")

    def test_nested_sections(self):
        store = ini_codec.decode("[server tls]\nport=443\n")
        self.assertEqual(store.get("server.tls.port"), "443")

    def test_section_header_whitespace_and_root(self):
        store = ini_codec.decode("  [ sec ]  \na=1\n[]\nb=2\n")
        self.assertEqual(store.get("sec.a"), "1")
        self.assertEqual(store.get("b"), "2")

    def test_section_replaces_scalar(self):
        store = ini_codec.decode("s=1\n[s]\na=2\n")
        self.assertEqual(store.get("s"), {"a": "2"})

    def test_bracketed_arrays(self):
        store = ini_codec.decode("arr[]=1\narr[]=2")
        self.assertEqual(store.get("arr"), ["1", "2"])

    def test_array_wraps_existing_scalar(self):
        store = ini_codec.decode("a=1\na[]=2\n")
        self.assertEqual(store.get("a"), ["1", "2"])

    def test_plain_key_appends_to_array(self):
        store = ini_codec.decode("a[]=1\na=2\n")
        self.assertEqual(store.get("a"), ["1", "2"])

    def test_plain_key_overwrites(self):
        store = ini_codec.decode("a=1\na=2\n")
        self.assertEqual(store.get("a"), "2")

    def test_non_bracketed_arrays(self):
        """Test that repeated keys become arrays when brackets are not used."""
        store = ini_codec.decode("a=1\na=2\nb[]=3\n", bracketed_array=False)
        self.assertEqual(store.get("a"), ["1", "2"])
        self.assertEqual(store.keys(), ["a", "b[]"])

    def test_non_bracketed_counts_per_section(self):
        store = ini_codec.decode("a=1\n[s]\na=2\n", bracketed_array=False)
        self.assertEqual(store.get("a"), "1")
        self.assertEqual(store.get("s.a"), "2")

    def test_comments(self):
        store = ini_codec.decode("; comment\n# other\n  ; indented\nkey=value ; trailing\n")
        self.assertEqual(store.to_dict(), {"key": "value"})

    def test_bare_key(self):
        store = ini_codec.decode("flag\n")
        self.assertIs(store.get("flag"), True)

    def test_quoted_values(self):
        text = 'a="true"\nb=\'x;y\'\nc=" padded "\nd="line\\nbreak"\n'
        store = ini_codec.decode(text)
        self.assertEqual(store.get("a"), "true")
        self.assertEqual(store.get("b"), "x;y")
        self.assertEqual(store.get("c"), " padded ")
        self.assertEqual(store.get("d"), "line\nbreak")

    def test_escaped_characters(self):
        store = ini_codec.decode("a=x\\;y\nb=x\\#y\nc=x\\\\y\nd=x\\ny\n")
        self.assertEqual(store.get("a"), "x;y")
        self.assertEqual(store.get("b"), "x#y")
        self.assertEqual(store.get("c"), "x\\y")
        self.assertEqual(store.get("d"), "x\\ny")

    def test_quoted_key_with_equals(self):
        store = ini_codec.decode('"a=b"=v\n')
        self.assertEqual(store.keys(), ["a=b"])
        self.assertEqual(store.to_dict(), {"a=b": "v"})

    def test_leading_quote_without_wrapped_key(self):
        """A quote in the value does not hide the separator of an unquoted key."""
        store = ini_codec.decode("'a=it's\n")
        self.assertEqual(store.to_dict(), {"'a": "it's"})

    def test_crlf(self):
        store = ini_codec.decode("a=1\r\nb=2\r\n")
        self.assertEqual(store.to_dict(), {"a": "1", "b": "2"})

    def test_empty_text(self):
        self.assertEqual(len(ini_codec.decode("")), 0)

    def test_bytes_input(self):
        store = ini_codec.decode("name=café\n".encode("utf-8"))
        self.assertEqual(store.get("name"), "café")

    def test_decode_into(self):
        into = Store({"x": "1"})
        result = ini_codec.decode("y=2\n", into=into)
        self.assertIs(result, into)
        self.assertEqual(into.to_dict(), {"x": "1", "y": "2"})

    def test_invalid_input(self):
        with self.assertRaises(InvalidArgumentError):
            ini_codec.decode(123)
        with self.assertRaises(InvalidArgumentError):
            ini_codec.decode("a=1", into={})
        with self.assertRaises(ParseFailureError):
            ini_codec.decode(b"\xff\xfe=1")


class TestIniEncode(unittest.TestCase):
    """Test cases for writing INI text."""

    def encode(self, data, **options):
        options.setdefault("platform", "linux")
        return ini_codec.encode(Store(data), **options)

    def test_section_after_values(self):
        """A blank line separates top-level values from the first section."""
        text = self.encode({"name": "value", "section": {"key1": "value1"}})
        self.assertEqual(text, "name=value\n\n[section]\nkey1=value1\n")

    def test_only_sections(self):
        self.assertEqual(self.encode({"s": {"a": "1"}}), "[s]\na=1\n")

    def test_nested_sections(self):
        text = self.encode({"server": {"host": "h", "tls": {"port": "443"}}})
        self.assertEqual(text, "[server]\nhost=h\n\n[server tls]\nport=443\n")

    def test_empty_intermediate_section(self):
        text = self.encode({"server": {"tls": {"port": "443"}}})
        self.assertEqual(text, "[server tls]\nport=443\n")

    def test_arrays(self):
        self.assertEqual(self.encode({"arr": ["1", "2"]}), "arr[]=1\narr[]=2\n")
        self.assertEqual(self.encode({"arr": ["1", "2"]}, bracketed_array=False), "arr=1\narr=2\n")

    def test_platform_line_endings(self):
        self.assertEqual(self.encode({"a": "1"}, platform="win32"), "a=1\r\n")

    def test_whitespace_and_align(self):
        self.assertEqual(self.encode({"a": "1"}, whitespace=True), "a = 1\n")
        self.assertEqual(self.encode({"a": "1", "long": "2"}, align=True), "a    = 1\nlong = 2\n")

    def test_sort(self):
        self.assertEqual(self.encode({"b": "1", "a": "2"}, sort=True), "a=2\nb=1\n")

    def test_newline_after_header(self):
        self.assertEqual(self.encode({"s": {"a": "1"}}, newline=True), "[s]\n\na=1\n")

    def test_scalars(self):
        text = self.encode({"none": None, "t": True, "f": False, "n": 42, "x": 1.5})
        self.assertEqual(text, "t=true\nf=false\nn=42\nx=1.5\n")

    def test_literal_strings_are_quoted(self):
        text = self.encode({"a": "true", "b": "null"})
        self.assertEqual(text, 'a="true"\nb="null"\n')
        self.assertEqual(ini_codec.decode(text).to_dict(), {"a": "true", "b": "null"})

    def test_options_object_and_mapping(self):
        options = IniOptions(whitespace=True, platform="linux")
        self.assertEqual(ini_codec.encode(Store({"a": "1"}), options), "a = 1\n")
        self.assertEqual(ini_codec.encode(Store({"a": "1"}), {"sort": True, "platform": "linux"}), "a=1\n")

    def test_invalid_options(self):
        with self.assertRaises(InvalidArgumentError):
            ini_codec.encode(Store(), align="yes")
        with self.assertRaises(InvalidArgumentError):
            ini_codec.encode(Store(), unknown=True)
        with self.assertRaises(InvalidArgumentError):
            ini_codec.encode({"a": "1"})

    def test_nested_array_element_rejected(self):
        with self.assertRaises(InvalidArgumentError):
            self.encode({"a": [{"x": "1"}]})

    def test_empty_store(self):
        self.assertEqual(self.encode({}), "")

    def test_round_trip(self):
        data = {
            "name": "value",
            "flag": True,
            "empty": "",
            "list": ["a", "b"],
            "odd": "semi;colon # hash",
            "server": {"host": "h", "tls": {"port": "443"}},
        }
        self.assertEqual(ini_codec.decode(self.encode(data)), Store(data))

    def test_round_trip_quote_keys(self):
        """Keys beginning with a quote survive next to values holding quotes."""
        cases = [
            ("'a", "it's"),
            ("'", "a''[0"),
            ('"k', 'say "hi"'),
            ("'x'y", "'q"),
            ('"', '"'),
            ("", "v"),
        ]
        for key, value in cases:
            with self.subTest(key=key, value=value):
                data = {key: value}
                self.assertEqual(ini_codec.decode(self.encode(data)).to_dict(), data)


class TestIniEscaping(unittest.TestCase):
    """Test cases for escape() and unescape()."""

    def test_escape(self):
        self.assertEqual(escape("plain"), "plain")
        self.assertEqual(escape("a;b"), "a\\;b")
        self.assertEqual(escape("x=y"), '"x=y"')
        self.assertEqual(escape(" p "), '" p "')
        self.assertEqual(escape("[x"), '"[x"')
        self.assertEqual(escape("'x"), '"\'x"')
        self.assertEqual(escape(""), '""')

    def test_unescape(self):
        self.assertEqual(unescape("value ; comment"), "value")
        self.assertEqual(unescape('"  padded  "'), "  padded  ")
        self.assertEqual(unescape("'kept \\; literally'"), "kept \\; literally")
        self.assertEqual(unescape('"broken'), '"broken')
        # Single quotes keep their content verbatim, JSON quotes included
        self.assertEqual(unescape("'\"x\"'"), '"x"')
        self.assertEqual(unescape(None), "")

    def test_escape_is_reversible(self):
        tokens = ["a;b", "a#b", "back\\slash", "a\\;b", "end\\", "x=y", " p ", "[x", "'q'", "it's"]
        for token in tokens:
            with self.subTest(token=token):
                self.assertEqual(unescape(escape(token)), token)


if __name__ == '__main__':
    unittest.main()
