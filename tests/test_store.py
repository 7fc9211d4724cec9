"""
Tests for the ConfStore hierarchical Store.
"""

import unittest

from ConfStore.exceptions import InvalidArgumentError
from ConfStore.store import Store


class TestStore(unittest.TestCase):
    """Test cases for dotted-path access on a Store."""

    def setUp(self):
        self.store = Store()

    def test_set_and_get_nested(self):
        """Test setting and getting values through intermediate Stores."""
        self.assertTrue(self.store.set("server.tls.port", "443"))
        self.assertEqual(self.store.get("server.tls.port"), "443")
        self.assertIsInstance(self.store.get("server"), Store)
        self.assertEqual(self.store.get("server"), {"tls": {"port": "443"}})

    def test_get_missing_returns_default(self):
        self.assertIsNone(self.store.get("missing"))
        self.assertEqual(self.store.get("missing.key", "fallback"), "fallback")

    def test_get_through_scalar_returns_default(self):
        """A scalar in the middle of a path ends resolution without a partial match."""
        self.store.set("a", "x")
        self.assertIsNone(self.store.get("a.b"))
        self.assertEqual(self.store.get("a"), "x")

    def test_set_replaces_scalar_intermediate(self):
        self.store.set("a", "x")
        self.store.set("a.b", "y")
        self.assertEqual(self.store.get("a"), {"b": "y"})

    def test_sibling_sets_survive(self):
        self.store.set("db.host", "localhost")
        self.store.set("db.port", "5432")
        self.store.set("db.user", "admin")
        self.assertEqual(self.store.get("db"), {"host": "localhost", "port": "5432", "user": "admin"})

    def test_set_replaces_instead_of_merging(self):
        self.store.set("a", {"x": "1"})
        self.store.set("a", {"y": "2"})
        self.assertEqual(self.store.get("a"), {"y": "2"})
        self.assertIsNone(self.store.get("a.x"))

    def test_get_returns_copies(self):
        """Test that values read from a Store cannot modify it."""
        self.store.set("a.y", "2")
        self.store.set("arr", ["1"])

        section = self.store.get("a")
        section.set("y", "changed")
        items = self.store.get("arr")
        items.append("2")

        self.assertEqual(self.store.get("a.y"), "2")
        self.assertEqual(self.store.get("arr"), ["1"])

    def test_set_copies_input(self):
        data = {"x": {"y": "1"}}
        self.store.set("a", data)
        data["x"]["y"] = "2"
        self.assertEqual(self.store.get("a.x.y"), "1")

    def test_invalid_paths(self):
        with self.assertRaises(InvalidArgumentError):
            self.store.set(1, "x")
        with self.assertRaises(InvalidArgumentError):
            self.store.get(None)
        with self.assertRaises(InvalidArgumentError):
            self.store.delete(["a"])

    def test_invalid_value(self):
        with self.assertRaises(InvalidArgumentError):
            self.store.set("a", object())

    def test_invalid_construction(self):
        with self.assertRaises(InvalidArgumentError):
            Store("not a mapping")

    def test_delete(self):
        """Test delete semantics for present, absent and unreachable keys."""
        store = Store({"a": {"b": "1"}, "c": "2"})
        self.assertTrue(store.delete("a.b"))
        self.assertFalse(store.delete("a.b"))
        self.assertFalse(store.delete("x.y"))
        self.assertEqual(store.get("a"), {})
        self.assertTrue(store.delete(".c"))
        self.assertNotIn("c", store)

    def test_delete_through_scalar(self):
        self.store.set("a", "x")
        self.assertFalse(self.store.delete("a.b"))
        self.assertEqual(self.store.get("a"), "x")

    def test_query(self):
        store = Store({"fs": {"local": {"type": "local"}}})
        self.assertEqual(store.query(".fs.local.type"), "local")
        self.assertEqual(store.query("fs.local.type"), "local")
        self.assertEqual(store.query("."), store)
        self.assertIsNot(store.query("."), store)
        self.assertEqual(store.query(".missing", "none"), "none")

    def test_has_and_contains(self):
        self.store.set("a.b", None)
        self.assertTrue(self.store.has("a.b"))
        self.assertIn("a.b", self.store)
        self.assertNotIn("a.c", self.store)
        self.assertNotIn(42, self.store)

    def test_mapping_helpers(self):
        store = Store({"b": "2", "a": {"c": "3"}})
        self.assertEqual(store.keys(), ["b", "a"])
        self.assertEqual(list(store), ["b", "a"])
        self.assertEqual(len(store), 2)
        self.assertEqual(store.to_dict(), {"b": "2", "a": {"c": "3"}})
        self.assertEqual(store, Store({"a": {"c": "3"}, "b": "2"}))
        self.assertEqual(repr(Store({"a": "1"})), "Store({'a': '1'})")

    def test_update_and_clear(self):
        store = Store({"a": "1", "b": {"c": "2"}})
        store.update({"b": {"d": "3"}, "e": "4"})
        self.assertEqual(store, {"a": "1", "b": {"d": "3"}, "e": "4"})
        store.clear()
        self.assertEqual(len(store), 0)

    def test_to_dict_drop_null(self):
        store = Store({"a": None, "b": {"c": None, "d": "1"}})
        self.assertEqual(store.to_dict(drop_null=True), {"b": {"d": "1"}})
        self.assertEqual(store.to_dict(), {"a": None, "b": {"c": None, "d": "1"}})


if __name__ == '__main__':
    unittest.main()
