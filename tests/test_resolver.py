"""
Argument Resolver Tests

Tests for resolving reference arguments against a container:
self ids, service references, sub-path descent and direct instantiation.
"""

import unittest
from collections import OrderedDict

from wirebox import ArgumentResolver
from wirebox.exceptions import InvalidReferenceError

from conftest import WireboxTestCase
from fixtures import Connection, Helper


class ConfigBag:
    """Keyed access without being a Mapping"""

    def __init__(self, data):
        self._data = data

    def __getitem__(self, key):
        return self._data[key]


class TestLiteralArguments(WireboxTestCase):
    """Literals pass through unchanged."""

    def test_literals_unchanged(self):
        payload = {"a": "@db"}
        for value in ("localhost", 42, None, payload, ["@db"]):
            with self.subTest(value=value):
                self.assertIs(self.container.resolve_argument(value), value)


class TestSelfIdArgument(WireboxTestCase):
    """#id resolves to the id being built."""

    def test_self_id(self):
        self.assertEqual(self.container.resolve_argument("#id", "mailer"), "mailer")

    def test_self_id_without_service(self):
        self.assertIsNone(self.container.resolve_argument("#id"))


class TestServiceReference(WireboxTestCase):
    """@name resolves to another service."""

    def test_reference_to_instance(self):
        connection = Connection()
        self.container.set("db", connection)

        self.assertIs(self.container.resolve_argument("@db"), connection)

    def test_reference_builds_definition(self):
        self.container.set_definition("db", {"class": Connection})

        resolved = self.container.resolve_argument("@db")

        self.assertIsInstance(resolved, Connection)
        self.assertIs(resolved, self.container.get("db"))

    def test_missing_reference_raises(self):
        """Dangling reference names the original text."""
        with self.assertRaises(InvalidReferenceError) as ctx:
            self.container.resolve_argument("@missingService")

        self.assertEqual(ctx.exception.reference, "@missingService")
        self.assertIn("@missingService", str(ctx.exception))

    def test_missing_reference_with_path_names_full_text(self):
        with self.assertRaises(InvalidReferenceError) as ctx:
            self.container.resolve_argument("@config/cache/adapter")

        self.assertEqual(ctx.exception.reference, "@config/cache/adapter")


class TestSubPathDescent(WireboxTestCase):
    """@name/a/b descends into keyed services."""

    def setUp(self):
        super().setUp()
        self.container.set("config", {
            "cache": {"adapter": "redis", "ttl": 0},
            "timeout": 30,
            "empty": None,
        })

    def test_single_segment(self):
        self.assertEqual(self.container.resolve_argument("@config/timeout"), 30)

    def test_nested_segments(self):
        self.assertEqual(self.container.resolve_argument("@config/cache/adapter"), "redis")

    def test_falsy_value_is_returned(self):
        self.assertEqual(self.container.resolve_argument("@config/cache/ttl"), 0)

    def test_missing_key_yields_none(self):
        """A missing key anywhere in the path resolves to None."""
        self.assertIsNone(self.container.resolve_argument("@config/b/c"))
        self.assertIsNone(self.container.resolve_argument("@config/cache/missing"))

    def test_descent_through_scalar_yields_none(self):
        self.assertIsNone(self.container.resolve_argument("@config/timeout/seconds"))

    def test_descent_through_none_yields_none(self):
        self.assertIsNone(self.container.resolve_argument("@config/empty/x"))

    def test_ordered_mapping(self):
        self.container.set("settings", OrderedDict([("a", OrderedDict([("b", 1)]))]))
        self.assertEqual(self.container.resolve_argument("@settings/a/b"), 1)

    def test_non_mapping_with_getitem(self):
        self.container.set("bag", ConfigBag({"host": "db.local"}))

        self.assertEqual(self.container.resolve_argument("@bag/host"), "db.local")
        self.assertIsNone(self.container.resolve_argument("@bag/port"))

    def test_unkeyed_service_returned_whole(self):
        """Path is ignored when the service itself has no keyed access."""
        connection = Connection()
        self.container.set("db", connection)

        self.assertIs(self.container.resolve_argument("@db/host"), connection)

    def test_string_service_returned_whole(self):
        self.container.set("name", "wirebox")
        self.assertEqual(self.container.resolve_argument("@name/0"), "wirebox")

    def test_digit_segments_index_sequences(self):
        self.container.set("servers", [{"host": "a.local"}, {"host": "b.local"}])

        self.assertEqual(self.container.resolve_argument("@servers/1/host"), "b.local")
        self.assertEqual(self.container.resolve_argument("@servers/0"), {"host": "a.local"})

    def test_sequence_index_out_of_range_yields_none(self):
        self.container.set("servers", ("a.local",))

        self.assertIsNone(self.container.resolve_argument("@servers/3"))
        self.assertIsNone(self.container.resolve_argument("@servers/first"))

    def test_digit_segments_stay_strings_for_mappings(self):
        self.container.set("ports", {"0": "zero", 0: "int zero"})
        self.assertEqual(self.container.resolve_argument("@ports/0"), "zero")


class TestNewInstanceArgument(WireboxTestCase):
    """\\Type builds a fresh, unregistered instance."""

    def test_backslash_path(self):
        self.assertIsInstance(self.container.resolve_argument("\\fixtures\\Helper"), Helper)

    def test_dotted_path(self):
        self.assertIsInstance(self.container.resolve_argument("\\fixtures.Helper"), Helper)

    def test_builtin(self):
        self.assertEqual(self.container.resolve_argument("\\dict"), {})

    def test_instances_are_fresh_and_unregistered(self):
        first = self.container.resolve_argument("\\fixtures\\Helper")
        second = self.container.resolve_argument("\\fixtures\\Helper")

        self.assertIsNot(first, second)
        self.assertEqual(self.container.instance_ids(), [])

    def test_unknown_class_raises_import_error(self):
        with self.assertRaises(ImportError):
            self.container.resolve_argument("\\fixtures\\DoesNotExist")


class TestResolveAll(WireboxTestCase):
    """Lists are resolved element by element."""

    def test_resolve_arguments(self):
        self.container.set("config", {"timeout": 30})

        resolved = self.container.resolve_arguments(
            ["#id", "@config/timeout", "plain", 7], "mailer"
        )

        self.assertEqual(resolved, ["mailer", 30, "plain", 7])

    def test_resolver_directly(self):
        resolver = ArgumentResolver(self.container)
        self.container.set("x", 1)

        self.assertEqual(resolver.resolve_all(["@x", "@x"]), [1, 1])


if __name__ == '__main__':
    unittest.main()
