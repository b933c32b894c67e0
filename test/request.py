"""
Request behavioral tests.

Scope
- Field validation and read-only storage.
- option/argument/flag accessors and defaults.
"""
import os
import unittest
from unittest import TestCase

from commandeer import Request


class TestRequest(TestCase):
    def setUp(self):
        self.request = Request(
            ["git", "remote", "add"],
            {"verbose": True, "output": "out.txt"},
            {"name": "origin", "paths": ("a", "b")},
            {"HOME": "/home/user"},
        )

    def testRouteIsStoredAsTuple(self):
        self.assertEqual(self.request.route, ["git", "remote", "add"])
        self.assertIsInstance(self.request._route, tuple)

    def testRouteValidation(self):
        with self.assertRaises(TypeError):
            Request("git")
        with self.assertRaises(TypeError):
            Request(["git", 1])
        with self.assertRaises(TypeError):
            Request(1)

    def testMappingsValidation(self):
        with self.assertRaises(TypeError):
            Request((), [("verbose", True)])
        with self.assertRaises(TypeError):
            Request((), arguments="origin")
        with self.assertRaises(TypeError):
            Request((), environ=None)

    def testDefaults(self):
        request = Request()
        self.assertEqual(request.route, [])
        self.assertEqual(request.options, {})
        self.assertEqual(request.arguments, {})
        self.assertEqual(request.environ, dict(os.environ))

    def testAccessors(self):
        self.assertEqual(self.request.option("output"), "out.txt")
        self.assertIsNone(self.request.option("missing"))
        self.assertEqual(self.request.option("missing", "fallback"), "fallback")
        self.assertEqual(self.request.argument("name"), "origin")
        self.assertEqual(self.request.argument("missing", ()), ())
        self.assertEqual(self.request.environ["HOME"], "/home/user")

    def testFlag(self):
        self.assertTrue(self.request.flag("verbose"))
        self.assertFalse(self.request.flag("quiet"))

    def testFieldsAreReadOnlyCopies(self):
        options = {"verbose": True}
        request = Request((), options)
        options["quiet"] = True
        with self.assertRaises(TypeError):
            request.options["dry-run"] = True
        with self.assertRaises(TypeError):
            request.arguments["name"] = "origin"
        self.assertEqual(request.options, {"verbose": True})

    def testVariadicValuesStayTuples(self):
        self.assertIsInstance(self.request.arguments["paths"], tuple)
        self.assertIs(self.request.arguments["paths"], self.request.argument("paths"))
        request = Request((), arguments={"paths": ["a", "b"]})
        self.assertEqual(request.arguments["paths"], ("a", "b"))
        self.assertEqual(request.argument("paths"), ("a", "b"))

    def testRepr(self):
        self.assertTrue(repr(self.request).startswith("request(route=['git', 'remote', 'add']"))


if __name__ == "__main__":
    unittest.main()
