"""
Help page tests.

Scope
- Option spelling and argument placeholders.
- Generated sections: usage, description, options, arguments, subcommands.
- Per-section overrides from HelpText.
- Fancy panel and route handling.

Conventions
- Rendering is captured on a colorless in-memory console.
"""
import io
import unittest
from unittest import TestCase, mock

from rich.console import Console

from commandeer import CommandDefinition, HelpText, OptKind, flag, option, string, file
from commandeer import helper
from commandeer.helper import spell, placeholder, render, display


def capture(renderable):
    console = Console(file=io.StringIO(), width=100, color_system=None)
    console.print(renderable)
    return console.file.getvalue()


class Wrapped:
    def __init__(self, definition):
        self.definition = definition

    def run(self, request, /):
        return None

    def __definition__(self):
        return self.definition


class TestSpelling(TestCase):
    def testSpell(self):
        self.assertEqual(spell("v"), "-v")
        self.assertEqual(spell("verbose"), "--verbose")

    def testPlaceholder(self):
        self.assertEqual(placeholder(string("path", required=True)), "<path>")
        self.assertEqual(placeholder(string("path")), "[<path>]")
        self.assertEqual(placeholder(file("paths", required=True, variadic=True)), "<paths>...")
        self.assertEqual(placeholder(file("paths", variadic=True)), "[<paths>...]")


class TestRender(TestCase):
    def setUp(self):
        self.add = CommandDefinition("add", help=HelpText("Add a remote"))
        self.remove = Wrapped(CommandDefinition("remove", help=HelpText("Remove a remote")))
        self.remote = CommandDefinition(
            "remote",
            [flag("v", "verbose", descr="be loud"), option("o", "output", descr="write here")],
            [string("name", required=True), file("paths", variadic=True)],
            HelpText("Manage remotes", "Manage the set of tracked repositories", "git remote -v"),
            [self.add, self.remove],
        )

    def testUsageLine(self):
        output = capture(render(self.remote, route="git remote"))
        self.assertIn("usage: git remote [options] <subcommand> <name> [<paths>...]", output)

    def testUsageDefaultsToName(self):
        output = capture(render(CommandDefinition("status")))
        self.assertIn("usage: status", output)
        self.assertNotIn("[options]", output)

    def testRouteAsIterable(self):
        output = capture(render(self.add, route=("git", "remote", "add")))
        self.assertIn("usage: git remote add", output)

    def testRouteMustBeString(self):
        with self.assertRaises(TypeError):
            render(self.add, route=1)

    def testDescription(self):
        output = capture(render(self.remote))
        self.assertIn("Manage the set of tracked repositories", output)
        self.assertIn("example: git remote -v", output)

    def testDescriptionFallsBackToTagline(self):
        output = capture(render(self.add))
        self.assertIn("Add a remote", output)

    def testOptions(self):
        output = capture(render(self.remote))
        self.assertIn("-v, --verbose", output)
        self.assertIn("-o, --output <string>", output)
        self.assertIn("be loud", output)

    def testIntegerMetavar(self):
        output = capture(render(CommandDefinition("build", [option("j", "jobs", kind=OptKind.INTEGER)])))
        self.assertIn("-j, --jobs <integer>", output)

    def testArguments(self):
        output = capture(render(self.remote))
        self.assertIn("<name>", output)
        self.assertIn("[<paths>...]", output)
        self.assertIn("file", output)

    def testSubcommands(self):
        output = capture(render(self.remote))
        self.assertIn("add", output)
        self.assertIn("Add a remote", output)
        self.assertIn("remove", output)
        self.assertIn("Remove a remote", output)

    def testOverrides(self):
        definition = CommandDefinition(
            "remote",
            [flag("v", "verbose")],
            [string("name")],
            HelpText(
                "Manage remotes",
                usage="remote [-v] NAME",
                long_descr="A long description",
                options="custom options",
                arguments="custom arguments",
                subcommands="custom subcommands",
            ),
            [self.add],
        )
        output = capture(render(definition))
        for expected in ("remote [-v] NAME", "A long description", "custom options", "custom arguments", "custom subcommands"):
            self.assertIn(expected, output)
        self.assertNotIn("--verbose", output)
        self.assertNotIn("Add a remote", output)

    def testFancyPanel(self):
        output = capture(render(self.add, route="git remote add", fancy=True))
        self.assertIn("[ GIT REMOTE ADD HELP ]", output)

    def testColorfulRendersSameText(self):
        plain = capture(render(self.remote))
        colorful = capture(render(self.remote, colorful=True))
        self.assertEqual(plain, colorful)

    def testRenderRejectsNonCommands(self):
        with self.assertRaises(TypeError):
            render(object())

    def testDisplayPrintsPage(self):
        buffer = io.StringIO()
        with mock.patch.object(helper, "Console", lambda stderr: Console(file=buffer, width=100, color_system=None)):
            display(self.add, route="git remote add")
        self.assertIn("usage: git remote add", buffer.getvalue())


if __name__ == "__main__":
    unittest.main()
