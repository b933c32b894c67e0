"""
Commandeer help pages.

render() turns any command-capable object into a rich renderable using only
the public surface of its CommandDefinition: name, help text (with section
overrides), flattened options, ordered arguments and children taglines.
display() prints it.

Sections (in order)
- usage: HelpText.usage, or "usage: <route> [options] <subcommand> ARGS"
- description: HelpText.long_descr, or descr (falling back to the tagline)
  followed by the synopsis
- options / arguments / subcommands: the matching override, or a table

Palette keys
- usage-label, program-name, usage-section, description-section, synopsis
- section-label, option-name, metavar, argument-name, argument-description
- children, children-description, children-table, panel-title

Customization
- Define a mapping named __styles__ in __main__ to override palette entries.
- When colorful is False, styling is suppressed.
"""
from collections import defaultdict
from collections.abc import Iterable

from rich.box import ROUNDED
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .arguments import OptKind
from .commands import getdef
from .utils import *


def spell(name, /):
    """
    Command-line spelling of an option alias: "-v" for one character,
    "--verbose" otherwise.
    """
    return ("-" if len(name) == 1 else "--") + name


def placeholder(argument, /):
    """
    Usage placeholder of an argument slot.

    - required:          <name>
    - optional:          [<name>]
    - required variadic: <name>...
    - optional variadic: [<name>...]
    """
    label = f"<{argument.name}>" + ("..." if argument.variadic else "")
    return label if argument.required else f"[{label}]"


def render(command, /, *, route=Unset, colorful=False, fancy=False):
    """
    Build the help page of a command.

    Parameters
    - command: command-capable object.
    - route: str | Iterable[str] | Unset
      Program route shown in the usage line (e.g., "git remote add"). Defaults
      to the command name.
    - colorful: bool
      Apply the palette.
    - fancy: bool
      Wrap the page in a Panel titled with the route.

    Returns
    - rich renderable (Group or Panel).
    """
    definition = getdef(command)
    help = definition.help

    if isinstance(route, str):
        route = route.strip() or definition.name
    elif isinstance(route, Iterable):
        route = " ".join(route) or definition.name
    elif route is Unset:
        route = definition.name
    else:
        raise TypeError("render() 'route' must be a string or an iterable of strings")

    styles = defaultdict(str, {
        # === Head sections ===
        "usage-label": "bold #00E6FF",  # CYAN → signature info color
        "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
        "usage-section": "bold #36C5F0",  # SKY-BLUE → softer than cyan
        "description-section": "italic #A3A3A3",  # Neutral gray
        "synopsis": "#737373",  # Dim example gray

        # === Sections / arguments ===
        "section-label": "bold #FFFFFF",  # Pure white headers
        "option-name": "bold #00E6FF",  # CYAN for options
        "metavar": "bold #FFD600",  # AMBER for parameters
        "argument-name": "bold #22C55E",  # GREEN for positionals
        "argument-description": "#9CA3AF",  # Muted gray

        # === Children table ===
        "children": "bold #36C5F0",  # Sky-blue subcommands
        "children-description": "#9CA3AF",
        "children-table": "#4B5563",  # Slate border

        # === Fancy panel ===
        "panel-title": "bold #FF4D94",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    def section(label, body):
        return Group(text(label, styler("section-label")), body, Text(""))

    renders = []

    usage = Text()
    usage.append("usage", styler("usage-label")).append(": ")
    if help and help.usage:
        usage.append(text(help.usage, styler("usage-section")))
    else:
        parts = [text(route, styler("program-name"))]
        if definition.switches:
            parts.append(Text("[options]"))
        if definition.subcommands:
            parts.append(Text("<subcommand>"))
        parts.extend(text(placeholder(argument), styler("argument-name")) for argument in definition.arguments)
        usage.append(Text(" ").join(parts))
    renders.append(Group(usage, Text("")))

    if help and help.long_descr:
        renders.append(section("description", text(help.long_descr, styler("description-section"))))
    elif help:
        body = [text(help.descr or help.tagline, styler("description-section"))]
        if help.synopsis:
            body.append(Text.assemble(text("example: ", styler("section-label")), text(help.synopsis, styler("synopsis"))))
        renders.append(section("description", Group(*body)))

    if help and help.options:
        renders.append(section("options", text(help.options)))
    elif definition.switches:
        table = Table.grid(padding=(0, 2))
        # dict.fromkeys keeps the first-seen order of the Opts behind the pairs.
        for opt in dict.fromkeys(opt for _, opt in definition.options()):
            names = Text(", ").join(text(spell(name), styler("option-name")) for name in opt.names)
            if opt.kind is not OptKind.FLAG:
                names = Text.assemble(names, " ", text(f"<{opt.kind.value}>", styler("metavar")))
            table.add_row(names, text(opt.descr, styler("argument-description")))
        renders.append(section("options", table))

    if help and help.arguments:
        renders.append(section("arguments", text(help.arguments)))
    elif definition.arguments:
        table = Table.grid(padding=(0, 2))
        for argument in definition.arguments:
            table.add_row(
                text(placeholder(argument), styler("argument-name")),
                text(argument.kind.value, styler("metavar")),
                text(argument.descr, styler("argument-description")),
            )
        renders.append(section("arguments", table))

    if help and help.subcommands:
        renders.append(section("subcommands", text(help.subcommands)))
    elif subcommands := definition.subcommands:
        table = Table(
            "name", "help",
            box=ROUNDED,
            style=styler("children-table"),
            header_style=styler("section-label"),
        )
        for name, child in subcommands.items():
            tagline = getattr(getdef(child).help, "tagline", None)
            table.add_row(text(name, styler("children")), text(tagline, styler("children-description")))
        renders.append(section("subcommands", table))

    renderable = Group(*renders)
    if fancy:
        renderable = Panel(
            renderable,
            title=Text.assemble("[", " ", f"{route} HELP".upper(), " ", "]", style=styler("panel-title")),
            title_align="left",
        )
    return renderable


def display(command, /, *, stderr=False, **options):
    """
    Print the help page of a command (see render() for options).
    """
    Console(stderr=stderr).print(render(command, **options))


__all__ = (
    "spell",
    "placeholder",
    "render",
    "display",
)
