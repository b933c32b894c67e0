"""
Commandeer command layer: describe, compose, and dispatch CLI commands.

What this module provides
- HelpText: the help strings of a command (tagline, description, synopsis)
  plus optional per-section overrides for the help page.
- CommandDefinition: one node of the command tree. It owns:
  • its options, indexed by every alias (several aliases fan out to one Opt),
  • its ordered argument slots,
  • its help text,
  • its subcommand table (children keyed by their own names),
  • the callback that runs it.
- The command capability: any object exposing a callable run(request) and a
  callable __definition__() returning its CommandDefinition can be mounted as a
  subcommand. CommandDefinition satisfies it by itself.
- Factories and helpers:
  • command(...): decorator that turns a callback into a CommandDefinition.
  • getdef(obj): resolve the definition behind any command-capable object.
  • run(obj, request): dispatch and hand back the callback's result verbatim.
  • execute(obj, request): dispatch and raise DelegatedCommandError on failure.

Core ideas
- Definitions are data: built once at startup, read-only afterwards. Every
  public attribute is a property that hands out copies of containers.
- Lookups never fail loudly: a miss is None.
- Dispatch is opaque: a callback returns None on success or an error message
  string, and nothing here wraps, classifies or retries it.

Quick start
    from commandeer import CommandDefinition, HelpText, Request, command, flag, string, run

    @command("add", options=[flag("f", "force")], arguments=[string("path", required=True, variadic=True)])
    def add(request):
        if not request.argument("path"):
            return "nothing to add"

    tool = CommandDefinition("tool", [flag("v", "verbose")], help=HelpText("a tool"), subcommands=[add])
    run(tool.resolve("add"), Request(("tool", "add"), arguments={"path": ("a.txt",)}))

See also
- commandeer.arguments for Opt/Argument semantics.
- commandeer.helper for rendering a definition as a help page.
- commandeer.faults for fault codes and rendering behavior.
"""
import inspect
import logging
from collections.abc import Iterable

from rich.text import Text

from .arguments import Opt, Argument
from .faults import *
from .utils import *
from .utils import SpecType

logger = logging.getLogger(__name__)


def _process_strings(cls, metadata, names):
    """
    Normalize scalar string/Text metadata fields.

    For each key in `names`:
    - Validates type: each value must be str | Text | Unset.
    - Trims strings; empty strings are rejected.
    - Resolves Unset to None (keeps Text unchanged).

    Errors
    - TypeError: when a value is not str | Text | Unset.
    - ValueError: when a string becomes empty after trimming.
    """
    for name in names:
        if not isinstance(object := metadata[name], str | Text | Unset):
            raise TypeError(f"{cls.__typename__} {name!r} must be a string")
        elif isinstance(object, str) and not (object := object.strip()):
            raise ValueError(f"{cls.__typename__} {name!r} cannot be empty")
        metadata[name] = coalesce(object)


def _check_iterable(cls, name, object):
    # Plain strings are iterable but never a valid collection of specs.
    if isinstance(object, str | Text) or not isinstance(object, Iterable):
        raise TypeError(f"{cls.__typename__} {name!r} must be an iterable")


class HelpText(metaclass=SpecType):
    """
    Help strings of one command.

    Fields
    - tagline: one line shown next to the command in its parent's listing.
    - descr: short description (DESCRIPTION section).
    - synopsis: an example showcasing the command.

    Overrides (None unless given): usage, long_descr, options, arguments,
    subcommands. Each one replaces the generated text of the matching section
    of the help page.
    """

    __introspectable__ = (
        "tagline",
        "descr",
        "synopsis",
        "usage",
        "long_descr",
        "options",
        "arguments",
        "subcommands",
    )
    __displayable__ = (
        "tagline",
        "descr",
        "synopsis",
    )

    def __init__(
            self,
            tagline,
            /,
            descr=Unset,
            synopsis=Unset,
            *,
            usage=Unset,
            long_descr=Unset,
            options=Unset,
            arguments=Unset,
            subcommands=Unset,
    ):
        metadata = {
            "tagline": tagline,
            "descr": descr,
            "synopsis": synopsis,
            "usage": usage,
            "long_descr": long_descr,
            "options": options,
            "arguments": arguments,
            "subcommands": subcommands,
        }
        if tagline is Unset:
            raise TypeError(f"{type(self).__typename__} 'tagline' must be a string")
        _process_strings(type(self), metadata, metadata.keys())

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    @classmethod
    def fromdoc(cls, doc, /):
        """
        Build a HelpText from a docstring: the first line becomes the tagline,
        the remaining paragraph(s) the description. Returns None for no doc.
        """
        if not isinstance(doc, str) or not (doc := inspect.cleandoc(doc)):
            return None
        tagline, _, rest = doc.partition("\n")
        return cls(tagline, rest.strip() or Unset)


def getdef(object, /):
    """
    Resolve the CommandDefinition behind a command-capable object.

    Contract
    - object must provide a callable __definition__() returning a
      CommandDefinition (CommandDefinition returns itself).

    Raises
    - TypeError: when the object does not implement the hook or the hook
      returns something else.
    """
    if not hasattr(object, "__definition__") or not callable(object.__definition__):
        raise TypeError("getdef() argument must implement __definition__ method")
    if not isinstance(definition := object.__definition__(), CommandDefinition):
        raise TypeError("__definition__() non-definition returned")
    return definition


def _process_options(cls, metadata):
    """
    Build the Opt store and its alias projection.

    - options (store): the supplied Opts, in order; an Opt instance supplied
      twice is kept once.
    - switches (projection): alias -> owning Opt, one entry per alias.

    Two distinct Opts claiming the same alias are rejected, so a lookup through
    the projection always agrees with a scan of the store.
    """
    _check_iterable(cls, "options", metadata["options"])

    options = []
    switches = {}
    for opt in metadata["options"]:
        if not isinstance(opt, Opt):
            raise TypeError(f"{cls.__typename__} 'options' must be an iterable of opts")
        if any(opt is other for other in options):
            continue
        for name in opt.names:
            if switches.setdefault(name, opt) is not opt:
                raise ValueError(f"{cls.__typename__} option name {name!r} is already in use")
        options.append(opt)

    metadata["options"] = tuple(options)
    metadata["switches"] = switches


def _process_arguments(cls, metadata):
    """
    Validate the ordered argument slots.

    Rules
    - only the last argument may be variadic,
    - a required argument cannot follow an optional one,
    - argument names are unique (they key the values of a Request).
    """
    _check_iterable(cls, "arguments", metadata["arguments"])

    arguments = []
    variadic = None
    optional = None
    for argument in metadata["arguments"]:
        if not isinstance(argument, Argument):
            raise TypeError(f"{cls.__typename__} 'arguments' must be an iterable of arguments")

        if variadic:
            raise TypeError(f"{cls.__typename__} variadic argument {variadic!r}, must be the last argument")
        variadic = argument.name if argument.variadic else None

        if argument.required and optional:
            raise TypeError(f"{cls.__typename__} required argument {argument.name!r}, cannot follow optional argument {optional!r}")
        optional = optional or (argument.name if not argument.required else None)

        if any(argument.name == other.name for other in arguments):
            raise ValueError(f"{cls.__typename__} argument name {argument.name!r} is already in use")
        arguments.append(argument)

    metadata["arguments"] = tuple(arguments)


def _process_subcommands(cls, metadata):
    """
    Key every child by its own definition name.

    Duplicated names: the later child replaces the earlier one and a
    DuplicatedSubcommandWarning is triggered; with strict=True the duplicate
    is a ValueError instead.
    """
    _check_iterable(cls, "subcommands", metadata["subcommands"])

    subcommands = {}
    for child in metadata["subcommands"]:
        try:
            name = getdef(child).name
        except TypeError:
            raise TypeError(f"{cls.__typename__} 'subcommands' must be an iterable of commands") from None
        if not callable(getattr(child, "run", None)):
            raise TypeError(f"{cls.__typename__} subcommand {name!r} must implement run method")

        if name in subcommands:
            if metadata["strict"]:
                raise ValueError(f"{cls.__typename__} subcommand name {name!r} is already in use")
            logger.debug("subcommand %r of %r replaced by a later registration", name, metadata["name"])
            trigger(DuplicatedSubcommandWarning(
                f"subcommand {name!r} of {metadata['name']!r} is registered more than once, the last registration wins",
                title="duplicated subcommand",
                code=FaultCode.DUPLICATED_SUBCOMMAND_WARNING,
                hint="rename one of them or pass strict=True to reject duplicates",
                docs=getdoc(FaultCode.DUPLICATED_SUBCOMMAND_WARNING),
                # Points at the caller of CommandDefinition(...).
                stacklevel=3,
            ))
            # Re-insert so listing order follows the surviving registration.
            del subcommands[name]
        subcommands[name] = child

    metadata["subcommands"] = subcommands


class CommandDefinition(metaclass=SpecType):
    """
    One command (or subcommand) node of a CLI.

    Responsibilities
    - Shape: name, options, ordered arguments, help text and children.
    - Lookup: option aliases (get_option/options/switches), children
      (subcommand/resolve), argument slots (arguments).
    - Dispatch: run(request) forwards to the callback and returns its result
      verbatim.

    Lifecycle
    - Built once, typically as static data describing the whole CLI, then only
      read. Ownership is a tree: the definition owns its Opts, Arguments and
      children.

    Notes
    - switches is the alias -> Opt projection of the option store; every
      alias of an Opt maps to the same instance.
    - The definition itself is command-capable (run + __definition__), so
      definitions nest directly as subcommands.
    """

    __introspectable__ = (
        "name",
        "help",
        "arguments",
        "switches",
        "subcommands",
        "strict",
    )
    __displayable__ = (
        "name",
        "help",
        "arguments",
        "subcommands",
    )

    def __init__(
            self,
            name,
            /,
            options=(),
            arguments=(),
            help=Unset,
            subcommands=(),
            *,
            run=Unset,
            strict=False,
    ):
        """
        Construct a CommandDefinition.

        Parameters
        - name: str
          Identifier within the parent's subcommand table. Trimmed, non-empty.
        - options: Iterable[Opt]
          Every accepted switch. Each alias is indexed; aliases cannot be shared
          between distinct Opts.
        - arguments: Iterable[Argument]
          Positional slots in order. Only the last may be variadic and required
          slots come before optional ones.
        - help: HelpText | Unset
          Help strings. If Unset, becomes None.
        - subcommands: Iterable[command-capable]
          Children, keyed by their own names.
        - run: Callable[[Request], str | None] | Unset
          Execution callback. A definition without one (e.g., a pure group of
          subcommands) runs as a no-op.
        - strict: bool
          Reject duplicated subcommand names instead of letting the last win.

        Raises
        - TypeError/ValueError on malformed fields, alias collisions, argument
          ordering violations, non-command children, and (strict) duplicates.
        """
        cls = type(self)
        if not isinstance(help, HelpText | Unset):
            raise TypeError(f"{cls.__typename__} 'help' must be a help-text")
        if not callable(run) and run is not Unset:
            raise TypeError(f"{cls.__typename__} 'run' must be callable")

        metadata = {
            "name": name,
            "help": coalesce(help),
            "options": options,
            "arguments": arguments,
            "subcommands": subcommands,
            "callback": run,
            "strict": bool(strict),
        }
        if name is Unset:
            raise TypeError(f"{cls.__typename__} 'name' must be a string")
        _process_strings(cls, metadata, ("name",))
        if isinstance(metadata["name"], Text):
            metadata["name"] = metadata["name"].plain
        _process_options(cls, metadata)
        _process_arguments(cls, metadata)
        _process_subcommands(cls, metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

        logger.debug(
            "defined command %r (%d options, %d arguments, %d subcommands)",
            self._name, len(self._options), len(self._arguments), len(self._subcommands),
        )

    def __definition__(self):
        """
        Command capability hook: a definition is its own definition.
        """
        return self

    def options(self):
        """
        Flatten the alias projection into (alias, Opt) pairs.

        One pair per alias: an Opt with three aliases yields three pairs sharing
        the same Opt. Pairs are grouped by Opt in declaration order, aliases in
        each Opt's display order (shortest first).
        """
        return [(name, opt) for opt in self._options for name in opt.names]

    def get_option(self, name, /):
        """
        Return the Opt accepting alias `name`, or None.
        """
        if not isinstance(name, str):
            return None
        return self._switches.get(name)

    def subcommand(self, name, /):
        """
        Return the child registered under exactly `name`, or None.

        No prefix matching and no case folding.
        """
        if not isinstance(name, str):
            return None
        return self._subcommands.get(name)

    def resolve(self, *route):
        """
        Walk the subcommand tree name by name.

        Returns the command reached after the last name (the definition itself
        for an empty route) or None as soon as a name is not found.
        """
        command = self
        for name in route:
            if (command := getdef(command).subcommand(name)) is None:
                return None
        return command

    def run(self, request, /):
        """
        Invoke the callback with `request` and return its result verbatim.

        The result is None on success or the error message string reported by
        the callback. Without a callback this is a no-op returning None.
        """
        if self._callback is Unset:
            return None
        return self._callback(request)


def command(name=Unset, /, *args, **kwargs):
    """
    Build a CommandDefinition around a callback (decorator).

    Usage
    - With an explicit name and definition fields:
        @command("add", options=[flag("f", "force")])
        def add(request): ...

    - Bare, naming the command after the function:
        @command
        def status(request): ...

    Behavior
    - The decorated callable becomes the definition's run callback.
    - When no help is given, it is built from the callback docstring
      (first line as tagline, the rest as description).
    - Remaining arguments are forwarded to CommandDefinition(...).

    Returns
    - CommandDefinition in bare form, otherwise a decorator producing one.
    """
    @rename("command")
    def wrapper(callback, /):
        if not callable(callback):
            raise TypeError("@command() must be applied to a callable")
        # The decorator may be reused, so the shared kwargs stay untouched.
        options = dict(kwargs)
        if "help" not in options and len(args) < 3 and (help := HelpText.fromdoc(inspect.getdoc(callback))):
            options["help"] = help
        return CommandDefinition(coalesce(name, getattr(callback, "__name__", Unset)), *args, run=callback, **options)

    if callable(name):
        callback, name = name, Unset
        return wrapper(callback)
    return wrapper


def run(command, request, /):
    """
    Dispatch `request` to a command-capable object.

    Behavior
    - Resolves the definition (for logging and diagnostics) and calls
      command.run(request).
    - Returns the callback's result unmodified: None on success, otherwise the
      error message string.

    Raises
    - TypeError: when command is not command-capable, or when its run returns
      anything other than None or a string.
    """
    definition = getdef(command)
    if not callable(getattr(command, "run", None)):
        raise TypeError("run() first argument must implement run method")

    logger.debug("dispatching command %r", definition.name)
    result = command.run(request)
    if result is None:
        logger.debug("command %r succeeded", definition.name)
    elif isinstance(result, str):
        logger.debug("command %r failed: %s", definition.name, result)
    else:
        raise TypeError(f"command {definition.name!r} run() must return None or an error message")
    return result


def execute(command, request, /, **options):
    """
    Dispatch like run(), but surface a failure as a DelegatedCommandError.

    The error carries the callback's message verbatim. Options (shell, fancy,
    colorful, ...) are forwarded to trigger(); in shell mode the fault is
    printed on stderr and the process exits with status 1.
    """
    if (message := run(command, request)) is None:
        return
    trigger(DelegatedCommandError(
        message,
        tool=getdef(command),
        title="command failed",
        code=FaultCode.DELEGATED_ERROR,
        docs=getdoc(FaultCode.DELEGATED_ERROR),
    ), **options)


__all__ = (
    # Public API surface for consumers of commandeer.commands.
    # These names are re-exported from the package __init__.
    "HelpText",
    "CommandDefinition",
    "command",
    "getdef",
    "run",
    "execute",
)
