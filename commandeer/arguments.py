r"""
Commandeer option and argument specifications.

Overview
- Specs
  • Opt: a named switch with one or more aliases (e.g., v/verbose), either a
    presence-only flag or a value-bearing option (string or integer).
  • Argument: a positional slot (string or file path) that may be required
    and/or variadic.

- Factories
  • flag(...): build a presence-only Opt.
  • option(...): build a value-bearing Opt (string by default).
  • string(...) / file(...): build an Argument of the matching kind.

Canonical names
- The first alias handed to Opt(...) is the canonical name (Opt.name). It is
  remembered before the aliases are sorted, so the stable shortest-first order
  of Opt.names (used for display) never changes which alias is canonical.

Metadata (sanitized on construction)
- Shared
  • descr: Unset | str | Text (short help), non-empty when provided.
- Opt only
  • names: one or more aliases matching r"[^\W\d_](-?[^\W_]+)*"; duplicates rejected.
  • kind: OptKind.
- Argument only
  • name: non-empty string.
  • kind: ArgumentKind.
  • required/variadic: coerced to bool.

Ordering rules between arguments (only the last may be variadic, required
slots come first) concern a whole command and are checked by
commandeer.commands.CommandDefinition.

Quick example:
    >>> from commandeer.arguments import flag, option, string, OptKind
    >>> verbose = flag("v", "verbose", descr="print more")
    >>> jobs = option("j", "jobs", kind=OptKind.INTEGER)
    >>> paths = string("PATH", required=True, variadic=True)
    ...

Public API
- Enums: OptKind, ArgumentKind
- Classes: Opt, Argument
- Factories: flag, option, string, file
"""
import re
from enum import Enum

from rich.text import Text

from .utils import *
from .utils import SpecType


class OptKind(Enum):
    """
    Value kind carried by an Opt.

    - FLAG: presence-only, no value.
    - STRING: a single string value.
    - INTEGER: a single integer value.
    """
    FLAG = "flag"
    STRING = "string"
    INTEGER = "integer"


class ArgumentKind(Enum):
    """
    Value kind carried by an Argument.

    - STRING: free-form text.
    - FILE: a filesystem path (not checked for existence here).
    """
    STRING = "string"
    FILE = "file"


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize the 'descr' field shared by every spec.

    - descr: optional short description. If omitted (Unset), it becomes None.
      If provided, it must be a str or rich Text; strings are trimmed and must
      not be empty.

    Raises
    - TypeError: if 'descr' is not a string, a Text or Unset (None included).
    - ValueError: if 'descr' is a string but empty after trimming.

    Mutates the provided metadata dict in place.
    """
    if not isinstance(descr := metadata["descr"], str | Text | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = coalesce(descr)


def _sanitize_named_metadata(cls, metadata, /):
    r"""
    Internal: validate and order the aliases of an Opt.

    Responsibilities
    - names: required. Each alias must be a non-empty string (trimmed) matching
      r"[^\W\d_](-?[^\W_]+)*": segments of Unicode letters/digits separated by
      single hyphens, starting with a letter and carrying no leading dash
      (dashes are a tokenizer concern). Duplicates are rejected.
    - canonical: the first alias, recorded before ordering.
    - names is then stably sorted by length (shortest first; equal lengths keep
      the order in which they were supplied) and frozen into a tuple.

    Raises
    - TypeError: when no alias is supplied or an alias is not a string.
    - ValueError: when an alias is empty, malformed, or duplicated.
    """
    if not metadata["names"]:
        raise TypeError(f"{cls.__typename__} must specify at least one name")

    names = []
    for name in metadata["names"]:
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} names must be strings")
        elif not (name := name.strip()):
            raise ValueError(f"{cls.__typename__} names cannot be empty-strings")
        elif not re.fullmatch(r"[^\W\d_](-?[^\W_]+)*", name):
            raise ValueError(f"{cls.__typename__} names must be valid option names without dashes (unicodes are allowed)")
        elif name in names:
            raise ValueError(f"{cls.__typename__} names cannot contain duplicates")
        names.append(name)

    metadata["name"] = names[0]
    # sorted() is stable: equal-length aliases keep their relative input order.
    metadata["names"] = tuple(sorted(names, key=len))


class Opt(metaclass=SpecType):
    """
    Named switch specification.

    An Opt describes one switch a command accepts: the aliases it can be
    spelled with, the kind of value it carries and a short description. It is
    pure metadata; parsed values live in the Request handed to a command.

    Highlights
    - name: canonical alias, always the first one supplied.
    - names: every alias, shortest first (stable), used for display.
    - kind: OptKind.FLAG, OptKind.STRING or OptKind.INTEGER.
    - descr: help text or None.

    Properties
    - The names listed in __introspectable__ are exposed as read-only attributes.
    """

    __introspectable__ = (
        "name",
        "names",
        "kind",
        "descr",
    )

    def __init__(self, *names, kind=OptKind.FLAG, descr=Unset):
        """
        Construct an Opt.

        Parameters
        - names: one or more str
          Aliases for the option (e.g., "v", "verbose", "very-verbose").
        - kind: OptKind
          Value kind; defaults to a presence-only flag.
        - descr: Unset | str | Text
          Short description for help. If Unset, becomes None.

        Raises
        - TypeError: no alias given, non-string alias, kind not an OptKind,
          descr of the wrong type.
        - ValueError: empty/malformed/duplicated alias, empty descr.
        """
        if not isinstance(kind, OptKind):
            raise TypeError(f"{type(self).__typename__} 'kind' must be an opt-kind")

        metadata = {
            "names": names,
            "kind": kind,
            "descr": descr,
        }
        _sanitize_metadata(type(self), metadata)
        _sanitize_named_metadata(type(self), metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, coalesce(object))

    @property
    def takes_value(self):
        """
        Whether the option consumes a value (everything but flags).
        """
        return self._kind is not OptKind.FLAG

    def __contains__(self, name, /):
        """
        Alias membership: "verbose" in opt.
        """
        return name in self._names


class Argument(metaclass=SpecType):
    """
    Positional slot specification.

    An Argument describes one positional value a command consumes, in
    declaration order. A variadic slot consumes all remaining tokens and a
    required slot must be filled; how a sequence of slots may be ordered is
    enforced by the owning CommandDefinition.

    Properties
    - name, kind, required, variadic, descr (read-only).
    """

    __introspectable__ = (
        "name",
        "kind",
        "required",
        "variadic",
        "descr",
    )

    def __init__(self, name, /, kind=ArgumentKind.STRING, required=False, variadic=False, descr=Unset):
        """
        Construct an Argument.

        Parameters
        - name: str
          Slot name (also the key of its value in a Request). Trimmed, non-empty.
        - kind: ArgumentKind
          Value kind; defaults to a plain string.
        - required: bool
          The slot must be filled.
        - variadic: bool
          The slot consumes every remaining token.
        - descr: Unset | str | Text
          Short description for help. If Unset, becomes None.
        """
        if not isinstance(name, str):
            raise TypeError(f"{type(self).__typename__} 'name' must be a string")
        elif not (name := name.strip()):
            raise ValueError(f"{type(self).__typename__} 'name' cannot be empty")
        if not isinstance(kind, ArgumentKind):
            raise TypeError(f"{type(self).__typename__} 'kind' must be an argument-kind")

        metadata = {
            "name": name,
            "kind": kind,
            "required": bool(required),
            "variadic": bool(variadic),
            "descr": descr,
        }
        _sanitize_metadata(type(self), metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, coalesce(object))


def flag(*names, descr=Unset):
    """
    Build a presence-only Opt.

        verbose = flag("v", "verbose", descr="print more")
    """
    return Opt(*names, kind=OptKind.FLAG, descr=descr)


def option(*names, kind=OptKind.STRING, descr=Unset):
    """
    Build a value-bearing Opt (string by default).

    Raises
    - ValueError: when asked for OptKind.FLAG (use flag() instead).
    """
    if kind is OptKind.FLAG:
        raise ValueError("option() kind must carry a value, use flag() for presence-only switches")
    return Opt(*names, kind=kind, descr=descr)


def string(name, /, required=False, variadic=False, descr=Unset):
    """
    Build a string Argument.
    """
    return Argument(name, ArgumentKind.STRING, required, variadic, descr)


def file(name, /, required=False, variadic=False, descr=Unset):
    """
    Build a file-path Argument.
    """
    return Argument(name, ArgumentKind.FILE, required, variadic, descr)


__all__ = (
    # Public API surface for consumers of commandeer.arguments.
    # These names are re-exported from the package __init__.

    # Enums
    "OptKind",
    "ArgumentKind",

    # Classes (specifications)
    "Opt",
    "Argument",

    # Factories
    "flag",
    "option",
    "string",
    "file",
)
