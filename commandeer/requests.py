"""
Commandeer requests: the resolved invocation handed to a command.

A Request is produced by whatever parses the command line (not part of this
package) after it has walked the subcommand tree, coerced option values to
their declared kind and sliced positional tokens into argument slots. It is
read-only; commands only consume it.

Shape
- route: names walked from the root to the target command.
- options: canonical option name -> value (True for flags that were given).
- arguments: argument name -> value (a tuple for variadic slots).
- environ: environment snapshot (defaults to a copy of os.environ).

options, arguments and environ are read-only mapping views over private
copies; route is handed out as a fresh list.
"""
import os
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from .utils import *
from .utils import SpecType


class Request(metaclass=SpecType):
    __introspectable__ = (
        "route",
        "options",
        "arguments",
        "environ",
    )
    __displayable__ = (
        "route",
        "options",
        "arguments",
    )

    def __init__(self, route=(), options=Unset, arguments=Unset, environ=Unset):
        if isinstance(route, str) or not isinstance(route, Iterable):
            raise TypeError(f"{type(self).__typename__} 'route' must be an iterable of strings")
        route = tuple(route)
        if not all(isinstance(name, str) for name in route):
            raise TypeError(f"{type(self).__typename__} 'route' must be an iterable of strings")

        for name, object in (("options", options), ("arguments", arguments), ("environ", environ)):
            if not isinstance(object, Mapping | Unset):
                raise TypeError(f"{type(self).__typename__} {name!r} must be a mapping")

        self._route = route
        self._options = MappingProxyType(dict(coalesce(options, {})))
        self._arguments = MappingProxyType({
            name: tuple(value) if isinstance(value, list) else value
            for name, value in coalesce(arguments, {}).items()
        })
        self._environ = MappingProxyType(dict(coalesce(environ, os.environ)))

    @property
    def options(self):
        """
        Read-only view of option values, keyed by canonical name.
        """
        return self._options

    @property
    def arguments(self):
        """
        Read-only view of argument values; variadic slots keep their tuples.
        """
        return self._arguments

    @property
    def environ(self):
        """
        Read-only view of the environment snapshot.
        """
        return self._environ

    def option(self, name, default=None, /):
        """
        Value of the option whose canonical name is `name`, or `default`.
        """
        return self._options.get(name, default)

    def argument(self, name, default=None, /):
        """
        Value of the argument slot `name`, or `default`.
        """
        return self._arguments.get(name, default)

    def flag(self, name, /):
        """
        Whether the flag whose canonical name is `name` was given.
        """
        return bool(self._options.get(name, False))


__all__ = (
    "Request",
)
