"""
cmdline results: the outcome of one parse.

A Result pairs the Definition it was parsed against with the resolved
positional parameters and the resolved option values (keyed by alias, None
for flags). It is immutable and compares by value, so parsing the same input
twice yields equal results.

Accessors
- parameter(): first positional (or None).
- has_option(alias): whether the option appeared on the command line.
- option(alias, fallback): resolved value, the fallback, or the static default.
- parse_option(alias, converter) / try_parse_option(alias, converter, fallback):
  typed access through a caller-supplied str → T converter.
- help(): the definition's usage block.

Every accessor taking an alias, except try_parse_option(), raises
UnknownOptionError when the alias is not declared on the definition.
"""
from .faults import MissingRequiredOptionError, UnknownOptionError
from .utils import *


class Result(metaclass=RecordType):
    """
    Parsed command line.

    Fields
    - definition: Definition, used for lookups and help.
    - parameters: tuple[str, ...], resolved positional values.
    - options: read-only mapping alias → value (None for flags), first-seen order.
    """
    __introspectable__ = (
        "definition",
        "parameters",
        "options",
    )

    __displayable__ = (
        "parameters",
        "options",
    )

    def __new__(cls, definition, parameters=(), options=Unset):
        self = super().__new__(cls)
        self._definition = definition
        self._parameters = freeze(list(parameters))
        self._options = freeze(coalesce(options, {}))
        return self

    def _lookup(self, alias):
        try:
            return self._definition.aliases[alias]
        except KeyError:
            raise UnknownOptionError(alias, self._definition) from None

    def help(self):
        return self._definition.help()

    def parameter(self):
        """
        Return the first parameter, or None when there is none.
        """
        return self._parameters[0] if self._parameters else None

    def has_option(self, alias, /):
        """
        Return True when the option was present on the command line.

        A value option filled from its default still counts as present; an
        option that never appeared does not, even if it has a default.
        """
        self._lookup(alias)
        return alias in self._options

    def option(self, alias, fallback=Unset, /):
        """
        Return the value of an option.

        Resolution order
        - the value seen on the command line (None for a flag);
        - fallback, when given;
        - the option's declared default (None when it has none).
        """
        option = self._lookup(alias)
        if alias in self._options:
            return self._options[alias]
        return coalesce(fallback, option.default)

    def parse_option(self, alias, converter, /):
        """
        Convert the value of an option with converter (a str → T callable).

        Raises
        - MissingRequiredOptionError: the option resolved to no value.
        - whatever converter raises, unchanged.
        """
        value = self.option(alias)
        if value is None:
            raise MissingRequiredOptionError(alias, self._definition)
        return converter(value)

    def try_parse_option(self, alias, converter, fallback, /):
        """
        Like parse_option(), but never raises: return fallback when the alias is
        not declared, when the option has no value, or when converter fails.
        """
        try:
            value = self.option(alias)
        except UnknownOptionError:
            return fallback
        if value is None:
            return fallback
        try:
            return converter(value)
        except Exception:
            return fallback


__all__ = (
    "Result",
)
