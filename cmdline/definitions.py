r"""
cmdline definitions: what a program accepts, and how to parse against it.

Overview
- Records
  • OptionSpec: one option with one or more aliases (e.g., -m/--maxSize). With a
    metavar it takes a value (falling back to its default); without one it is a
    presence-only flag.
  • ParameterSpec: the positional parameter (single or variadic, required or with defaults).
  • Definition: program name + optional ParameterSpec + ordered OptionSpecs + the
    alias → OptionSpec lookup table. Immutable and reusable.

- Parsing
  • Definition.parse(args) scans the tokens left to right. A token equal to a
    declared alias is an option occurrence, anything else is positional. Value
    options consume the next token unless it is itself an alias. Later occurrences
    overwrite earlier ones.
  • No prefix matching, no "--name=value" form, no clustering of short flags.

- Help
  • Definition.help() renders the usage block:

        <program> [options] <parameter>
          Options:
          -m, --maxSize [<size>] : max file size in KB

  • Definition.__rich__() renders the same text with styles (see __styles__ in __main__).

Records are built by cmdline.builders.Builder; constructing them directly is
supported but skips duplicate-alias diagnostics.
"""
import os
import shlex
import sys
from collections import defaultdict, deque
from collections.abc import Iterable

from rich.text import Text

from .faults import MissingOptionArgumentError, MissingParameterError
from .results import Result
from .utils import *


def _styles():
    return defaultdict(str, {
        "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
        "usage-section": "bold #36C5F0",  # SKY-BLUE → parameter fragment
        "group-label": "bold #FFFFFF",  # Pure white headers
        "option-name": "bold #00E6FF",  # CYAN for value options
        "flag-name": "bold #22C55E",  # GREEN for flags
        "metavar": "bold #FFD600",  # AMBER for parameters
        "argument-description": "#9CA3AF",  # Muted gray
    } | getattr(__import__("__main__"), "__styles__", {}))


class OptionSpec(metaclass=RecordType):
    """
    A named option.

    Fields
    - names: tuple[str, ...], the aliases in declaration order (duplicates collapsed).
    - descr: str, help text ("" when omitted).
    - metavar: str | None, label of the expected value; None makes the option a flag.
    - default: str | None, value used when the option is given without a value.
    """
    __introspectable__ = (
        "names",
        "descr",
        "metavar",
        "default",
    )

    def __new__(cls, names, descr="", metavar=None, default=None):
        self = super().__new__(cls)
        self._names = tuple(dict.fromkeys(names))
        self._descr = descr
        self._metavar = metavar
        # Flags carry presence only.
        self._default = default if metavar is not None else None
        return self

    @property
    def flag(self):
        """
        True when the option carries no value (presence only).
        """
        return self._metavar is None

    def __rich__(self):
        styles = _styles()
        style = styles["flag-name" if self.flag else "option-name"]
        fragments = [Text(", ").join(Text(name, style) for name in self._names)]
        if not self.flag:
            metavar = Text.assemble("<", (self._metavar, styles["metavar"]), ">")
            if self._default is not None:
                metavar = Text.assemble("[", metavar, "]")
            fragments += [" ", metavar]
        if self._descr:
            fragments += [" : ", Text(self._descr, styles["argument-description"])]
        return Text.assemble(*fragments)

    def help(self):
        return self.__rich__().plain


class ParameterSpec(metaclass=RecordType):
    """
    The positional parameter.

    Fields
    - name: str, label used in help.
    - descr: str, help text.
    - required: bool, at least one positional must be given.
    - variadic: bool, every positional belongs to the parameter.
    - defaults: tuple[str, ...], used when no positional was given (never for required ones).
    """
    __introspectable__ = (
        "name",
        "descr",
        "required",
        "variadic",
        "defaults",
    )

    def __new__(cls, name, descr="", required=True, variadic=False, defaults=()):
        self = super().__new__(cls)
        self._name = name
        self._descr = descr
        self._required = required
        self._variadic = variadic
        self._defaults = () if required else freeze(list(defaults))
        return self

    def __rich__(self):
        style = _styles()["usage-section"]
        name = self._name
        if self._required:
            fragment = name + (f" [{name}2 {name}3 ...]" if self._variadic else "")
        else:
            fragment = "[" + name + (f" [{name}2 [{name}3] ...]" if self._variadic else "") + "]"
        return Text(fragment, style)

    def help(self):
        return self.__rich__().plain


class Definition(metaclass=RecordType):
    """
    Immutable description of what a program accepts.

    Fields
    - program: str, program name (first word of the help).
    - parameter: ParameterSpec | None.
    - options: tuple[OptionSpec, ...] in declaration order.
    - aliases: read-only mapping alias → OptionSpec (first registration wins).

    A Definition holds no reference to the builder that produced it and can be
    shared and parsed against any number of times.
    """
    __introspectable__ = (
        "program",
        "parameter",
        "options",
        "aliases",
    )

    __displayable__ = (
        "program",
        "parameter",
        "options",
    )

    def __new__(cls, program, parameter=None, options=(), aliases=Unset):
        self = super().__new__(cls)
        self._program = program
        self._parameter = parameter
        self._options = freeze(list(options))
        if aliases is Unset:
            aliases = {}
            for option in self._options:
                for name in option.names:
                    aliases.setdefault(name, option)
        self._aliases = freeze(aliases)
        return self

    def __rich__(self):
        styles = _styles()
        head = [Text(self._program, styles["program-name"])]
        if self._options:
            head.append(" [options]")
        if self._parameter is not None:
            head += [" ", self._parameter.__rich__()]
        lines = [Text.assemble(*head)]
        if self._options:
            lines.append(Text.assemble("  ", ("Options:", styles["group-label"])))
            lines += [Text.assemble("  ", option.__rich__()) for option in self._options]
        return Text(os.linesep).join(lines)

    def help(self):
        """
        Return the usage block as plain text (lines separated by os.linesep).
        """
        return self.__rich__().plain

    def parse(self, args=Unset, /):
        """
        Parse an argument vector into a Result.

        Parameters
        - args:
          • Unset: read tokens from sys.argv[1:].
          • str: shell-like string; split via shlex.split.
          • Iterable[str]: pre-tokenized sequence, used verbatim.

        Raises
        - MissingOptionArgumentError: a value option has no value and no default.
        - MissingParameterError: a required parameter received no positional.
        - TypeError: args is not a string or an iterable of strings.
        """
        tokens = deque(_tokenize(args))
        positionals = []
        values = {}

        while tokens:
            token = tokens.popleft()
            option = self._aliases.get(token)
            if option is None:
                positionals.append(token)
                continue

            value = None
            if not option.flag:
                if tokens and tokens[0] not in self._aliases:
                    value = tokens.popleft()
                elif option.default is not None:
                    value = option.default
                else:
                    raise MissingOptionArgumentError(token, option.metavar, self)

            # Only the aliases this option actually owns (duplicates were dropped).
            for name in option.names:
                if self._aliases.get(name) is option:
                    values[name] = value

        if self._parameter is None:
            parameters = ()
        elif positionals:
            parameters = positionals
        elif self._parameter.required:
            raise MissingParameterError(self._parameter.name, self)
        else:
            parameters = self._parameter.defaults

        return Result(self, parameters, values)


def _tokenize(args):
    if args is Unset:
        return list(sys.argv[1:])
    if isinstance(args, str):
        return shlex.split(args)
    if not isinstance(args, Iterable):
        raise TypeError("parse() argument must be a string or an iterable of strings")
    tokens = list(args)
    for token in tokens:
        if not isinstance(token, str):
            raise TypeError("parse() argument must be a string or an iterable of strings")
    return tokens


__all__ = (
    "OptionSpec",
    "ParameterSpec",
    "Definition",
)
