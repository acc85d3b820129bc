"""
cmdline builders: declare options and the parameter, then build a Definition.

    >>> from cmdline import define
    >>> definition = (
    ...     define("copy")
    ...     .with_option(("-m", "--maxSize"), "max file size in KB", "size", "1024")
    ...     .with_option("-v", "verbose")
    ...     .with_parameter("file", "The output file")
    ...     .build()
    ... )
    >>> definition.parse(["-m", "512", "out.txt"]).option("--maxSize")
    '512'

The builder is a plain mutable accumulator owned by one caller. build()
snapshots its state into an independent, immutable Definition; the builder
stays usable afterwards.
"""
from .definitions import Definition, OptionSpec, ParameterSpec
from .faults import DuplicateAliasWarning, InvalidDefinitionError, trigger
from .utils import Unset


def _check(value, label, /):
    if not isinstance(value, str):
        raise TypeError(f"{label} must be a string")
    return value


class Builder:
    """
    Fluent accumulator of option and parameter declarations.

    Every with_* method returns the builder itself so declarations chain.
    """

    def __init__(self, program):
        if not isinstance(program, str):
            raise TypeError("program name must be a string")
        if not program.strip():
            raise InvalidDefinitionError("program name cannot be empty", hint="name the program")
        self.program = program
        self.parameter = None
        self.options = []

    def __repr__(self):
        return f"builder(program={self.program!r}, parameter={self.parameter!r}, options={self.options!r})"

    def with_option(self, names, descr="", metavar=Unset, default=Unset):
        """
        Declare an option.

        Parameters
        - names: str | Iterable[str], one alias or several (e.g., ("-m", "--maxSize")).
        - descr: str, help text.
        - metavar: str, label of the expected value. Omit it to declare a flag.
        - default: str, value used when the option is given without a value, and
          returned by Result.option() when the option is absent. Ignored for flags.

        Raises
        - InvalidDefinitionError: no alias, or a blank alias.
        - TypeError: a non-string alias, descr, metavar or default.
        """
        if isinstance(names, str):
            names = (names,)
        names = list(names)
        if not names:
            raise InvalidDefinitionError("option names cannot be empty")
        for name in names:
            if not _check(name, "option names").strip():
                raise InvalidDefinitionError("option names cannot be empty-strings")

        self.options.append(OptionSpec(
            names,
            _check(descr if descr is not None else "", "option description"),
            _check(metavar, "option metavar") if metavar is not Unset else None,
            _check(default, "option default") if default is not Unset else None,
        ))
        return self

    def with_parameter(self, name, descr="", default=Unset):
        """
        Declare a single positional parameter (replaces any previous one).

        Without a default the parameter is required.
        """
        required = default is Unset
        self.parameter = ParameterSpec(
            _check(name, "parameter name"),
            _check(descr if descr is not None else "", "parameter description"),
            required=required,
            variadic=False,
            defaults=() if required else (_check(default, "parameter default"),),
        )
        return self

    def with_parameters(self, name, descr="", defaults=Unset):
        """
        Declare a variadic positional parameter (replaces any previous one).

        Without defaults the parameter is required; any iterable of defaults,
        including an empty one, makes it optional.
        """
        required = defaults is Unset
        if not required:
            if isinstance(defaults, str):
                raise TypeError("parameter defaults must be an iterable of strings")
            defaults = [_check(default, "parameter defaults") for default in defaults]
        self.parameter = ParameterSpec(
            _check(name, "parameter name"),
            _check(descr if descr is not None else "", "parameter description"),
            required=required,
            variadic=True,
            defaults=() if required else defaults,
        )
        return self

    def build(self):
        """
        Return an immutable Definition of the current declarations.

        Aliases are registered in declaration order; an alias already taken by an
        earlier option emits a DuplicateAliasWarning and is left to the first one.
        """
        aliases = {}
        for option in self.options:
            for name in option.names:
                if name in aliases:
                    trigger(DuplicateAliasWarning(name, self.program))
                    continue
                aliases[name] = option
        return Definition(self.program, self.parameter, self.options, aliases)

    def parse(self, args=Unset, /):
        """
        Shortcut for build().parse(args).
        """
        return self.build().parse(args)


def define(program, /):
    """
    Start declaring the command line of program (the name shown in help).
    """
    return Builder(program)


__all__ = (
    "Builder",
    "define",
)
