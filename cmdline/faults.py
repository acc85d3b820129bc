"""
cmdline faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue
  (errors and warnings). Codes are grouped by domain to keep logs/searches predictable.
- CommandLineException / CommandLineWarning: base types that carry a message plus
  context (definition, code, title, hint) and know how to render themselves with rich.
- trigger(): central entry point to surface any fault, either by raising/warning
  (library mode) or by printing it and exiting (shell mode).

Integration
- The builder raises InvalidDefinitionError and emits DuplicateAliasWarning.
- Definition.parse raises ParsingError subclasses; their message embeds the usage.
- Result accessors raise UnknownOptionError and MissingRequiredOptionError.
- Hosts may define __styles__ and __codes__ mappings in __main__ to restyle
  rendering and relabel codes.
"""
import os
import sys
import warnings
from collections import defaultdict
from enum import IntEnum

from rich.console import Console, Group
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - definition errors (1110x)
      • INVALID_DEFINITION
    - option errors (1111x)
      • MISSING_OPTION_ARGUMENT
    - parameter errors (1112x)
      • MISSING_PARAMETER
    - accessor errors (1113x)
      • UNKNOWN_OPTION, MISSING_REQUIRED_OPTION
    - warnings (12xxx)
      • DUPLICATE_ALIAS
    """
    # --- definition errors (11xxx) ---
    INVALID_DEFINITION          = 11101

    # --- option errors (11xxx) ---
    MISSING_OPTION_ARGUMENT     = 11111

    # --- parameter errors (11xxx) ---
    MISSING_PARAMETER           = 11121

    # --- accessor errors (11xxx) ---
    UNKNOWN_OPTION              = 11131
    MISSING_REQUIRED_OPTION     = 11132

    # --- warnings (12xxx) ---
    DUPLICATE_ALIAS             = 12101

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette, *, colorful):
    """
    shared rich renderer for exceptions and warnings.

    layout
        [ program — code | title ]
        message
         → hint
    """
    styles = defaultdict(str, palette | getattr(__import__("__main__"), "__styles__", {}))

    def text(fragment, style):
        if not fragment:
            return Text("")
        return Text(str(fragment), styles[style] if colorful else "")

    if fault.definition is not None:
        program = fault.definition.program
    else:
        program = getattr(fault, "program", "cmdline")

    header = Text.assemble(
        "[ ",
        text(program, "prog-name"),
        " — ",
        text(fault.code.normalize() if fault.code else "-", "code"),
        " | ",
        text(fault.title.title(), "title"),
        " ]"
    )
    renders = [header, text(fault.reason, "message")]
    if fault.hint:
        renders.append(Text.assemble(text(" → ", "hint-arrow"), text(fault.hint, "hint")))
    return Group(*renders)


class CommandLineException(Exception):
    """
    base type of every cmdline error.

    attributes
    - message: full message (for parse errors it ends with the usage block).
    - reason: the one-line cause, without usage.
    - definition: the Definition involved, or None when not known yet.
    - code/title/hint: presentation metadata, per subclass.
    """
    code = Unset
    title = "command line error"
    hint = ""

    def __init__(self, reason, /, definition=None, *, hint=Unset):
        assert isinstance(reason, str)
        self.reason = reason
        self.definition = definition
        self.hint = coalesce(hint, type(self).hint)
        self.message = self._compose(reason)
        super().__init__(self.message)

    def _compose(self, reason):
        return reason

    def __str__(self):
        return self.message

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "title": "bold #FF4DA6",
            "message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        }, colorful=True)

    def __trigger__(self, *, shell, colorful):
        if not shell:
            raise self
        console.print(_render(self, {}, colorful=False) if not colorful else self)
        sys.exit(1)


class InvalidDefinitionError(CommandLineException, ValueError):
    code = FaultCode.INVALID_DEFINITION
    title = "invalid definition"
    hint = "declare every option with at least one non-empty name"


class ParsingError(CommandLineException):
    """
    base type of the errors raised while parsing an argument vector.

    the message embeds the generated help so callers can show the usage
    together with the failure:

        <reason>
        Usage: <help>
    """
    title = "parsing error"

    def __init__(self, reason, /, definition, *, hint=Unset):
        super().__init__(reason, definition, hint=hint)

    def _compose(self, reason):
        return f"{reason}{os.linesep}Usage: {self.definition.help()}"

    def __trigger__(self, *, shell, colorful):
        if not shell:
            raise self
        console.print(_render(self, {}, colorful=False) if not colorful else self)
        console.print(Text.assemble("Usage: ", self.definition.__rich__() if colorful else self.definition.help()))
        sys.exit(1)


class MissingOptionArgumentError(ParsingError):
    code = FaultCode.MISSING_OPTION_ARGUMENT
    title = "missing option argument"
    hint = "put the value right after the option name"

    def __init__(self, alias, metavar, /, definition):
        self.alias = alias
        self.metavar = metavar
        super().__init__(f"Option '{alias}' requires argument '{metavar}'", definition)


class MissingParameterError(ParsingError):
    code = FaultCode.MISSING_PARAMETER
    title = "missing parameter"
    hint = "pass at least one positional value"

    def __init__(self, name, /, definition):
        self.name = name
        super().__init__(f"Missing required parameter '{name}'", definition)


class UnknownOptionError(CommandLineException, LookupError):
    code = FaultCode.UNKNOWN_OPTION
    title = "unknown option"
    hint = "query options by one of their declared names"

    def __init__(self, alias, /, definition):
        self.alias = alias
        super().__init__(f"Unknown option {alias}", definition)


class MissingRequiredOptionError(CommandLineException, LookupError):
    code = FaultCode.MISSING_REQUIRED_OPTION
    title = "missing required option"
    hint = "pass the option or declare a default value for it"

    def __init__(self, alias, /, definition):
        self.alias = alias
        super().__init__(f"Option '{alias}' has no value", definition)


class CommandLineWarning(UserWarning):
    """
    base type of every cmdline warning (non-fatal diagnostics).

    warnings go through the standard warnings machinery so hosts can filter,
    record or escalate them.
    """
    code = Unset
    title = "command line warning"
    hint = ""

    def __init__(self, reason, /, definition=None, *, hint=Unset):
        self.reason = reason
        self.message = reason
        self.definition = definition
        self.hint = coalesce(hint, type(self).hint)
        super().__init__(reason)

    def __str__(self):
        return self.message

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #FFB400",
            "title": "bold #FFC2E0",
            "message": "#D6D6DE",
            "hint-arrow": "#B8EFAF dim",
            "hint": "italic #B8EFAF",
        }, colorful=True)

    def __trigger__(self, *, shell, colorful):
        if not shell:
            return warnings.warn(self, stacklevel=4)
        console.print(_render(self, {}, colorful=False) if not colorful else self)


class DuplicateAliasWarning(CommandLineWarning):
    code = FaultCode.DUPLICATE_ALIAS
    title = "duplicate alias"
    hint = "the first option declaring this name keeps it"

    def __init__(self, alias, program, /):
        self.alias = alias
        self.program = program
        super().__init__(f"Duplicate option name {alias}")


def trigger(fault, /, *, shell=False, colorful=True):
    """
    surface a fault.

    contract
    - fault must provide a __trigger__ method (see the base classes).
    - shell=False: errors are raised, warnings are emitted with warnings.warn.
    - shell=True: the fault is printed to stderr with rich (parse errors are
      followed by the usage) and errors end the process with exit status 1.
    - colorful=False strips styling from the printed output.
    """
    if not hasattr(fault, "__trigger__") or not callable(fault.__trigger__):
        raise TypeError("trigger() argument must have a __trigger__ method")
    fault.__trigger__(shell=shell, colorful=colorful)


__all__ = (
    "FaultCode",
    "CommandLineException",
    "InvalidDefinitionError",
    "ParsingError",
    "MissingOptionArgumentError",
    "MissingParameterError",
    "UnknownOptionError",
    "MissingRequiredOptionError",
    "CommandLineWarning",
    "DuplicateAliasWarning",
    "trigger",
)
