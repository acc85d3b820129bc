"""
cmdline utilities (internal helpers, carefully exposed)

Scope
- Building blocks shared by the definitions, builders and results layers.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/"".

- @method("name")
  • Names the methods RecordType generates (__repr__, __eq__, property getters, ...).

- freeze(object) / mirror("attr")
  • freeze() snapshots containers into their read-only counterparts.
  • mirror() publishes a private backing field (self._attr) as a read-only property.

- RecordType
  • Metaclass for the immutable value records (OptionSpec, ParameterSpec,
    Definition, Result): read-only fields, value equality, hashing, stable
    __repr__ and __rich_repr__, sealed against subclassing.

Usage guidance
- Prefer Unset for API defaults when None is a meaningful user value; materialize with coalesce().
- Store record fields already frozen; mirror() hands them out as-is.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> coalesce(None, "fallback") is None
    True
"""
import functools
import operator
import re
from collections.abc import Mapping, Sequence, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    This is used when None is a legitimate user value, but the API needs a way
    to distinguish “not provided” from “provided as None”. A single instance,
    Unset, is exposed for use as the default in internal parameters.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset" for friendly diagnostics.
    - Non-subclassable.
    - Singleton per process: UnsetType() always yields the same instance.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in annotations (e.g., str | UnsetType).
        """
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Use Unset as a default when None is a valid, user-meaningful value but you still
need to distinguish “no input” from “explicitly passed None”.
"""


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Falsey values like None, 0 or "" are preserved as-is; only Unset is replaced.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


def method(name, /):
    """
    Decorator giving a method generated by RecordType its public name.

    The generated closures otherwise show up as "RecordType.__new__.<locals>.__eq__"
    in tracebacks and reprs.
    """
    if not isinstance(name, str):
        raise TypeError("method() argument must be a string")

    def decorator(function):
        function.__name__ = function.__qualname__ = name
        return function

    return decorator


def freeze(object, /):
    """
    Return a shallow read-only snapshot of a container.

    - Sequence (non-string) → tuple
    - Mapping → MappingProxyType over a private dict copy
    - Set → frozenset
    - anything else → returned as-is
    """
    if isinstance(object, Sequence) and not isinstance(object, (str, bytes, bytearray)):
        return tuple(object)
    elif isinstance(object, Mapping):
        return MappingProxyType(dict(object))
    elif isinstance(object, Set):
        return frozenset(object)
    return object


def mirror(name, /):
    """
    Define a read-only property that mirrors the private backing attribute "_{name}".

    The backing value is expected to be frozen already (see freeze()), so it is
    returned without copying.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @method(name)
    def getter(self):
        return getattr(self, "_" + name)

    return property(getter)


def _hashable(object):
    # MappingProxyType is not hashable; records compare mappings by content.
    if isinstance(object, Mapping):
        return tuple(object.items())
    return object


class RecordType(type):
    """
    Metaclass that turns a class into an immutable value record.

    Responsibilities
    - Expose every name listed in __introspectable__ as a read-only property
      backed by "_{name}" (see mirror()).
    - Provide __eq__/__hash__ over those fields so records compare by value.
    - Provide stable __repr__ and __rich_repr__ implementations for diagnostics
      and rich.pretty output.
    - Seal the class against subclassing.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages and reprs.
    - __displayable__ (if set) narrows which fields are shown by __rich_repr__.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        fields = namespace.get("__introspectable__", ())

        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                field: mirror(field) for field in fields
            },
        )

        @method("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        self.__repr__ = __repr__

        @method("__rich_repr__")
        def __rich_repr__(self):
            for field in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield field, getattr(self, field)
        self.__rich_repr__ = __rich_repr__

        @method("__eq__")
        def __eq__(self, other):
            if type(other) is not type(self):
                return NotImplemented
            return all(getattr(self, field) == getattr(other, field) for field in fields)
        self.__eq__ = __eq__

        @method("__hash__")
        def __hash__(self):
            return hash((type(self), *(_hashable(getattr(self, field)) for field in fields)))
        self.__hash__ = __hash__

        @method("__init_subclass__")
        def __init_subclass__(cls, **options):  # NOQA: F-841
            raise TypeError(f"type {self.__name__!r} is not an acceptable base type")
        self.__init_subclass__ = classmethod(__init_subclass__)

        return self


__all__ = (
    # Functions
    "coalesce",
    "method",
    "freeze",
    "mirror",

    # Types
    "UnsetType",
    "RecordType",

    # Constants
    "Unset",
)
