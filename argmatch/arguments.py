r"""
Argmatch argument specifications.

Overview
- Arg: one expected argument of a grammar. It is identified by a logical
  'name' (the key used in every result mapping) and optionally reachable
  through a short alias (-x) and/or a long alias (--xyz).
  • takes_value=False → boolean flag (recorded in ArgMatches.flags).
  • takes_value=True  → valued option (consumes the next token, recorded in
    ArgMatches.values).
  • required/default only matter for valued options: a required option that
    was not supplied falls back to its default, or fails the parse.
  • validator: optional predicate over the raw string value. It is shared by
    reference between copies and only called through accepts().

- Immutability
  • Every field is exposed through a read-only property. Changes are made by
    building a new spec with copy.replace(arg, **changes), which re-runs the
    field validation and keeps the very same validator object.
  • ArgParser's builder calls use this to swap the stored spec in place.

- Introspection & representation
  • ArgumentType metaclass provides stable __repr__/__rich_repr__ and exposes
    the fields declared in __introspectable__ as read-only properties.
  • The validator is deliberately absent from representations
    (__displayable__), only its presence matters to readers.

Quick example:
    >>> import copy
    >>> from argmatch.arguments import Arg
    >>> out = Arg("out", short="o", takes_value=True)
    >>> copy.replace(out, required=True, default="a.txt")
    arg(name='out', short='o', long=None, takes_value=True, required=True, default='a.txt')
"""
import functools
import operator
import re

from .utils import *


class ArgumentType(type):
    """
    Metaclass that turns specs into immutable, introspectable records.

    Responsibilities
    - Expose every name listed in __introspectable__ as a read-only property
      mirroring the private "_{name}" field (see mirror()).
    - Provide stable, readable __repr__/__rich_repr__ implementations.

    Conventions
    - __typename__ is derived from the class name (camel-case split with
      hyphens, lowercased) and used in messages.
    - __displayable__ (if set) narrows which properties are shown; otherwise
      __introspectable__ is used.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - arg(name='verbose', short='v', long='verbose', takes_value=False, ...)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield (name, object) pairs for pretty printers (e.g., rich).
            """
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: validate and normalize the fields of an Arg.

    Rules
    - name: non-empty string.
    - short: None or a string of exactly one character.
    - long: None or a non-empty string (the text after "--").
    - takes_value/required: coerced to bool.
    - default: None or a string.
    - validator: None or a callable.

    Raises
    - TypeError: a field has the wrong type.
    - ValueError: a string field has an invalid length.

    Notes
    - The metadata dict is mutated in place.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not name:
        raise ValueError(f"{cls.__typename__} 'name' cannot be empty")

    if not isinstance(short := metadata["short"], str | None):
        raise TypeError(f"{cls.__typename__} 'short' must be a string")
    elif isinstance(short, str) and len(short) != 1:
        raise ValueError(f"{cls.__typename__} 'short' must be a single character")

    if not isinstance(long := metadata["long"], str | None):
        raise TypeError(f"{cls.__typename__} 'long' must be a string")
    elif isinstance(long, str) and not long:
        raise ValueError(f"{cls.__typename__} 'long' cannot be empty")

    metadata["takes_value"] = bool(metadata["takes_value"])
    metadata["required"] = bool(metadata["required"])

    if not isinstance(metadata["default"], str | None):
        raise TypeError(f"{cls.__typename__} 'default' must be a string")

    if metadata["validator"] is not None and not callable(metadata["validator"]):
        raise TypeError(f"{cls.__typename__} 'validator' must be callable")


class Arg(metaclass=ArgumentType):
    """
    One argument specification of a grammar.

    Properties
    - The names listed in __introspectable__ are exposed as read-only
      attributes on instances, mirroring the sanitized metadata values.
    """

    __slots__ = (
        "_name",
        "_short",
        "_long",
        "_takes_value",
        "_required",
        "_default",
        "_validator",
    )

    __introspectable__ = (
        "name",
        "short",
        "long",
        "takes_value",
        "required",
        "default",
        "validator",
    )

    __displayable__ = (
        "name",
        "short",
        "long",
        "takes_value",
        "required",
        "default",
    )

    def __init__(
            self,
            name,
            /,
            short=None,
            long=None,
            takes_value=False,
            required=False,
            default=None,
            validator=None,
    ):
        """
        Construct an Arg with the provided metadata.

        Parameters
        - name: str
          Logical identifier, key of the result mappings.
        - short: str | None
          Single-character alias matched inside "-abc" clusters.
        - long: str | None
          Alias matched by "--long" tokens (given without the dashes).
        - takes_value: bool
          Whether the next token is consumed as this argument's value.
        - required: bool
          Whether a missing value (after default substitution) is fatal.
        - default: str | None
          Fallback used only when required, valued and not supplied.
        - validator: Callable[[str], bool] | None
          Value-acceptance predicate, kept by reference.
        """
        metadata = {
            "name": name,
            "short": short,
            "long": long,
            "takes_value": takes_value,
            "required": required,
            "default": default,
            "validator": validator,
        }
        _sanitize_metadata(type(self), metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    def accepts(self, value, /):
        """
        Return whether the raw value passes the validator (always True without one).
        """
        return self._validator is None or bool(self._validator(value))

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        metadata = {
            name: getattr(self, "_" + name) for name in type(self).__introspectable__
        } | overrides
        return type(self)(metadata.pop("name"), **metadata)

    def __copy__(self):
        return self.__replace__()


__all__ = (
    "Arg",
)

# Not part of the public API.
del ArgumentType
