"""
Argmatch parse results.

ArgMatches is built once, as the last step of a successful ArgParser.parse(),
and never changes afterwards:
- values: dict[str, str]        resolved values of valued options.
- flags: dict[str, bool]        True for every flag that appeared (never False).
- positionals: list[str]        unrecognized tokens, in encounter order.

The public attributes are read-only properties handing out fresh copies, so a
caller mutating what it received cannot alter the result itself.
"""
from .utils import *


class ArgMatches:
    """
    Immutable outcome of a parse.

    Examples
    - matches.values        -> {"out": "file.txt"}
    - matches.flags         -> {"verbose": True}
    - matches.positionals   -> ["input.txt"]
    - matches.value_of("out", "a.txt")
    - matches.is_present("verbose")
    """

    __slots__ = ("_values", "_flags", "_positionals")

    values = mirror("values")
    flags = mirror("flags")
    positionals = mirror("positionals")

    def __init__(self, values=(), flags=(), positionals=()):
        self._values = dict(values)
        self._flags = dict(flags)
        self._positionals = tuple(positionals)

    def value_of(self, name, default=None, /):
        """
        Return the resolved value of a valued option, or default when absent.
        """
        return self._values.get(name, default)

    def is_present(self, name, /):
        """
        Return whether the argument was matched, as a value or as a flag.
        """
        return name in self._values or name in self._flags

    def __eq__(self, other):
        if not isinstance(other, ArgMatches):
            return NotImplemented
        return (
            self._values == other._values and
            self._flags == other._flags and
            self._positionals == other._positionals
        )

    __hash__ = None

    def __setattr__(self, name, value):
        if hasattr(self, "_positionals"):
            raise AttributeError(f"{type(self).__name__!r} object is immutable")
        super().__setattr__(name, value)

    def __rich_repr__(self):
        yield "values", self.values
        yield "flags", self.flags
        yield "positionals", self.positionals

    def __repr__(self):
        return "%s(%s)" % (type(self).__name__, ", ".join("%s=%r" % item for item in self.__rich_repr__()))


__all__ = (
    "ArgMatches",
)
