"""
Argmatch faults (parse errors) and rendering.

Scope
- FaultCode: stable numeric identifiers for every user-facing parse error.
- ParserException: base type carrying a message + options that knows how to
  render itself (rich) and how to surface itself (raise or print-and-exit).
- InvalidValueError / MissingRequiredArgumentError: the two fatal faults the
  matcher can produce.
- trigger(): central entry point to surface a fault with runtime options.
- getdoc(): optional description lookup for a code from the host application.

UX goals
- Position-first messages for token-bound faults (“at second position”).
- Short titles, one-sentence bodies, a single clear hint, lowercased tone.

Integration
- ArgParser builds a fault and calls ArgParser.trigger(fault, **context), which
  merges its runtime options (prog/shell/fancy/colorful) and calls trigger().
- Outside shell mode the fault is raised; in shell mode it is printed to stderr
  via rich and the process exits with status 1.
"""
import copy
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used by the matcher (stable identifiers).

    grouping
    - switches (111xx): INVALID_VALUE
    - requirements (112xx): MISSING_REQUIRED_ARGUMENT

    spacing leaves room for future codes without reshuffling existing ones.
    """
    # --- switch errors (111xx) ---
    INVALID_VALUE             = 11111

    # --- requirement errors (112xx) ---
    MISSING_REQUIRED_ARGUMENT = 11121

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to relabel numeric ids. without it, the numeric value is returned.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ParserException(Exception):
    """
    base class of every parse fault.

    - message: one lowercased sentence describing what went wrong.
    - options: read-only mapping with the rendering context (title, code, hint,
      prog, shell, fancy, colorful) and the fault payload (input, argument, ...).
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message) if self.message is not Unset else ""

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), styles[style] if colorful else "")

        prog = text(getattr(main, "__prog__", self.options.get("prog") or "argmatch"), "prog-name")

        code = self.options.get("code")
        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code.normalize() if isinstance(code, FaultCode) else code, "code"),
            " | ",
            text(str(self.options.get("title", "error")).title(), "error-title"),
            " ]"
        )
        message = text(self, "error-message")
        hint = Text.assemble(text(" → ", "hint-arrow"), text(self.options.get("hint"), "hint"))

        if fancy:
            return Panel(Group(message, hint), title=header, title_align="left")

        return Group(header, message, hint)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class InvalidValueError(ParserException): ...
class MissingRequiredArgumentError(ParserException): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ParserException).
    - options are merged into the fault via copy.replace() before triggering.
    - in shell mode the fault is printed to stderr and the process exits;
      otherwise the fault is raised.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode members and values are short documentation strings. when
    not found, None is returned.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "ParserException",
    "InvalidValueError",
    "MissingRequiredArgumentError",
    "FaultCode",
    "trigger",
    "getdoc",
)
