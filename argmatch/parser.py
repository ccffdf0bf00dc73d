"""
Argmatch parser layer: build a grammar, then match raw tokens against it.

What this module provides
- ArgParser: a grammar node made of an ordered list of Arg specs plus a
  mapping from subcommand name to a child ArgParser.
  • Fluent builder: arg/short/long/takes_value/required/default/validator/
    subcommand each return the parser itself so calls chain.
  • Matcher: parse(tokens) walks the tokens once and returns an ArgMatches or
    triggers a fault (InvalidValueError, MissingRequiredArgumentError).

Matching rules (token 0 is the program name and is always skipped)
- "--name"     long option. Unknown names are dropped silently. A valued
               option consumes the next token; a flag records True.
- "-abc"       short cluster. Each character is looked up on its own; unknown
               characters are ignored. A valued character consumes the next
               whole token, the rest of the cluster is still processed.
- "build"      registered subcommand. The child parser takes over with the
               tokens starting at "build" and its result is returned as-is;
               whatever the parent collected so far is discarded.
- anything     positional, appended in encounter order.
After the pass, every required valued argument without a value gets its
default, or the parse fails.

Quiet by design (kept for compatibility with existing callers)
- Unknown long/short options, unknown cluster characters and a valued option
  at the end of input (no value stored) never raise.
- Builder calls naming an argument that was never registered with arg() are
  no-ops. Lookups are first-match-by-name, so registering the same name twice
  leaves the second entry unreachable by later builder calls.

One-shot lifecycle
- parse() consumes the parser: any further builder call, parse() or copy
  raises RuntimeError. A matched subcommand is removed from its parent and
  consumed as well. Use copy.copy(parser) beforehand to match a grammar more
  than once.

Quick start
    from argmatch import ArgParser

    parser = (
        ArgParser()
        .arg("verbose").short("verbose", "v").long("verbose", "verbose")
        .arg("out").short("out", "o").takes_value("out")
        .required("out").default("out", "a.out")
    )
    matches = parser.parse(["prog", "-v", "main.c"])
    # matches.flags == {"verbose": True}
    # matches.values == {"out": "a.out"}
    # matches.positionals == ["main.c"]
"""
import copy
import shlex
import sys
from collections import deque
from collections.abc import Iterable

from .arguments import Arg
from .faults import *
from .matches import ArgMatches
from .utils import *


class ArgParser:
    """
    Grammar node and matcher.

    Runtime options (keyword-only)
    - shell: print faults to stderr with rich and exit(1) instead of raising.
    - fancy: render faults inside a panel.
    - colorful: style rendered faults.
    """

    __slots__ = (
        "_args",
        "_children",
        "_consumed",
        "_shell",
        "_fancy",
        "_colorful",
        # per-parse working state
        "_prog",
        "_tokens",
        "_index",
        "_values",
        "_flags",
        "_positionals",
    )

    shell = mirror("shell")
    fancy = mirror("fancy")
    colorful = mirror("colorful")
    consumed = mirror("consumed")

    def __init__(self, *, shell=False, fancy=False, colorful=True):
        self._args = []
        self._children = {}
        self._consumed = False
        self._shell = bool(shell)
        self._fancy = bool(fancy)
        self._colorful = bool(colorful)

    @property
    def args(self):
        """
        Registered specs, in registration order (a fresh tuple).
        """
        return tuple(self._args)

    @property
    def subcommands(self):
        """
        Registered subcommand names mapped to their child parsers (a fresh dict).
        """
        return dict(self._children)

    # ----------------------------------------------------------------- builder

    def _ensure_alive(self, caller):
        if self._consumed:
            raise RuntimeError(f"{caller}() cannot be used on a parser that was already consumed by parse()")

    def _configure(self, caller, name, /, **changes):
        """
        Apply changes to the first Arg registered under name; silently do
        nothing when no such spec exists.
        """
        self._ensure_alive(caller)
        if not isinstance(name, str):
            raise TypeError(f"{caller}() first argument must be a string")
        for index, argument in enumerate(self._args):
            if argument.name == name:
                self._args[index] = copy.replace(argument, **changes)
                break
        return self

    def arg(self, name, /):
        """
        Register a new argument: no alias, boolean flag, optional, no default,
        no validator. Names are not de-duplicated.
        """
        self._ensure_alive("arg")
        self._args.append(Arg(name))
        return self

    def short(self, name, short, /):
        """
        Set the single-character alias of name (matched inside "-abc").
        """
        return self._configure("short", name, short=short)

    def long(self, name, long, /):
        """
        Set the multi-character alias of name (matched by "--long").
        """
        return self._configure("long", name, long=long)

    def takes_value(self, name, /):
        """
        Make name consume the following token as its value.
        """
        return self._configure("takes_value", name, takes_value=True)

    def required(self, name, /):
        """
        Make name mandatory. Only enforced for valued arguments.
        """
        return self._configure("required", name, required=True)

    def default(self, name, default, /):
        """
        Set the value used when name is required, valued and not supplied.
        """
        return self._configure("default", name, default=default)

    def validator(self, name, validator, /):
        """
        Attach a predicate that every supplied value of name must satisfy.
        """
        return self._configure("validator", name, validator=validator)

    def subcommand(self, name, parser, /, *, propagate=False):
        """
        Register (or replace) a child grammar reached through the literal token name.

        With propagate=True the child tree adopts this parser's shell/fancy/colorful
        options.
        """
        self._ensure_alive("subcommand")
        if not isinstance(name, str):
            raise TypeError("subcommand() first argument must be a string")
        if not name:
            raise ValueError("subcommand() name cannot be empty")
        if not isinstance(parser, ArgParser):
            raise TypeError("subcommand() second argument must be an ArgParser")
        if parser is self:
            raise ValueError("subcommand() cannot register a parser under itself")
        parser._ensure_alive("subcommand")

        if propagate:
            parser._propagate(shell=self._shell, fancy=self._fancy, colorful=self._colorful)

        self._children[name] = parser
        return self

    def _propagate(self, **options):
        for name, object in options.items():
            setattr(self, "_" + name, object)
        for child in self._children.values():
            child._propagate(**options)

    # ----------------------------------------------------------------- faults

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this parser's runtime options merged in.
        """
        trigger(fault, **options, shell=self._shell, fancy=self._fancy, colorful=self._colorful)

    def _hint(self, argument):
        if argument.long is not None:
            spelling = "--" + argument.long
        elif argument.short is not None:
            spelling = "-" + argument.short
        else:
            spelling = None

        if spelling is None:
            return "give %r a default, or a short or long alias so it can be supplied" % argument.name
        return "pass '%s <value>' or give %r a default" % (spelling, argument.name)

    # ----------------------------------------------------------------- matcher

    def _take_value(self, argument, input, switch, index):
        """
        Consume the next token as the value of argument.

        Returns None when the input is exhausted (the option is then skipped).
        """
        if not self._tokens:
            return None
        value = self._tokens.popleft()
        self._index += 1

        if not argument.accepts(value):
            self.trigger(InvalidValueError(
                "invalid value %r for option %r at %s position" % (value, switch, ordinal(index)),
                title="invalid value",
                code=FaultCode.INVALID_VALUE,
                hint="pass a value accepted by %r" % switch,
                input=input,
                value=value,
                argument=argument,
                index=index,
                prog=self._prog,
                docs=getdoc(FaultCode.INVALID_VALUE),
            ))
        return value

    def _record(self, argument, input, switch, index):
        if argument.takes_value:
            value = self._take_value(argument, input, switch, index)
            if value is not None:
                self._values[argument.name] = value
        else:
            self._flags[argument.name] = True

    def _parseargs(self, tokens):
        """
        Match tokens (program name already removed) against this grammar.

        phases
        - loop: classify each token as long option, short cluster, subcommand
          or positional; valued options pull their value from the deque.
        - subcommand: delegate the remaining tokens (re-prefixed with the
          subcommand name) and return the child's matches untouched.
        - finalize: substitute defaults of missing required values or fail.
        """
        self._values = {}
        self._flags = {}
        self._positionals = []
        self._tokens = tokens
        self._index = 0

        while self._tokens:
            token = self._tokens.popleft()
            self._index += 1
            start = self._index

            if token.startswith("--"):
                input = token[2:]
                for argument in self._args:
                    if argument.long == input:
                        self._record(argument, input, token, start)
                        break
            elif token.startswith("-"):
                for input in token[1:]:
                    for argument in self._args:
                        if argument.short == input:
                            self._record(argument, input, "-" + input, start)
                            break
            elif token in self._children:
                child = self._children.pop(token)
                return child.parse([token, *self._tokens])
            else:
                self._positionals.append(token)

        for argument in self._args:
            if not (argument.required and argument.takes_value) or argument.name in self._values:
                continue
            if argument.default is not None:
                self._values[argument.name] = argument.default
                continue
            self.trigger(MissingRequiredArgumentError(
                "missing required argument %r" % argument.name,
                title="missing required argument",
                code=FaultCode.MISSING_REQUIRED_ARGUMENT,
                hint=self._hint(argument),
                input=argument.name,
                argument=argument,
                prog=self._prog,
                docs=getdoc(FaultCode.MISSING_REQUIRED_ARGUMENT),
            ))

        return ArgMatches(self._values, self._flags, self._positionals)

    def parse(self, tokens=Unset, /):
        """
        Consume this parser and match tokens against it.

        Parameters
        - tokens:
          • Unset: read sys.argv (program name included).
          • str: shell-like command line, split via shlex.split; its first word
            is the program name.
          • Iterable[str]: the full argument vector, program name first.

        Returns
        - ArgMatches

        Raises
        - InvalidValueError: a validator rejected a supplied value.
        - MissingRequiredArgumentError: a required valued argument has neither
          a value nor a default.
        - TypeError: tokens is not one of the accepted forms.
        - RuntimeError: the parser was already consumed.

        In shell mode the two faults are printed to stderr and the process
        exits with status 1 instead.
        """
        self._ensure_alive("parse")

        if tokens is Unset:
            tokens = list(sys.argv)
        elif isinstance(tokens, str):
            tokens = shlex.split(tokens)
        elif isinstance(tokens, Iterable):
            tokens = list(tokens)
            if not all(isinstance(token, str) for token in tokens):
                raise TypeError("parse() argument must be a string or an iterable of strings")
        else:
            raise TypeError("parse() argument must be a string or an iterable of strings")

        self._consumed = True
        self._prog = tokens[0] if tokens else None
        return self._parseargs(deque(tokens[1:]))

    # ----------------------------------------------------------------- protocol

    def __copy__(self):
        """
        Return an independent, unconsumed copy of the whole grammar tree.

        Specs are copied (validators are shared by reference) and children are
        copied recursively.
        """
        self._ensure_alive("copy")
        clone = type(self)(shell=self._shell, fancy=self._fancy, colorful=self._colorful)
        clone._args = [copy.copy(argument) for argument in self._args]
        clone._children = {name: copy.copy(child) for name, child in self._children.items()}
        return clone

    def __deepcopy__(self, memo, /):
        return self.__copy__()

    def __rich_repr__(self):
        yield "args", self.args
        yield "subcommands", self.subcommands
        yield "shell", self._shell, False
        yield "fancy", self._fancy, False
        yield "colorful", self._colorful, True
        yield "consumed", self._consumed, False

    def __repr__(self):
        return "%s(args=%r, subcommands=%r)" % (type(self).__name__, self.args, list(self._children))


__all__ = (
    "ArgParser",
)
