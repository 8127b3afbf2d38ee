"""
Optlex parse engine: scan tokens against a registry and record the results.

What this module provides
- OptionContext: an OptionRegistry that also parses. It owns the positional
  arguments, writes `specified`/`argument` back into matched options, and
  stamps its rendering options (prog/fancy/colorful) on every fault it raises.
- Scanner: one parse pass, an explicit finite-state machine stepped once per
  character with a single accumulation buffer.
- ScanState: the states of that machine.

Token grammar (per token, left to right)
- pending option    → the whole token is its argument ('-B G', '--block-size G').
- '-x...'           → short cluster; 'x' resolves exactly. A flag is marked at
                      once and the next character starts a fresh lookup ('-aBG').
                      An argument-taking option swallows the rest verbatim
                      ('-BG' → 'G', '-B=X' → '=X'), or becomes pending.
- '--name'          → long name; resolves by unique prefix at end of token.
- '--name=value'    → long name resolves at '='; the rest is the argument.
                      A flag here is a NoArgumentAcceptedError.
- anything else     → positional argument.
- '-' and '--'      → nothing.

Failure model
- Faults abort the call immediately. Tokens consumed before the failing one
  keep their effects; the failing token commits nothing further.
- An option still pending after the last token is an ArgumentRequiredError
  naming the identifier that was typed.
"""
import copy
from enum import Enum, auto

from .faults import *
from .registry import OptionRegistry
from .utils import *


class ScanState(Enum):
    """
    states of the per-token scanner.

    - IDLE: nothing read yet in this token.
    - SHORT: inside a '-' cluster, next character is a short identifier.
    - LONG: after '--', accumulating a long name.
    - ARGUMENT: accumulating an argument for the pending option.
    - POSITIONAL: accumulating a token that is not an option.
    """
    IDLE = auto()
    SHORT = auto()
    LONG = auto()
    ARGUMENT = auto()
    POSITIONAL = auto()


class Scanner:
    """
    A single parse pass over a token stream.

    State carried across tokens is the pending option and the identifier that
    made it pending; everything else starts over with each token.
    """

    def __init__(self, registry, arguments, /):
        self._registry = registry
        self._arguments = arguments

        self._state = ScanState.IDLE
        self._buffer = []
        self._pending = None
        self._identifier = {}
        self._origin = None

        self._token = None
        self._index = 0

    @property
    def state(self):
        return self._state

    @property
    def pending(self):
        return self._pending

    def feed(self, token, /):
        """
        consume one token, committing its effects before returning.
        """
        self._token = token
        self._index += 1

        if self._pending is not None:
            return self._assign(token)

        self._state = ScanState.IDLE
        self._buffer.clear()

        for position, char in enumerate(token):
            self._step(position, char)

        self._flush()

    def close(self):
        """
        end of stream: a pending option never got its argument.
        """
        if self._pending is None:
            return
        token, index = self._origin
        label = "-%s" % self._identifier["short"] if "short" in self._identifier else "--%s" % self._identifier["long"]
        raise ArgumentRequiredError(
            "option '%s' requires an argument" % label,
            token=token,
            index=index,
            hint="pass a value right after it (for example: %s VALUE)" % label,
            **self._identifier,
        )

    def _step(self, position, char):
        match self._state:
            case ScanState.IDLE:
                if char == "-":
                    self._state = ScanState.SHORT
                else:
                    self._state = ScanState.POSITIONAL
                    self._buffer.append(char)
            case ScanState.SHORT:
                if position == 1 and char == "-":
                    self._state = ScanState.LONG
                elif self._pending is None:
                    self._short(char)
                else:
                    # rest of the cluster belongs to the pending option, '=' included
                    self._state = ScanState.ARGUMENT
                    self._buffer.append(char)
            case ScanState.LONG:
                if char == "=":
                    name = "".join(self._buffer)
                    self._buffer.clear()
                    self._long(name, inline=True)
                else:
                    self._buffer.append(char)
            case ScanState.ARGUMENT | ScanState.POSITIONAL:
                self._buffer.append(char)

    def _flush(self):
        value = "".join(self._buffer)
        self._buffer.clear()

        match self._state:
            case ScanState.LONG if value:
                self._long(value)
            case ScanState.ARGUMENT if value:
                self._assign(value)
            case ScanState.POSITIONAL if value:
                self._arguments.append(value)

    def _short(self, char):
        option = self._registry.getshort(char)
        if option.required:
            self._wait(option, short=char)
        else:
            option.specified = True

    def _long(self, name, *, inline=False):
        option = self._registry.getlong(name)
        if inline:
            if not option.required:
                raise NoArgumentAcceptedError(
                    "option '--%s' doesn't allow an argument" % name,
                    long=name,
                    argument=self._token.partition("=")[2],
                    hint="remove everything from '=' (for example: --%s)" % name,
                )
            self._wait(option, long=name)
            self._state = ScanState.ARGUMENT
        elif option.required:
            self._wait(option, long=name)
        else:
            option.specified = True

    def _wait(self, option, **identifier):
        self._pending = option
        self._identifier = identifier
        self._origin = (self._token, self._index)

    def _assign(self, argument):
        option = self._pending
        if not option.accepts(argument):
            raise InvalidArgumentError(
                "invalid argument %r for option '%s'" % (argument, option.label),
                argument=argument,
                hint="check the accepted values of %s" % option.label,
                **option.identifiers,
            )
        option.argument = argument
        option.specified = True

        self._pending = None
        self._identifier = {}
        self._origin = None
        self._state = ScanState.IDLE


class OptionContext(OptionRegistry):
    """
    Registry plus parse engine.

    Parsing accumulates: flags stay specified, arguments are overwritten by
    later occurrences, positional arguments keep piling up, all until reset().

    Configuration
    - prog: program name shown in rendered faults (defaults to __main__.__prog__
      or "optlex").
    - fancy: render faults inside a rich Panel.
    - colorful: styled (True) or plain (False) rendering.
    """

    arguments = mirror("arguments")

    def __init__(self, *options, prog=Unset, fancy=False, colorful=True):
        if not isinstance(prog, str | Unset):
            raise TypeError("context 'prog' must be a string")
        elif isinstance(prog, str) and not (prog := prog.strip()):
            raise ValueError("context 'prog' cannot be empty")
        if not isinstance(fancy, bool):
            raise TypeError("context 'fancy' must be a boolean")
        if not isinstance(colorful, bool):
            raise TypeError("context 'colorful' must be a boolean")

        self._prog = coalesce(prog)
        self._fancy = fancy
        self._colorful = colorful
        self._arguments = []

        super().__init__(*options)

    prog = mirror("prog")
    fancy = mirror("fancy")
    colorful = mirror("colorful")

    def _stamp(self, fault, /, **context):
        if self._prog is not None:
            context["prog"] = self._prog
        return copy.replace(fault, fancy=self._fancy, colorful=self._colorful, **context)

    def register(self, option, /):
        try:
            super().register(option)
        except OptionException as fault:
            raise self._stamp(fault) from None

    add = register

    def getshort(self, short, /):
        try:
            return super().getshort(short)
        except OptionException as fault:
            raise self._stamp(fault) from None

    def getlong(self, long, /):
        try:
            return super().getlong(long)
        except OptionException as fault:
            raise self._stamp(fault) from None

    def parse(self, tokens, /):
        """
        scan a batch of tokens, updating options and positional arguments.

        parameters
        - tokens: Iterable[str]
          the raw tokens (e.g., sys.argv[1:]); any iterable is accepted and
          materialized before scanning.

        raises
        - TypeError if tokens is a plain string or holds a non-string.
        - UnknownOptionError / AmbiguousOptionError on an unresolvable name.
        - NoArgumentAcceptedError on '--flag=value'.
        - InvalidArgumentError when a validator rejects an argument.
        - ArgumentRequiredError when the last option never got its argument.
        every parse fault carries token= and index= (1-based position).
        """
        if isinstance(tokens, str):
            raise TypeError("parse() argument must be an iterable of strings, not a string")
        tokens = list(tokens)
        for token in tokens:
            if not isinstance(token, str):
                raise TypeError("parse() tokens must be strings")

        scanner = Scanner(self, self._arguments)
        index = 0
        try:
            for index, token in enumerate(tokens, 1):
                scanner.feed(token)
        except OptionException as fault:
            raise self._stamp(fault, token=tokens[index - 1], index=index) from None

        try:
            scanner.close()
        except OptionException as fault:
            raise self._stamp(fault) from None

    def reset(self):
        """
        clear every option's parse state and the positional arguments.
        """
        for option in self._options:
            option.specified = False
            if option.required:
                option.argument = None
        self._arguments.clear()

    def __rich_repr__(self):
        yield "options", self.options
        yield "arguments", self.arguments


__all__ = (
    "ScanState",
    "Scanner",
    "OptionContext",
)
