"""
Optlex faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue
  raised while declaring options or parsing tokens. Codes are grouped by domain
  so logs and searches stay predictable.
- OptionException: base type that carries a message plus keyword context
  (identifiers, offending token/position, candidates, hint) and knows how to
  render itself through rich.
- trigger(): central entry point to surface a fault (raise it, or print it in shell mode).
- getdoc(): optional description lookup for a code from the host application.

Taxonomy
- FormatError              → identifier fails structural validity at construction.
- DuplicateOptionError     → registration collides with an existing identifier.
- UnknownOptionError       → no exact short match, or no long prefix match.
- AmbiguousOptionError     → long prefix matches two or more options (is an UnknownOptionError).
- InvalidArgumentError     → validator rejected the argument.
- ArgumentRequiredError    → argument-taking option reached the end of input bare.
- NoArgumentAcceptedError  → '--name=value' applied to an option without argument.

Integration
- The registry and the options raise faults directly; the parse engine
  enriches them with the raw token and its 1-based position through
  copy.replace() before re-raising, so messages read “... at second position”.
- Nothing in the package prints or swallows a fault. Callers that want the
  rendered form call trigger(fault, shell=True) or print the fault with rich.
"""
import copy
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce, ordinal

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - declaration (211xx)
      • MALFORMED_IDENTIFIER, DUPLICATE_OPTION
    - lookup (212xx)
      • UNKNOWN_OPTION, AMBIGUOUS_OPTION
    - arguments (213xx)
      • INVALID_ARGUMENT, ARGUMENT_REQUIRED, NO_ARGUMENT_ACCEPTED

    normalize() allows a host remapping to custom labels while keeping the
    numeric codes stable.
    """
    # --- declaration errors (211xx) ---
    MALFORMED_IDENTIFIER = 21101
    DUPLICATE_OPTION     = 21102

    # --- lookup errors (212xx) ---
    UNKNOWN_OPTION       = 21201
    AMBIGUOUS_OPTION     = 21202

    # --- argument errors (213xx) ---
    INVALID_ARGUMENT     = 21301
    ARGUMENT_REQUIRED    = 21302
    NO_ARGUMENT_ACCEPTED = 21303

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class OptionException(Exception):
    """
    base fault for everything optlex raises on bad declarations or bad input.

    the keyword context is frozen into a read-only mapping (``options``).
    well-known keys
    - short / long: the identifier(s) the fault is about.
    - argument: the rejected or unexpected argument string.
    - token / index: the raw token and its 1-based position (parse faults only).
    - hint: one actionable sentence shown under the message.
    - prog / fancy / colorful: rendering options stamped by the context.
    """
    __fault__ = Unset
    __title__ = "option error"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def short(self):
        return self.options.get("short")

    @property
    def long(self):
        return self.options.get("long")

    @property
    def argument(self):
        return self.options.get("argument")

    @property
    def index(self):
        return self.options.get("index")

    @property
    def code(self):
        return self.options.get("code", type(self).__fault__)

    def __str__(self):
        message = coalesce(self.message, "")
        if self.index is not None:
            return "%s at %s position" % (message, ordinal(self.index))
        return message

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = text(self.options.get("prog", getattr(main, "__prog__", "optlex")), styler("prog-name"))
        code = self.code.normalize() if isinstance(self.code, FaultCode) else "-"

        header = Text.assemble(
            "[ ",
            prog,
            " | ",
            text(code, styler("code")),
            " | ",
            text(self.options.get("title", type(self).__title__).title(), styler("error-title")),
            " ]"
        )
        message = text(str(self), styler("error-message"))
        renders = [message]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

        if fancy:
            try:
                width = int((console.width - 4) * self.options["ratio"])
            except KeyError:
                width = None
            return Panel(Group(*renders), title=header, title_align="left", width=width)

        return Group(header, *renders)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        if self.options.get("deferred", False):
            return
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class FormatError(OptionException):
    __fault__ = FaultCode.MALFORMED_IDENTIFIER
    __title__ = "malformed option name"


class DuplicateOptionError(OptionException):
    __fault__ = FaultCode.DUPLICATE_OPTION
    __title__ = "option already exists"


class UnknownOptionError(OptionException):
    __fault__ = FaultCode.UNKNOWN_OPTION
    __title__ = "unknown option"

    @property
    def suggestions(self):
        return tuple(self.options.get("suggestions", ()))


class AmbiguousOptionError(UnknownOptionError):
    __fault__ = FaultCode.AMBIGUOUS_OPTION
    __title__ = "ambiguous option"

    @property
    def candidates(self):
        return tuple(self.options.get("candidates", ()))


class InvalidArgumentError(OptionException):
    __fault__ = FaultCode.INVALID_ARGUMENT
    __title__ = "invalid argument"


class ArgumentRequiredError(OptionException):
    __fault__ = FaultCode.ARGUMENT_REQUIRED
    __title__ = "argument required"


class NoArgumentAcceptedError(OptionException):
    __fault__ = FaultCode.NO_ARGUMENT_ACCEPTED
    __title__ = "no argument allowed"


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see OptionException).
    - options are merged into the fault via __replace__(**options) before triggering.
    - shell=True prints the fault on the stderr console and exits with status 1
      (deferred=True prints without exiting); otherwise the fault is raised.
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
    are FaultCode instances and values are short documentation strings.
    returns None when not found.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "OptionException",
    "FormatError",
    "DuplicateOptionError",
    "UnknownOptionError",
    "AmbiguousOptionError",
    "InvalidArgumentError",
    "ArgumentRequiredError",
    "NoArgumentAcceptedError",
    "trigger",
    "getdoc",
)
