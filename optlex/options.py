r"""
Optlex option declarations.

Overview
- Option: a declared flag (presence-only) or valued switch, identified by a
  short name ("a" → -a), a long name ("all" → --all), or both.

Metadata (sanitized on construction)
- short: Unset | str, exactly one character, neither space nor hyphen.
- long: Unset | str, non-empty, no whitespace and no '='.
- required: bool, whether the option takes an argument. Fixed for life.
- validator: Unset | Callable[[str], bool], predicate over a candidate argument.

Parse state (mutated by the context, cleared by reset)
- specified: bool, the option was seen at least once.
- argument: str | None, last argument given (argument-taking options only).

Validation highlights
- At least one of short/long is required; explicit None is rejected (omit instead).
- Structural faults (bad characters) raise FormatError carrying the identifier.
- Wrong types raise TypeError.

Quick example:
    >>> from optlex import Option
    >>> from optlex.validators import choices
    >>> every = Option("a", "all")
    >>> size = Option("B", "block-size", required=True, validator=choices(*"bBkKmMgGpP"))
    >>> both = Option(long="both")
"""
import re

from .faults import FormatError
from .utils import *


class Option:
    """
    A single owned record describing one command-line option.

    Identifiers, the argument requirement and the validator are read-only
    after construction; only ``specified`` and ``argument`` change, and only
    through parsing or an explicit reset of the owning context.
    """

    __introspectable__ = (
        "short",
        "long",
        "required",
        "validator",
        "specified",
        "argument",
    )

    short = mirror("short")
    long = mirror("long")
    required = mirror("required")
    validator = mirror("validator")

    def __init__(self, short=Unset, long=Unset, *, required=False, validator=Unset):
        """
        Construct an Option with the provided identifiers.

        Parameters
        - short: Unset | str
          Single character used as '-x'. Space and hyphen are not allowed.
        - long: Unset | str
          Name used as '--name'. Must be non-empty with no whitespace or '='.
        - required: bool
          Whether the option requires an argument.
        - validator: Unset | Callable[[str], bool]
          Called with every candidate argument; a falsey result rejects it.

        Raises
        - TypeError: neither identifier given, or a parameter of the wrong type.
        - FormatError: an identifier fails the structural rules above.
        """
        if short is Unset and long is Unset:
            raise TypeError("option must specify a short name, a long name, or both")

        if not isinstance(short, str | Unset):
            raise TypeError("option 'short' must be a string")
        elif isinstance(short, str) and (len(short) != 1 or short in " -"):
            raise FormatError(
                "invalid short option name %r" % short,
                short=short,
                hint="use a single character other than space or '-' (for example: 'a' for -a)",
            )

        if not isinstance(long, str | Unset):
            raise TypeError("option 'long' must be a string")
        elif isinstance(long, str) and not re.fullmatch(r"[^\s=]+", long):
            raise FormatError(
                "invalid long option name %r" % long,
                long=long,
                hint="use a non-empty name without spaces or '=' (for example: 'block-size' for --block-size)",
            )

        if not isinstance(required, bool):
            raise TypeError("option 'required' must be a boolean")

        if not callable(validator) and validator is not Unset:
            raise TypeError("option 'validator' must be callable")

        self._short = coalesce(short)
        self._long = coalesce(long)
        self._required = required
        self._validator = coalesce(validator)

        self.specified = False
        self.argument = None

    @property
    def names(self):
        """
        Display forms of the identifiers, short first: ('-B', '--block-size').
        """
        names = []
        if self._short is not None:
            names.append("-" + self._short)
        if self._long is not None:
            names.append("--" + self._long)
        return tuple(names)

    @property
    def label(self):
        """
        Compact display used in messages: '-B/--block-size', '-a', '--both'.
        """
        return "/".join(self.names)

    @property
    def identifiers(self):
        """
        Keyword form of the identifiers this option has (fault context).
        """
        identifiers = {}
        if self._short is not None:
            identifiers["short"] = self._short
        if self._long is not None:
            identifiers["long"] = self._long
        return identifiers

    def accepts(self, argument, /):
        """
        Run the validator (if any) over a candidate argument.
        """
        if self._validator is None:
            return True
        return bool(self._validator(argument))

    def __repr__(self):
        return "option(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)


__all__ = (
    "Option",
)
