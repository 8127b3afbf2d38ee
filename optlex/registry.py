"""
Optlex option registry: uniqueness and lookup.

What this module provides
- OptionRegistry: the set of declared options, with
  • registration that enforces unique short and unique long identifiers,
    atomically for options carrying both;
  • exact lookup by short identifier;
  • prefix lookup by long identifier ("--bl" resolves "--block-size" when no
    other long name starts with "bl");
  • iteration in registration order.

Faults
- DuplicateOptionError(short=... | long=...) on a colliding registration.
- UnknownOptionError(short=... | long=...) when nothing matches.
- AmbiguousOptionError(long=..., candidates=[...]) when a prefix matches
  several long names (candidates keep registration order).
"""
import difflib

from .faults import *
from .options import Option
from .utils import *


class OptionRegistry:
    """
    Registered options, indexed for short and long lookup.

    The registry is populated before parsing and treated as read-only while
    parsing; options are never removed.
    """

    options = mirror("options")

    def __init__(self, *options):
        self._shorts = set()
        self._longs = set()
        self._options = []
        self._index = {}

        for option in options:
            self.register(option)

    def register(self, option, /):
        """
        Add an option to the registry.

        raises
        - TypeError when given anything but an Option.
        - DuplicateOptionError carrying the colliding identifier. A short name
          claimed before a long-name collision is released first, so a failed
          registration leaves no trace.
        """
        if not isinstance(option, Option):
            raise TypeError("register() argument must be an option")

        claimed = False
        if (short := option.short) is not None:
            if short in self._shorts:
                raise DuplicateOptionError(
                    "option '-%s' already exists" % short,
                    short=short,
                    hint="pick another short name or drop it from one of the options",
                )
            self._shorts.add(short)
            claimed = True

        if (long := option.long) is not None:
            if long in self._longs:
                if claimed:
                    self._shorts.discard(short)
                raise DuplicateOptionError(
                    "option '--%s' already exists" % long,
                    long=long,
                    hint="pick another long name or drop it from one of the options",
                )
            self._longs.add(long)

        self._options.append(option)
        if short is not None:
            self._index[short] = option

    add = register

    def getshort(self, short, /):
        """
        Exact lookup by short identifier.
        """
        if not isinstance(short, str):
            raise TypeError("getshort() argument must be a string")
        try:
            return self._index[short]
        except KeyError:
            raise UnknownOptionError(
                "unknown option '-%s'" % short,
                short=short,
                hint="short options are case-sensitive single characters; check the spelling",
            ) from None

    def getlong(self, long, /):
        """
        Prefix lookup by long identifier.

        Every registered long name starting with ``long`` is a match, the
        full name included. One match resolves; none (or an empty input) is
        unknown; several are ambiguous.
        """
        if not isinstance(long, str):
            raise TypeError("getlong() argument must be a string")

        matches = [option for option in self._options if long and option.long is not None and option.long.startswith(long)]

        if len(matches) == 1:
            return matches[0]

        if matches:
            candidates = [option.long for option in matches]
            raise AmbiguousOptionError(
                "option '--%s' is ambiguous; possibilities: %s" % (
                    long,
                    " ".join("'--%s'" % candidate for candidate in candidates)
                ),
                long=long,
                candidates=candidates,
                hint="type more of the name to pick one (for example: --%s)" % candidates[0],
            )

        suggestions = difflib.get_close_matches(long, [option.long for option in self._options if option.long is not None], 5)
        try:
            hint = "did you mean '--%s'?" % suggestions[0]
        except IndexError:
            hint = "check the spelling; long names may be abbreviated to any unique prefix"
        raise UnknownOptionError(
            "unknown option '--%s'" % long,
            long=long,
            suggestions=suggestions,
            hint=hint,
        )

    def __iter__(self):
        return iter(tuple(self._options))

    def __len__(self):
        return len(self._options)

    def __contains__(self, item, /):
        if isinstance(item, Option):
            return any(option is item for option in self._options)
        return item in self._shorts or item in self._longs

    def __rich_repr__(self):
        yield "options", self.options


__all__ = (
    "OptionRegistry",
)
