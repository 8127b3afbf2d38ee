"""
Built-in argument validators.

Each factory returns a plain predicate ``(argument) -> bool`` suitable for
``Option(validator=...)``. Any other callable works just as well; these
cover the usual shapes (a closed set of values, a regex, a converter).

    >>> from optlex.validators import choices, pattern, convert
    >>> size = choices(*"bBkKmMgGpP")
    >>> size("G"), size("Z")
    (True, False)
    >>> pattern(r"\\d+")("42")
    True
    >>> convert(int)("4x")
    False
"""
import re

from .utils import rename


def choices(*values):
    """
    Accept exactly one of the given strings (case-sensitive).
    """
    if not values:
        raise TypeError("choices() requires at least one value")
    for value in values:
        if not isinstance(value, str):
            raise TypeError("choices() values must be strings")

    allowed = frozenset(values)

    @rename("choices")
    def validator(argument):
        return argument in allowed

    validator.choices = tuple(dict.fromkeys(values))
    return validator


def pattern(regex, flags=0, /):
    """
    Accept arguments that fully match a regular expression.
    """
    if not isinstance(regex, str | re.Pattern):
        raise TypeError("pattern() argument must be a string or a compiled pattern")
    compiled = re.compile(regex, flags)

    @rename("pattern")
    def validator(argument):
        return compiled.fullmatch(argument) is not None

    validator.pattern = compiled
    return validator


def convert(converter, /, *exceptions):
    """
    Accept arguments the converter can handle without raising.

    Only the listed exception types count as a rejection (ValueError when
    none are given); anything else propagates to the caller.
    """
    if not callable(converter):
        raise TypeError("convert() argument must be callable")
    exceptions = exceptions or (ValueError,)

    @rename("convert")
    def validator(argument):
        try:
            converter(argument)
        except exceptions:
            return False
        return True

    validator.converter = converter
    return validator


__all__ = (
    "choices",
    "pattern",
    "convert",
)
