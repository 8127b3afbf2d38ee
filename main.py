import sys

from rich.pretty import pprint

from optlex import *
from optlex.validators import choices

__prog__ = "ls-lite"


context = OptionContext(
    Option("a", "all"),
    Option("B", "block-size", required=True, validator=choices(*"bBkKmMgGpP")),
    Option(long="both"),
)


if __name__ == '__main__':
    try:
        context.parse(sys.argv[1:])
    except OptionException as fault:
        trigger(fault, shell=True)
    pprint(context)
