"""Command line options of the NC-SI netlink tool."""

from __future__ import annotations

import getopt
import sys
from dataclasses import dataclass, field
from typing import Sequence, TextIO

TRUE_STRING = "true"
EMPTY_STRING = ""

# Short option letter -> (long name, whether the long form takes an argument).
_OPTIONS = {
    "i": ("info", False),
    "s": ("set", False),
    "r": ("clear", False),
    "o": ("oem-payload", True),
    "p": ("package", True),
    "c": ("channel", True),
    "x": ("index", True),
    "t": ("type", True),
    "d": ("data", True),
    "h": ("help", False),
}
_SHORT_OPTIONS = "i:s:r:o:p:c:x:t:d:h"
_LONG_OPTIONS = [name + ("=" if has_arg else "") for name, has_arg in _OPTIONS.values()]
_BY_LONG = {name: (name, has_arg) for name, has_arg in _OPTIONS.values()}

_USAGE_BODY = (
    "Options:\n"
    "    --help            Print this menu.\n"
    "    --info=<info>     Retrieve info about NCSI topology.\n"
    "    --set=<set>       Set a specific package/channel.\n"
    "    --clear=<clear>   Clear all the settings on the interface.\n"
    "    --oem-payload=<hex data> Send an OEM command with payload.\n"
    "    --package=<package>  Specify a package.\n"
    "    --channel=<channel> Specify a channel.\n"
    "    --index=<device index> Specify device ifindex.\n"
    "    --type=<hex data> Send a specified command.\n"
    "    --data=<hex data> Send a specified command with data.\n"
)

_EXIT_USAGE = 255


@dataclass
class NcsiArguments:
    """Parsed options; a missing option reads as the empty string."""

    values: dict[str, str] = field(default_factory=dict)

    def __getitem__(self, option: str) -> str:
        return self.values.get(option, EMPTY_STRING)

    def __contains__(self, option: object) -> bool:
        return option in self.values


def usage(prog: str, stream: TextIO | None = None) -> None:
    """Write the usage text to ``stream`` (standard error by default)."""
    out = sys.stderr if stream is None else stream
    out.write(f"Usage: {prog} [options]\n")
    out.write(_USAGE_BODY)
    out.flush()


def parse_arguments(argv: Sequence[str] | None = None) -> NcsiArguments:
    """Parse ``argv`` (program name first); print usage and exit on help or error."""
    args = list(sys.argv if argv is None else argv)
    prog = args[0] if args else "ncsi-netlink"
    try:
        opts, _ = getopt.gnu_getopt(args[1:], _SHORT_OPTIONS, _LONG_OPTIONS)
    except getopt.GetoptError:
        usage(prog)
        raise SystemExit(_EXIT_USAGE) from None

    values: dict[str, str] = {}
    for opt, optarg in opts:
        if opt.startswith("--"):
            name, has_arg = _BY_LONG[opt[2:]]
        else:
            name, has_arg = _OPTIONS[opt[1:]]
        if name == "help":
            usage(prog)
            raise SystemExit(_EXIT_USAGE)
        values[name] = optarg if has_arg else TRUE_STRING
    return NcsiArguments(values)