"""Sentinel line protocol used to read variables out of a login shell.

Each variable of interest is printed on its own line as ``__KTS_<NAME>__<value>``,
the marker followed immediately by the value with no whitespace in between.
``<NAME>`` is the upper-cased variable name. Anything else the shell prints
(banners, motd, prompt noise) carries no marker and is ignored.

A marker that appears more than once resolves to the value on its last line.
A marker that never appears leaves its variable out of the result. When one
marker is a prefix of another (``PATH`` and ``PATH__X``), a line belongs to the
longer one.
"""

import logging
import re

from kts_runner.const import SENTINEL_PREFIX, SENTINEL_SUFFIX

logger = logging.getLogger(__name__)

_VARIABLE_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def marker_for(variable: str) -> str:
    """Return the sentinel marker for a variable name."""
    if not _VARIABLE_NAME.match(variable):
        msg = f"Invalid environment variable name: {variable!r}"
        raise ValueError(msg)
    return f"{SENTINEL_PREFIX}{variable.upper()}{SENTINEL_SUFFIX}"


def build_echo_command(variables: list[str]) -> str:
    """Build a POSIX shell command that prints each variable behind its marker."""
    return " && ".join(f'echo "{marker_for(name)}${name}"' for name in variables)


def parse_sentinel_output(output: str, variables: list[str]) -> dict[str, str]:
    """Parse shell output into a mapping of variable name to raw value.

    Args:
        output: Captured standard output of the shell.
        variables: Variable names that were queried.

    Returns:
        dict[str, str]: Values keyed by variable name. Values may be empty;
        deciding what to do with an empty value is up to the caller.

    """
    # Longest first, so a marker that prefixes another never claims its line.
    markers = sorted(((marker_for(name), name) for name in variables), key=lambda item: -len(item[0]))
    values: dict[str, str] = {}

    for line in output.splitlines():
        for marker, name in markers:
            if line.startswith(marker):
                if name in values:
                    logger.debug("Duplicate %s marker, keeping the last value", name)
                values[name] = line[len(marker) :]
                break

    return values
