"""Console logging used throughout the engine."""

import os
import sys

DEBUG_ENV_VAR = "EMBERENGINE_DEBUG"


def _debug_enabled() -> bool:
    return os.environ.get(DEBUG_ENV_VAR, "") not in ("", "0")


def print_message(message: str) -> None:
    """Write an informational message to standard output."""
    print(message, file=sys.stdout)


def print_warning(message: str) -> None:
    """Write a warning to standard output."""
    print(message, file=sys.stdout)


def print_error(message: str) -> None:
    """Write an error to standard error."""
    print(message, file=sys.stderr)


def print_debug(message: str) -> None:
    """Write a message to standard output when debug output is switched on."""
    if _debug_enabled():
        print(message, file=sys.stdout)