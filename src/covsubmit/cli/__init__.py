from covsubmit.cli.exit_codes import (
    EXIT_DATAERR,
    EXIT_GENERIC,
    EXIT_NOINPUT,
    EXIT_OK,
    EXIT_UNAVAILABLE,
)
from covsubmit.cli.root import cli, create_app, main

__all__ = [
    "EXIT_DATAERR",
    "EXIT_GENERIC",
    "EXIT_NOINPUT",
    "EXIT_OK",
    "EXIT_UNAVAILABLE",
    "cli",
    "create_app",
    "main",
]
