"""Logging configuration for the buildcat CLI."""

import logging
from enum import IntEnum
from typing import TextIO

from rich.console import Console
from rich.logging import RichHandler


class LogLevel(IntEnum):
    """Log level enumeration."""

    QUIET = logging.WARNING
    NORMAL = logging.INFO
    VERBOSE = logging.DEBUG


def resolve_level(verbosity: int = 0, quiet: bool = False) -> LogLevel:
    """Map CLI flags to a log level.

    Quiet takes precedence; any -v enables debug output.
    """
    if quiet:
        return LogLevel.QUIET
    if verbosity >= 1:
        return LogLevel.VERBOSE
    return LogLevel.NORMAL


def configure_logging(
    verbosity: int = 0,
    quiet: bool = False,
    no_color: bool = False,
    stream: TextIO | None = None,
) -> Console:
    """Configure logging based on CLI options.

    Log records go to stderr so catalog JSON on stdout stays clean. One -v
    switches to debug records with timestamps; a second -v also shows the
    source location of each record.

    Args:
        verbosity: Number of -v flags (0=info, 1=debug, 2+=debug with paths)
        quiet: Only show warnings and errors
        no_color: Disable colored output
        stream: Output stream for logs (stderr when None)

    Returns:
        Configured Rich console for log and status output
    """
    level = resolve_level(verbosity, quiet)

    console = Console(
        file=stream,
        stderr=stream is None,
        force_terminal=False if no_color else None,
        no_color=no_color,
    )

    handler = RichHandler(
        console=console,
        show_time=verbosity >= 1,
        show_path=verbosity >= 2,
    )

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )

    return console
