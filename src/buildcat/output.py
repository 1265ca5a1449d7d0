"""Text vs JSON output for buildcat commands.

Commands print human summaries through ``ctx.console`` (stderr) and, with
``--json``, one machine-readable document on stdout.
"""

import json
from dataclasses import dataclass
from typing import Any

from rich.console import Console


@dataclass
class OutputContext:
    """Where a command's messages and documents go."""

    console: Console
    json_mode: bool = False

    def print_json(self, data: dict[str, Any]) -> None:
        """Write ``data`` to stdout as one JSON document (json mode only)."""
        if self.json_mode:
            print(json.dumps(data, indent=2, default=str))

    def _status(self, key: str, message: str, text: str, data: dict[str, Any] | None) -> None:
        if self.json_mode:
            self.print_json({key: message, **(data or {})})
        else:
            self.console.print(text)

    def error(self, message: str, data: dict[str, Any] | None = None) -> None:
        """Report a failure; ``data`` is merged into the JSON document."""
        self._status("error", message, f"[red]Error: {message}[/red]", data)

    def success(self, message: str, data: dict[str, Any] | None = None) -> None:
        """Report a completed action; ``data`` only appears in json mode."""
        self._status("success", message, f"[green]{message}[/green]", data)


# Set by the cli.py callback
_ctx: OutputContext | None = None


def get_output_context() -> OutputContext:
    """Return the CLI's output context, or a stderr text context before setup."""
    if _ctx is None:
        return OutputContext(Console(stderr=True))
    return _ctx


def set_output_context(ctx: OutputContext) -> None:
    """Install the output context for the current CLI invocation."""
    global _ctx
    _ctx = ctx
