"""Tests for output formatting."""

import io
import json

from rich.console import Console

from buildcat.output import OutputContext, get_output_context, set_output_context


def _context(json_mode: bool = False) -> tuple[OutputContext, io.StringIO]:
    buffer = io.StringIO()
    console = Console(file=buffer, force_terminal=False, width=200)
    return OutputContext(console=console, json_mode=json_mode), buffer


class TestOutputContextJson:
    """Tests for JSON output."""

    def test_print_json_in_json_mode(self, capsys) -> None:
        """print_json should write JSON to stdout."""
        ctx, buffer = _context(json_mode=True)
        ctx.print_json({"version": "7290", "eol": False})
        assert json.loads(capsys.readouterr().out) == {"version": "7290", "eol": False}
        assert buffer.getvalue() == ""

    def test_print_json_suppressed_in_normal_mode(self, capsys) -> None:
        """print_json should do nothing in normal mode."""
        ctx, _ = _context()
        ctx.print_json({"version": "7290"})
        assert capsys.readouterr().out == ""

class TestOutputContextErrorAndSuccess:
    """Tests for error and success messages."""

    def test_error_json(self, capsys) -> None:
        """error should merge extra data into the JSON document."""
        ctx, _ = _context(json_mode=True)
        ctx.error("Cannot load catalog", {"path": "catalog.json"})
        data = json.loads(capsys.readouterr().out)
        assert data == {"error": "Cannot load catalog", "path": "catalog.json"}

    def test_error_text(self) -> None:
        """error should print a prefixed message in normal mode."""
        ctx, buffer = _context()
        ctx.error("Cannot load catalog")
        assert "Error: Cannot load catalog" in buffer.getvalue()

    def test_success_json_without_data(self, capsys) -> None:
        """success should print JSON even without extra data."""
        ctx, _ = _context(json_mode=True)
        ctx.success("Wrote catalog")
        assert json.loads(capsys.readouterr().out) == {"success": "Wrote catalog"}

    def test_success_text_hides_data(self) -> None:
        """success should only show the message in normal mode."""
        ctx, buffer = _context()
        ctx.success("Wrote catalog", {"path": "catalog.json"})
        assert "Wrote catalog" in buffer.getvalue()
        assert "catalog.json" not in buffer.getvalue()


class TestGlobalOutputContext:
    """Tests for the global output context."""

    def test_set_and_get(self) -> None:
        """get_output_context should return what was set."""
        ctx, _ = _context()
        set_output_context(ctx)
        assert get_output_context() is ctx

    def test_default_context_is_text_mode(self) -> None:
        """get_output_context should fall back to a text context before setup."""
        set_output_context(None)  # type: ignore[arg-type]
        ctx = get_output_context()
        assert ctx.json_mode is False
        assert ctx.console.stderr is True
