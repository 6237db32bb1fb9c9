"""Tests for jirabranch.utils.console module."""

import io
from unittest.mock import patch

import pytest
from rich.console import Console

from jirabranch import __version__
from jirabranch.utils.console import (
    custom_theme,
    print_error,
    print_field,
    print_header,
    print_info,
    print_step,
    print_success,
    print_warning,
    show_version,
)


@pytest.fixture
def real_console():
    """Real Rich consoles writing to in-memory buffers."""
    out = Console(file=io.StringIO(), theme=custom_theme, width=200, color_system=None)
    err = Console(file=io.StringIO(), theme=custom_theme, width=200, color_system=None)
    with (
        patch("jirabranch.utils.console.console", out),
        patch("jirabranch.utils.console.console_err", err),
    ):
        yield out, err


def _text(target: Console) -> str:
    return target.file.getvalue()


class TestCustomTheme:
    """Tests for custom Rich theme."""

    def test_theme_has_message_styles(self):
        """Theme defines a style for every message level."""
        for name in ("error", "success", "warning", "info", "header", "step", "highlight", "label"):
            assert name in custom_theme.styles


class TestPrintFunctions:
    """Tests for print functions."""

    @patch("jirabranch.utils.console.console_err")
    @patch("jirabranch.utils.console.log_message")
    def test_print_error(self, mock_log, mock_console_err):
        """print_error writes to stderr and logs."""
        print_error("Test error")

        mock_console_err.print.assert_called_once()
        call_args = mock_console_err.print.call_args
        assert "[ERROR]" in call_args[0][0]
        assert "Test error" in call_args[0][0]
        mock_log.assert_called_once_with("ERROR: Test error")

    @patch("jirabranch.utils.console.console")
    @patch("jirabranch.utils.console.log_message")
    def test_print_success(self, mock_log, mock_console):
        """print_success outputs success message."""
        print_success("Test success")

        assert "[SUCCESS]" in mock_console.print.call_args[0][0]
        mock_log.assert_called_once_with("SUCCESS: Test success")

    @patch("jirabranch.utils.console.console")
    @patch("jirabranch.utils.console.log_message")
    def test_print_warning(self, mock_log, mock_console):
        print_warning("Test warning")

        assert "[WARNING]" in mock_console.print.call_args[0][0]
        mock_log.assert_called_once_with("WARNING: Test warning")

    @patch("jirabranch.utils.console.console")
    @patch("jirabranch.utils.console.log_message")
    def test_print_info(self, mock_log, mock_console):
        print_info("Test info")

        assert "[INFO]" in mock_console.print.call_args[0][0]
        mock_log.assert_called_once_with("INFO: Test info")

    @patch("jirabranch.utils.console.console")
    def test_print_header(self, mock_console):
        """print_header prints blank line, header, blank line."""
        print_header("Test Header")

        assert mock_console.print.call_count == 3
        assert "=== Test Header ===" in mock_console.print.call_args_list[1][0][0]

    @patch("jirabranch.utils.console.console")
    def test_print_step(self, mock_console):
        """print_step outputs step with arrow."""
        print_step("Test step")

        mock_console.print.assert_called_once()
        assert "Test step" in mock_console.print.call_args[0][0]


class TestMarkupInMessages:
    """Bracketed text in messages is printed literally."""

    @pytest.mark.parametrize("message", ["[/red]", "Invalid ticket '[/]'", "[wip] Fix login", "path\\"])
    def test_print_error_literal(self, real_console, message):
        _, err = real_console

        print_error(message)

        assert f"[ERROR] {message}" in _text(err)

    @pytest.mark.parametrize("func", [print_success, print_warning, print_info, print_step])
    def test_stdout_helpers_literal(self, real_console, func):
        out, _ = real_console

        func("[bold]not bold[/bold] [/x]")

        assert "[bold]not bold[/bold] [/x]" in _text(out)

    def test_print_header_literal(self, real_console):
        out, _ = real_console

        print_header("[Jira]")

        assert "=== [Jira] ===" in _text(out)

    def test_print_field(self, real_console):
        out, _ = real_console

        print_field("Summary", "[wip] Fix login", note="[local]", indent=4)

        assert "    Summary: [wip] Fix login ([local])" in _text(out)

    @patch("jirabranch.utils.console.log_message")
    def test_log_gets_raw_message(self, mock_log, real_console):
        print_warning("[/red]")

        mock_log.assert_called_once_with("WARNING: [/red]")


class TestVersion:
    """Tests for version display."""

    @patch("jirabranch.utils.console.console")
    def test_show_version(self, mock_console):
        """show_version prints the package version."""
        show_version()

        printed = " ".join(str(c[0][0]) for c in mock_console.print.call_args_list)
        assert __version__ in printed
        assert "JIRABRANCH" in printed
