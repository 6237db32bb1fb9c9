"""Rich-based console output for JIRABRANCH.

Messages routinely carry text the tool does not control: ticket
arguments, Jira summaries and sprint names, git stderr, config values.
The helpers here escape that text, so square brackets are printed
literally instead of being read as Rich markup. Only the styling added
by this module is markup.
"""

from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

from jirabranch import JIRA_API_VERSION, SCRIPT_NAME, __version__
from jirabranch.utils.logging import log_message

custom_theme = Theme(
    {
        "error": "bold red",
        "success": "bold green",
        "warning": "bold yellow",
        "info": "bold blue",
        "header": "bold magenta",
        "step": "bold cyan",
        "highlight": "bold white",
        "label": "dim",
    }
)

console = Console(theme=custom_theme)
console_err = Console(theme=custom_theme, stderr=True)


def _emit(target: Console, level: str, color: str, message: str) -> None:
    """Print a tagged, colored line and mirror it to the log."""
    tag = level.upper()
    target.print(f"[{level}][[{tag}]][/{level}] [{color}]{escape(message)}[/{color}]")
    log_message(f"{tag}: {message}")


def print_error(message: str) -> None:
    """Print an error to stderr."""
    _emit(console_err, "error", "red", message)


def print_success(message: str) -> None:
    _emit(console, "success", "green", message)


def print_warning(message: str) -> None:
    _emit(console, "warning", "yellow", message)


def print_info(message: str) -> None:
    _emit(console, "info", "cyan", message)


def print_header(title: str) -> None:
    """Print a section header surrounded by blank lines."""
    console.print()
    console.print(f"[header]=== {escape(title)} ===[/header]")
    console.print()


def print_step(message: str) -> None:
    """Print a progress step with an arrow."""
    console.print(f"[step]➜[/step] {escape(message)}")


def print_field(label: str, value: Any, *, note: str = "", indent: int = 2) -> None:
    """Print "label: value" for reports such as --inspect and --config.

    Args:
        label: Field name (plain text)
        value: Field value, printed literally
        note: Optional dimmed suffix, e.g. where a config value came from
        indent: Leading spaces
    """
    line = f"{' ' * indent}[label]{escape(label)}:[/label] {escape(str(value))}"
    if note:
        line += f" [dim]({escape(note)})[/dim]"
    console.print(line)


def show_version() -> None:
    """Display version information."""
    console.print(f"[bold]{SCRIPT_NAME}[/bold] v{__version__}")
    console.print(f"  Jira REST API: v{JIRA_API_VERSION}")


__all__ = [
    "console",
    "console_err",
    "custom_theme",
    "print_error",
    "print_success",
    "print_warning",
    "print_info",
    "print_header",
    "print_step",
    "print_field",
    "show_version",
]
