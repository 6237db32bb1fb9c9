"""Typer application and main entry point for the CLI.

Contains the Typer app, main command, and version callback.
"""

from pathlib import Path
from typing import Annotated

import typer

from jirabranch.cli.workflow import (
    _resolve_on_exists,
    _resolve_ticket_key,
    _run_create_branch,
    _run_inspect,
)
from jirabranch.config.manager import ConfigManager
from jirabranch.integrations.git import OnExistsPolicy
from jirabranch.utils.console import print_error, print_info, show_version
from jirabranch.utils.errors import ExitCode, JiraBranchError, UserCancelledError
from jirabranch.utils.logging import setup_logging

app = typer.Typer(
    name="jirabranch",
    help="JIRABRANCH - Create git branches named after Jira tickets",
    add_completion=False,
    no_args_is_help=False,
)


def version_callback(value: bool) -> None:
    """Display version and exit."""
    if value:
        show_version()
        raise typer.Exit()


@app.command()
def main(
    ticket: Annotated[
        str | None,
        typer.Argument(
            help=(
                "Jira ticket ID or URL. Examples: WAR-7974, "
                "https://example.atlassian.net/browse/WAR-7974. Prompted for when omitted."
            ),
        ),
    ] = None,
    repo: Annotated[
        Path | None,
        typer.Option(
            "--repo",
            "-r",
            help="Repository to create the branch in (default: current directory)",
            file_okay=False,
        ),
    ] = None,
    on_exists: Annotated[
        OnExistsPolicy | None,
        typer.Option(
            "--on-exists",
            help="What to do if the branch already exists (default: from config, else prompt)",
            case_sensitive=False,
        ),
    ] = None,
    inspect: Annotated[
        bool,
        typer.Option(
            "--inspect",
            "-i",
            help="Show the Jira data and the branch name it produces without touching git",
        ),
    ] = False,
    show_config: Annotated[
        bool,
        typer.Option(
            "--config",
            help="Show current configuration and exit",
        ),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version information",
        ),
    ] = None,
) -> None:
    """JIRABRANCH - Create git branches named after Jira tickets.

    Fetches the ticket's summary and sprint from Jira and creates (or
    switches to) a branch named <fiscal-year>/<sprint>/<TICKET>/<summary>.
    """
    setup_logging()

    try:
        config = ConfigManager()
        config.load()

        if show_config:
            config.show()
            raise typer.Exit()

        ticket_key = _resolve_ticket_key(ticket)

        if inspect:
            _run_inspect(ticket_key, config)
            return

        _run_create_branch(
            ticket_key,
            config,
            repo_path=(repo or Path.cwd()).resolve(),
            on_exists=_resolve_on_exists(on_exists, config),
        )

    except UserCancelledError as e:
        print_info(f"\n{e}")
        raise typer.Exit(ExitCode.USER_CANCELLED) from e

    except JiraBranchError as e:
        print_error(str(e))
        raise typer.Exit(e.exit_code) from e

    except KeyboardInterrupt as e:
        print_info("\nOperation cancelled by user")
        raise typer.Exit(ExitCode.USER_CANCELLED) from e
