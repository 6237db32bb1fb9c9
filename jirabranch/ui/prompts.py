"""Interactive prompts for JIRABRANCH.

This module provides Questionary-based user input prompts with
consistent styling and error handling.
"""

from __future__ import annotations

from collections.abc import Callable

import questionary
from questionary import Style

from jirabranch.naming import is_valid_ticket_reference
from jirabranch.utils.errors import UserCancelledError
from jirabranch.utils.logging import log_message

# Custom style matching the application theme
custom_style = Style(
    [
        ("qmark", "fg:cyan bold"),
        ("question", "bold"),
        ("answer", "fg:green bold"),
        ("pointer", "fg:cyan bold"),
        ("highlighted", "fg:cyan bold"),
        ("selected", "fg:green"),
        ("instruction", "fg:white"),
        ("text", ""),
    ]
)


def prompt_confirm(message: str, default: bool = True) -> bool:
    """Prompt for yes/no confirmation.

    Args:
        message: Question to ask
        default: Default value if user presses Enter

    Returns:
        True for yes, False for no

    Raises:
        UserCancelledError: If user presses Ctrl+C
    """
    log_message(f"Prompt confirm: {message}")

    try:
        result = questionary.confirm(
            message,
            default=default,
            style=custom_style,
        ).ask()

        if result is None:
            raise UserCancelledError("User cancelled confirmation prompt")

        log_message(f"User response: {result}")
        return bool(result)

    except KeyboardInterrupt as e:
        raise UserCancelledError("User cancelled with Ctrl+C") from e


def prompt_input(
    message: str,
    default: str = "",
    *,
    validate: Callable[[str], bool | str] | None = None,
    secret: bool = False,
) -> str:
    """Prompt for text input.

    Args:
        message: Prompt message
        default: Default value
        validate: Optional validation function returning True or an error message
        secret: Hide the typed characters (for API tokens)

    Returns:
        User input string

    Raises:
        UserCancelledError: If user presses Ctrl+C
    """
    log_message(f"Prompt input: {message}")

    try:
        if secret:
            question = questionary.password(message, validate=validate, style=custom_style)
        else:
            question = questionary.text(
                message,
                default=default,
                validate=validate,
                style=custom_style,
            )
        result = question.ask()

        if result is None:
            raise UserCancelledError("User cancelled input prompt")

        if not secret:
            log_message(f"User input: {result[:50]}")
        return str(result)

    except KeyboardInterrupt as e:
        raise UserCancelledError("User cancelled with Ctrl+C") from e


def validate_ticket_input(value: str) -> bool | str:
    """Questionary validator for ticket keys.

    Returns True for a valid key, otherwise the message shown under the prompt.
    """
    if not value:
        return "Please enter a ticket ID"
    if not is_valid_ticket_reference(value):
        return "Invalid Jira ticket format. Please use the format PROJECT-123."
    return True


def prompt_ticket_reference() -> str:
    """Ask for a ticket key until a valid one is entered.

    Raises:
        UserCancelledError: If user cancels the prompt
    """
    return prompt_input(
        "Enter Jira ticket ID (e.g., VEL-123):",
        validate=validate_ticket_input,
    )


__all__ = [
    "custom_style",
    "prompt_confirm",
    "prompt_input",
    "prompt_ticket_reference",
    "validate_ticket_input",
]
