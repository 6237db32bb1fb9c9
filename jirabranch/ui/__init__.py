"""User interface components for JIRABRANCH.

This package contains:
- prompts: Questionary-based user input prompts
"""

from jirabranch.ui.prompts import (
    custom_style,
    prompt_confirm,
    prompt_input,
    prompt_ticket_reference,
    validate_ticket_input,
)

__all__ = [
    "custom_style",
    "prompt_confirm",
    "prompt_input",
    "prompt_ticket_reference",
    "validate_ticket_input",
]
