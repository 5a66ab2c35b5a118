"""UI management for interactive mode."""

from enum import Enum
from typing import Optional

import click


class MessageType(Enum):
    """Types of messages printed to the operator."""

    SUCCESS = "success"
    ERROR = "error"


MESSAGE_STYLES = {
    MessageType.SUCCESS: ("✅", "green"),
    MessageType.ERROR: ("❌", "red"),
}


class UIManager:
    """Manages UI formatting and user interaction."""

    def __init__(self, use_colors: Optional[bool] = None):
        """Initialize UI manager.

        Args:
            use_colors: Whether to use colored output (click decides per stream if None)
        """
        self.use_colors = use_colors

    def format_message(self, message: str, msg_type: MessageType) -> str:
        """Format a message with its icon and color.

        Args:
            message: Message text
            msg_type: Type of message

        Returns:
            Formatted message
        """
        icon, color = MESSAGE_STYLES[msg_type]
        if self.use_colors is False:
            return f"{icon} {message}"
        return f"{icon} {click.style(message, fg=color)}"

    def print_message(self, message: str, msg_type: MessageType) -> None:
        err = msg_type is MessageType.ERROR
        click.echo(self.format_message(message, msg_type), err=err, color=self.use_colors)

    def print_success(self, message: str) -> None:
        self.print_message(message, MessageType.SUCCESS)

    def print_error(self, message: str) -> None:
        self.print_message(message, MessageType.ERROR)

    def format_prompt(self) -> str:
        return "> "

    def print_welcome(self) -> None:
        """Print welcome message for interactive mode."""
        click.echo("Telemetry Hub CLI - Interactive Mode")
        click.echo("Type 'quit', 'exit', or 'bye' to exit")
        click.echo()

    def print_goodbye(self) -> None:
        click.echo("Goodbye!")
