"""Exceptions raised while parsing and serializing hub commands."""

from typing import Optional


class CommandError(ValueError):
    """Base class for command language errors.

    Every subclass renders to a single human-readable line via ``str()``.
    """


class MalformedInvocation(CommandError):
    """Raised when an invocation has unbalanced parentheses."""

    def __init__(self, text: str):
        super().__init__("Missing closing parenthesis")
        self.text = text


class UnknownCommand(CommandError):
    """Raised when the command name is not one the hub understands."""

    def __init__(self, name: str):
        super().__init__(f"Unknown command: {name}")
        self.name = name


class MissingParameterBlock(CommandError):
    """Raised when a command that takes parameters was given no ``(...)``."""

    def __init__(self, name: str):
        super().__init__(f"{name} requires parameters")
        self.name = name


class MissingField(CommandError):
    """Raised when a required parameter is absent."""

    def __init__(self, command: str, field: str, message: Optional[str] = None):
        super().__init__(message or f"Missing {field} parameter")
        self.command = command
        self.field = field


class InvalidField(CommandError):
    """Raised when a parameter is present but fails validation."""

    def __init__(self, command: str, field: str, reason: str):
        super().__init__(f"Invalid {field}: {reason}")
        self.command = command
        self.field = field
        self.reason = reason


class NonTransportableCommand(CommandError):
    """Raised when a session-only command is converted for transport."""

    def __init__(self, command: str):
        super().__init__(f"{command} command cannot be converted to JSON")
        self.command = command
