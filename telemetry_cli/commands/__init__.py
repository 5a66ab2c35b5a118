"""Command language: tokenizer, variant builder and transport documents."""

from .builder import COMMAND_NAMES, build_command, parse_command, parse_timestamp
from .errors import (
    CommandError,
    InvalidField,
    MalformedInvocation,
    MissingField,
    MissingParameterBlock,
    NonTransportableCommand,
    UnknownCommand,
)
from .models import (
    QUIT,
    Command,
    LogLevel,
    Quit,
    RawCommand,
    RebootProbe,
    SetLogFilter,
    SetLogLevel,
    SetUpdateInterval,
    StartMeasurement,
    TransportCommand,
    UpdateNode,
    UpdateProbe,
    to_transport_document,
)
from .tokenizer import Invocation, parse_params, tokenize

__all__ = [
    "COMMAND_NAMES",
    "build_command",
    "parse_command",
    "parse_timestamp",
    "CommandError",
    "InvalidField",
    "MalformedInvocation",
    "MissingField",
    "MissingParameterBlock",
    "NonTransportableCommand",
    "UnknownCommand",
    "QUIT",
    "Command",
    "LogLevel",
    "Quit",
    "RawCommand",
    "RebootProbe",
    "SetLogFilter",
    "SetLogLevel",
    "SetUpdateInterval",
    "StartMeasurement",
    "TransportCommand",
    "UpdateNode",
    "UpdateProbe",
    "to_transport_document",
    "Invocation",
    "parse_params",
    "tokenize",
]
