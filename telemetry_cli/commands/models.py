"""Command variants and their canonical transport documents."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Union

from .errors import NonTransportableCommand

# The hub expects the node identifier under "node id" (with a space), unlike
# every other snake_case parameter. Likely a wire-format defect upstream;
# kept as-is so deployed hubs keep accepting our documents.
NODE_ID_WIRE_KEY = "node id"


class LogLevel(str, Enum):
    """Log levels accepted by probes."""

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


@dataclass(frozen=True)
class SetUpdateInterval:
    """Hub-wide measurement schedule; never targets a single node."""

    start_time: datetime
    end_time: datetime
    active_period: int
    inactive_period: int

    name = "set_update_interval"

    def parameters(self) -> Dict[str, Any]:
        return {
            "start_time": _rfc3339(self.start_time),
            "end_time": _rfc3339(self.end_time),
            "active_period": self.active_period,
            "inactive_period": self.inactive_period,
        }


@dataclass(frozen=True)
class SetLogLevel:
    node_id: Optional[int]
    log_level: LogLevel

    name = "set_log_level"

    def parameters(self) -> Dict[str, Any]:
        return _with_node_id({"log_level": self.log_level.value}, self.node_id)


@dataclass(frozen=True)
class SetLogFilter:
    node_id: Optional[int]
    log_filter: str

    name = "set_log_filter"

    def parameters(self) -> Dict[str, Any]:
        return _with_node_id({"log_filter": self.log_filter}, self.node_id)


@dataclass(frozen=True)
class RawCommand:
    """Free-text command passed through to the probe."""

    node_id: Optional[int]
    command: str

    name = "command"

    def parameters(self) -> Dict[str, Any]:
        return _with_node_id({"command": self.command}, self.node_id)


@dataclass(frozen=True)
class UpdateNode:
    node_id: Optional[int] = None

    name = "update_node"

    def parameters(self) -> Dict[str, Any]:
        return _with_node_id({}, self.node_id)


@dataclass(frozen=True)
class UpdateProbe:
    node_id: Optional[int] = None

    name = "update_probe"

    def parameters(self) -> Dict[str, Any]:
        return _with_node_id({}, self.node_id)


@dataclass(frozen=True)
class RebootProbe:
    node_id: Optional[int] = None

    name = "reboot_probe"

    def parameters(self) -> Dict[str, Any]:
        return _with_node_id({}, self.node_id)


@dataclass(frozen=True)
class StartMeasurement:
    node_id: int
    sequence: int

    name = "start_measurement"

    def parameters(self) -> Dict[str, Any]:
        return {NODE_ID_WIRE_KEY: self.node_id, "sequence": self.sequence}


@dataclass(frozen=True)
class Quit:
    """Ends an interactive session. Never sent to the hub."""

    name = "quit"


QUIT = Quit()

TransportCommand = Union[
    SetUpdateInterval,
    SetLogLevel,
    SetLogFilter,
    RawCommand,
    UpdateNode,
    UpdateProbe,
    RebootProbe,
    StartMeasurement,
]

Command = Union[TransportCommand, Quit]


def to_transport_document(command: Command) -> Dict[str, Any]:
    """Convert a command into the document POSTed to the hub.

    Args:
        command: Any parsed command

    Returns:
        ``{"command": <name>, "parameters": {...}}``

    Raises:
        NonTransportableCommand: For the session-only ``Quit`` command
    """
    if isinstance(command, Quit):
        raise NonTransportableCommand("Quit")

    return {
        "command": command.name,
        "parameters": command.parameters(),
    }


def _with_node_id(params: Dict[str, Any], node_id: Optional[int]) -> Dict[str, Any]:
    if node_id is not None:
        params[NODE_ID_WIRE_KEY] = node_id
    return params


def _rfc3339(value: datetime) -> str:
    """Render with the shortest of 0, 3 or 6 fractional digits."""
    if value.microsecond % 1000 == 0 and value.microsecond:
        return value.isoformat(timespec="milliseconds")
    return value.isoformat()
