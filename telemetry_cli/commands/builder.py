"""Resolve tokenized invocations into validated command variants."""

import re
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional, Tuple

from .errors import (
    InvalidField,
    MissingField,
    MissingParameterBlock,
    UnknownCommand,
)
from .models import (
    Command,
    LogLevel,
    RawCommand,
    RebootProbe,
    SetLogFilter,
    SetLogLevel,
    SetUpdateInterval,
    StartMeasurement,
    TransportCommand,
    UpdateNode,
    UpdateProbe,
)
from .tokenizer import Invocation, ParameterList, get_param, tokenize

U32_MAX = 2**32 - 1
U64_MAX = 2**64 - 1

_UNSIGNED_RE = re.compile(r"^\+?[0-9]+$")

_DATE_TIME = r"(?a)(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
_OFFSET = r"(?P<sign>[+-])(?P<off_h>\d{2})"

# Tried in order; the first pattern that yields a valid datetime wins.
TIMESTAMP_PATTERNS: Tuple[Tuple[str, re.Pattern], ...] = (
    (
        "rfc3339",
        re.compile(
            _DATE_TIME
            + r"[Tt ](?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})"
            r"(?:\.(?P<fraction>\d+))?"
            r"(?:(?P<zulu>[Zz])|" + _OFFSET + r":(?P<off_m>\d{2}))$"
        ),
    ),
    (
        "iso8601_seconds",
        re.compile(
            _DATE_TIME
            + r"T(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})"
            + _OFFSET + r"(?P<off_m>\d{2})$"
        ),
    ),
    (
        "iso8601_minutes",
        re.compile(
            _DATE_TIME
            + r"T(?P<hour>\d{2}):(?P<minute>\d{2})"
            + _OFFSET + r"(?P<off_m>\d{2})$"
        ),
    ),
    (
        "iso8601_colon_offset",
        re.compile(
            _DATE_TIME
            + r"T(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})"
            + _OFFSET + r":(?P<off_m>\d{2})$"
        ),
    ),
)


def parse_command(raw: str) -> Command:
    """Parse one line of operator input into a command.

    Args:
        raw: Raw invocation text

    Returns:
        A command variant, or the ``QUIT`` sentinel

    Raises:
        CommandError: Describing the first problem found
    """
    token = tokenize(raw)
    if not isinstance(token, Invocation):
        return token
    return build_command(token)


def build_command(invocation: Invocation) -> TransportCommand:
    """Validate an invocation against its command's parameter contract."""
    key = invocation.name.lower()
    entry = _BUILDERS.get(key)
    if entry is None:
        raise UnknownCommand(invocation.name)

    builder, requires_params = entry
    if invocation.params is None:
        if requires_params:
            raise MissingParameterBlock(key)
        return builder([])
    return builder(invocation.params)


def parse_unsigned(command: str, field: str, value: str, maximum: int) -> int:
    """Parse an unsigned integer no larger than ``maximum``."""
    if not _UNSIGNED_RE.match(value):
        raise InvalidField(command, field, "must be a positive integer")
    number = int(value)
    if number > maximum:
        raise InvalidField(command, field, "must be a positive integer")
    return number


def parse_timestamp(command: str, field: str, value: str) -> datetime:
    """Parse an ISO 8601 timestamp with offset and normalize it to UTC.

    Raises:
        InvalidField: If no supported format matches
    """
    for _name, pattern in TIMESTAMP_PATTERNS:
        match = pattern.match(value)
        if match is None:
            continue
        parsed = _datetime_from_match(match)
        if parsed is not None:
            return parsed.astimezone(timezone.utc)

    raise InvalidField(command, field, f"invalid ISO 8601 timestamp: {value}")


def _datetime_from_match(match) -> Optional[datetime]:
    parts = match.groupdict()

    if parts.get("zulu"):
        tz = timezone.utc
    else:
        off_h, off_m = int(parts["off_h"]), int(parts["off_m"])
        if off_h > 23 or off_m > 59:
            return None
        offset = timedelta(hours=off_h, minutes=off_m)
        tz = timezone(-offset if parts["sign"] == "-" else offset)

    # Digits past microseconds are truncated.
    fraction = (parts.get("fraction") or "").ljust(6, "0")[:6]

    try:
        return datetime(
            int(parts["year"]),
            int(parts["month"]),
            int(parts["day"]),
            int(parts["hour"]),
            int(parts["minute"]),
            int(parts.get("second") or 0),
            int(fraction),
            tzinfo=tz,
        )
    except ValueError:
        return None


def _require(command: str, params: ParameterList, field: str) -> str:
    value = get_param(params, field)
    if value is None:
        raise MissingField(command, field)
    return value


def _optional_node_id(command: str, params: ParameterList) -> Optional[int]:
    value = get_param(params, "node_id")
    if value is None:
        return None
    return parse_unsigned(command, "node_id", value, U32_MAX)


def _build_set_update_interval(params: ParameterList) -> SetUpdateInterval:
    cmd = SetUpdateInterval.name
    if get_param(params, "node_id") is not None:
        raise InvalidField(cmd, "node_id", f"{cmd} does not accept node_id parameter")

    start_time = _require(cmd, params, "start_time")
    end_time = _require(cmd, params, "end_time")
    active_period = _require(cmd, params, "active_period")
    inactive_period = _require(cmd, params, "inactive_period")

    return SetUpdateInterval(
        start_time=parse_timestamp(cmd, "start_time", start_time),
        end_time=parse_timestamp(cmd, "end_time", end_time),
        active_period=parse_unsigned(cmd, "active_period", active_period, U64_MAX),
        inactive_period=parse_unsigned(cmd, "inactive_period", inactive_period, U64_MAX),
    )


def _build_set_log_level(params: ParameterList) -> SetLogLevel:
    cmd = SetLogLevel.name
    node_id = _optional_node_id(cmd, params)
    level = _require(cmd, params, "log_level").upper()

    try:
        log_level = LogLevel(level)
    except ValueError:
        allowed = ", ".join(member.value for member in LogLevel)
        raise InvalidField(cmd, "log_level", f"must be one of {allowed}") from None

    return SetLogLevel(node_id=node_id, log_level=log_level)


def _build_set_log_filter(params: ParameterList) -> SetLogFilter:
    cmd = SetLogFilter.name
    node_id = _optional_node_id(cmd, params)
    return SetLogFilter(node_id=node_id, log_filter=_require(cmd, params, "log_filter"))


def _build_raw_command(params: ParameterList) -> RawCommand:
    cmd = RawCommand.name
    node_id = _optional_node_id(cmd, params)
    return RawCommand(node_id=node_id, command=_require(cmd, params, "command"))


def _build_update_node(params: ParameterList) -> UpdateNode:
    return UpdateNode(node_id=_optional_node_id(UpdateNode.name, params))


def _build_update_probe(params: ParameterList) -> UpdateProbe:
    return UpdateProbe(node_id=_optional_node_id(UpdateProbe.name, params))


def _build_reboot_probe(params: ParameterList) -> RebootProbe:
    return RebootProbe(node_id=_optional_node_id(RebootProbe.name, params))


def _build_start_measurement(params: ParameterList) -> StartMeasurement:
    cmd = StartMeasurement.name
    node_id = _optional_node_id(cmd, params)
    if node_id is None:
        raise MissingField(cmd, "node_id", f"node_id is required for {cmd} command")

    sequence = parse_unsigned(cmd, "sequence", _require(cmd, params, "sequence"), U32_MAX)
    return StartMeasurement(node_id=node_id, sequence=sequence)


# name -> (builder, requires a parameter block)
_BUILDERS: Dict[str, Tuple[Callable[[ParameterList], TransportCommand], bool]] = {
    SetUpdateInterval.name: (_build_set_update_interval, True),
    SetLogLevel.name: (_build_set_log_level, True),
    SetLogFilter.name: (_build_set_log_filter, True),
    RawCommand.name: (_build_raw_command, True),
    UpdateNode.name: (_build_update_node, False),
    UpdateProbe.name: (_build_update_probe, False),
    RebootProbe.name: (_build_reboot_probe, False),
    StartMeasurement.name: (_build_start_measurement, True),
}

COMMAND_NAMES = tuple(_BUILDERS)
