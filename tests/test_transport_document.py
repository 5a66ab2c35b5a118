"""Tests for canonical transport documents."""

import json
import pytest
from datetime import datetime, timezone

from telemetry_cli.commands import (
    QUIT,
    LogLevel,
    NonTransportableCommand,
    RawCommand,
    RebootProbe,
    SetLogFilter,
    SetLogLevel,
    SetUpdateInterval,
    StartMeasurement,
    UpdateNode,
    UpdateProbe,
    parse_command,
    to_transport_document,
)


class TestTransportDocument:
    """Test document shape for every command variant."""

    def test_set_update_interval(self):
        command = parse_command(
            "set_update_interval(start_time=2024-06-01T12:00:00+02:00, end_time=2024-06-02T00:00:00Z, "
            "active_period=60, inactive_period=300)"
        )

        assert to_transport_document(command) == {
            "command": "set_update_interval",
            "parameters": {
                "start_time": "2024-06-01T10:00:00+00:00",
                "end_time": "2024-06-02T00:00:00+00:00",
                "active_period": 60,
                "inactive_period": 300,
            },
        }

    @pytest.mark.parametrize("value,expected", [
        ("2024-06-01T12:00:00.5Z", "2024-06-01T12:00:00.500+00:00"),
        ("2024-06-01T12:00:00.123456Z", "2024-06-01T12:00:00.123456+00:00"),
        ("2024-06-01T12:00:00.000Z", "2024-06-01T12:00:00+00:00"),
    ])
    def test_fractional_seconds_use_shortest_width(self, value, expected):
        command = parse_command(
            f"set_update_interval(start_time={value}, end_time=2024-06-02T00:00:00Z, "
            "active_period=60, inactive_period=300)"
        )

        assert to_transport_document(command)["parameters"]["start_time"] == expected

    def test_positional_fields_follow_node_first_order(self):
        command = SetLogLevel(21, LogLevel.DEBUG)

        assert command.node_id == 21
        assert to_transport_document(command)["parameters"] == {"log_level": "DEBUG", "node id": 21}

    def test_set_log_level_with_node(self):
        document = to_transport_document(SetLogLevel(node_id=5, log_level=LogLevel.DEBUG))

        assert document == {
            "command": "set_log_level",
            "parameters": {"log_level": "DEBUG", "node id": 5},
        }

    def test_set_log_level_without_node_omits_key(self):
        document = to_transport_document(SetLogLevel(node_id=None, log_level=LogLevel.INFO))

        assert document["parameters"] == {"log_level": "INFO"}

    def test_set_log_filter(self):
        document = to_transport_document(SetLogFilter(log_filter="radio", node_id=1))

        assert document == {
            "command": "set_log_filter",
            "parameters": {"log_filter": "radio", "node id": 1},
        }

    def test_raw_command(self):
        document = to_transport_document(RawCommand(node_id=None, command='"a,b"'))

        assert document == {"command": "command", "parameters": {"command": '"a,b"'}}

    @pytest.mark.parametrize("command,name", [
        (UpdateNode(), "update_node"),
        (UpdateProbe(), "update_probe"),
        (RebootProbe(), "reboot_probe"),
    ])
    def test_parameterless_commands(self, command, name):
        assert to_transport_document(command) == {"command": name, "parameters": {}}

    def test_reboot_probe_with_node(self):
        document = to_transport_document(RebootProbe(node_id=12))

        assert document["parameters"] == {"node id": 12}

    def test_start_measurement_always_has_node(self):
        document = to_transport_document(StartMeasurement(node_id=21, sequence=42))

        assert document == {
            "command": "start_measurement",
            "parameters": {"node id": 21, "sequence": 42},
        }

    def test_node_key_uses_space(self):
        document = to_transport_document(parse_command("update_node(node_id=3)"))

        assert "node id" in document["parameters"]
        assert "node_id" not in document["parameters"]


class TestQuitIsNotTransportable:
    """Quit never leaves the interactive session."""

    def test_quit_raises(self):
        with pytest.raises(NonTransportableCommand) as exc_info:
            to_transport_document(QUIT)

        assert "cannot be converted" in str(exc_info.value)

    def test_parsed_quit_raises(self):
        with pytest.raises(NonTransportableCommand):
            to_transport_document(parse_command("exit"))


class TestDeterminism:
    """Repeated conversion yields identical output."""

    def test_documents_are_byte_identical(self):
        command = parse_command("set_log_level(node_id=21, log_level=debug)")

        first = json.dumps(to_transport_document(command))
        second = json.dumps(to_transport_document(command))

        assert first == second

    def test_conversion_does_not_mutate_command(self):
        command = SetUpdateInterval(
            start_time=datetime(2024, 1, 1, tzinfo=timezone.utc),
            end_time=datetime(2024, 1, 2, tzinfo=timezone.utc),
            active_period=1,
            inactive_period=2,
        )

        to_transport_document(command)

        assert command.active_period == 1
        assert to_transport_document(command) == to_transport_document(command)
