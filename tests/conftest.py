"""Pytest configuration and shared fixtures."""

import pytest
import os
import logging
from unittest.mock import Mock

from telemetry_cli.config import HubConfig

# Disable logging during tests to reduce noise
logging.disable(logging.CRITICAL)


@pytest.fixture(autouse=True)
def clean_env():
    """Clean environment variables before each test."""
    env_vars_to_clean = [
        "TELEMETRY_API_KEY",
        "TELEMETRY_HUB_URL",
        "TELEMETRY_REQUEST_TIMEOUT",
        "TELEMETRY_MAX_RETRIES",
        "LOG_LEVEL",
    ]

    # Store original values
    original_values = {}
    for var in env_vars_to_clean:
        original_values[var] = os.environ.get(var)
        if var in os.environ:
            del os.environ[var]

    yield

    # Restore original values
    for var, value in original_values.items():
        if value is not None:
            os.environ[var] = value
        elif var in os.environ:
            del os.environ[var]


@pytest.fixture
def hub_config():
    """Hub configuration pointing at a test hub."""
    return HubConfig(
        api_key="test-api-key",
        hub_url="https://hub.test.example.com",
        request_timeout=30,
    )


@pytest.fixture
def make_response():
    """Build a mock requests.Response with the given status and body."""

    def _create_response(status_code, text=""):
        response = Mock()
        response.status_code = status_code
        response.text = text
        return response

    return _create_response

