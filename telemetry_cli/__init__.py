"""
Telemetry Hub CLI

Send structured control commands to field probes through the telemetry hub.
"""

# Logging is configured at app entry point via telemetry_cli/logging_utils.py
# No need to configure logging here.

__version__ = "0.1.0"
__author__ = "Telemetry Hub CLI"
__description__ = "Command-line front end for the probe telemetry hub"
