"""Command-line interface for the Telemetry Hub CLI."""

import sys
import json
import click
import logging
from typing import Optional

from .config import load_config, ConfigError, DEFAULT_CONFIG_FILE
from .api_client import HubClient, HubAPIError, HubAuthenticationError
from .commands import CommandError, Quit, parse_command, to_transport_document
from .interactive import UIManager
from .logging_utils import setup_logging


@click.group(invoke_without_command=True)
@click.option('--config', '--config-file', default=DEFAULT_CONFIG_FILE, show_default=True,
              help='Path to configuration file (TOML, YAML, or JSON)')
@click.option('--command', 'command_str', default=None, help='Single command to send and exit')
@click.option('--log-level', default=None, help='Logging level (DEBUG, INFO, WARNING, ERROR)')
@click.option('--no-color', is_flag=True, default=False, help='Disable colored output')
@click.pass_context
def cli(ctx, config: str, command_str: Optional[str], log_level: Optional[str], no_color: bool):
    """Telemetry Hub CLI - Send commands to probes via the telemetry hub."""
    ctx.ensure_object(dict)
    ui_manager = UIManager(use_colors=False if no_color else None)
    ctx.obj['ui'] = ui_manager

    if ctx.invoked_subcommand is not None:
        _configure_logging(ui_manager, log_level or "WARNING")
        return

    try:
        app_config = load_config(config_file=config)
    except ConfigError as e:
        ui_manager.print_error(str(e))
        sys.exit(1)

    # CLI flag overrides config
    _configure_logging(ui_manager, log_level or app_config.log_level)
    logger = logging.getLogger(__name__)
    logger.debug(f"Using hub at {app_config.hub.hub_url}")

    client = HubClient(app_config.hub)

    if command_str is not None:
        execute_single_command(client, command_str, ui_manager)
    else:
        interactive_mode(client, ui_manager)


def _configure_logging(ui_manager: UIManager, level: str) -> None:
    try:
        setup_logging(level)
    except ValueError as e:
        ui_manager.print_error(str(e))
        sys.exit(1)


def execute_single_command(client: HubClient, command_str: str, ui_manager: UIManager) -> None:
    """Parse and send one command, exiting non-zero on any failure."""
    try:
        command = parse_command(command_str)
    except CommandError as e:
        ui_manager.print_error(f"Parse error: {e}")
        sys.exit(1)

    if isinstance(command, Quit):
        ui_manager.print_error("Quit command is only valid in interactive mode")
        sys.exit(1)

    try:
        result = client.send_command(command)
    except HubAPIError as e:
        ui_manager.print_error(str(e))
        sys.exit(1)

    click.echo(result)


def interactive_mode(client: HubClient, ui_manager: UIManager) -> None:
    """Read commands line by line until quit, EOF or Ctrl+C."""
    ui_manager.print_welcome()

    while True:
        try:
            user_input = input(ui_manager.format_prompt()).strip()
        except (KeyboardInterrupt, EOFError):
            click.echo()
            ui_manager.print_goodbye()
            break

        if not user_input:
            continue

        try:
            command = parse_command(user_input)
        except CommandError as e:
            ui_manager.print_error(f"Parse error: {e}")
            continue

        if isinstance(command, Quit):
            ui_manager.print_goodbye()
            break

        try:
            result = client.send_command(command)
        except HubAuthenticationError as e:
            # A bad key fails every later call too
            ui_manager.print_error(str(e))
            ui_manager.print_error("Authentication failed. Please check your API key in the config file.")
            sys.exit(1)
        except HubAPIError as e:
            ui_manager.print_error(str(e))
            continue

        ui_manager.print_success(result)


@cli.command()
@click.argument('line')
@click.pass_context
def preview(ctx, line: str):
    """Show the JSON document LINE would send, without contacting the hub."""
    ui_manager = ctx.obj['ui']

    try:
        command = parse_command(line)
        document = to_transport_document(command)
    except CommandError as e:
        ui_manager.print_error(f"Parse error: {e}")
        sys.exit(1)

    click.echo(json.dumps(document, indent=2, ensure_ascii=False))


if __name__ == '__main__':
    cli()
