"""Logging setup for the CLI entry point."""

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Chatty HTTP stack loggers; only shown when the CLI runs at DEBUG.
NOISY_LOGGERS = ("urllib3", "requests")


def resolve_level(level_name: str) -> int:
    """Map a level name such as ``"debug"`` to its numeric value.

    Raises:
        ValueError: If the name is not a standard logging level
    """
    level = logging.getLevelName(level_name.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Invalid log level: {level_name}")
    return level


def setup_logging(log_level: str = "WARNING") -> int:
    """Configure root logging once, at the CLI entry point.

    Connection pool chatter from the HTTP stack stays at WARNING unless
    the CLI itself runs at DEBUG.

    Returns:
        The numeric level that was applied
    """
    level = resolve_level(log_level)
    logging.basicConfig(level=level, format=LOG_FORMAT)

    library_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)

    return level
