"""Interactive mode components for the Telemetry Hub CLI."""

from .ui_manager import UIManager, MessageType

__all__ = [
    'UIManager',
    'MessageType',
]
