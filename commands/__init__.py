"""
Command registration system.
"""

from .registry import (
    COMMAND_SPECS,
    CommandEntry,
    CommandRegistry,
    CommandSpec,
    build_command_registry
)

__all__ = [
    'COMMAND_SPECS',
    'CommandEntry',
    'CommandRegistry',
    'CommandSpec',
    'build_command_registry'
]
