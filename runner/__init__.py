"""
Core task runner package.
Exports base runner, action mixins, and utilities.
"""

from .base_runner import BaseTaskRunner, console, err_console
from .errors import (
    TaskRunnerError,
    UnknownCommandError,
    DuplicateNameError,
    RegistryFrozenError,
    ProbeConnectionError
)
from .probe import ProbeMixin, ProbeTarget, DEFAULT_PROBE_TARGET, DEFAULT_PROBE_TIMEOUT, run_probe

__all__ = [
    'BaseTaskRunner',
    'ProbeMixin',
    'ProbeTarget',
    'DEFAULT_PROBE_TARGET',
    'DEFAULT_PROBE_TIMEOUT',
    'run_probe',
    'TaskRunnerError',
    'UnknownCommandError',
    'DuplicateNameError',
    'RegistryFrozenError',
    'ProbeConnectionError',
    'console',
    'err_console'
]
