"""
Exceptions raised by the task runner.
"""


class TaskRunnerError(Exception):
    """Base class for all task runner errors."""


class UnknownCommandError(TaskRunnerError, LookupError):
    """Requested command name is not in the registry."""

    def __init__(self, name: str):
        super().__init__(f"Unknown command: {name}")
        self.name = name


class DuplicateNameError(TaskRunnerError, ValueError):
    """Command name or alias is already registered."""

    def __init__(self, name: str):
        super().__init__(f"Command already registered: {name}")
        self.name = name


class RegistryFrozenError(TaskRunnerError):
    """Registry no longer accepts new commands."""


class ProbeConnectionError(TaskRunnerError, ConnectionError):
    """Probe could not reach the target or timed out waiting for it."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Could not reach {url}: {reason}")
        self.url = url
        self.reason = reason
