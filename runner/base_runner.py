"""
Base task runner with consoles, loggers and command bookkeeping.
"""

from rich.console import Console
from rich.logging import RichHandler
from datetime import datetime
from typing import Any, Dict, List, Optional
import logging

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)

def _setup_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """Create a properly configured logger with Rich handler."""
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            markup=True,
            show_time=False
        )
        logger.addHandler(handler)
    logger.propagate = False

    return logger

command_logger = _setup_logger("commands", logging.INFO)
action_logger = _setup_logger("actions", logging.INFO)
error_logger = _setup_logger("errors", logging.ERROR)


class BaseTaskRunner:
    """
    Core task runner state shared by all action mixins.

    Holds the output consoles so that tests can capture what an action
    prints, and records every executed command.
    """

    def __init__(self, out: Optional[Console] = None, err: Optional[Console] = None):
        self.out = out or console
        self.err = err or err_console

        self.command_history: List[Dict[str, Any]] = []
        self.action_count: int = 0

    # ==================== Logging ====================

    def log_command(self, cmd: str, status: int, error: Optional[str] = None):
        """Record a dispatched command and its exit status."""
        self.command_history.append({
            'timestamp': datetime.now().isoformat(),
            'command': cmd,
            'status': status,
            'error': error,
            'action_id': self.action_count
        })
        self.action_count += 1

        if status == 0:
            command_logger.info(f"[{self.action_count}] {cmd}")
        else:
            error_logger.error(f"[{self.action_count}] FAILED: {cmd} - {error or f'exit {status}'}")

    def log_action(self, action: str, details: str = "", success: bool = True):
        """Log runner actions (help, probe)."""
        if success:
            action_logger.info(f"Action: {action} - {details}")
        else:
            error_logger.error(f"Action Failed: {action} - {details}")
