#!/usr/bin/env python3
"""
Task runner for the local HTTP server.
Entry point: `python main.py [help|check]`.
"""

from typing import List, Optional
import sys
import traceback

from rich.console import Console
from rich.markup import escape

from runner import (
    BaseTaskRunner,
    ProbeMixin,
    ProbeTarget,
    DEFAULT_PROBE_TARGET,
    DEFAULT_PROBE_TIMEOUT,
    UnknownCommandError,
    console,
    err_console
)
from commands import CommandRegistry, build_command_registry

HELP_HEADER = "Available targets:"


def run_help(registry: CommandRegistry, out: Optional[Console] = None) -> int:
    """
    Print the list of registered targets.

    Args:
        registry: Registry whose entries are listed in registration order
        out: Console to write to (stdout by default)

    Returns:
        Always 0
    """
    out = out or console
    out.out(HELP_HEADER, highlight=False)

    for name, description in registry.list():
        if not description.endswith('.'):
            description += '.'
        out.out(f"  - {name}: {description}", highlight=False)

    return 0


def dispatch(registry: CommandRegistry, argv: List[str],
             err: Optional[Console] = None, out: Optional[Console] = None) -> int:
    """
    Run the command named by argv[0].

    No argument means `help`. A registered `help` action takes precedence,
    otherwise the registry listing is printed. Anything after the command
    name is ignored.

    Returns:
        Exit status of the action, or 1 for an unknown command
    """
    err = err or err_console
    cmd = argv[0] if argv else 'help'

    if cmd == 'help' and cmd not in registry:
        return run_help(registry, out)

    try:
        action = registry.resolve(cmd)
    except UnknownCommandError:
        err.print(f"[red]Unknown command:[/red] {escape(cmd)}")
        usage = escape(f"[{'|'.join(registry.names())}]")
        err.print(f"[dim]Usage: http-task-runner {usage}[/dim]")
        return 1

    return action()


class TaskRunner(BaseTaskRunner, ProbeMixin):
    """
    Complete task runner combining all mixins.
    Its registry is built once from COMMAND_SPECS and frozen.
    """

    def __init__(self, target: ProbeTarget = DEFAULT_PROBE_TARGET,
                 timeout: float = DEFAULT_PROBE_TIMEOUT,
                 out: Optional[Console] = None,
                 err: Optional[Console] = None):
        super().__init__(out=out, err=err)
        self.probe_target = target
        self.probe_timeout = timeout
        self.registry = build_command_registry(self)

    def help(self) -> int:
        """Display this help message."""
        status = run_help(self.registry, self.out)
        self.log_action("help", "overview", success=True)
        return status

    def run(self, argv: List[str]) -> int:
        """Dispatch argv and record the outcome."""
        cmd = argv[0] if argv else 'help'
        status = dispatch(self.registry, argv, self.err, self.out)

        if cmd not in self.registry:
            self.log_command(cmd, status, error="Unknown command")
        else:
            self.log_command(cmd, status)

        return status


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = list(sys.argv[1:] if argv is None else argv)

    try:
        return TaskRunner().run(args)

    except KeyboardInterrupt:
        err_console.print("\n[yellow]Interrupted[/yellow]")
        return 130

    except Exception as e:
        err_console.print(f"[bold red]Fatal error:[/bold red] {escape(str(e))}")
        err_console.print("[dim]" + escape(traceback.format_exc()) + "[/dim]")
        return 1


if __name__ == '__main__':
    sys.exit(main())
