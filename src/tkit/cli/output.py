"""Output utilities for CLI commands with clear intent.

user_output goes to stderr (status, progress, errors); machine_output goes to
stdout (data meant to be piped). Tables are rendered with rich on stderr.
"""

import time
from typing import Any

import click
from rich.console import Console

from tkit.core.shell.abc import ShellEvent


def user_output(message: Any = "", nl: bool = True) -> None:
    """Output informational message for human users (stderr)."""
    click.echo(message, nl=nl, err=True)


def machine_output(message: Any = "", nl: bool = True) -> None:
    """Output structured data for scripts and pipes (stdout)."""
    click.echo(message, nl=nl)


def table_console() -> Console:
    return Console(stderr=True, width=200)


def format_duration(seconds: float) -> str:
    """Format a duration as "850ms", "12.3s" or "2m 05s"."""
    if seconds < 1:
        return f"{int(seconds * 1000)}ms"
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes, remainder = divmod(int(seconds), 60)
    return f"{minutes}m {remainder:02d}s"


class ActionFeedback:
    """Live print-based feedback while an action's commands run.

    Visual output format:
    - Start: `--- install git ---` (bold), printed before the first command
    - Step: `[1/2] $ sudo apt-get install -y git` (cyan)
    - Output lines: as-is (stderr lines dimmed)
    - End: `--- Done (1.2s) ---` (green) or `--- Failed (1.2s) ---` (red)

    Nothing is printed if no command ran.
    """

    def __init__(self, tool: str, action: str, total_steps: int) -> None:
        self._tool = tool
        self._action = action
        self._total_steps = total_steps
        self._start_time: float | None = None

    def on_step(self, index: int, command: str) -> None:
        if self._start_time is None:
            self._start_time = time.time()
            user_output(click.style(f"--- {self._action} {self._tool} ---", bold=True))
        prefix = f"[{index + 1}/{self._total_steps}]"
        user_output(click.style(f"{prefix} $ {command}", fg="cyan"))

    def on_output(self, event: ShellEvent) -> None:
        if event.stream == "stderr":
            user_output(click.style(event.content, dim=True))
        else:
            user_output(event.content)

    def finish(self, success: bool) -> None:
        if self._start_time is None:
            return
        duration = format_duration(time.time() - self._start_time)
        if success:
            user_output(click.style(f"--- Done ({duration}) ---", fg="green"))
        else:
            user_output(click.style(f"--- Failed ({duration}) ---", fg="red"))
