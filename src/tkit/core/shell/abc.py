"""Abstract interface for shell operations."""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Literal

StreamName = Literal["stdout", "stderr", "exit"]


@dataclass(frozen=True)
class ShellEvent:
    """Event emitted while a shell command runs.

    Attributes:
        stream: "stdout" or "stderr" for an output line, "exit" for the final event
        content: The output line without its trailing newline (empty for "exit")
        exit_code: Process exit status, set only on the "exit" event
    """

    stream: StreamName
    content: str
    exit_code: int | None = None


class Shell(ABC):
    """Abstract interface for spawning processes.

    Kept narrow so command execution and binary discovery can be tested
    without invoking a real shell.
    """

    @abstractmethod
    def execute_streaming(self, command: str) -> Iterator[ShellEvent]:
        """Run a shell command string and yield its output as it is produced.

        Yields:
            stdout/stderr line events in arrival order, then exactly one
            "exit" event carrying the exit code
        """
        ...

    @abstractmethod
    def which(self, name: str) -> str | None:
        """Return the absolute path of an executable on PATH, or None."""
        ...

    @abstractmethod
    def capture(self, args: list[str], *, timeout: float) -> tuple[int, str]:
        """Run an argument vector and return (exit_code, stdout).

        Raises:
            RuntimeError: If the program is missing or the timeout expires
        """
        ...
