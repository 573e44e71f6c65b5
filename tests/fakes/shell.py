"""Fake implementation of Shell for testing.

This fake enables testing command execution and binary discovery without
spawning processes.
"""

from collections.abc import Iterator

from tkit.core.shell.abc import Shell, ShellEvent


class FakeShell(Shell):
    """In-memory fake implementation of shell operations.

    Constructor Injection:
    - All state is provided via constructor parameters
    - Only call tracking mutates after construction

    Examples:
        # A command that prints a line and fails
        >>> shell = FakeShell(command_results={"make": (2, ["building"], ["boom"])})
        >>> events = list(shell.execute_streaming("make"))
        >>> assert events[-1].exit_code == 2

        # A binary on PATH with a version
        >>> shell = FakeShell(
        ...     installed_tools={"git": "/usr/bin/git"},
        ...     capture_results={("/usr/bin/git", "--version"): (0, "git version 2.43.0\\n")},
        ... )
    """

    def __init__(
        self,
        *,
        command_results: dict[str, tuple[int, list[str], list[str]]] | None = None,
        default_exit_code: int = 0,
        installed_tools: dict[str, str] | None = None,
        capture_results: dict[tuple[str, ...], tuple[int, str]] | None = None,
        failing_captures: set[tuple[str, ...]] | None = None,
    ) -> None:
        """Initialize fake with predetermined command outcomes.

        Args:
            command_results: Mapping of command string -> (exit_code, stdout lines,
                stderr lines). Commands not in the mapping print nothing and exit
                with default_exit_code.
            default_exit_code: Exit code for commands without a configured result
            installed_tools: Mapping of binary name -> absolute path for which()
            capture_results: Mapping of argument vector -> (exit_code, stdout) for capture()
            failing_captures: Argument vectors for which capture() raises RuntimeError
        """
        self._command_results = command_results or {}
        self._default_exit_code = default_exit_code
        self._installed_tools = installed_tools or {}
        self._capture_results = capture_results or {}
        self._failing_captures = failing_captures or set()
        self._executed_commands: list[str] = []
        self._capture_calls: list[list[str]] = []

    @property
    def executed_commands(self) -> list[str]:
        """Commands passed to execute_streaming(), in order.

        This property is for test assertions only.
        """
        return self._executed_commands.copy()

    @property
    def capture_calls(self) -> list[list[str]]:
        """Argument vectors passed to capture(), in order."""
        return [list(args) for args in self._capture_calls]

    def execute_streaming(self, command: str) -> Iterator[ShellEvent]:
        self._executed_commands.append(command)
        exit_code, stdout, stderr = self._command_results.get(
            command, (self._default_exit_code, [], [])
        )
        for line in stdout:
            yield ShellEvent("stdout", line)
        for line in stderr:
            yield ShellEvent("stderr", line)
        yield ShellEvent("exit", "", exit_code=exit_code)

    def which(self, name: str) -> str | None:
        return self._installed_tools.get(name)

    def capture(self, args: list[str], *, timeout: float) -> tuple[int, str]:
        self._capture_calls.append(list(args))
        key = tuple(args)
        if key in self._failing_captures:
            raise RuntimeError(f"Timed out after {timeout}s while trying to run {args[0]}")
        return self._capture_results.get(key, (0, ""))
