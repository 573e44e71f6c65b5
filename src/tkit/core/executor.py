"""Sequential execution of a tool action's command list."""

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from tkit.core.shell.abc import Shell, ShellEvent
from tkit.core.types import ActionKind

logger = logging.getLogger(__name__)

StepListener = Callable[[int, str], None]
OutputListener = Callable[[ShellEvent], None]


@dataclass(frozen=True)
class StepResult:
    """Outcome of one command in the sequence.

    Attributes:
        index: Zero-based position in the sequence
        command: The command string as configured
        exit_code: Exit status reported by the shell
        duration_seconds: Wall-clock time the command took
    """

    index: int
    command: str
    exit_code: int
    duration_seconds: float


@dataclass(frozen=True)
class ExecutionReport:
    """Result of running one action of one tool.

    Commands after failed_index were never started.
    """

    tool: str
    action: ActionKind
    total_steps: int
    steps: tuple[StepResult, ...]
    failed_index: int | None

    @property
    def success(self) -> bool:
        return self.failed_index is None

    @property
    def exit_code(self) -> int | None:
        """Exit code of the failing command, None on success."""
        if self.failed_index is None:
            return None
        return self.steps[self.failed_index].exit_code

    @property
    def failed_command(self) -> str | None:
        if self.failed_index is None:
            return None
        return self.steps[self.failed_index].command


class CommandExecutor:
    """Runs command strings strictly in order and halts at the first failure.

    Output lines are relayed to on_output while each command runs. Nothing is
    retried: tool commands can have side effects that are unsafe to repeat.
    """

    def __init__(self, shell: Shell) -> None:
        self._shell = shell

    def execute(
        self,
        tool: str,
        action: ActionKind,
        commands: Sequence[str],
        *,
        on_step: StepListener | None = None,
        on_output: OutputListener | None = None,
    ) -> ExecutionReport:
        """Execute commands for tool/action.

        Args:
            tool: Tool name (for reporting)
            action: Action kind being run
            commands: Ordered command strings; empty means nothing to do
            on_step: Called with (index, command) before each command starts
            on_output: Called with every stdout/stderr line as it arrives

        Returns:
            ExecutionReport describing every step that ran
        """
        steps: list[StepResult] = []

        for index, command in enumerate(commands):
            if on_step is not None:
                on_step(index, command)

            start_time = time.time()
            exit_code = self._run_one(command, on_output)
            steps.append(StepResult(index, command, exit_code, time.time() - start_time))

            if exit_code != 0:
                logger.debug(
                    "%s %s halted at step %d with exit code %d",
                    action.value,
                    tool,
                    index,
                    exit_code,
                )
                return ExecutionReport(tool, action, len(commands), tuple(steps), index)

        return ExecutionReport(tool, action, len(commands), tuple(steps), None)

    def _run_one(self, command: str, on_output: OutputListener | None) -> int:
        exit_code: int | None = None
        for event in self._shell.execute_streaming(command):
            if event.stream == "exit":
                exit_code = event.exit_code
            elif on_output is not None:
                on_output(event)

        if exit_code is None:
            msg = f"Shell produced no exit status for command: {command}"
            raise RuntimeError(msg)
        return exit_code
