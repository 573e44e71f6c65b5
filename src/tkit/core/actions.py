"""Running a tool action against the registry.

Ties CommandExecutor to ConfigStore: decides whether an action should run,
executes it, and records the installed flag on success.
"""

import logging
from dataclasses import dataclass

from tkit.core.config_store import ConfigStore
from tkit.core.errors import CommandFailure
from tkit.core.executor import CommandExecutor, ExecutionReport, OutputListener, StepListener
from tkit.core.types import ActionKind, Tool

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActionOutcome:
    """Result of run_action.

    Exactly one of report and skipped_reason is set.
    """

    tool: Tool
    action: ActionKind
    report: ExecutionReport | None = None
    skipped_reason: str | None = None

    @property
    def skipped(self) -> bool:
        return self.skipped_reason is not None


def skip_reason(tool: Tool, action: ActionKind) -> str | None:
    """Return why action should not run for tool, or None if it should run."""
    if action is ActionKind.INSTALL and tool.installed:
        return f"'{tool.name}' is already installed"
    if action in (ActionKind.REMOVE, ActionKind.UPDATE) and not tool.installed:
        return f"'{tool.name}' is not installed"
    return None


def run_action(
    store: ConfigStore,
    executor: CommandExecutor,
    name: str,
    action: ActionKind,
    *,
    force: bool = False,
    on_step: StepListener | None = None,
    on_output: OutputListener | None = None,
) -> ActionOutcome:
    """Run one action of a registered tool.

    Args:
        store: Loaded config store
        executor: Executor that runs the command list
        name: Tool name
        action: Action to run
        force: Run even when the installed flag says there is nothing to do
        on_step: Forwarded to the executor
        on_output: Forwarded to the executor

    Returns:
        ActionOutcome with the execution report, or the reason it was skipped

    Raises:
        NotFound: If no tool has this name
        CommandFailure: If a command exits non-zero; the installed flag is
            left unchanged
    """
    tool = store.get(name)

    reason = skip_reason(tool, action)
    if reason is not None and not force:
        logger.debug("Skipping %s of %s: %s", action.value, name, reason)
        return ActionOutcome(tool=tool, action=action, skipped_reason=reason)

    report = executor.execute(
        name,
        action,
        tool.commands_for(action),
        on_step=on_step,
        on_output=on_output,
    )

    if report.failed_index is not None:
        failed = report.steps[report.failed_index]
        raise CommandFailure(
            tool=name,
            action=action.value.capitalize(),
            index=failed.index,
            exit_code=failed.exit_code,
            command=failed.command,
        )

    if action is ActionKind.INSTALL and not tool.installed:
        tool = store.set_installed(name, True)
    elif action is ActionKind.REMOVE and tool.installed:
        tool = store.set_installed(name, False)

    return ActionOutcome(tool=tool, action=action, report=report)
