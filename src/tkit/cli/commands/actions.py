"""install / remove / update / run commands.

All four share one implementation parameterized by ActionKind.
"""

import click

from tkit.cli.output import ActionFeedback, user_output
from tkit.core.actions import run_action
from tkit.core.context import TkitContext
from tkit.core.errors import CommandFailure
from tkit.core.types import ActionKind

_DONE_VERBS = {
    ActionKind.INSTALL: "Installed",
    ActionKind.REMOVE: "Removed",
    ActionKind.UPDATE: "Updated",
    ActionKind.RUN: "Ran",
}


def _run(ctx: TkitContext, name: str, action: ActionKind, force: bool) -> None:
    tool = ctx.store.get(name)
    feedback = ActionFeedback(name, action.value, len(tool.commands_for(action)))

    try:
        outcome = run_action(
            ctx.store,
            ctx.executor,
            name,
            action,
            force=force,
            on_step=feedback.on_step,
            on_output=feedback.on_output,
        )
    except CommandFailure:
        feedback.finish(success=False)
        raise

    if outcome.skipped:
        user_output(
            click.style("Skipped: ", fg="yellow")
            + f"{outcome.skipped_reason}. Use --force to {action.value} anyway."
        )
        return

    feedback.finish(success=True)
    if outcome.report is not None and outcome.report.total_steps == 0:
        user_output(
            click.style("Note: ", fg="yellow") + f"no {action.value} commands defined for '{name}'"
        )
    user_output(click.style("✓", fg="green") + f" {_DONE_VERBS[action]} {name}")


def _make_action_command(action: ActionKind, help_text: str) -> click.Command:
    @click.command(action.value, help=help_text)
    @click.argument("name")
    @click.option("--force", is_flag=True, help="Run even if the installed state says not to.")
    @click.pass_obj
    def command(ctx: TkitContext, name: str, force: bool) -> None:
        _run(ctx, name, action, force)

    return command


install_cmd = _make_action_command(ActionKind.INSTALL, "Run a tool's install commands.")
remove_cmd = _make_action_command(ActionKind.REMOVE, "Run a tool's remove commands.")
update_cmd = _make_action_command(ActionKind.UPDATE, "Run a tool's update commands.")
run_cmd = _make_action_command(ActionKind.RUN, "Run a tool's run commands.")
