import click

from tkit.cli.ensure import Ensure
from tkit.cli.output import user_output
from tkit.core.context import TkitContext
from tkit.core.errors import DuplicateName
from tkit.core.types import ActionKind, Tool


def _prompt_commands(action: ActionKind) -> tuple[str, ...]:
    """Prompt for commands one per line until an empty line."""
    heading = click.style(f"{action.value.capitalize()} commands", bold=True)
    user_output(heading + " (empty line to finish):")
    commands: list[str] = []
    while True:
        command = click.prompt(f"  {len(commands) + 1}", default="", show_default=False)
        if not command.strip():
            return tuple(commands)
        commands.append(command.strip())


@click.command("add")
@click.argument("name")
@click.option("-d", "--description", help="Short description of the tool.")
@click.option("--install", "install_cmds", multiple=True, help="Install command (repeatable).")
@click.option("--remove", "remove_cmds", multiple=True, help="Remove command (repeatable).")
@click.option("--update", "update_cmds", multiple=True, help="Update command (repeatable).")
@click.option("--run", "run_cmds", multiple=True, help="Run command (repeatable).")
@click.pass_obj
def add_cmd(
    ctx: TkitContext,
    name: str,
    description: str | None,
    install_cmds: tuple[str, ...],
    remove_cmds: tuple[str, ...],
    update_cmds: tuple[str, ...],
    run_cmds: tuple[str, ...],
) -> None:
    """Add a tool to the registry.

    Commands are taken from the flags when any is given; otherwise they are
    prompted for interactively, one per line.
    """
    name = Ensure.valid_tool_name(name)
    if name in ctx.store.registry.tools:
        raise DuplicateName(name)

    commands = {
        ActionKind.INSTALL: install_cmds,
        ActionKind.REMOVE: remove_cmds,
        ActionKind.UPDATE: update_cmds,
        ActionKind.RUN: run_cmds,
    }

    interactive = description is None and not any(commands.values())
    if interactive:
        user_output(f"Adding tool {click.style(name, bold=True)}")
        description = click.prompt("Description", default="", show_default=False)
        commands = {action: _prompt_commands(action) for action in ActionKind}

    tool = Tool(
        name=name,
        description=description.strip() if description and description.strip() else None,
        commands={
            action: tuple(c.strip() for c in cmds if c.strip()) for action, cmds in commands.items()
        },
    )
    ctx.store.add(tool)

    user_output(click.style("✓", fg="green") + f" Added tool '{name}'")
    if not tool.commands_for(ActionKind.INSTALL):
        user_output(click.style("  Note: ", fg="yellow") + "no install commands defined")
