import click
from rich.table import Table

from tkit.cli.output import machine_output, table_console, user_output
from tkit.core.context import TkitContext
from tkit.core.types import ActionKind, Tool


def _format_status(tool: Tool) -> str:
    if tool.installed:
        return "[green]installed[/green]"
    return "[dim]not installed[/dim]"


def _format_actions(tool: Tool) -> str:
    counts = [
        f"{action.value}:{len(tool.commands_for(action))}"
        for action in ActionKind
        if tool.commands_for(action)
    ]
    return " ".join(counts) if counts else "[dim]none[/dim]"


@click.command("list")
@click.option("--names", "names_only", is_flag=True, help="Print tool names only, one per line.")
@click.pass_obj
def list_cmd(ctx: TkitContext, names_only: bool) -> None:
    """List configured tools."""
    tools = ctx.store.list()

    if names_only:
        for tool in tools:
            machine_output(tool.name)
        return

    if not tools:
        user_output("No tools configured. Use 'tkit add <name>' to add one.")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("tool", style="cyan", no_wrap=True)
    table.add_column("status", no_wrap=True)
    table.add_column("commands", no_wrap=True)
    table.add_column("description")

    for tool in tools:
        table.add_row(
            tool.name, _format_status(tool), _format_actions(tool), tool.description or ""
        )

    table_console().print(table)

    sync = ctx.store.registry.sync
    if sync.is_configured:
        auto = "on" if sync.auto_sync else "off"
        user_output(f"Synced with {sync.repo} (auto-sync {auto})")
