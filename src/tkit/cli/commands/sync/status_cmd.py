import click
from rich.table import Table

from tkit.cli.output import table_console, user_output
from tkit.core.context import TkitContext
from tkit.core.types import SyncState

_STATE_COLORS = {
    SyncState.IN_SYNC: "green",
    SyncState.LOCAL_AHEAD: "yellow",
    SyncState.REMOTE_AHEAD: "yellow",
    SyncState.DIVERGED: "red",
    SyncState.UNCONFIGURED: "white",
}


@click.command("status")
@click.pass_obj
def status_cmd(ctx: TkitContext) -> None:
    """Compare local tools with the copy on GitHub."""
    status = ctx.sync.status()

    table = Table(show_header=False)
    table.add_column("field", style="bold", no_wrap=True)
    table.add_column("value")
    color = _STATE_COLORS[status.state]
    table.add_row("state", f"[{color}]{status.state.value}[/{color}]")
    table.add_row("repository", status.repo or "-")
    table.add_row("auto-sync", "on" if status.auto_sync else "off")
    table.add_row("last synced", status.last_synced_at or "never")
    table.add_row("local", status.local_fingerprint)
    table.add_row("remote", status.remote_fingerprint or "-")
    table_console().print(table)

    if status.state is SyncState.DIVERGED:
        user_output(click.style("Warning: ", fg="yellow") + status.detail)
    else:
        user_output(status.detail)
