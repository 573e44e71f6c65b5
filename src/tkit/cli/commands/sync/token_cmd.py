import click

from tkit.cli.commands.sync.token_input import resolve_token_input
from tkit.cli.output import user_output
from tkit.core.context import TkitContext


@click.command("update-token")
@click.option("--token", help="New GitHub personal access token (prompted for if omitted).")
@click.pass_obj
def update_token_cmd(ctx: TkitContext, token: str | None) -> None:
    """Replace the stored GitHub token."""
    ctx.store.load()
    resolved = resolve_token_input(token)
    ctx.sync.update_token(resolved)
    user_output(click.style("✓", fg="green") + " GitHub token updated")


@click.command("auto-sync")
@click.argument("state", type=click.Choice(["on", "off"]))
@click.pass_obj
def auto_sync_cmd(ctx: TkitContext, state: str) -> None:
    """Turn automatic push after every change on or off."""
    enabled = state == "on"
    ctx.sync.set_auto_sync(enabled)
    user_output(click.style("✓", fg="green") + f" Auto-sync {state}")
