import click

from tkit.cli.output import user_output
from tkit.core.context import TkitContext


@click.command("delete")
@click.argument("name")
@click.pass_obj
def delete_cmd(ctx: TkitContext, name: str) -> None:
    """Delete a tool from the registry (its commands are not run)."""
    ctx.store.delete(name)
    user_output(click.style("✓", fg="green") + f" Deleted tool '{name}'")
