import click

from tkit.cli.output import user_output
from tkit.core.context import TkitContext


@click.command("reset")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation.")
@click.pass_obj
def reset_cmd(ctx: TkitContext, yes: bool) -> None:
    """Delete the registry, stored token and pull backup."""
    has_token = ctx.credentials.get_token() is not None
    if not ctx.store.exists() and not has_token:
        user_output("Nothing to reset.")
        return

    if not yes:
        warning = "This deletes all configured tools and the stored token."
        user_output(click.style(warning, fg="yellow"))
        if not click.confirm("Continue?", default=False, err=True):
            user_output("Reset cancelled.")
            return

    # Credentials first so the store can remove the now-empty config directory
    ctx.credentials.clear()
    ctx.store.destroy()
    user_output(click.style("✓", fg="green") + " Configuration reset.")
    user_output("Run 'tkit init' to start again.")
