import click

from tkit.cli.output import user_output
from tkit.core.context import TkitContext


@click.command("push")
@click.pass_obj
def push_cmd(ctx: TkitContext) -> None:
    """Upload local tools to GitHub, overwriting the remote copy."""
    result = ctx.sync.push()
    action = "Created" if result.created else "Updated"
    user_output(
        click.style("✓", fg="green") + f" {action} {result.repo} ({result.fingerprint})"
    )
