import click

from tkit.cli.output import user_output
from tkit.core.context import TkitContext


@click.command("pull")
@click.pass_obj
def pull_cmd(ctx: TkitContext) -> None:
    """Replace local tools with the copy on GitHub.

    The current configuration file is backed up first.
    """
    result = ctx.sync.pull()
    if result.backup_path is not None:
        user_output(f"Backed up previous configuration to {result.backup_path}")
    user_output(
        click.style("✓", fg="green")
        + f" Pulled {result.tool_count} tools from {result.repo} ({result.fingerprint})"
    )
