import click

from tkit.cli.output import user_output
from tkit.core.context import TkitContext
from tkit.core.examples import STARTER_TOOLS
from tkit.core.types import Registry


@click.command("init")
@click.option(
    "--with-examples/--no-examples",
    default=True,
    help="Seed the registry with example tools (git, docker, node, python).",
)
@click.option("--force", is_flag=True, help="Replace an existing configuration.")
@click.pass_obj
def init_cmd(ctx: TkitContext, with_examples: bool, force: bool) -> None:
    """Create a fresh tool registry."""
    path = ctx.store.storage.path()
    if ctx.store.exists() and not force:
        user_output(click.style("Configuration already exists at ", fg="yellow") + str(path))
        user_output("Use --force to replace it, or 'tkit reset' to start over.")
        raise SystemExit(1)

    tools = {tool.name: tool for tool in STARTER_TOOLS} if with_examples else {}
    ctx.store.initialize(Registry(tools=tools))

    user_output(click.style("✓", fg="green") + f" Created configuration at {path}")
    for name in sorted(tools):
        user_output(f"  + {click.style(name, fg='green')} ({tools[name].description})")

    user_output()
    user_output("Next steps:")
    user_output("  • Run 'tkit add <name>' to add a tool")
    user_output("  • Run 'tkit sync setup <owner/repo>' to back up to GitHub")
    user_output("  • Run 'tkit examples' to see more tool ideas")
