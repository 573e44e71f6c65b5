import click

from tkit.cli.commands.sync.token_input import resolve_token_input
from tkit.cli.output import user_output
from tkit.core.context import TkitContext


@click.command("setup")
@click.argument("repo")
@click.option("--token", help="GitHub personal access token (prompted for if omitted).")
@click.option("--create", is_flag=True, help="Create the repository if it does not exist.")
@click.option(
    "--private/--public",
    default=True,
    show_default=True,
    help="Visibility of a created repository.",
)
@click.option(
    "--auto-sync/--no-auto-sync",
    default=None,
    help="Push automatically after every change (default: keep current setting).",
)
@click.pass_obj
def setup_cmd(
    ctx: TkitContext,
    repo: str,
    token: str | None,
    create: bool,
    private: bool,
    auto_sync: bool | None,
) -> None:
    """Configure sync with a GitHub repository (owner/name)."""
    # Fail before prompting when there is no registry to attach sync to
    ctx.store.load()
    resolved = resolve_token_input(token)

    user_output(f"Checking access to {repo}...")
    created = ctx.sync.setup(
        repo, resolved, create_missing=create, private=private, auto_sync=auto_sync
    )
    if created is not None:
        visibility = "private" if created.private else "public"
        user_output(
            click.style("✓", fg="green") + f" Created {visibility} repository {created.html_url}"
        )

    settings = ctx.store.registry.sync
    user_output(click.style("✓", fg="green") + f" Sync configured with {settings.repo}")
    user_output(f"  Auto-sync: {'on' if settings.auto_sync else 'off'}")
    user_output("  Run 'tkit sync push' to upload your configuration.")
