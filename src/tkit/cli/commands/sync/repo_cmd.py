import click
from rich.table import Table

from tkit.cli.output import table_console, user_output
from tkit.core.context import TkitContext


@click.command("create-repo")
@click.argument("name")
@click.option("--token", help="GitHub token (defaults to the stored one).")
@click.option(
    "--private/--public", default=True, help="Repository visibility.", show_default=True
)
@click.pass_obj
def create_repo_cmd(ctx: TkitContext, name: str, token: str | None, private: bool) -> None:
    """Create a GitHub repository and configure it for sync."""
    info = ctx.sync.create_repo(name, private=private, token=token)
    visibility = "private" if info.private else "public"
    user_output(
        click.style("✓", fg="green") + f" Created {visibility} repository {info.full_name}"
    )
    user_output(f"  {info.html_url}")
    if ctx.store.exists() and ctx.store.registry.sync.repo == info.full_name:
        user_output("  Sync configured. Run 'tkit sync push' to upload your configuration.")


@click.command("list-repos")
@click.option("--token", help="GitHub token (defaults to the stored one).")
@click.pass_obj
def list_repos_cmd(ctx: TkitContext, token: str | None) -> None:
    """List your GitHub repositories."""
    repos = ctx.sync.list_repos(token=token)
    if not repos:
        user_output("No repositories found.")
        return

    configured = ctx.store.registry.sync.repo if ctx.store.exists() else None

    table = Table(show_header=True, header_style="bold")
    table.add_column("repository", style="cyan", no_wrap=True)
    table.add_column("visibility", no_wrap=True)
    table.add_column("description")
    for repo in repos:
        name = repo.full_name
        if name == configured:
            name += " [green](sync)[/green]"
        table.add_row(name, "private" if repo.private else "public", repo.description or "")
    table_console().print(table)
