import click
from rich.table import Table

from tkit.cli.output import table_console, user_output
from tkit.core.context import TkitContext
from tkit.core.search.engine import CONFIGURED, SearchMode, SearchReport

DEFAULT_LIMIT = 20


def _render(report: SearchReport, limit: int) -> None:
    for source, reason in report.failures:
        user_output(click.style("Warning: ", fg="yellow") + f"{source} search failed: {reason}")

    if not report.results:
        user_output(f"No matches for '{report.query}'.")
        return

    shown = report.results[:limit]
    table = Table(show_header=True, header_style="bold")
    table.add_column("name", style="cyan", no_wrap=True)
    table.add_column("source", no_wrap=True)
    table.add_column("score", justify="right", no_wrap=True)
    table.add_column("version", no_wrap=True)
    table.add_column("details")

    for result in shown:
        source = f"[green]{result.source}[/green]" if result.source == CONFIGURED else result.source
        table.add_row(
            result.name,
            source,
            f"{result.score:.0f}",
            result.version or "",
            result.path or result.description or "",
        )
    table_console().print(table)

    hidden = len(report.results) - len(shown)
    if hidden > 0:
        user_output(f"... {hidden} more (use --limit to show more)")


def _make_search_command(mode: SearchMode, help_text: str) -> click.Command:
    @click.command(mode.value, help=help_text)
    @click.argument("query")
    @click.option(
        "--limit",
        type=click.IntRange(min=1),
        default=DEFAULT_LIMIT,
        show_default=True,
        help="Maximum number of results to show.",
    )
    @click.pass_obj
    def command(ctx: TkitContext, query: str, limit: int) -> None:
        # Binaries and registries are searchable before `tkit init`
        use_tools = mode is not SearchMode.REMOTE and ctx.store.exists()
        tools = ctx.store.list() if use_tools else []
        report = ctx.search.search(query, mode, tools)
        _render(report, limit)

    return command


@click.group("search")
def search_group() -> None:
    """Fuzzy search for tools."""
    pass


search_group.add_command(
    _make_search_command(SearchMode.LOCAL, "Search configured tools and installed binaries.")
)
search_group.add_command(
    _make_search_command(SearchMode.REMOTE, "Search package registries (apt, snap, PyPI).")
)
search_group.add_command(
    _make_search_command(SearchMode.ALL, "Search local tools and package registries.")
)
