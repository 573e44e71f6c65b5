import itertools

import click

from tkit.cli.output import user_output
from tkit.core.examples import CATALOG, CatalogEntry


def _format_add_command(entry: CatalogEntry) -> str:
    parts = [f"tkit add {entry.name}", f'-d "{entry.description}"']
    parts.extend(f'--install "{command}"' for command in entry.install)
    parts.extend(f'--run "{command}"' for command in entry.run)
    return " ".join(parts)


@click.command("examples")
def examples_cmd() -> None:
    """Show example tool configurations."""
    user_output(click.style("Tool Configuration Examples:", fg="blue", bold=True))

    for category, entries in itertools.groupby(CATALOG, key=lambda entry: entry.category):
        user_output()
        user_output(click.style(f"{category}:", fg="cyan", bold=True))
        for entry in entries:
            user_output(f"  {click.style(entry.name, fg='green')}: {entry.description}")
            for command in entry.install:
                user_output(f"    Install: {command}")
            for command in entry.run:
                user_output(f"    Run: {command}")
            user_output(click.style(f"    $ {_format_add_command(entry)}", dim=True))

    user_output()
    user_output(click.style("Usage:", fg="yellow", bold=True))
    user_output("  Copy a 'tkit add' line above, adjusting commands as needed.")
    user_output("  Run 'tkit list' to see your configured tools.")
