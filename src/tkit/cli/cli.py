import logging
import os

import click

from tkit import __version__
from tkit.cli.commands.actions import install_cmd, remove_cmd, run_cmd, update_cmd
from tkit.cli.commands.add import add_cmd
from tkit.cli.commands.delete import delete_cmd
from tkit.cli.commands.examples import examples_cmd
from tkit.cli.commands.init import init_cmd
from tkit.cli.commands.list_cmd import list_cmd
from tkit.cli.commands.reset import reset_cmd
from tkit.cli.commands.search import search_group
from tkit.cli.commands.sync import sync_group
from tkit.cli.output import user_output
from tkit.core.context import create_context
from tkit.core.errors import CommandFailure, TkitError
from tkit.core.paths import DEBUG_ENV

logger = logging.getLogger(__name__)

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags

INTERRUPTED_EXIT_CODE = 130


def configure_debug_logging() -> None:
    logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")


def exit_code_for(error: TkitError) -> int:
    """Process exit status for a domain error.

    A failed command propagates its own exit code so scripts can react to it.
    """
    if isinstance(error, CommandFailure):
        code = error.exit_code
        return code if 0 < code < 256 else 1
    return error.exit_code


class TkitGroup(click.Group):
    """Root group that turns domain errors into a styled message and exit status."""

    def invoke(self, ctx: click.Context) -> object:
        try:
            return super().invoke(ctx)
        except TkitError as e:
            logger.debug("Command failed", exc_info=True)
            user_output(click.style("Error: ", fg="red") + str(e))
            raise SystemExit(exit_code_for(e)) from e
        except OSError as e:
            logger.debug("I/O failure", exc_info=True)
            user_output(click.style("Error: ", fg="red") + str(e))
            raise SystemExit(1) from e
        except KeyboardInterrupt as e:
            user_output()
            user_output(click.style("Interrupted.", fg="yellow"))
            raise SystemExit(INTERRUPTED_EXIT_CODE) from e


@click.group(cls=TkitGroup, context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, prog_name="tkit")
@click.option("--debug", is_flag=True, help=f"Enable debug logging (same as {DEBUG_ENV}=1).")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """Manage install, remove, update and run commands for your tools."""
    if debug or os.getenv(DEBUG_ENV):
        configure_debug_logging()
    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = create_context()
        ctx.call_on_close(ctx.obj.close)


cli.add_command(init_cmd)
cli.add_command(add_cmd)
cli.add_command(delete_cmd)
cli.add_command(list_cmd)
cli.add_command(install_cmd)
cli.add_command(remove_cmd)
cli.add_command(update_cmd)
cli.add_command(run_cmd)
cli.add_command(search_group)
cli.add_command(sync_group)
cli.add_command(reset_cmd)
cli.add_command(examples_cmd)


def main() -> None:
    """CLI entry point used by the `tkit` console script."""
    cli()
