"""GitHub sync commands."""

import click

from tkit.cli.commands.sync.pull_cmd import pull_cmd
from tkit.cli.commands.sync.push_cmd import push_cmd
from tkit.cli.commands.sync.repo_cmd import create_repo_cmd, list_repos_cmd
from tkit.cli.commands.sync.setup_cmd import setup_cmd
from tkit.cli.commands.sync.status_cmd import status_cmd
from tkit.cli.commands.sync.token_cmd import auto_sync_cmd, update_token_cmd


@click.group("sync")
def sync_group() -> None:
    """Back up and restore tools with a GitHub repository."""
    pass


# Register subcommands
sync_group.add_command(setup_cmd)
sync_group.add_command(push_cmd)
sync_group.add_command(pull_cmd)
sync_group.add_command(status_cmd)
sync_group.add_command(create_repo_cmd)
sync_group.add_command(list_repos_cmd)
sync_group.add_command(update_token_cmd)
sync_group.add_command(auto_sync_cmd)
