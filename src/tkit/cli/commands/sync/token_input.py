import click

from tkit.cli.ensure import Ensure
from tkit.core.paths import TOKEN_ENV, get_env_token


def resolve_token_input(token: str | None) -> str:
    """Token from the --token flag, else a hidden prompt, else TKIT_GITHUB_TOKEN.

    An empty answer to the prompt falls back to the environment variable. When
    stdin is not a terminal and the variable is set, it is used without prompting.
    """
    if token is not None:
        return Ensure.not_empty(token, "--token cannot be empty")

    env_token = get_env_token()
    if env_token and not _stdin_is_interactive():
        return env_token

    hint = f" (leave empty to use ${TOKEN_ENV})" if env_token else ""
    entered = click.prompt(
        f"GitHub personal access token{hint}",
        default="",
        show_default=False,
        hide_input=True,
        err=True,
    )
    return Ensure.not_empty(
        entered or env_token,
        f"A GitHub token is required. Pass --token or set {TOKEN_ENV}.",
    )


def _stdin_is_interactive() -> bool:
    return click.get_text_stream("stdin").isatty()
