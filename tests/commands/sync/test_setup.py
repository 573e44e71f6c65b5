"""Tests for `tkit sync setup`."""

import pytest
from click.testing import CliRunner

from tests.test_utils.registry_helpers import make_store, make_tool
from tkit.cli.cli import cli
from tkit.core.context import TkitContext
from tkit.core.credentials import InMemoryCredentialStore
from tkit.core.github.fake import FakeRemoteRepository
from tkit.core.paths import TOKEN_ENV


def _context(remote: FakeRemoteRepository, credentials: InMemoryCredentialStore) -> TkitContext:
    return TkitContext.for_test(
        store=make_store(make_tool("git")),
        credentials=credentials,
        remote_factory=remote.connect,
    )


def test_setup_with_token_flag_stores_repo_and_token() -> None:
    remote = FakeRemoteRepository(repos={"octocat/tools": {}})
    credentials = InMemoryCredentialStore()
    ctx = _context(remote, credentials)

    result = CliRunner().invoke(
        cli, ["sync", "setup", "octocat/tools", "--token", "ghp_flag"], obj=ctx
    )

    assert result.exit_code == 0, result.output
    assert "Sync configured with octocat/tools" in result.output
    assert "Auto-sync: off" in result.output
    assert ctx.store.registry.sync.repo == "octocat/tools"
    assert credentials.get_token() == "ghp_flag"
    assert remote.tokens_used == ["ghp_flag"]


def test_setup_prompts_for_token() -> None:
    remote = FakeRemoteRepository(repos={"octocat/tools": {}})
    credentials = InMemoryCredentialStore()
    ctx = _context(remote, credentials)

    result = CliRunner().invoke(
        cli, ["sync", "setup", "octocat/tools", "--auto-sync"], obj=ctx, input="ghp_typed\n"
    )

    assert result.exit_code == 0, result.output
    assert credentials.get_token() == "ghp_typed"
    assert "Auto-sync: on" in result.output
    assert ctx.store.registry.sync.auto_sync is True


def test_empty_prompt_falls_back_to_environment_token(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(TOKEN_ENV, "ghp_env")
    monkeypatch.setattr(
        "tkit.cli.commands.sync.token_input._stdin_is_interactive", lambda: True
    )
    remote = FakeRemoteRepository(repos={"octocat/tools": {}})
    credentials = InMemoryCredentialStore()
    ctx = _context(remote, credentials)

    result = CliRunner().invoke(cli, ["sync", "setup", "octocat/tools"], obj=ctx, input="\n")

    assert result.exit_code == 0, result.output
    assert "leave empty to use" in result.output
    assert credentials.get_token() == "ghp_env"


def test_noninteractive_setup_uses_environment_token_without_prompting(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv(TOKEN_ENV, "ghp_env")
    remote = FakeRemoteRepository(repos={"octocat/tools": {}})
    credentials = InMemoryCredentialStore()
    ctx = _context(remote, credentials)

    result = CliRunner().invoke(cli, ["sync", "setup", "octocat/tools"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "personal access token" not in result.output
    assert credentials.get_token() == "ghp_env"
    assert remote.tokens_used == ["ghp_env"]


def test_setup_without_any_token_fails() -> None:
    ctx = _context(FakeRemoteRepository(repos={"octocat/tools": {}}), InMemoryCredentialStore())

    result = CliRunner().invoke(cli, ["sync", "setup", "octocat/tools"], obj=ctx, input="\n")

    assert result.exit_code == 1
    assert "A GitHub token is required" in result.output
    assert ctx.store.registry.sync.repo is None


def test_setup_missing_repo_suggests_create() -> None:
    ctx = _context(FakeRemoteRepository(), InMemoryCredentialStore())

    result = CliRunner().invoke(cli, ["sync", "setup", "octocat/tools", "--token", "t"], obj=ctx)

    assert result.exit_code == 1
    assert "Pass --create" in result.output
    assert ctx.store.registry.sync.repo is None
    assert ctx.credentials.get_token() is None


def test_setup_create_makes_private_repo() -> None:
    remote = FakeRemoteRepository()
    ctx = _context(remote, InMemoryCredentialStore())

    result = CliRunner().invoke(
        cli, ["sync", "setup", "octocat/new-tools", "--token", "t", "--create"], obj=ctx
    )

    assert result.exit_code == 0, result.output
    assert remote.created_repos == [("octocat/new-tools", True)]
    assert "Created private repository https://github.com/octocat/new-tools" in result.output
    assert ctx.store.registry.sync.repo == "octocat/new-tools"


def test_setup_rejects_malformed_repo() -> None:
    ctx = _context(FakeRemoteRepository(), InMemoryCredentialStore())

    result = CliRunner().invoke(cli, ["sync", "setup", "tools", "--token", "t"], obj=ctx)

    assert result.exit_code == 1
    assert "Expected format: owner/name" in result.output


def test_setup_with_rejected_token_fails() -> None:
    remote = FakeRemoteRepository(repos={"octocat/tools": {}}, accepted_tokens={"good"})
    ctx = _context(remote, InMemoryCredentialStore())

    result = CliRunner().invoke(cli, ["sync", "setup", "octocat/tools", "--token", "bad"], obj=ctx)

    assert result.exit_code == 1
    assert "rejected the token" in result.output
    assert ctx.credentials.get_token() is None


def test_setup_before_init_fails_without_prompting() -> None:
    ctx = TkitContext.for_test()

    result = CliRunner().invoke(cli, ["sync", "setup", "octocat/tools"], obj=ctx)

    assert result.exit_code == 1
    assert "tkit init" in result.output
    assert "token" not in result.output.lower()
