"""Tests for `tkit add`, including interactive entry and auto-sync."""

import httpx
from click.testing import CliRunner

from tests.test_utils.registry_helpers import make_store, make_tool
from tkit.cli.cli import cli
from tkit.core.context import TkitContext
from tkit.core.credentials import InMemoryCredentialStore
from tkit.core.github.fake import FakeRemoteRepository
from tkit.core.github.real import API_URL, HttpGitHub
from tkit.core.sync import REMOTE_PATH
from tkit.core.types import ActionKind, SyncSettings


def test_add_from_flags() -> None:
    ctx = TkitContext.for_test(store=make_store())

    result = CliRunner().invoke(
        cli,
        [
            "add",
            "jq",
            "-d",
            "JSON processor",
            "--install",
            "sudo apt-get install -y jq",
            "--run",
            "jq --version",
            "--run",
            "jq -n 1",
        ],
        obj=ctx,
    )

    assert result.exit_code == 0, result.output
    assert "Added tool 'jq'" in result.output
    tool = ctx.store.get("jq")
    assert tool.description == "JSON processor"
    assert tool.commands_for(ActionKind.INSTALL) == ("sudo apt-get install -y jq",)
    assert tool.commands_for(ActionKind.RUN) == ("jq --version", "jq -n 1")
    assert tool.commands_for(ActionKind.REMOVE) == ()
    assert tool.installed is False


def test_add_prompts_when_no_flags_given() -> None:
    ctx = TkitContext.for_test(store=make_store())
    answers = [
        "JSON processor",
        "sudo apt-get install -y jq",
        "",
        "",
        "",
        "jq --version",
        "",
    ]

    result = CliRunner().invoke(cli, ["add", "jq"], obj=ctx, input="\n".join(answers) + "\n")

    assert result.exit_code == 0, result.output
    tool = ctx.store.get("jq")
    assert tool.description == "JSON processor"
    assert tool.commands_for(ActionKind.INSTALL) == ("sudo apt-get install -y jq",)
    assert tool.commands_for(ActionKind.UPDATE) == ()
    assert tool.commands_for(ActionKind.RUN) == ("jq --version",)


def test_add_without_install_commands_prints_note() -> None:
    ctx = TkitContext.for_test(store=make_store())

    result = CliRunner().invoke(cli, ["add", "sysinfo", "--run", "uname -a"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "no install commands defined" in result.output


def test_add_duplicate_name_fails() -> None:
    ctx = TkitContext.for_test(store=make_store(make_tool("git", run=("git --version",))))

    result = CliRunner().invoke(cli, ["add", "git", "--run", "git status"], obj=ctx)

    assert result.exit_code == 1
    assert "Error: Tool 'git' already exists." in result.output
    assert ctx.store.get("git").commands_for(ActionKind.RUN) == ("git --version",)


def test_add_rejects_names_with_spaces() -> None:
    ctx = TkitContext.for_test(store=make_store())

    result = CliRunner().invoke(cli, ["add", "my tool", "--run", "x"], obj=ctx)

    assert result.exit_code == 1
    assert "cannot contain spaces" in result.output
    assert ctx.store.list() == []


def test_add_before_init_fails() -> None:
    ctx = TkitContext.for_test()

    result = CliRunner().invoke(cli, ["add", "jq", "--run", "jq --version"], obj=ctx)

    assert result.exit_code == 1
    assert "tkit init" in result.output


def test_add_auto_syncs_when_enabled() -> None:
    remote = FakeRemoteRepository(repos={"octocat/tools": {}})
    ctx = TkitContext.for_test(
        store=make_store(sync=SyncSettings(repo="octocat/tools", auto_sync=True)),
        credentials=InMemoryCredentialStore("ghp_stored"),
        remote_factory=remote.connect,
    )

    result = CliRunner().invoke(cli, ["add", "jq", "--run", "jq --version"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "Auto-synced to octocat/tools" in result.output
    assert "jq --version" in (remote.document("octocat/tools", REMOTE_PATH) or "")
    assert remote.tokens_used == ["ghp_stored"]


def test_add_keeps_local_change_when_auto_sync_fails() -> None:
    remote = FakeRemoteRepository(repos={"octocat/tools": {}}, network_failure=True)
    ctx = TkitContext.for_test(
        store=make_store(sync=SyncSettings(repo="octocat/tools", auto_sync=True)),
        credentials=InMemoryCredentialStore("ghp_stored"),
        remote_factory=remote.connect,
    )

    result = CliRunner().invoke(cli, ["add", "jq", "--run", "jq --version"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "auto-sync failed, local changes are saved" in result.output
    assert ctx.store.get("jq").name == "jq"


def test_add_succeeds_when_github_returns_garbage_during_auto_sync() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>proxy login</html>")

    def remote_factory(token: str) -> HttpGitHub:
        transport = httpx.MockTransport(handler)
        return HttpGitHub(token, client=httpx.Client(base_url=API_URL, transport=transport))

    ctx = TkitContext.for_test(
        store=make_store(sync=SyncSettings(repo="octocat/tools", auto_sync=True)),
        credentials=InMemoryCredentialStore("ghp_stored"),
        remote_factory=remote_factory,
    )

    result = CliRunner().invoke(cli, ["add", "jq", "--install", "true"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "auto-sync failed, local changes are saved" in result.output
    assert ctx.store.get("jq").commands_for(ActionKind.INSTALL) == ("true",)
