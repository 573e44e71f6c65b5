"""Tests for `tkit sync push`, `pull` and `status`."""

from click.testing import CliRunner

from tests.test_utils.registry_helpers import make_store, make_tool, storage_of
from tkit.cli.cli import cli
from tkit.core.codec import encode_remote_document
from tkit.core.context import TkitContext
from tkit.core.credentials import InMemoryCredentialStore
from tkit.core.github.fake import FakeRemoteRepository
from tkit.core.sync import REMOTE_PATH
from tkit.core.types import SyncSettings

REPO = "octocat/tools"


def _synced_context(remote: FakeRemoteRepository) -> TkitContext:
    return TkitContext.for_test(
        store=make_store(make_tool("git", run=("git --version",)), sync=SyncSettings(repo=REPO)),
        credentials=InMemoryCredentialStore("ghp_stored"),
        remote_factory=remote.connect,
    )


def test_push_creates_then_updates_remote_document() -> None:
    remote = FakeRemoteRepository(repos={REPO: {}})
    ctx = _synced_context(remote)
    runner = CliRunner()

    first = runner.invoke(cli, ["sync", "push"], obj=ctx)
    second = runner.invoke(cli, ["sync", "push"], obj=ctx)

    assert first.exit_code == 0, first.output
    assert f"Created {REPO} (" in first.output
    assert second.exit_code == 0, second.output
    assert f"Updated {REPO} (" in second.output
    assert "git --version" in (remote.document(REPO, REMOTE_PATH) or "")
    assert ctx.store.registry.sync.last_synced_at == "2026-01-15T12:00:00+00:00"


def test_push_without_sync_configuration_fails() -> None:
    ctx = TkitContext.for_test(store=make_store(make_tool("git")))

    result = CliRunner().invoke(cli, ["sync", "push"], obj=ctx)

    assert result.exit_code == 1
    assert "Sync is not configured" in result.output


def test_push_reports_network_failure() -> None:
    ctx = _synced_context(FakeRemoteRepository(repos={REPO: {}}, network_failure=True))

    result = CliRunner().invoke(cli, ["sync", "push"], obj=ctx)

    assert result.exit_code == 1
    assert "Could not reach GitHub" in result.output
    assert ctx.store.registry.sync.last_synced_fingerprint is None


def test_pull_replaces_tools_and_backs_up() -> None:
    remote_doc = encode_remote_document({"jq": make_tool("jq", run=("jq --version",))})
    remote = FakeRemoteRepository(repos={REPO: {REMOTE_PATH: remote_doc}})
    ctx = _synced_context(remote)
    before = storage_of(ctx.store).content

    result = CliRunner().invoke(cli, ["sync", "pull"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "Backed up previous configuration to /fake/tkit/config.yaml.backup" in result.output
    assert f"Pulled 1 tools from {REPO}" in result.output
    assert [tool.name for tool in ctx.store.list()] == ["jq"]
    assert ctx.store.registry.sync.repo == REPO
    assert storage_of(ctx.store).backup_content == before


def test_pull_without_remote_document_fails() -> None:
    ctx = _synced_context(FakeRemoteRepository(repos={REPO: {}}))

    result = CliRunner().invoke(cli, ["sync", "pull"], obj=ctx)

    assert result.exit_code == 1
    assert "Run 'tkit sync push' first" in result.output
    assert [tool.name for tool in ctx.store.list()] == ["git"]


def test_status_unconfigured() -> None:
    ctx = TkitContext.for_test(store=make_store(make_tool("git")))

    result = CliRunner().invoke(cli, ["sync", "status"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "unconfigured" in result.output
    assert "tkit sync setup" in result.output


def test_status_in_sync_after_push() -> None:
    remote = FakeRemoteRepository(repos={REPO: {}})
    ctx = _synced_context(remote)
    runner = CliRunner()
    runner.invoke(cli, ["sync", "push"], obj=ctx)

    result = runner.invoke(cli, ["sync", "status"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "in-sync" in result.output
    assert "Local and remote configurations match." in result.output


def test_status_warns_when_diverged() -> None:
    remote_doc = encode_remote_document({"jq": make_tool("jq")})
    ctx = _synced_context(FakeRemoteRepository(repos={REPO: {REMOTE_PATH: remote_doc}}))

    result = CliRunner().invoke(cli, ["sync", "status"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "diverged" in result.output
    assert "Warning: Local and remote both changed" in result.output
