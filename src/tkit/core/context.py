"""Application context with dependency injection."""

from collections.abc import Sequence
from dataclasses import dataclass

import click

from tkit.cli.output import user_output
from tkit.core.config_store import ConfigStore, FilesystemRegistryStorage, InMemoryRegistryStorage
from tkit.core.credentials import CredentialStore, FileCredentialStore, InMemoryCredentialStore
from tkit.core.errors import TkitError
from tkit.core.executor import CommandExecutor
from tkit.core.github.real import HttpGitHub
from tkit.core.paths import get_config_path, get_credentials_path
from tkit.core.search.engine import SearchEngine
from tkit.core.search.registries import PackageRegistry, default_registries
from tkit.core.shell.abc import Shell
from tkit.core.shell.real import RealShell
from tkit.core.sync import PushResult, RemoteFactory, SyncEngine
from tkit.core.time.abc import Time
from tkit.core.time.real import RealTime


@dataclass(frozen=True)
class TkitContext:
    """Immutable context holding all dependencies for tkit operations.

    Created at CLI entry point and threaded through the application.
    Frozen to prevent accidental modification at runtime.
    """

    store: ConfigStore
    credentials: CredentialStore
    shell: Shell
    executor: CommandExecutor
    sync: SyncEngine
    search: SearchEngine
    time: Time

    def close(self) -> None:
        """Release network clients held by the sync and search engines."""
        self.sync.close()
        self.search.close()

    @staticmethod
    def for_test(
        store: ConfigStore | None = None,
        credentials: CredentialStore | None = None,
        shell: Shell | None = None,
        remote_factory: RemoteFactory | None = None,
        registries: Sequence[PackageRegistry] | None = None,
        time: Time | None = None,
    ) -> "TkitContext":
        """Create test context with optional pre-configured integration classes.

        Args:
            store: Optional ConfigStore. If None, wraps an empty (uninitialized)
                InMemoryRegistryStorage.
            credentials: Optional CredentialStore. If None, creates an empty
                InMemoryCredentialStore.
            shell: Optional Shell implementation. If None, creates empty FakeShell.
            remote_factory: Optional token -> RemoteRepository factory. If None,
                uses FakeRemoteRepository().connect.
            registries: Optional package registries for remote search. If None,
                no registries are queried.
            time: Optional Time implementation. If None, creates FakeTime.

        Returns:
            TkitContext wired with the given or default fakes
        """
        from tests.fakes.shell import FakeShell
        from tests.fakes.time import FakeTime

        from tkit.core.github.fake import FakeRemoteRepository

        if store is None:
            store = ConfigStore(InMemoryRegistryStorage())
        if credentials is None:
            credentials = InMemoryCredentialStore()
        if shell is None:
            shell = FakeShell()
        if remote_factory is None:
            remote_factory = FakeRemoteRepository().connect
        if time is None:
            time = FakeTime()

        return _assemble(store, credentials, shell, remote_factory, list(registries or []), time)


def create_context() -> TkitContext:
    """Create production context with real implementations.

    Called once at CLI entry point. Paths come from the environment
    (TKIT_CONFIG_DIR / XDG_CONFIG_HOME); nothing is read from disk until a
    command touches the store.
    """
    shell = RealShell()
    return _assemble(
        store=ConfigStore(FilesystemRegistryStorage(get_config_path())),
        credentials=FileCredentialStore(get_credentials_path()),
        shell=shell,
        remote_factory=HttpGitHub,
        registries=default_registries(shell),
        time=RealTime(),
    )


def _assemble(
    store: ConfigStore,
    credentials: CredentialStore,
    shell: Shell,
    remote_factory: RemoteFactory,
    registries: list[PackageRegistry],
    time: Time,
) -> TkitContext:
    sync = SyncEngine(store, credentials, remote_factory, time)
    sync.install_auto_sync(_report_auto_sync, _report_auto_sync_failure)
    return TkitContext(
        store=store,
        credentials=credentials,
        shell=shell,
        executor=CommandExecutor(shell),
        sync=sync,
        search=SearchEngine(shell, registries),
        time=time,
    )


def _report_auto_sync(result: PushResult) -> None:
    user_output(click.style("✓", fg="green") + f" Auto-synced to {result.repo}")


def _report_auto_sync_failure(error: TkitError) -> None:
    user_output(
        click.style("Warning: ", fg="yellow")
        + f"auto-sync failed, local changes are saved: {error}"
    )
