"""Reconciliation of the local registry with a hosted repository.

The remote side is a single YAML document (REMOTE_PATH) holding the tools.
Divergence is detected by comparing fingerprints of the local document, the
remote document, and the document recorded at the last push or pull. There
is no merging: push overwrites the remote, pull overwrites the local tools.
"""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, replace
from pathlib import Path

from tkit.core.codec import compute_fingerprint, decode_remote_document, encode_remote_document
from tkit.core.config_store import ConfigStore
from tkit.core.credentials import CredentialStore
from tkit.core.errors import NotFound, TkitError, Unconfigured
from tkit.core.github.abc import RemoteRepository
from tkit.core.github.types import RepoInfo
from tkit.core.time.abc import Time
from tkit.core.types import SyncSettings, SyncState

logger = logging.getLogger(__name__)

REMOTE_PATH = "tkit-config.yaml"

RemoteFactory = Callable[[str], RemoteRepository]

_REPO_REF_PATTERN = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9-]*)/[A-Za-z0-9._-]+$")


@dataclass(frozen=True)
class SyncStatus:
    """Snapshot returned by SyncEngine.status()."""

    state: SyncState
    detail: str
    repo: str | None
    auto_sync: bool
    last_synced_at: str | None
    local_fingerprint: str
    remote_fingerprint: str | None


@dataclass(frozen=True)
class PushResult:
    repo: str
    fingerprint: str
    revision: str
    created: bool  # True when the remote document did not exist before


@dataclass(frozen=True)
class PullResult:
    repo: str
    fingerprint: str
    tool_count: int
    backup_path: Path | None


def validate_repo_ref(repo: str) -> str:
    """Check that repo has the owner/name shape and return it stripped.

    Raises:
        TkitError: If the reference is malformed
    """
    candidate = repo.strip()
    if not _REPO_REF_PATTERN.match(candidate):
        raise TkitError(f"Invalid repository '{repo}'. Expected format: owner/name")
    return candidate


def classify_sync_state(local: str, remote: str | None, last_synced: str | None) -> SyncState:
    """Derive the sync state from three fingerprints.

    Args:
        local: Fingerprint of the local tools document
        remote: Fingerprint of the remote document, None if it does not exist
        last_synced: Fingerprint recorded at the last push or pull, None if never synced
    """
    if remote is not None and local == remote:
        return SyncState.IN_SYNC

    if last_synced is None:
        if remote is None:
            return SyncState.LOCAL_AHEAD
        return SyncState.DIVERGED

    local_changed = local != last_synced
    remote_changed = remote != last_synced

    if local_changed and remote_changed:
        return SyncState.DIVERGED
    if remote_changed:
        return SyncState.REMOTE_AHEAD
    return SyncState.LOCAL_AHEAD


_STATE_DETAILS = {
    SyncState.IN_SYNC: "Local and remote configurations match.",
    SyncState.LOCAL_AHEAD: "Local changes have not been pushed. Run 'tkit sync push'.",
    SyncState.REMOTE_AHEAD: "Remote has changes not pulled yet. Run 'tkit sync pull'.",
    SyncState.DIVERGED: (
        "Local and remote both changed since the last sync. "
        "'tkit sync push' overwrites the remote; 'tkit sync pull' overwrites local tools."
    ),
    SyncState.UNCONFIGURED: "Sync is not configured. Run 'tkit sync setup <owner/name>'.",
}


class SyncEngine:
    """Push, pull and compare the registry against a remote repository.

    Every failure is raised before local state is touched, so a failed sync
    leaves the registry exactly as it was.
    """

    def __init__(
        self,
        store: ConfigStore,
        credentials: CredentialStore,
        remote_factory: RemoteFactory,
        time: Time,
    ) -> None:
        """Initialize SyncEngine.

        Args:
            store: Config store holding the registry
            credentials: Token storage
            remote_factory: Builds a RemoteRepository authenticated with a token
            time: Clock used for last_synced_at
        """
        self._store = store
        self._credentials = credentials
        self._remote_factory = remote_factory
        self._time = time
        self._open_remotes: list[RemoteRepository] = []

    def local_fingerprint(self) -> str:
        return compute_fingerprint(encode_remote_document(self._store.registry.tools))

    def status(self) -> SyncStatus:
        """Compare local state with the remote document without changing either."""
        settings = self._store.registry.sync
        local_fp = self.local_fingerprint()

        if not settings.is_configured:
            return SyncStatus(
                state=SyncState.UNCONFIGURED,
                detail=_STATE_DETAILS[SyncState.UNCONFIGURED],
                repo=None,
                auto_sync=settings.auto_sync,
                last_synced_at=settings.last_synced_at,
                local_fingerprint=local_fp,
                remote_fingerprint=None,
            )

        repo, remote = self._connect()
        document = remote.get_document(repo, REMOTE_PATH)
        remote_fp = _canonical_fingerprint(document.content) if document is not None else None

        state = classify_sync_state(local_fp, remote_fp, settings.last_synced_fingerprint)
        detail = _STATE_DETAILS[state]
        if document is None:
            detail = f"No {REMOTE_PATH} in {repo} yet. " + detail

        return SyncStatus(
            state=state,
            detail=detail,
            repo=repo,
            auto_sync=settings.auto_sync,
            last_synced_at=settings.last_synced_at,
            local_fingerprint=local_fp,
            remote_fingerprint=remote_fp,
        )

    def push(self) -> PushResult:
        """Upload the local tools, replacing the remote document unconditionally.

        Raises:
            Unconfigured: If no repository or token is set up
            AuthFailure: If the token is rejected
            NetworkFailure: If GitHub cannot be reached
        """
        repo, remote = self._connect()
        tools = self._store.registry.tools
        content = encode_remote_document(tools)

        current = remote.get_document(repo, REMOTE_PATH)
        stored = remote.put_document(
            repo,
            REMOTE_PATH,
            content,
            f"Update tkit configuration ({len(tools)} tools)",
            current.revision if current is not None else None,
        )

        fingerprint = compute_fingerprint(content)
        self._record_sync(fingerprint, stored.revision)
        logger.debug("Pushed %d tools to %s (%s)", len(tools), repo, fingerprint)
        return PushResult(
            repo=repo, fingerprint=fingerprint, revision=stored.revision, created=current is None
        )

    def pull(self) -> PullResult:
        """Replace all local tools with the remote ones.

        The current config file is copied to a .backup file first. Local sync
        settings are kept.

        Raises:
            Unconfigured: If no repository or token is set up
            NotFound: If the remote document does not exist
            SerializationFailure: If the remote document is malformed
        """
        repo, remote = self._connect()
        document = remote.get_document(repo, REMOTE_PATH)
        if document is None:
            raise NotFound(f"No {REMOTE_PATH} found in {repo}. Run 'tkit sync push' first.")

        tools = decode_remote_document(document.content)
        fingerprint = _canonical_fingerprint(document.content)

        backup_path = self._store.backup()
        self._store.replace_tools(tools)
        self._record_sync(fingerprint, document.revision)
        logger.debug("Pulled %d tools from %s (%s)", len(tools), repo, fingerprint)
        return PullResult(
            repo=repo, fingerprint=fingerprint, tool_count=len(tools), backup_path=backup_path
        )

    def setup(
        self,
        repo: str,
        token: str,
        *,
        create_missing: bool = False,
        private: bool = True,
        auto_sync: bool | None = None,
    ) -> RepoInfo | None:
        """Validate access to repo and store it with the token.

        Args:
            repo: Repository reference "owner/name"
            token: GitHub token to validate and store
            create_missing: Create the repository if it does not exist
            private: Visibility of a created repository
            auto_sync: New auto-sync setting (None = keep the current one)

        Returns:
            RepoInfo of the created repository, or None if it already existed

        Raises:
            AuthFailure: If the token is rejected
            NotFound: If the repository does not exist and create_missing is False
        """
        repo = validate_repo_ref(repo)
        remote = self._open(token)

        created: RepoInfo | None = None
        if not remote.check_access(repo):
            if not create_missing:
                raise NotFound(
                    f"Repository '{repo}' not found or not accessible with this token. "
                    "Pass --create to create it."
                )
            created = remote.create_repo(repo.split("/", 1)[1], private=private)
            repo = created.full_name

        self._credentials.set_token(token)
        current = self._store.registry.sync
        enabled = current.auto_sync if auto_sync is None else auto_sync
        self._store.update_sync(_settings_for_repo(current, repo, enabled))
        return created

    def update_token(self, token: str) -> None:
        """Replace the stored token after checking it can access the configured repo.

        Raises:
            Unconfigured: If no repository is configured
            AuthFailure: If the new token is rejected
            NotFound: If the repository is not visible with the new token
        """
        settings = self._store.registry.sync
        if settings.repo is None:
            raise Unconfigured(_STATE_DETAILS[SyncState.UNCONFIGURED])

        remote = self._open(token)
        if not remote.check_access(settings.repo):
            raise NotFound(f"Repository '{settings.repo}' is not accessible with the new token.")
        self._credentials.set_token(token)

    def set_auto_sync(self, enabled: bool) -> None:
        settings = self._store.registry.sync
        if enabled and not settings.is_configured:
            raise Unconfigured(_STATE_DETAILS[SyncState.UNCONFIGURED])
        self._store.update_sync(replace(settings, auto_sync=enabled))

    def create_repo(
        self, name: str, *, private: bool = True, token: str | None = None, configure: bool = True
    ) -> RepoInfo:
        """Create a repository and, when a registry exists, configure it for sync.

        Raises:
            Unconfigured: If no token is given and none is stored
        """
        resolved = self._require_token(token)
        info = self._open(resolved).create_repo(name, private=private)

        if configure and self._store.exists():
            if token is not None:
                self._credentials.set_token(token)
            current = self._store.registry.sync
            self._store.update_sync(_settings_for_repo(current, info.full_name, current.auto_sync))
        return info

    def list_repos(self, token: str | None = None) -> list[RepoInfo]:
        return self._open(self._require_token(token)).list_repos()

    def install_auto_sync(
        self, on_pushed: Callable[[PushResult], None], on_failed: Callable[[TkitError], None]
    ) -> None:
        """Register a ConfigStore change listener that pushes after each mutation.

        Failures are handed to on_failed and never propagate: the local change
        has already been saved.
        """

        def listener() -> None:
            try:
                result = self.push()
            except TkitError as e:
                logger.debug("Auto-sync failed: %s", e)
                on_failed(e)
                return
            except Exception as e:
                logger.debug("Auto-sync crashed", exc_info=True)
                on_failed(TkitError(f"unexpected error: {e!r}"))
                return
            on_pushed(result)

        self._store.add_change_listener(listener)

    def close(self) -> None:
        """Release every remote opened during this invocation."""
        for remote in self._open_remotes:
            remote.close()
        self._open_remotes.clear()

    def _connect(self) -> tuple[str, RemoteRepository]:
        repo = self._store.registry.sync.repo
        if repo is None:
            raise Unconfigured(_STATE_DETAILS[SyncState.UNCONFIGURED])
        return repo, self._open(self._require_token(None))

    def _open(self, token: str) -> RemoteRepository:
        remote = self._remote_factory(token)
        if remote not in self._open_remotes:
            self._open_remotes.append(remote)
        return remote

    def _require_token(self, token: str | None) -> str:
        resolved = token or self._credentials.resolve_token()
        if resolved is None:
            raise Unconfigured(
                "No GitHub token available. Run 'tkit sync update-token' "
                "or set TKIT_GITHUB_TOKEN."
            )
        return resolved

    def _record_sync(self, fingerprint: str, revision: str) -> None:
        settings = replace(
            self._store.registry.sync,
            last_synced_fingerprint=fingerprint,
            last_synced_at=self._time.now().isoformat(timespec="seconds"),
            remote_revision=revision,
        )
        self._store.update_sync(settings)


def _canonical_fingerprint(content: str) -> str:
    """Fingerprint of a remote document after normalizing its formatting."""
    return compute_fingerprint(encode_remote_document(decode_remote_document(content)))


def _settings_for_repo(current: SyncSettings, repo: str, auto_sync: bool) -> SyncSettings:
    if current.repo == repo:
        return replace(current, auto_sync=auto_sync)
    # Bookkeeping from a previous repository does not apply to the new one
    return SyncSettings(repo=repo, auto_sync=auto_sync)
