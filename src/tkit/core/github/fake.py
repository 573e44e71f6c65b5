"""Fake remote repository for testing.

FakeRemoteRepository is an in-memory implementation that accepts pre-configured
state in its constructor. Construct instances directly with keyword arguments.
"""

from tkit.core.errors import AuthFailure, NetworkFailure, NotFound, TkitError
from tkit.core.github.abc import RemoteRepository
from tkit.core.github.types import RemoteDocument, RepoInfo


class FakeRemoteRepository(RemoteRepository):
    """In-memory fake implementation of the remote repository.

    This class has NO public setup methods. All state is provided via constructor
    using keyword arguments with sensible defaults. Use connect() as the remote
    factory so the token each call was made with is recorded.
    """

    def __init__(
        self,
        *,
        owner: str = "octocat",
        repos: dict[str, dict[str, str]] | None = None,
        accepted_tokens: set[str] | None = None,
        network_failure: bool = False,
    ) -> None:
        """Create FakeRemoteRepository with pre-configured state.

        Args:
            owner: Login of the authenticated user (prefix for created repos)
            repos: Mapping of "owner/name" -> {path: content} for existing repos
            accepted_tokens: Tokens the fake accepts (None = accept any token)
            network_failure: If True, every call raises NetworkFailure
        """
        self._owner = owner
        self._files: dict[str, dict[str, RemoteDocument]] = {}
        self._private: dict[str, bool] = {}
        self._revision_counter = 0
        for repo, files in (repos or {}).items():
            self._files[repo] = {path: self._new_document(text) for path, text in files.items()}
            self._private[repo] = True

        self._accepted_tokens = accepted_tokens
        self._network_failure = network_failure
        self._active_token: str | None = None
        self._tokens_used: list[str] = []
        self._put_calls: list[tuple[str, str, str, str | None]] = []
        self._created_repos: list[tuple[str, bool]] = []
        self._close_count = 0

    @property
    def tokens_used(self) -> list[str]:
        """Read-only access to the tokens passed to connect(), in order."""
        return self._tokens_used

    @property
    def put_calls(self) -> list[tuple[str, str, str, str | None]]:
        """Read-only access to tracked put_document() calls.

        Returns list of (repo, path, content, previous_revision) tuples.
        """
        return self._put_calls

    @property
    def created_repos(self) -> list[tuple[str, bool]]:
        """Read-only access to created repos as (full_name, private) tuples."""
        return self._created_repos

    @property
    def close_count(self) -> int:
        """Number of times close() was called."""
        return self._close_count

    def connect(self, token: str) -> "FakeRemoteRepository":
        """Remote factory: record the token and return this fake."""
        self._active_token = token
        self._tokens_used.append(token)
        return self

    def document(self, repo: str, path: str) -> str | None:
        """Current content of a stored file, for assertions."""
        stored = self._files.get(repo, {}).get(path)
        return stored.content if stored is not None else None

    def get_document(self, repo: str, path: str) -> RemoteDocument | None:
        self._check_reachable()
        if repo not in self._files:
            raise NotFound(f"Repository '{repo}' not found.")
        return self._files[repo].get(path)

    def put_document(
        self,
        repo: str,
        path: str,
        content: str,
        message: str,
        previous_revision: str | None,
    ) -> RemoteDocument:
        self._check_reachable()
        if repo not in self._files:
            raise NotFound(f"Repository '{repo}' not found.")
        self._put_calls.append((repo, path, content, previous_revision))

        current = self._files[repo].get(path)
        current_revision = current.revision if current is not None else None
        if previous_revision != current_revision:
            raise TkitError(f"GitHub returned 409 while trying to write {path} to {repo}")

        stored = self._new_document(content)
        self._files[repo][path] = stored
        return stored

    def check_access(self, repo: str) -> bool:
        self._check_reachable()
        return repo in self._files

    def create_repo(self, name: str, *, private: bool) -> RepoInfo:
        self._check_reachable()
        full_name = f"{self._owner}/{name}"
        if full_name in self._files:
            raise TkitError(f"Could not create repository '{name}': name already exists")
        self._files[full_name] = {}
        self._private[full_name] = private
        self._created_repos.append((full_name, private))
        return self._repo_info(full_name)

    def list_repos(self) -> list[RepoInfo]:
        self._check_reachable()
        return [self._repo_info(name) for name in sorted(self._files)]

    def close(self) -> None:
        self._close_count += 1

    def _check_reachable(self) -> None:
        if self._network_failure:
            raise NetworkFailure("Could not reach GitHub: connection refused")
        if self._accepted_tokens is not None and self._active_token not in self._accepted_tokens:
            raise AuthFailure("GitHub rejected the token (401: Bad credentials).")

    def _new_document(self, content: str) -> RemoteDocument:
        self._revision_counter += 1
        return RemoteDocument(content=content, revision=f"rev-{self._revision_counter}")

    def _repo_info(self, full_name: str) -> RepoInfo:
        return RepoInfo(
            full_name=full_name,
            private=self._private.get(full_name, True),
            html_url=f"https://github.com/{full_name}",
        )
