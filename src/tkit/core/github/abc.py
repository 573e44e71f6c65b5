"""Abstract base class for remote repository operations."""

from abc import ABC, abstractmethod

from tkit.core.github.types import RemoteDocument, RepoInfo


class RemoteRepository(ABC):
    """Abstract interface for the hosted repository that backs sync.

    All implementations (real and fake) must implement this interface.
    Implementations raise AuthFailure when the credential is rejected and
    NetworkFailure when the provider cannot be reached.
    """

    @abstractmethod
    def get_document(self, repo: str, path: str) -> RemoteDocument | None:
        """Fetch a file from the default branch.

        Args:
            repo: Repository reference "owner/name"
            path: Path of the file inside the repository

        Returns:
            The document, or None if the file does not exist

        Raises:
            NotFound: If the repository itself does not exist
        """
        ...

    @abstractmethod
    def put_document(
        self,
        repo: str,
        path: str,
        content: str,
        message: str,
        previous_revision: str | None,
    ) -> RemoteDocument:
        """Create or replace a file with a commit.

        Args:
            repo: Repository reference "owner/name"
            path: Path of the file inside the repository
            content: New file text
            message: Commit message
            previous_revision: Revision being replaced, None when creating

        Returns:
            The stored document with its new revision
        """
        ...

    @abstractmethod
    def check_access(self, repo: str) -> bool:
        """Check that the repository exists and the credential can read it.

        Returns:
            True if the repository is accessible, False if it does not exist
        """
        ...

    @abstractmethod
    def create_repo(self, name: str, *, private: bool) -> RepoInfo:
        """Create a repository owned by the authenticated user."""
        ...

    @abstractmethod
    def list_repos(self) -> list[RepoInfo]:
        """List repositories owned by the authenticated user."""
        ...

    def close(self) -> None:
        """Release network resources held by this instance. Nothing by default."""
