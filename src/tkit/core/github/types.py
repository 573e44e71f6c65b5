"""Type definitions for remote repository operations."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RemoteDocument:
    """A file stored in the remote repository.

    Attributes:
        content: Decoded text of the file
        revision: Provider revision of this content (GitHub blob sha), passed
            back on update
    """

    content: str
    revision: str


@dataclass(frozen=True)
class RepoInfo:
    """Information about a hosted repository."""

    full_name: str  # "owner/name"
    private: bool
    html_url: str
    description: str | None = None
