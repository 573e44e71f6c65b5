"""Scoped storage for the remote access token.

The token is kept out of the registry document so the registry can be
pushed, backed up and shared without leaking it.
"""

import os
from abc import ABC, abstractmethod
from pathlib import Path

import yaml

from tkit.core.errors import SerializationFailure
from tkit.core.paths import get_env_token


class CredentialStore(ABC):
    """Abstract interface for token storage."""

    @abstractmethod
    def get_token(self) -> str | None:
        """Return the stored token, or None if none is stored."""
        ...

    @abstractmethod
    def set_token(self, token: str) -> None:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...

    def resolve_token(self) -> str | None:
        """Token to use for remote calls: the environment overrides the stored one."""
        return get_env_token() or self.get_token()


class FileCredentialStore(CredentialStore):
    """Token stored in a YAML file readable only by the current user."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def get_token(self) -> str | None:
        if not self._path.exists():
            return None
        try:
            data = yaml.safe_load(self._path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise SerializationFailure(f"Credential file {self._path} is malformed: {e}") from e
        if not isinstance(data, dict):
            return None
        token = data.get("github_token")
        return token if isinstance(token, str) and token else None

    def set_token(self, token: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(self._path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(yaml.safe_dump({"github_token": token}))
        os.chmod(self._path, 0o600)

    def clear(self) -> None:
        self._path.unlink(missing_ok=True)


class InMemoryCredentialStore(CredentialStore):
    """Test implementation holding the token in memory."""

    def __init__(self, token: str | None = None) -> None:
        self._token = token

    def get_token(self) -> str | None:
        return self._token

    def set_token(self, token: str) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None
