"""Tests for token storage."""

import stat
from pathlib import Path

import pytest

from tkit.core.credentials import FileCredentialStore, InMemoryCredentialStore
from tkit.core.paths import TOKEN_ENV


def test_file_store_writes_token_readable_only_by_owner(tmp_path: Path) -> None:
    path = tmp_path / "tkit" / "credentials.yaml"
    store = FileCredentialStore(path)

    store.set_token("ghp_secret")

    assert store.get_token() == "ghp_secret"
    assert stat.S_IMODE(path.stat().st_mode) == 0o600


def test_file_store_clear_removes_file(tmp_path: Path) -> None:
    path = tmp_path / "credentials.yaml"
    store = FileCredentialStore(path)
    store.set_token("ghp_secret")

    store.clear()

    assert not path.exists()
    assert store.get_token() is None


def test_environment_token_overrides_stored_token(monkeypatch: pytest.MonkeyPatch) -> None:
    store = InMemoryCredentialStore(token="stored")

    monkeypatch.setenv(TOKEN_ENV, "from-env")
    assert store.resolve_token() == "from-env"

    monkeypatch.delenv(TOKEN_ENV)
    assert store.resolve_token() == "stored"
