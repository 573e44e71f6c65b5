"""Registry persistence and the session-scoped ConfigStore.

RegistryStorage is the persistence seam: a YAML file in production, a string
held in memory in tests. ConfigStore owns the loaded Registry, applies
mutations, saves after each one, and notifies change listeners (auto-sync)
when sync is enabled.
"""

import logging
import os
import shutil
import tempfile
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import replace
from pathlib import Path

from tkit.core.codec import decode_registry, encode_registry
from tkit.core.errors import DuplicateName, NotFound, NotInitialized
from tkit.core.paths import get_backup_path
from tkit.core.types import Registry, SyncSettings, Tool

logger = logging.getLogger(__name__)

ChangeListener = Callable[[], None]


class RegistryStorage(ABC):
    """Abstract interface for reading and writing the serialized registry."""

    @abstractmethod
    def exists(self) -> bool:
        """Check if a persisted registry exists."""
        ...

    @abstractmethod
    def read(self) -> str:
        """Read the serialized registry.

        Raises:
            FileNotFoundError: If nothing has been persisted
        """
        ...

    @abstractmethod
    def write(self, content: str) -> None:
        """Replace the serialized registry atomically."""
        ...

    @abstractmethod
    def backup(self) -> Path | None:
        """Copy the current document aside before a destructive replace.

        Returns:
            Location of the backup, or None if there was nothing to back up
        """
        ...

    @abstractmethod
    def delete(self) -> None:
        """Remove the persisted registry and its backup."""
        ...

    @abstractmethod
    def path(self) -> Path:
        """Location of the persisted registry (for messages)."""
        ...


class FilesystemRegistryStorage(RegistryStorage):
    """Production storage: a YAML file replaced atomically on every write."""

    def __init__(self, config_path: Path) -> None:
        self._path = config_path

    def exists(self) -> bool:
        return self._path.exists()

    def read(self) -> str:
        return self._path.read_text(encoding="utf-8")

    def write(self, content: str) -> None:
        """Write to a temp file in the same directory, then os.replace over the target.

        A crash mid-write leaves the previous document untouched.
        """
        parent = self._path.parent
        parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(prefix=f".{self._path.name}.", suffix=".tmp", dir=parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("Saved registry to %s", self._path)

    def backup(self) -> Path | None:
        if not self._path.exists():
            return None
        backup_path = get_backup_path(self._path)
        shutil.copy2(self._path, backup_path)
        return backup_path

    def delete(self) -> None:
        """Remove the file and its backup, then the config directory if now empty."""
        self._path.unlink(missing_ok=True)
        get_backup_path(self._path).unlink(missing_ok=True)
        parent = self._path.parent
        if parent.is_dir() and not any(parent.iterdir()):
            parent.rmdir()

    def path(self) -> Path:
        return self._path


class InMemoryRegistryStorage(RegistryStorage):
    """Test storage that keeps the serialized registry in memory."""

    def __init__(self, content: str | None = None) -> None:
        """Initialize in-memory storage.

        Args:
            content: Initial serialized registry (None = not initialized)
        """
        self._content = content
        self._backup: str | None = None
        self._write_count = 0

    @property
    def content(self) -> str | None:
        return self._content

    @property
    def backup_content(self) -> str | None:
        return self._backup

    @property
    def write_count(self) -> int:
        return self._write_count

    def exists(self) -> bool:
        return self._content is not None

    def read(self) -> str:
        if self._content is None:
            raise FileNotFoundError(f"Registry not found at {self.path()}")
        return self._content

    def write(self, content: str) -> None:
        self._content = content
        self._write_count += 1

    def backup(self) -> Path | None:
        if self._content is None:
            return None
        self._backup = self._content
        return get_backup_path(self.path())

    def delete(self) -> None:
        self._content = None
        self._backup = None

    def path(self) -> Path:
        return Path("/fake/tkit/config.yaml")


class ConfigStore:
    """Owns the in-memory Registry for one invocation.

    Loaded once at the start of a command, mutated through the methods below,
    and persisted after every mutation. add/delete/set_installed additionally
    notify change listeners when auto-sync is enabled; listeners are expected
    to handle their own failures.
    """

    def __init__(self, storage: RegistryStorage) -> None:
        self._storage = storage
        self._registry: Registry | None = None
        self._listeners: list[ChangeListener] = []

    @property
    def storage(self) -> RegistryStorage:
        return self._storage

    @property
    def registry(self) -> Registry:
        if self._registry is None:
            return self.load()
        return self._registry

    def add_change_listener(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    def exists(self) -> bool:
        return self._storage.exists()

    def load(self) -> Registry:
        """Load the persisted registry.

        Raises:
            NotInitialized: If no registry has been persisted
            SerializationFailure: If the document is malformed
        """
        if not self._storage.exists():
            raise NotInitialized(self._storage.path())
        self._registry = decode_registry(self._storage.read())
        return self._registry

    def save(self) -> None:
        self._persist(self.registry)

    def initialize(self, registry: Registry) -> None:
        """Persist a fresh registry, replacing whatever was there."""
        self._persist(registry)

    def get(self, name: str) -> Tool:
        tool = self.registry.tools.get(name)
        if tool is None:
            raise NotFound(f"Tool '{name}' not found. Use 'tkit add {name}' to add it first.")
        return tool

    def list(self) -> list[Tool]:
        return [self.registry.tools[name] for name in sorted(self.registry.tools)]

    def add(self, tool: Tool) -> None:
        if tool.name in self.registry.tools:
            raise DuplicateName(tool.name)
        self._commit(replace(self.registry, tools={**self.registry.tools, tool.name: tool}))

    def delete(self, name: str) -> Tool:
        tool = self.get(name)
        remaining = {key: value for key, value in self.registry.tools.items() if key != name}
        self._commit(replace(self.registry, tools=remaining))
        return tool

    def set_installed(self, name: str, installed: bool) -> Tool:
        tool = self.get(name).with_installed(installed)
        self._commit(replace(self.registry, tools={**self.registry.tools, name: tool}))
        return tool

    def replace_tools(self, tools: dict[str, Tool]) -> None:
        """Swap in a whole tool set (pull). Does not notify listeners."""
        self._persist(replace(self.registry, tools=dict(tools)))

    def update_sync(self, settings: SyncSettings) -> None:
        """Persist new sync bookkeeping. Does not notify listeners."""
        self._persist(replace(self.registry, sync=settings))

    def backup(self) -> Path | None:
        return self._storage.backup()

    def destroy(self) -> None:
        """Delete the persisted registry and forget the loaded one."""
        self._storage.delete()
        self._registry = None

    def _persist(self, registry: Registry) -> None:
        self._storage.write(encode_registry(registry))
        self._registry = registry

    def _commit(self, registry: Registry) -> None:
        self._persist(registry)
        sync = registry.sync
        if sync.auto_sync and sync.is_configured:
            for listener in self._listeners:
                listener()
