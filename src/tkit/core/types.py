"""Core data model for the tool registry."""

from dataclasses import dataclass, field, replace
from enum import Enum


class ActionKind(Enum):
    """Actions a tool defines command sequences for."""

    INSTALL = "install"
    REMOVE = "remove"
    UPDATE = "update"
    RUN = "run"


@dataclass(frozen=True)
class Tool:
    """One managed tool.

    commands maps every ActionKind to an ordered tuple of shell command strings.
    Missing kinds are filled with empty tuples so lookups never fail.
    """

    name: str
    description: str | None = None
    commands: dict[ActionKind, tuple[str, ...]] = field(default_factory=dict)
    installed: bool = False

    def __post_init__(self) -> None:
        normalized = {kind: tuple(self.commands.get(kind, ())) for kind in ActionKind}
        object.__setattr__(self, "commands", normalized)

    def commands_for(self, action: ActionKind) -> tuple[str, ...]:
        return self.commands[action]

    def with_installed(self, installed: bool) -> "Tool":
        return replace(self, installed=installed)


@dataclass(frozen=True)
class SyncSettings:
    """Remote sync configuration. The token lives in the credential store, not here."""

    repo: str | None = None
    auto_sync: bool = False
    last_synced_fingerprint: str | None = None
    last_synced_at: str | None = None
    remote_revision: str | None = None

    @property
    def is_configured(self) -> bool:
        return self.repo is not None


@dataclass(frozen=True)
class Registry:
    """The full configuration: tools keyed by name plus sync settings."""

    tools: dict[str, Tool] = field(default_factory=dict)
    sync: SyncSettings = field(default_factory=SyncSettings)


class SyncState(Enum):
    """Relationship between local state and the remote document."""

    IN_SYNC = "in-sync"
    LOCAL_AHEAD = "local-ahead"
    REMOTE_AHEAD = "remote-ahead"
    DIVERGED = "diverged"
    UNCONFIGURED = "unconfigured"
