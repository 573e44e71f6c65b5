"""YAML encoding of the registry and of the remote sync document.

The local document carries tools and sync settings. The remote document
carries tools only, so each machine keeps its own sync bookkeeping and the
fingerprint of a document never depends on when it was synced.
"""

import hashlib
from typing import Any

import yaml

from tkit.core.errors import SerializationFailure
from tkit.core.types import ActionKind, Registry, SyncSettings, Tool

DOCUMENT_VERSION = 1

_SYNC_FIELDS = (
    "repo",
    "auto_sync",
    "last_synced_fingerprint",
    "last_synced_at",
    "remote_revision",
)


def compute_fingerprint(content: str) -> str:
    """Compute the content fingerprint used for divergence detection."""
    return "sha256:" + hashlib.sha256(content.encode("utf-8")).hexdigest()[:16]


def encode_registry(registry: Registry) -> str:
    data: dict[str, Any] = {
        "version": DOCUMENT_VERSION,
        "tools": _encode_tools(registry.tools),
        "sync": {name: getattr(registry.sync, name) for name in _SYNC_FIELDS},
    }
    return _dump(data)


def decode_registry(text: str) -> Registry:
    data = _load_mapping(text)
    tools = _decode_tools(data.get("tools"))
    sync = _decode_sync(data.get("sync"))
    return Registry(tools=tools, sync=sync)


def encode_remote_document(tools: dict[str, Tool]) -> str:
    return _dump({"version": DOCUMENT_VERSION, "tools": _encode_tools(tools)})


def decode_remote_document(text: str) -> dict[str, Tool]:
    data = _load_mapping(text)
    return _decode_tools(data.get("tools"))


def _dump(data: dict[str, Any]) -> str:
    return yaml.safe_dump(data, sort_keys=True, default_flow_style=False, allow_unicode=True)


def _load_mapping(text: str) -> dict[str, Any]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise SerializationFailure(f"Config is not valid YAML: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise SerializationFailure("Config document must be a mapping")

    version = data.get("version", DOCUMENT_VERSION)
    if version != DOCUMENT_VERSION:
        raise SerializationFailure(f"Unsupported config version: {version!r}")
    return data


def _encode_tools(tools: dict[str, Tool]) -> dict[str, Any]:
    encoded: dict[str, Any] = {}
    for name in sorted(tools):
        tool = tools[name]
        encoded[name] = {
            "description": tool.description,
            "installed": tool.installed,
            "commands": {kind.value: list(tool.commands_for(kind)) for kind in ActionKind},
        }
    return encoded


def _decode_tools(raw: object) -> dict[str, Tool]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise SerializationFailure("'tools' must be a mapping of name to tool")

    tools: dict[str, Tool] = {}
    for name, entry in raw.items():
        if not isinstance(name, str) or not name:
            raise SerializationFailure(f"Invalid tool name: {name!r}")
        if not isinstance(entry, dict):
            raise SerializationFailure(f"Tool '{name}' must be a mapping")

        description = entry.get("description")
        if description is not None and not isinstance(description, str):
            raise SerializationFailure(f"Tool '{name}' has a non-string description")

        installed = entry.get("installed", False)
        if not isinstance(installed, bool):
            raise SerializationFailure(f"Tool '{name}' has a non-boolean 'installed' flag")

        tools[name] = Tool(
            name=name,
            description=description,
            commands=_decode_commands(name, entry.get("commands")),
            installed=installed,
        )
    return tools


def _decode_commands(name: str, raw: object) -> dict[ActionKind, tuple[str, ...]]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise SerializationFailure(f"Tool '{name}' commands must be a mapping")

    commands: dict[ActionKind, tuple[str, ...]] = {}
    for key, value in raw.items():
        try:
            kind = ActionKind(key)
        except ValueError:
            raise SerializationFailure(f"Tool '{name}' has unknown action '{key}'") from None

        if value is None:
            value = []
        if not isinstance(value, list) or not all(isinstance(cmd, str) for cmd in value):
            raise SerializationFailure(f"Tool '{name}' {key} commands must be a list of strings")
        commands[kind] = tuple(value)
    return commands


def _decode_sync(raw: object) -> SyncSettings:
    if raw is None:
        return SyncSettings()
    if not isinstance(raw, dict):
        raise SerializationFailure("'sync' must be a mapping")

    values = {name: raw.get(name) for name in _SYNC_FIELDS}
    auto_sync = values.pop("auto_sync")
    if auto_sync is None:
        auto_sync = False
    if not isinstance(auto_sync, bool):
        raise SerializationFailure("'sync.auto_sync' must be a boolean")

    for field_name, value in values.items():
        if value is not None and not isinstance(value, str):
            raise SerializationFailure(f"'sync.{field_name}' must be a string")

    return SyncSettings(auto_sync=auto_sync, **values)
