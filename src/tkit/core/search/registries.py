"""Remote package registries queried by `tkit search remote`.

Each registry returns raw matches; scoring and ranking happen in the engine.
A registry raises TkitError when it cannot answer so the engine can report it
and continue with the others.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

import httpx

from tkit import __version__
from tkit.core.errors import NetworkFailure, TkitError
from tkit.core.shell.abc import Shell

logger = logging.getLogger(__name__)

REGISTRY_TIMEOUT_SECONDS = 10.0
MAX_MATCHES_PER_REGISTRY = 50

SNAP_FIND_URL = "https://api.snapcraft.io/v2/snaps/find"
PYPI_JSON_URL = "https://pypi.org/pypi/{name}/json"


@dataclass(frozen=True)
class PackageMatch:
    """A package a registry reported for a query."""

    name: str
    version: str | None = None
    description: str | None = None


class PackageRegistry(ABC):
    """Abstract interface for a searchable package source."""

    @property
    @abstractmethod
    def source(self) -> str:
        """Source tag shown in results (e.g. "apt")."""
        ...

    @abstractmethod
    def search(self, query: str) -> list[PackageMatch]:
        """Return packages matching query.

        Raises:
            TkitError: If the registry is unavailable or times out
        """
        ...

    def close(self) -> None:
        """Release network resources. Nothing by default."""


class AptRegistry(PackageRegistry):
    """Debian/Ubuntu package index via `apt-cache search --names-only`."""

    def __init__(self, shell: Shell) -> None:
        self._shell = shell

    @property
    def source(self) -> str:
        return "apt"

    def search(self, query: str) -> list[PackageMatch]:
        if self._shell.which("apt-cache") is None:
            raise TkitError("apt-cache is not available on this system")

        try:
            exit_code, stdout = self._shell.capture(
                ["apt-cache", "search", "--names-only", query], timeout=REGISTRY_TIMEOUT_SECONDS
            )
        except RuntimeError as e:
            raise TkitError(str(e)) from e
        if exit_code != 0:
            raise TkitError(f"apt-cache search exited with code {exit_code}")

        matches: list[PackageMatch] = []
        for line in stdout.splitlines():
            name, sep, description = line.partition(" - ")
            if not sep or not name.strip():
                continue
            matches.append(PackageMatch(name=name.strip(), description=description.strip()))
            if len(matches) >= MAX_MATCHES_PER_REGISTRY:
                break
        logger.debug("apt-cache returned %d matches for %r", len(matches), query)
        return matches


class _HttpRegistry(PackageRegistry):
    """Shared request handling for registries reached over HTTP."""

    def __init__(self, client: httpx.Client | None = None) -> None:
        self._owns_client = client is None
        self._client = client or httpx.Client(
            timeout=REGISTRY_TIMEOUT_SECONDS,
            headers={"User-Agent": f"tkit/{__version__}"},
        )

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def _get(self, url: str, **kwargs: Any) -> httpx.Response:
        try:
            return self._client.get(url, **kwargs)
        except httpx.TimeoutException as e:
            raise NetworkFailure(f"{self.source} search timed out") from e
        except httpx.RequestError as e:
            raise NetworkFailure(f"Could not reach {self.source}: {e}") from e


class SnapRegistry(_HttpRegistry):
    """Snap Store find API."""

    @property
    def source(self) -> str:
        return "snap"

    def search(self, query: str) -> list[PackageMatch]:
        response = self._get(
            SNAP_FIND_URL,
            params={"q": query, "fields": "summary,version"},
            headers={"Snap-Device-Series": "16"},
        )
        if response.status_code != 200:
            raise NetworkFailure(f"Snap Store returned {response.status_code}")

        matches: list[PackageMatch] = []
        items = _json(response, self.source).get("results") or []
        if not isinstance(items, list):
            raise NetworkFailure(f"{self.source} returned an unexpected response")
        for item in items[:MAX_MATCHES_PER_REGISTRY]:
            if not isinstance(item, dict) or not isinstance(item.get("name"), str):
                continue
            snap = _mapping(item.get("snap"))
            revision = _mapping(item.get("revision"))
            matches.append(
                PackageMatch(
                    name=item["name"],
                    version=_text(revision.get("version")),
                    description=_text(snap.get("summary")),
                )
            )
        return matches


class PyPIRegistry(_HttpRegistry):
    """PyPI JSON API. PyPI has no search endpoint, so this is an exact-name lookup."""

    @property
    def source(self) -> str:
        return "pypi"

    def search(self, query: str) -> list[PackageMatch]:
        response = self._get(PYPI_JSON_URL.format(name=query.strip()))
        if response.status_code == 404:
            return []
        if response.status_code != 200:
            raise NetworkFailure(f"PyPI returned {response.status_code}")

        info = _mapping(_json(response, self.source).get("info"))
        return [
            PackageMatch(
                name=_text(info.get("name")) or query.strip(),
                version=_text(info.get("version")),
                description=_text(info.get("summary")),
            )
        ]


def default_registries(shell: Shell) -> list[PackageRegistry]:
    return [AptRegistry(shell), SnapRegistry(), PyPIRegistry()]


def _mapping(value: object) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _text(value: object) -> str | None:
    return value if isinstance(value, str) and value else None


def _json(response: httpx.Response, source: str) -> dict[str, Any]:
    try:
        data = response.json()
    except ValueError as e:
        raise NetworkFailure(f"{source} returned an unreadable response") from e
    if not isinstance(data, dict):
        raise NetworkFailure(f"{source} returned an unexpected response")
    return data
