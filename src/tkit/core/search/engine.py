"""Fuzzy search across configured tools, installed binaries and package registries."""

import logging
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from enum import Enum

from tkit.core.errors import TkitError
from tkit.core.search.registries import PackageRegistry
from tkit.core.search.scoring import MIN_SCORE, score, weighted_score
from tkit.core.shell.abc import Shell
from tkit.core.types import Tool

logger = logging.getLogger(__name__)

CONFIGURED = "configured"
SYSTEM_BINARY = "system-binary"

VERSION_PROBE_TIMEOUT_SECONDS = 3.0

# Binaries looked up on PATH in addition to every configured tool name
WELL_KNOWN_BINARIES = (
    "git",
    "docker",
    "node",
    "npm",
    "python3",
    "pip3",
    "go",
    "cargo",
    "rustc",
    "java",
    "ruby",
    "make",
    "cmake",
    "gcc",
    "clang",
    "curl",
    "wget",
    "jq",
    "vim",
    "nvim",
    "tmux",
    "kubectl",
    "helm",
    "terraform",
    "aws",
    "gh",
    "rg",
    "fzf",
    "htop",
    "zsh",
)

_SOURCE_PRIORITY = {CONFIGURED: 0, SYSTEM_BINARY: 1}
_REMOTE_PRIORITY = 2


class SearchMode(Enum):
    LOCAL = "local"
    REMOTE = "remote"
    ALL = "all"


@dataclass(frozen=True)
class SearchResult:
    """One ranked match.

    Attributes:
        source: "configured", "system-binary" or a registry tag ("apt", "snap", "pypi")
        name: Display name
        score: Match score in [0, 100]
        version: Version if known
        path: Executable path for system binaries
        description: Description if known
    """

    source: str
    name: str
    score: float
    version: str | None = None
    path: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class SearchReport:
    """Ranked results plus the registries that could not answer."""

    query: str
    mode: SearchMode
    results: tuple[SearchResult, ...]
    failures: tuple[tuple[str, str], ...] = ()  # (source, reason)


def rank(results: Iterable[SearchResult]) -> list[SearchResult]:
    """Drop results below MIN_SCORE and order the rest.

    Order: score descending, then configured > system-binary > remote, then name.
    """
    kept = [result for result in results if result.score >= MIN_SCORE]
    return sorted(
        kept,
        key=lambda r: (
            -r.score,
            _SOURCE_PRIORITY.get(r.source, _REMOTE_PRIORITY),
            r.name.lower(),
            r.source,
        ),
    )


class SearchEngine:
    """Produces a ranked SearchReport for a query."""

    def __init__(self, shell: Shell, registries: Sequence[PackageRegistry]) -> None:
        self._shell = shell
        self._registries = list(registries)

    def search(self, query: str, mode: SearchMode, tools: Iterable[Tool] = ()) -> SearchReport:
        results: list[SearchResult] = []
        failures: list[tuple[str, str]] = []
        tools = list(tools)

        if mode in (SearchMode.LOCAL, SearchMode.ALL):
            results.extend(self._search_configured(query, tools))
            results.extend(self._search_binaries(query, tools))

        if mode in (SearchMode.REMOTE, SearchMode.ALL):
            remote_results, failures = self._search_registries(query)
            results.extend(remote_results)

        return SearchReport(
            query=query, mode=mode, results=tuple(rank(results)), failures=tuple(failures)
        )

    def close(self) -> None:
        for registry in self._registries:
            registry.close()

    def _search_configured(self, query: str, tools: list[Tool]) -> list[SearchResult]:
        return [
            SearchResult(
                source=CONFIGURED,
                name=tool.name,
                score=weighted_score(query, tool.name, tool.description),
                description=tool.description,
            )
            for tool in tools
        ]

    def _search_binaries(self, query: str, tools: list[Tool]) -> list[SearchResult]:
        candidates = sorted(set(WELL_KNOWN_BINARIES) | {tool.name for tool in tools})

        results: list[SearchResult] = []
        for name in candidates:
            name_score = score(query, name)
            if name_score < MIN_SCORE:
                continue
            path = self._shell.which(name)
            if path is None:
                continue
            results.append(
                SearchResult(
                    source=SYSTEM_BINARY,
                    name=name,
                    score=name_score,
                    version=self._read_version(path),
                    path=path,
                )
            )
        return results

    def _read_version(self, path: str) -> str | None:
        """First non-empty line of `<path> --version`, or None if it fails."""
        try:
            exit_code, stdout = self._shell.capture(
                [path, "--version"], timeout=VERSION_PROBE_TIMEOUT_SECONDS
            )
        except RuntimeError as e:
            logger.debug("Version check failed for %s: %s", path, e)
            return None
        if exit_code != 0:
            return None
        for line in stdout.splitlines():
            if line.strip():
                return line.strip()
        return None

    def _search_registries(
        self, query: str
    ) -> tuple[list[SearchResult], list[tuple[str, str]]]:
        """Query every registry concurrently; a failing registry is reported, not raised."""
        if not self._registries:
            return [], []

        results: list[SearchResult] = []
        failures: list[tuple[str, str]] = []

        with ThreadPoolExecutor(max_workers=len(self._registries)) as executor:
            future_to_registry = {
                executor.submit(registry.search, query): registry for registry in self._registries
            }
            for future in as_completed(future_to_registry):
                registry = future_to_registry[future]
                try:
                    matches = future.result()
                except TkitError as e:
                    logger.debug("Registry %s failed: %s", registry.source, e)
                    failures.append((registry.source, str(e)))
                    continue
                except Exception as e:
                    logger.debug("Registry %s crashed", registry.source, exc_info=True)
                    failures.append((registry.source, f"unexpected error: {e!r}"))
                    continue
                results.extend(
                    SearchResult(
                        source=registry.source,
                        name=match.name,
                        score=weighted_score(query, match.name, match.description),
                        version=match.version,
                        description=match.description,
                    )
                    for match in matches
                )

        failures.sort()
        return results, failures
