"""Production implementation of remote repository operations over the GitHub REST API."""

import base64
import logging
from typing import Any

import httpx

from tkit import __version__
from tkit.core.errors import (
    AuthFailure,
    NetworkFailure,
    NotFound,
    SerializationFailure,
    TkitError,
)
from tkit.core.github.abc import RemoteRepository
from tkit.core.github.types import RemoteDocument, RepoInfo

logger = logging.getLogger(__name__)

API_URL = "https://api.github.com"
REQUEST_TIMEOUT_SECONDS = 15.0


class HttpGitHub(RemoteRepository):
    """GitHub contents and repos API accessed with a bearer token.

    A single httpx.Client is reused for the lifetime of the object and closed by
    close(). A client passed in (tests use httpx.MockTransport) stays owned by
    the caller.
    """

    def __init__(self, token: str, *, client: httpx.Client | None = None) -> None:
        self._token = token
        self._owns_client = client is None
        self._client = client or httpx.Client(base_url=API_URL, timeout=REQUEST_TIMEOUT_SECONDS)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def get_document(self, repo: str, path: str) -> RemoteDocument | None:
        response = self._request("GET", f"/repos/{repo}/contents/{path}")
        if response.status_code == 404:
            # Distinguish "file missing" from "repository missing"
            if not self.check_access(repo):
                raise NotFound(f"Repository '{repo}' not found.")
            return None
        self._raise_for_status(response, f"read {path} from {repo}")

        data = _json_object(response, f"read {path} from {repo}")
        encoded = data.get("content")
        revision = data.get("sha")
        if not isinstance(encoded, str) or not isinstance(revision, str):
            raise SerializationFailure(f"{path} in {repo} is not a file")
        try:
            content = base64.b64decode(encoded).decode("utf-8")
        except (ValueError, UnicodeDecodeError) as e:
            raise SerializationFailure(f"Could not decode {path} from {repo}: {e}") from e
        return RemoteDocument(content=content, revision=revision)

    def put_document(
        self,
        repo: str,
        path: str,
        content: str,
        message: str,
        previous_revision: str | None,
    ) -> RemoteDocument:
        body: dict[str, Any] = {
            "message": message,
            "content": base64.b64encode(content.encode("utf-8")).decode("ascii"),
        }
        if previous_revision is not None:
            body["sha"] = previous_revision

        response = self._request("PUT", f"/repos/{repo}/contents/{path}", json=body)
        if response.status_code == 404:
            raise NotFound(f"Repository '{repo}' not found.")
        self._raise_for_status(response, f"write {path} to {repo}")

        stored = _json_object(response, f"write {path} to {repo}").get("content")
        revision = stored.get("sha") if isinstance(stored, dict) else None
        if not isinstance(revision, str):
            raise SerializationFailure(f"GitHub did not report a revision for {path} in {repo}")
        logger.debug("Stored %s in %s at revision %s", path, repo, revision)
        return RemoteDocument(content=content, revision=revision)

    def check_access(self, repo: str) -> bool:
        response = self._request("GET", f"/repos/{repo}")
        if response.status_code == 404:
            return False
        self._raise_for_status(response, f"access {repo}")
        return True

    def create_repo(self, name: str, *, private: bool) -> RepoInfo:
        body = {
            "name": name,
            "description": "tkit tool configuration",
            "private": private,
            "auto_init": True,
        }
        response = self._request("POST", "/user/repos", json=body)
        if response.status_code == 422:
            raise TkitError(f"Could not create repository '{name}': {_error_message(response)}")
        self._raise_for_status(response, f"create repository {name}")
        return _parse_repo(_json_object(response, f"create repository {name}"))

    def list_repos(self) -> list[RepoInfo]:
        response = self._request(
            "GET",
            "/user/repos",
            params={"per_page": 100, "sort": "updated", "affiliation": "owner"},
        )
        self._raise_for_status(response, "list repositories")
        data = _json(response, "list repositories")
        if not isinstance(data, list):
            raise SerializationFailure("GitHub returned an unexpected repository list")
        return [_parse_repo(item) for item in data if isinstance(item, dict)]

    def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        headers = {
            "Authorization": f"Bearer {self._token}",
            "Accept": "application/vnd.github+json",
            "User-Agent": f"tkit/{__version__}",
        }
        logger.debug("%s %s", method, url)
        try:
            return self._client.request(method, url, headers=headers, **kwargs)
        except httpx.TimeoutException as e:
            raise NetworkFailure(f"GitHub request timed out: {method} {url}") from e
        except httpx.RequestError as e:
            raise NetworkFailure(f"Could not reach GitHub: {e}") from e

    def _raise_for_status(self, response: httpx.Response, operation: str) -> None:
        status = response.status_code
        if status in (401, 403):
            raise AuthFailure(
                f"GitHub rejected the token while trying to {operation} "
                f"({status}: {_error_message(response)}). "
                "Run 'tkit sync update-token' to store a new one."
            )
        if status >= 500:
            raise NetworkFailure(f"GitHub returned {status} while trying to {operation}.")
        if status >= 400:
            raise TkitError(
                f"GitHub returned {status} while trying to {operation}: {_error_message(response)}"
            )


def _json(response: httpx.Response, operation: str) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise NetworkFailure(
            f"GitHub returned an unreadable response while trying to {operation} "
            f"(status {response.status_code})"
        ) from e


def _json_object(response: httpx.Response, operation: str) -> dict[str, Any]:
    data = _json(response, operation)
    if not isinstance(data, dict):
        raise SerializationFailure(
            f"GitHub returned an unexpected response while trying to {operation}"
        )
    return data


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text.strip() or response.reason_phrase
    if isinstance(data, dict) and isinstance(data.get("message"), str):
        return data["message"]
    return response.reason_phrase


def _parse_repo(data: dict[str, Any]) -> RepoInfo:
    full_name = data.get("full_name")
    if not isinstance(full_name, str):
        raise SerializationFailure("GitHub returned a repository without a name")
    return RepoInfo(
        full_name=full_name,
        private=bool(data.get("private", False)),
        html_url=data.get("html_url", ""),
        description=data.get("description"),
    )
