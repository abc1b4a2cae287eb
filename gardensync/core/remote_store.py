"""Single-file read/write against the GitHub repository contents API."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from urllib.parse import quote

import requests

from gardensync import __version__
from gardensync.core.constants import GITHUB_API_URL, THEME_COMMIT_MESSAGE
from gardensync.core.env_payload import decode_content, encode_content
from gardensync.errors import (
    ConflictError,
    ErrorCode,
    RemoteFileNotFound,
    TransportError,
    classify_status,
)

logger = logging.getLogger("gardensync.remote")


@dataclass(frozen=True, slots=True)
class RemoteFile:
    """A decoded remote file and its version token."""

    path: str
    content: str
    sha: str | None = None

    @property
    def exists(self) -> bool:
        return bool(self.sha)


class RemoteConfigStore:
    """Optimistic-concurrency read/write of one file in a GitHub repository.

    ``read_file`` returns the blob ``sha`` as the version token. Passing it
    back to ``write_file`` makes GitHub reject the commit when the file moved
    on in the meantime; omitting it means "create". No retries, no caching.
    """

    def __init__(
        self,
        token: str,
        *,
        api_url: str = GITHUB_API_URL,
        session: requests.Session | None = None,
        timeout: float = 15.0,
        commit_message: str = THEME_COMMIT_MESSAGE,
    ) -> None:
        self._token = token
        self._api_url = api_url.rstrip("/")
        self._session = session or requests.Session()
        self._timeout = timeout
        self._commit_message = commit_message

    def contents_url(self, owner: str, repo: str, path: str) -> str:
        return (
            f"{self._api_url}/repos/{quote(owner, safe='')}/{quote(repo, safe='')}"
            f"/contents/{quote(path.lstrip('/'))}"
        )

    def read_file(self, owner: str, repo: str, path: str) -> RemoteFile:
        """Fetch a file.

        Raises:
            RemoteFileNotFound: The path does not exist (create mode).
            TransportError: Network, auth, rate-limit or unexpected response.
        """
        url = self.contents_url(owner, repo, path)
        response = self._request("GET", url)
        if response.status_code == 404:
            logger.info("remote file missing path=%s repo=%s/%s", path, owner, repo)
            raise RemoteFileNotFound(path)
        if response.status_code != 200:
            raise self._status_error(response, path)

        try:
            data = response.json()
        except ValueError as exc:
            raise TransportError(ErrorCode.NETWORK_BAD_RESPONSE, details={"path": path}) from exc
        if not isinstance(data, dict) or data.get("type", "file") != "file":
            # A directory listing comes back as a JSON array.
            raise TransportError(
                ErrorCode.NETWORK_BAD_RESPONSE,
                details={"path": path, "reason": "path is not a file"},
            )
        sha = data.get("sha")
        if not isinstance(sha, str) or not sha:
            raise TransportError(
                ErrorCode.NETWORK_BAD_RESPONSE,
                details={"path": path, "reason": "missing sha"},
            )
        try:
            content = decode_content(str(data.get("content") or ""))
        except ValueError as exc:
            raise TransportError(
                ErrorCode.NETWORK_BAD_RESPONSE,
                details={"path": path, "reason": "undecodable content"},
            ) from exc
        logger.info("remote file read path=%s repo=%s/%s sha=%s", path, owner, repo, sha[:7])
        return RemoteFile(path=path, content=content, sha=sha)

    def write_file(
        self,
        owner: str,
        repo: str,
        path: str,
        content: str,
        sha: str | None = None,
    ) -> str:
        """Commit ``content`` to ``path`` and return the new blob sha.

        Raises:
            ConflictError: ``sha`` no longer matches the remote file.
            TransportError: Network, auth, rate-limit or unexpected response.
        """
        url = self.contents_url(owner, repo, path)
        body: dict[str, str] = {
            "message": self._commit_message,
            "content": encode_content(content),
        }
        if sha:
            body["sha"] = sha
        response = self._request("PUT", url, json=body)

        if response.status_code == 409 or (
            response.status_code == 422 and _mentions_sha(response)
        ):
            logger.warning("remote write conflict path=%s repo=%s/%s", path, owner, repo)
            raise ConflictError(path, details={"status": response.status_code})
        if response.status_code not in (200, 201):
            raise self._status_error(response, path)

        new_sha = ""
        try:
            data = response.json()
        except ValueError:
            data = {}
        if isinstance(data, dict):
            content_info = data.get("content")
            if isinstance(content_info, dict):
                new_sha = str(content_info.get("sha") or "")
        logger.info(
            "remote file %s path=%s repo=%s/%s",
            "created" if response.status_code == 201 else "updated",
            path,
            owner,
            repo,
        )
        return new_sha

    def close(self) -> None:
        self._session.close()

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": f"GardenSync/{__version__}",
        }
        if self._token:
            headers["Authorization"] = f"token {self._token}"
        return headers

    def _request(self, method: str, url: str, **kwargs) -> requests.Response:
        try:
            return self._session.request(
                method,
                url,
                headers=self._headers(),
                timeout=self._timeout,
                **kwargs,
            )
        except requests.Timeout as exc:
            raise TransportError(ErrorCode.NETWORK_TIMEOUT, details={"method": method}) from exc
        except requests.RequestException as exc:
            raise TransportError(
                ErrorCode.NETWORK_UNAVAILABLE,
                details={"method": method, "original": type(exc).__name__},
            ) from exc

    @staticmethod
    def _status_error(response: requests.Response, path: str) -> TransportError:
        code = classify_status(response.status_code, _safe_text(response))
        if code in (ErrorCode.REMOTE_FILE_NOT_FOUND, ErrorCode.REMOTE_CONFLICT):
            code = ErrorCode.NETWORK_BAD_RESPONSE
        logger.warning("remote request failed path=%s status=%s", path, response.status_code)
        return TransportError(code, details={"path": path, "status": response.status_code})


def _safe_text(response: requests.Response) -> str:
    try:
        return response.text or ""
    except (UnicodeDecodeError, AttributeError):
        return ""


def _mentions_sha(response: requests.Response) -> bool:
    return "sha" in _safe_text(response).lower()
