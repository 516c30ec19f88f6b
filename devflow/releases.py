"""
releases.py

Responsibility: Isolate the "latest release" HTTP lookup used by the update check.

This module must be the only place that:
- Builds the release endpoint URL from the configured repository URL
- Sends the HTTP request
- Interprets the response payload

The update check compares tags; it never downloads or applies anything.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any

import requests


class NetworkError(RuntimeError):
    pass


@dataclass(frozen=True)
class ReleaseInfo:
    tag_name: str
    html_url: str | None = None


def latest_release_url(repository_url: str) -> str:
    """
    Return `<repository_url>/releases/latest`, ignoring a trailing slash or `.git` suffix.
    """
    url = repository_url.strip().rstrip("/")
    if url.endswith(".git"):
        url = url[: -len(".git")]
    return f"{url}/releases/latest"


class ReleaseClient:
    def __init__(
        self,
        session: requests.Session | None = None,
        *,
        timeout: float = 30.0,
        token: str | None = None,
    ) -> None:
        self._session = session if session is not None else requests.Session()
        self._timeout = timeout
        self._token = token if token is not None else os.environ.get("GITHUB_TOKEN", "")

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "devflow",
        }
        if self._token.strip():
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _get_json(self, url: str) -> Any:
        try:
            r = self._session.get(url, headers=self._headers(), timeout=self._timeout)
        except requests.RequestException as e:
            raise NetworkError(f"GET {url} failed: {e}") from e
        if r.status_code >= 400:
            try:
                payload = r.json()
            except ValueError:
                payload = {"message": r.text}
            message = payload.get("message", payload) if isinstance(payload, dict) else payload
            raise NetworkError(f"Release lookup error {r.status_code} GET {url}: {message}")
        try:
            return r.json()
        except ValueError as e:
            raise NetworkError(f"Release lookup GET {url} did not return JSON") from e

    def latest_release(self, repository_url: str) -> ReleaseInfo:
        url = latest_release_url(repository_url)
        data = self._get_json(url)
        tag = data.get("tag_name") if isinstance(data, dict) else None
        if not isinstance(tag, str) or not tag:
            raise NetworkError(f"Release payload from {url} has no `tag_name`")
        return ReleaseInfo(tag_name=tag, html_url=data.get("html_url"))
