"""Minimal GitHub REST client for tags, refs and releases.

Every call raises ``requests.HTTPError`` on a non-2xx response. There is no
retry: callers decide per call site whether a failure is fatal.
"""

from __future__ import annotations

import os
from typing import Any

import requests

DEFAULT_API_URL = "https://api.github.com"
PER_PAGE = 100


class GitHubClient:
    def __init__(
        self,
        token: str,
        owner: str,
        repo: str,
        api_base: str | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.owner = owner
        self.repo = repo
        self._token = token
        self._api_base = (api_base or os.environ.get("GITHUB_API_URL") or DEFAULT_API_URL).rstrip("/")
        self._session = session or requests.Session()

    @property
    def _repo_path(self) -> str:
        return f"/repos/{self.owner}/{self.repo}"

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = f"{self._api_base}{self._repo_path}{path}"
        headers = {
            "Authorization": f"token {self._token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        response = self._session.request(method, url, headers=headers, timeout=20, **kwargs)
        response.raise_for_status()
        return response

    # -- tags & refs -----------------------------------------------------------

    def list_tags(self, per_page: int = PER_PAGE) -> list[dict]:
        """Return repository tags, newest first (one page only)."""
        response = self._request("GET", "/tags", params={"per_page": per_page})
        return response.json()

    def list_commits(self, sha: str | None = None, per_page: int = PER_PAGE) -> list[dict]:
        params: dict = {"per_page": per_page}
        if sha:
            params["sha"] = sha
        response = self._request("GET", "/commits", params=params)
        return response.json()

    def get_ref(self, ref: str) -> dict:
        """Get a ref without the "refs/" prefix, e.g. "tags/v1.0.0"."""
        response = self._request("GET", f"/git/ref/{ref}")
        return response.json()

    def get_tag(self, tag_sha: str) -> dict:
        """Get an annotated tag object."""
        response = self._request("GET", f"/git/tags/{tag_sha}")
        return response.json()

    def compare_commits(self, base: str, head: str) -> dict:
        response = self._request("GET", f"/compare/{base}...{head}")
        return response.json()

    def create_ref(self, ref: str, sha: str) -> dict:
        """Create a fully qualified ref, e.g. "refs/tags/v1.0.0"."""
        response = self._request("POST", "/git/refs", json={"ref": ref, "sha": sha})
        return response.json()

    def update_ref(self, ref: str, sha: str, force: bool = False) -> dict:
        """Move a ref given without the "refs/" prefix."""
        response = self._request(
            "PATCH", f"/git/refs/{ref}", json={"sha": sha, "force": force}
        )
        return response.json()

    # -- releases --------------------------------------------------------------

    def generate_release_notes(
        self,
        tag_name: str,
        previous_tag_name: str | None = None,
        target_commitish: str | None = None,
    ) -> dict:
        """Ask GitHub to draft release notes. Returns {"name", "body"}."""
        payload: dict[str, Any] = {"tag_name": tag_name}
        if previous_tag_name:
            payload["previous_tag_name"] = previous_tag_name
        if target_commitish:
            payload["target_commitish"] = target_commitish
        response = self._request("POST", "/releases/generate-notes", json=payload)
        return response.json()

    def create_release(
        self,
        tag_name: str,
        name: str,
        body: str | None = None,
        draft: bool = False,
        prerelease: bool = False,
        generate_release_notes: bool = False,
    ) -> dict:
        payload: dict[str, Any] = {
            "tag_name": tag_name,
            "name": name,
            "draft": draft,
            "prerelease": prerelease,
            "generate_release_notes": generate_release_notes,
        }
        if body is not None:
            payload["body"] = body
        response = self._request("POST", "/releases", json=payload)
        return response.json()

    def get_release_by_tag(self, tag: str) -> dict:
        response = self._request("GET", f"/releases/tags/{tag}")
        return response.json()

    def update_release(self, release_id: int, **fields: Any) -> dict:
        """Update a release (name, body, draft, prerelease, ...)."""
        response = self._request("PATCH", f"/releases/{release_id}", json=fields)
        return response.json()
