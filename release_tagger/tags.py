"""Tag lookups and tag writes against the GitHub API.

Reads are forgiving: a failed tag listing or comparison is reported as a
warning and treated as "nothing found", which makes the run end with no bump.
Writes are not: creating a release tag that already exists is fatal.
Floating tags are the only refs this module ever moves.

Only one page of 100 tags or commits is read.
"""

from __future__ import annotations

import requests

from .errors import TagAlreadyExists
from .github import GitHubClient
from .models import CommitInfo, FloatingTagUpdate, Upsert
from .shell import info, warning
from .versions import latest_semver_tag


def _status(exc: requests.HTTPError) -> int | None:
    return exc.response.status_code if exc.response is not None else None


def _to_commits(raw: list[dict]) -> list[CommitInfo]:
    return [CommitInfo(message=c["commit"]["message"], sha=c["sha"]) for c in raw]


def find_latest_tag(client: GitHubClient, prefix: str) -> str | None:
    """Find the highest semver tag with the given prefix.

    Returns:
        The tag name, or None if there is none or tags could not be listed.
    """
    try:
        tags = client.list_tags()
    except requests.RequestException as exc:
        warning(f"Failed to fetch tags: {exc}")
        return None
    return latest_semver_tag((t["name"] for t in tags), prefix)


def resolve_tag_commit(client: GitHubClient, tag: str) -> str:
    """Return the commit a tag points at.

    Lightweight tags point at the commit directly; annotated tags point at a
    tag object which in turn points at the commit.
    """
    ref = client.get_ref(f"tags/{tag}")
    target = ref["object"]
    if target["type"] == "tag":
        return client.get_tag(target["sha"])["object"]["sha"]
    return target["sha"]


def commits_since(client: GitHubClient, tag: str | None, head_sha: str) -> list[CommitInfo]:
    """List the commits reachable from ``head_sha`` but not from ``tag``.

    Without a tag, returns the most recent commits on ``head_sha``. Returns
    an empty list if the API calls fail.
    """
    try:
        if not tag:
            return _to_commits(client.list_commits(sha=head_sha or None))
        base = resolve_tag_commit(client, tag)
        comparison = client.compare_commits(base, head_sha or "HEAD")
        return _to_commits(comparison.get("commits", []))
    except requests.RequestException as exc:
        warning(f"Failed to get commits since tag: {exc}")
        return []


def create_tag(client: GitHubClient, name: str, sha: str) -> None:
    """Create an immutable release tag.

    Raises:
        TagAlreadyExists: If the tag is already there. It is never moved.
    """
    try:
        client.create_ref(f"refs/tags/{name}", sha)
    except requests.HTTPError as exc:
        if _status(exc) == 422:
            raise TagAlreadyExists(name) from exc
        raise


def upsert_floating_tag(client: GitHubClient, name: str, sha: str) -> FloatingTagUpdate:
    """Force-move a floating tag to ``sha``, creating it on first use."""
    try:
        client.update_ref(f"tags/{name}", sha, force=True)
    except requests.HTTPError as exc:
        # GitHub answers 422 "Reference does not exist" for a missing ref.
        if _status(exc) not in (404, 422):
            raise
        client.create_ref(f"refs/tags/{name}", sha)
        info(f"Created new floating tag {name}")
        return FloatingTagUpdate(name=name, sha=sha, outcome=Upsert.CREATED)
    info(f"Updated existing floating tag {name}")
    return FloatingTagUpdate(name=name, sha=sha, outcome=Upsert.UPDATED)
