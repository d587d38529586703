"""GitHub Release publishing.

Nothing here is fatal: the tag already exists by the time a release is
published, so failures are reported as warnings and the run still succeeds.
"""

from __future__ import annotations

import requests

from .github import GitHubClient
from .models import ReleaseResult, Upsert
from .shell import info, warning


def fetch_generated_notes(
    client: GitHubClient, tag: str, previous_tag: str | None, target: str
) -> tuple[str | None, str | None]:
    """Ask GitHub for generated release notes.

    Returns:
        (name, body); both None if the notes could not be generated.
    """
    try:
        data = client.generate_release_notes(tag, previous_tag, target)
    except requests.RequestException as exc:
        warning(f"Failed to generate release notes via API: {exc}")
        return None, None
    return data.get("name") or tag, data.get("body") or None


def publish_release(
    client: GitHubClient,
    tag: str,
    previous_tag: str | None,
    target: str,
) -> ReleaseResult | None:
    """Create the release for ``tag``, or update it if it already exists.

    Args:
        client: API client for the repository.
        tag: The tag that was just created.
        previous_tag: The previous release tag, used to scope generated notes.
        target: Branch the notes are generated against.

    Returns:
        The outcome and release URL, or None if neither create nor update
        succeeded.
    """
    name, body = fetch_generated_notes(client, tag, previous_tag, target)

    try:
        created = client.create_release(
            tag_name=tag,
            name=name or tag,
            body=body,
            generate_release_notes=body is None,
        )
        return ReleaseResult(tag=tag, outcome=Upsert.CREATED, url=created.get("html_url"))
    except requests.RequestException as exc:
        info(f"Release already exists or create failed; attempting update. ({exc})")

    try:
        existing = client.get_release_by_tag(tag)
        updated = client.update_release(
            existing["id"],
            name=name or existing.get("name") or tag,
            body=body or existing.get("body"),
            draft=existing.get("draft", False),
            prerelease=existing.get("prerelease", False),
        )
    except requests.RequestException as exc:
        warning(f"Failed to update existing release: {exc}")
        return None
    return ReleaseResult(
        tag=tag,
        outcome=Upsert.UPDATED,
        url=updated.get("html_url") or existing.get("html_url"),
    )
