"""Commit classification and version arithmetic.

Turns the commits since the last release into a bump type and computes the
next version from the latest tag. Increments follow npm's ``semver.inc``:
bumping a pre-release of the target version finalizes it instead of skipping
past it ("1.0.0-rc.1" + patch -> "1.0.0").
"""

from __future__ import annotations

from collections.abc import Iterable

import semver

from .errors import InvalidVersion
from .models import BumpType, CommitInfo

BREAKING_MARKERS = ("BREAKING CHANGE:", "BREAKING-CHANGE:")


def classify_commits(commits: Iterable[CommitInfo]) -> BumpType:
    """Decide the bump type for a set of commits.

    Only the subject line is checked for a ``!:`` marker and for the
    ``feat``/``fix`` prefixes; the whole message is searched for
    ``BREAKING CHANGE:`` footers. Breaking wins over feat, feat over fix.
    """
    has_breaking = has_feat = has_fix = False

    for commit in commits:
        subject = commit.subject
        if "!:" in subject or any(m in commit.message for m in BREAKING_MARKERS):
            has_breaking = True
        if subject.startswith("feat"):
            has_feat = True
        if subject.startswith("fix"):
            has_fix = True

    if has_breaking:
        return BumpType.MAJOR
    if has_feat:
        return BumpType.MINOR
    if has_fix:
        return BumpType.PATCH
    return BumpType.NONE


def parse_version(version_str: str) -> semver.Version:
    """Parse a full semantic version string.

    Raises:
        InvalidVersion: If the string is not valid semver.
    """
    try:
        return semver.Version.parse(version_str)
    except (TypeError, ValueError) as exc:
        raise InvalidVersion(version_str) from exc


def strip_prefix(tag: str, prefix: str) -> str:
    """Return the version part of a tag name ("v1.2.3" -> "1.2.3")."""
    if prefix and tag.startswith(prefix):
        return tag[len(prefix) :]
    return tag


def latest_semver_tag(names: Iterable[str], prefix: str) -> str | None:
    """Pick the highest semver tag among ``names``.

    Names that do not start with ``prefix`` or whose remainder is not a
    valid semantic version are ignored.
    """
    best: tuple[semver.Version, str] | None = None
    for name in names:
        if not name.startswith(prefix):
            continue
        candidate = strip_prefix(name, prefix)
        if not semver.Version.is_valid(candidate):
            continue
        version = semver.Version.parse(candidate)
        if best is None or version > best[0]:
            best = (version, name)
    return best[1] if best else None


def resolve_next_version(current: str, bump: BumpType) -> str:
    """Compute the next version string.

    Examples:
        "1.4.2" + minor → "1.5.0"
        "2.0.0" + major → "3.0.0"
        "0.0.0" + patch → "0.0.1"

    Raises:
        InvalidVersion: If ``current`` cannot be parsed.
        ValueError: If ``bump`` is BumpType.NONE.
    """
    if bump is BumpType.NONE:
        raise ValueError("Cannot resolve a next version for bump type 'none'")
    return str(parse_version(current).next_version(bump.value))
