"""Release pipeline: analyze → bump → hook → tag → release → float.

This module orchestrates one run, dispatched on the triggering event:

- pull_request: check that the PR title follows Conventional Commits.
- push to the default branch:
  1. Find the latest release tag
  2. Collect the commits since that tag
  3. Classify them into a bump type (stop if none)
  4. Compute the next version
  5. Run the pre-release command, which may add a release commit
  6. Create the release tag
  7. Publish a GitHub Release (optional)
  8. Move the floating major / major.minor tags (optional, not for 0.x)

Every irreversible write happens after all fallible computation succeeded.
"""

from __future__ import annotations

import re

import semver

from .actions import EventContext, set_output
from .config import Settings
from .errors import InvalidTitle
from .github import GitHubClient
from .hooks import run_pre_release_command
from .models import BumpType, FloatingTagMode, PushResult
from .releases import publish_release
from .shell import info, step, warning
from .tags import commits_since, create_tag, find_latest_tag, upsert_floating_tag
from .versions import classify_commits, resolve_next_version, strip_prefix

COMMIT_TYPES = (
    "feat",
    "fix",
    "docs",
    "style",
    "refactor",
    "perf",
    "test",
    "build",
    "ci",
    "chore",
    "revert",
)
CONVENTIONAL_TITLE = re.compile(rf"^({'|'.join(COMMIT_TYPES)})(\(.+\))?!?:\s.+$")

_TITLE_HELP = (
    "PR title does not follow Conventional Commits format.\n\n"
    "Expected format: <type>[optional scope][!]: <description>\n\n"
    "Valid types: {types}\n\n"
    "Examples:\n"
    "  - feat: add new feature\n"
    "  - fix(auth): resolve login issue\n"
    "  - feat!: breaking change in API\n"
    "  - chore(deps): update dependencies\n\n"
    'Your title: "{title}"'
)


def validate_pr_title(title: str | None) -> None:
    """Check a PR title against the Conventional Commits grammar.

    Raises:
        InvalidTitle: If the title is missing or malformed. The message
            explains the expected format.
    """
    if not title:
        raise InvalidTitle("Unable to retrieve PR title")
    if not CONVENTIONAL_TITLE.match(title):
        raise InvalidTitle(_TITLE_HELP.format(types=", ".join(COMMIT_TYPES), title=title))


def handle_pull_request(event: EventContext) -> None:
    step("Validating pull request title")
    title = event.pr_title
    if title:
        info(f'PR Title: "{title}"')
    validate_pr_title(title)
    info("PR title follows Conventional Commits format")


def is_release_branch(ref: str, default_branch: str) -> bool:
    """Whether a pushed ref should produce releases."""
    return ref in {
        f"refs/heads/{default_branch}",
        "refs/heads/main",
        "refs/heads/master",
    }


def update_floating_tags(
    client: GitHubClient,
    settings: Settings,
    version: str,
    new_tag: str,
    sha: str,
    result: PushResult,
) -> None:
    """Point the floating major (and major.minor) tags at the release commit.

    0.x releases never get floating tags.
    """
    if settings.floating_tag is FloatingTagMode.OFF:
        return

    parsed = semver.Version.parse(version)
    if parsed.major == 0:
        info("Skipping floating tag creation for v0.x.x versions")
        return

    step("Updating floating tags")
    major_tag = f"{settings.tag_prefix}{parsed.major}"
    update = upsert_floating_tag(client, major_tag, sha)
    result.floating_tag = major_tag
    set_output("floating-tag", major_tag)
    info(f"{update.outcome.value.capitalize()} floating tag {major_tag} -> {new_tag}")

    if settings.floating_tag is FloatingTagMode.MAJOR_MINOR:
        minor_tag = f"{settings.tag_prefix}{parsed.major}.{parsed.minor}"
        update = upsert_floating_tag(client, minor_tag, sha)
        result.floating_minor_tag = minor_tag
        set_output("floating-minor-tag", minor_tag)
        info(f"{update.outcome.value.capitalize()} floating minor tag {minor_tag} -> {new_tag}")


def _no_bump(reason: str) -> PushResult:
    info(reason)
    set_output("bump-type", BumpType.NONE.value)
    return PushResult()


def handle_push(client: GitHubClient, event: EventContext, settings: Settings) -> PushResult:
    """Tag a new release if the commits since the last one call for it.

    Args:
        client: API client for the repository.
        event: The push event.
        settings: Parsed action inputs.

    Returns:
        What the run did. The same values are written as step outputs.
    """
    default_branch = event.default_branch
    if not is_release_branch(event.ref, default_branch):
        return _no_bump(f"Push is not to the default branch ({event.ref}). Skipping tag creation.")

    step("Push to main branch detected. Analyzing commits")
    latest_tag = find_latest_tag(client, settings.tag_prefix)
    info(f"Latest tag: {latest_tag or 'none'}")

    commits = commits_since(client, latest_tag, event.sha)
    info(f"Found {len(commits)} commits since last tag")
    if not commits:
        return _no_bump("No new commits since last tag. Skipping.")

    bump = classify_commits(commits)
    info(f"Determined bump type: {bump.value}")
    if bump is BumpType.NONE:
        return _no_bump("No version bump required based on commit messages.")

    current = strip_prefix(latest_tag, settings.tag_prefix) if latest_tag else settings.initial_version
    new_version = resolve_next_version(current, bump)
    new_tag = f"{settings.tag_prefix}{new_version}"

    sha = run_pre_release_command(
        settings.pre_release_command,
        version=new_version,
        tag=new_tag,
        head_sha=event.sha,
        workspace=event.workspace,
        actor=event.actor,
    )

    step(f"Creating new tag: {new_tag}")
    create_tag(client, new_tag, sha)
    result = PushResult(bump_type=bump, new_tag=new_tag)
    set_output("new-tag", new_tag)
    set_output("bump-type", bump.value)
    info(f"Successfully created tag {new_tag}")

    if settings.create_release:
        step("Publishing GitHub release")
        release = publish_release(client, new_tag, latest_tag, default_branch)
        if release and release.url:
            result.release_url = release.url
            set_output("release-url", release.url)
            info(f"Created/updated GitHub Release: {release.url}")

    update_floating_tags(client, settings, new_version, new_tag, sha, result)
    return result


def run(event: EventContext, settings: Settings, client: GitHubClient | None = None) -> PushResult | None:
    """Execute one run for the triggering event.

    Args:
        event: The workflow event.
        settings: Parsed action inputs.
        client: API client; built from the settings if not given.

    Returns:
        The push result for push events, None otherwise.
    """
    info(f"Event: {event.event_name}")
    info(f"Repository: {event.repository}")

    if event.event_name == "pull_request":
        handle_pull_request(event)
        return None
    if event.event_name == "push":
        if client is None:
            client = GitHubClient(settings.github_token, event.owner, event.repo)
        return handle_push(client, event, settings)

    warning(f"Unsupported event: {event.event_name}. Skipping.")
    return None
