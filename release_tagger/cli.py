"""CLI entry point for release-tagger."""

from __future__ import annotations

import subprocess

import click
import requests

from release_tagger import pipeline
from release_tagger.actions import EventContext
from release_tagger.config import DEFAULT_INITIAL_VERSION, Settings
from release_tagger.errors import InvalidTitle, ReleaseTaggerError
from release_tagger.models import BumpType, CommitInfo
from release_tagger.shell import fatal
from release_tagger.versions import classify_commits, resolve_next_version


@click.group()
@click.version_option(package_name="release-tagger")
def cli() -> None:
    """Conventional-commit release tagging for GitHub Actions."""


@cli.command()
@click.option("--github-token", envvar="INPUT_GITHUB-TOKEN", help="GitHub API token.")
@click.option("--tag-prefix", envvar="INPUT_TAG-PREFIX", help="Release tag prefix. [default: v]")
@click.option(
    "--initial-version",
    envvar="INPUT_INITIAL-VERSION",
    help=f"Version to bump from when no release tag exists. [default: {DEFAULT_INITIAL_VERSION}]",
)
@click.option(
    "--floating-tag",
    envvar="INPUT_FLOATING-TAG",
    help="Floating tags to move: off, major or major+minor. [default: major]",
)
@click.option(
    "--create-release",
    envvar="INPUT_CREATE-RELEASE",
    help="Publish a GitHub Release for new tags (true/false). [default: false]",
)
@click.option(
    "--pre-release-command",
    envvar="INPUT_PRE-RELEASE-COMMAND",
    help="Shell command to run before tagging; NEW_VERSION and NEW_TAG are set.",
)
def run(
    github_token: str | None,
    tag_prefix: str | None,
    initial_version: str | None,
    floating_tag: str | None,
    create_release: str | None,
    pre_release_command: str | None,
) -> None:
    """Handle the triggering workflow event (called from CI)."""
    try:
        settings = Settings.from_inputs(
            github_token=github_token,
            tag_prefix=tag_prefix,
            initial_version=initial_version,
            floating_tag=floating_tag,
            create_release=create_release,
            pre_release_command=pre_release_command,
        )
        pipeline.run(EventContext.from_env(), settings)
    except (ReleaseTaggerError, requests.RequestException) as exc:
        fatal(str(exc))
    except subprocess.CalledProcessError as exc:
        detail = (exc.stderr or "").strip() if isinstance(exc.stderr, str) else ""
        fatal(f"Command {exc.cmd!r} failed with exit code {exc.returncode}. {detail}".strip())


@cli.command("check-title")
@click.argument("title")
def check_title(title: str) -> None:
    """Check a PR title or commit subject against Conventional Commits."""
    try:
        pipeline.validate_pr_title(title)
    except InvalidTitle as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo("Title follows Conventional Commits format")


@cli.command("next-version")
@click.option(
    "--current",
    default=DEFAULT_INITIAL_VERSION,
    show_default=True,
    help="Version to bump from (without tag prefix).",
)
@click.option(
    "-m",
    "--message",
    "messages",
    multiple=True,
    help="Commit message to classify (repeatable).",
)
def next_version(current: str, messages: tuple[str, ...]) -> None:
    """Preview the bump type and next version for some commit messages."""
    commits = [CommitInfo(message=m, sha="") for m in messages]
    bump = classify_commits(commits)
    click.echo(f"bump-type: {bump.value}")
    if bump is BumpType.NONE:
        return
    try:
        click.echo(f"next-version: {resolve_next_version(current, bump)}")
    except ReleaseTaggerError as exc:
        raise click.ClickException(str(exc)) from exc
