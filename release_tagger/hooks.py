"""Pre-release command.

Runs a user-supplied command before the release tag is created. If the
command changes files in the checkout, the changes are committed and pushed
and the release tag points at that new commit instead of the pushed one.
Every failure here is fatal so that no tag ever points at a half-finished
release.
"""

from __future__ import annotations

from pathlib import Path

from .errors import PreReleaseCommandFailed
from .shell import git, info, run, step

BOT_ACTOR = "github-actions[bot]"
BOT_EMAIL = "41898282+github-actions[bot]@users.noreply.github.com"


def commit_identity(actor: str | None) -> tuple[str, str]:
    """Return (name, email) for the release commit author."""
    name = actor or BOT_ACTOR
    if name == BOT_ACTOR:
        return name, BOT_EMAIL
    return name, f"{name}@users.noreply.github.com"


def run_pre_release_command(
    command: str | None,
    *,
    version: str,
    tag: str,
    head_sha: str,
    workspace: str | Path | None = None,
    actor: str | None = None,
) -> str:
    """Run the pre-release command and return the commit to tag.

    Args:
        command: Shell command, or None to skip.
        version: New version, exported as NEW_VERSION.
        tag: New tag name, exported as NEW_TAG.
        head_sha: Commit that triggered the run.
        workspace: Repository checkout. Defaults to the current directory.
        actor: User that triggered the run; used as the commit author.

    Returns:
        ``head_sha`` if nothing was committed, else the new commit's sha.

    Raises:
        PreReleaseCommandFailed: If the command exits non-zero.
        subprocess.CalledProcessError: If any git step fails.
    """
    if not command:
        return head_sha

    cwd = Path(workspace) if workspace else Path.cwd()
    step(f"Running pre-release command: {command}")

    result = run(
        command, cwd=cwd, env={"NEW_VERSION": version, "NEW_TAG": tag}, check=False
    )
    if result.returncode != 0:
        raise PreReleaseCommandFailed(command, result.returncode)

    if not git("status", "--porcelain", cwd=cwd):
        info("Pre-release command produced no file changes; tagging current commit.")
        return head_sha

    info("Pre-release command produced changes; creating release commit.")
    name, email = commit_identity(actor)
    git("config", "user.name", name, cwd=cwd)
    git("config", "user.email", email, cwd=cwd)
    git("add", "-A", cwd=cwd)
    git("commit", "-m", f"chore: release {tag}", cwd=cwd)
    git("push", cwd=cwd)

    new_sha = git("rev-parse", "HEAD", cwd=cwd)
    info(f"Created release commit {new_sha}")
    return new_sha
