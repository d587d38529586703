"""Data models for release-tagger.

These Pydantic models represent the values passed between the steps of a
release run.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class BumpType(str, Enum):
    """Semantic-version increment implied by a set of commits."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    NONE = "none"


class FloatingTagMode(str, Enum):
    """Which floating tags to move after a release."""

    OFF = "off"
    MAJOR = "major"
    MAJOR_MINOR = "major+minor"


class Upsert(str, Enum):
    """Outcome of a create-or-update call."""

    CREATED = "created"
    UPDATED = "updated"


class CommitInfo(BaseModel):
    """A single commit between the last release and the pushed head.

    Attributes:
        message: Full commit message, including body and trailers.
        sha: Commit identifier.
    """

    model_config = ConfigDict(frozen=True)

    message: str
    sha: str

    @property
    def subject(self) -> str:
        return self.message.split("\n", 1)[0]


class FloatingTagUpdate(BaseModel):
    name: str
    sha: str
    outcome: Upsert


class ReleaseResult(BaseModel):
    tag: str
    outcome: Upsert
    url: str | None = None


class PushResult(BaseModel):
    """Summary of a push run, mirrored into the step outputs.

    Attributes:
        bump_type: The bump decided for the commits since the last tag.
        new_tag: Tag created by this run, if any.
        floating_tag: Major floating tag moved by this run, if any.
        floating_minor_tag: Major.minor floating tag moved by this run, if any.
        release_url: URL of the created or updated release, if any.
    """

    bump_type: BumpType = BumpType.NONE
    new_tag: str | None = None
    floating_tag: str | None = None
    floating_minor_tag: str | None = None
    release_url: str | None = None
