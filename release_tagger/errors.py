"""Exceptions raised by release-tagger.

Everything that should stop a run derives from ReleaseTaggerError. The CLI
turns these into a workflow error annotation and a non-zero exit.
"""

from __future__ import annotations


class ReleaseTaggerError(Exception):
    """Base class for fatal release-tagger errors."""


class MissingInput(ReleaseTaggerError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Input required and not supplied: {name}")
        self.name = name


class InvalidTitle(ReleaseTaggerError):
    """PR title is missing or does not follow Conventional Commits."""


class InvalidVersion(ReleaseTaggerError):
    def __init__(self, version: str) -> None:
        super().__init__(f"Failed to increment version from {version!r}: not a valid semantic version")
        self.version = version


class TagAlreadyExists(ReleaseTaggerError):
    def __init__(self, tag: str) -> None:
        super().__init__(f"Tag {tag} already exists; refusing to overwrite it")
        self.tag = tag


class PreReleaseCommandFailed(ReleaseTaggerError):
    def __init__(self, command: str, returncode: int) -> None:
        super().__init__(f"Pre-release command failed with exit code {returncode}: {command}")
        self.command = command
        self.returncode = returncode
