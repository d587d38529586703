"""Action inputs.

Inputs are passed by the runner as INPUT_<NAME> environment variables and are
also accepted as options of ``release-tagger run``. Parsing is lenient: any
unrecognised value falls back to the documented default.
"""

from __future__ import annotations

from pydantic import BaseModel, field_validator

from .errors import MissingInput
from .models import FloatingTagMode

DEFAULT_TAG_PREFIX = "v"
DEFAULT_INITIAL_VERSION = "0.0.0"

_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off"}
_FLOATING_OFF = {"off", "false", "0", "no"}
_FLOATING_MAJOR_MINOR = {"minor", "major+minor", "major,minor", "majorminor"}


def parse_floating_tag_mode(raw: str | None) -> FloatingTagMode:
    """Map the ``floating-tag`` input to a mode.

    "off"/"false"/"0"/"no" disable floating tags, "minor"/"major+minor"/
    "major,minor"/"majorminor" move both tags, and anything else (including
    "true" and an empty value) moves only the major tag.
    """
    value = (raw or "").strip().lower()
    if value in _FLOATING_OFF:
        return FloatingTagMode.OFF
    if value in _FLOATING_MAJOR_MINOR:
        return FloatingTagMode.MAJOR_MINOR
    return FloatingTagMode.MAJOR


def parse_boolean(raw: str | None, default: bool) -> bool:
    value = (raw or "").strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    return default


class Settings(BaseModel):
    """Parsed action inputs.

    Attributes:
        github_token: API credential. Required.
        tag_prefix: Prefix of release tags ("v" gives "v1.2.3").
        initial_version: Version to bump from when no release tag exists.
        floating_tag: Which floating tags to move after a release.
        create_release: Publish a GitHub Release for the new tag.
        pre_release_command: Shell command run before tagging, if any.
    """

    github_token: str
    tag_prefix: str = DEFAULT_TAG_PREFIX
    initial_version: str = DEFAULT_INITIAL_VERSION
    floating_tag: FloatingTagMode = FloatingTagMode.MAJOR
    create_release: bool = False
    pre_release_command: str | None = None

    @field_validator("pre_release_command")
    @classmethod
    def _blank_command_is_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None

    @classmethod
    def from_inputs(
        cls,
        *,
        github_token: str | None,
        tag_prefix: str | None = None,
        initial_version: str | None = None,
        floating_tag: str | None = None,
        create_release: str | None = None,
        pre_release_command: str | None = None,
    ) -> Settings:
        """Build settings from raw input strings, applying defaults.

        Raises:
            MissingInput: If no GitHub token was supplied.
        """
        if not (github_token or "").strip():
            raise MissingInput("github-token")
        return cls(
            github_token=github_token.strip(),
            tag_prefix=(tag_prefix or "").strip() or DEFAULT_TAG_PREFIX,
            initial_version=(initial_version or "").strip() or DEFAULT_INITIAL_VERSION,
            floating_tag=parse_floating_tag_mode(floating_tag),
            create_release=parse_boolean(create_release, False),
            pre_release_command=pre_release_command,
        )
