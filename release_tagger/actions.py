"""GitHub Actions runtime: triggering event and step outputs."""

from __future__ import annotations

import json
import os
from pathlib import Path
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field

from .shell import info


class EventContext(BaseModel):
    """The workflow event that triggered this run.

    Attributes:
        event_name: e.g. "push" or "pull_request".
        ref: Fully qualified ref that was pushed ("refs/heads/main").
        sha: Commit that triggered the run.
        repository: "owner/repo".
        workspace: Checkout directory of the repository.
        actor: Login of the user that triggered the run.
        payload: Webhook payload read from GITHUB_EVENT_PATH.
    """

    event_name: str
    ref: str = ""
    sha: str = ""
    repository: str = ""
    workspace: str | None = None
    actor: str | None = None
    payload: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> EventContext:
        env = os.environ if environ is None else environ
        payload: dict[str, Any] = {}
        event_path = env.get("GITHUB_EVENT_PATH")
        if event_path and Path(event_path).exists():
            payload = json.loads(Path(event_path).read_text())
        return cls(
            event_name=env.get("GITHUB_EVENT_NAME", ""),
            ref=env.get("GITHUB_REF", ""),
            sha=env.get("GITHUB_SHA", ""),
            repository=env.get("GITHUB_REPOSITORY", ""),
            workspace=env.get("GITHUB_WORKSPACE") or None,
            actor=env.get("GITHUB_ACTOR") or None,
            payload=payload,
        )

    @property
    def owner(self) -> str:
        return self.repository.partition("/")[0]

    @property
    def repo(self) -> str:
        return self.repository.partition("/")[2]

    @property
    def pr_title(self) -> str | None:
        return (self.payload.get("pull_request") or {}).get("title")

    @property
    def default_branch(self) -> str:
        return (self.payload.get("repository") or {}).get("default_branch") or "main"


def set_output(name: str, value: str) -> None:
    """Set a step output.

    Appends to the file named by GITHUB_OUTPUT; outside a runner the value
    is printed instead.
    """
    output_path = os.environ.get("GITHUB_OUTPUT")
    if not output_path:
        info(f"output {name}={value}")
        return
    with open(output_path, "a") as fh:
        fh.write(f"{name}={value}\n")
