"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
import requests

from release_tagger.actions import EventContext
from release_tagger.config import Settings


@pytest.fixture(autouse=True)
def _isolate_runner_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a real runner's outputs and API URL out of the tests."""
    monkeypatch.delenv("GITHUB_OUTPUT", raising=False)
    monkeypatch.delenv("GITHUB_API_URL", raising=False)


@pytest.fixture
def github_output(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point GITHUB_OUTPUT at a temporary file."""
    path = tmp_path / "github_output.txt"
    path.touch()
    monkeypatch.setenv("GITHUB_OUTPUT", str(path))
    return path


@pytest.fixture
def http_error() -> Callable[[int], requests.HTTPError]:
    """Build an HTTPError carrying a response with the given status."""

    def make(status: int) -> requests.HTTPError:
        response = requests.Response()
        response.status_code = status
        return requests.HTTPError(f"{status} Client Error", response=response)

    return make


@pytest.fixture
def settings() -> Settings:
    return Settings(github_token="t0ken")


@pytest.fixture
def push_event() -> EventContext:
    """A push to main of commit 'head'."""
    return EventContext(
        event_name="push",
        ref="refs/heads/main",
        sha="head",
        repository="octo/widgets",
        payload={"repository": {"default_branch": "main"}},
    )


def read_outputs(path: Path) -> dict[str, str]:
    """Parse a GITHUB_OUTPUT file into a dict."""
    outputs: dict[str, str] = {}
    for line in path.read_text().splitlines():
        name, _, value = line.partition("=")
        outputs[name] = value
    return outputs


@pytest.fixture
def outputs(github_output: Path) -> Callable[[], dict[str, str]]:
    """Return a callable that reads the current step outputs."""
    return lambda: read_outputs(github_output)
