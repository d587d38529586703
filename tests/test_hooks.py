"""Tests for release_tagger.hooks."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, call, patch

import pytest

from release_tagger.errors import PreReleaseCommandFailed
from release_tagger.hooks import BOT_EMAIL, commit_identity, run_pre_release_command


class TestCommitIdentity:
    def test_defaults_to_bot(self) -> None:
        assert commit_identity(None) == ("github-actions[bot]", BOT_EMAIL)

    def test_bot_actor_uses_bot_email(self) -> None:
        assert commit_identity("github-actions[bot]") == ("github-actions[bot]", BOT_EMAIL)

    def test_user_actor_gets_noreply_address(self) -> None:
        assert commit_identity("mona") == ("mona", "mona@users.noreply.github.com")


@patch("release_tagger.hooks.step")
class TestRunPreReleaseCommand:
    @patch("release_tagger.hooks.run")
    @patch("release_tagger.hooks.git")
    def test_no_command_returns_head(
        self, mock_git: MagicMock, mock_run: MagicMock, mock_step: MagicMock
    ) -> None:
        sha = run_pre_release_command(None, version="1.0.0", tag="v1.0.0", head_sha="head")

        assert sha == "head"
        mock_run.assert_not_called()
        mock_git.assert_not_called()

    @patch("release_tagger.hooks.run")
    @patch("release_tagger.hooks.git")
    def test_passes_version_and_tag_to_command(
        self, mock_git: MagicMock, mock_run: MagicMock, mock_step: MagicMock, tmp_path: Path
    ) -> None:
        mock_run.return_value = subprocess.CompletedProcess("make", 0)
        mock_git.return_value = ""

        run_pre_release_command(
            "make version", version="1.5.0", tag="v1.5.0", head_sha="head", workspace=tmp_path
        )

        mock_run.assert_called_once_with(
            "make version",
            cwd=tmp_path,
            env={"NEW_VERSION": "1.5.0", "NEW_TAG": "v1.5.0"},
            check=False,
        )

    @patch("release_tagger.hooks.run")
    @patch("release_tagger.hooks.git")
    def test_clean_tree_tags_head(
        self, mock_git: MagicMock, mock_run: MagicMock, mock_step: MagicMock, tmp_path: Path
    ) -> None:
        mock_run.return_value = subprocess.CompletedProcess("true", 0)
        mock_git.return_value = ""

        sha = run_pre_release_command(
            "true", version="1.5.0", tag="v1.5.0", head_sha="head", workspace=tmp_path
        )

        assert sha == "head"
        mock_git.assert_called_once_with("status", "--porcelain", cwd=tmp_path)

    @patch("release_tagger.hooks.run")
    @patch("release_tagger.hooks.git")
    def test_changes_are_committed_and_pushed(
        self, mock_git: MagicMock, mock_run: MagicMock, mock_step: MagicMock, tmp_path: Path
    ) -> None:
        mock_run.return_value = subprocess.CompletedProcess("bump", 0)
        mock_git.side_effect = [
            " M pyproject.toml",  # status
            "",  # config user.name
            "",  # config user.email
            "",  # add
            "",  # commit
            "",  # push
            "newsha",  # rev-parse
        ]

        sha = run_pre_release_command(
            "bump",
            version="1.5.0",
            tag="v1.5.0",
            head_sha="head",
            workspace=tmp_path,
            actor="mona",
        )

        assert sha == "newsha"
        assert mock_git.call_args_list == [
            call("status", "--porcelain", cwd=tmp_path),
            call("config", "user.name", "mona", cwd=tmp_path),
            call("config", "user.email", "mona@users.noreply.github.com", cwd=tmp_path),
            call("add", "-A", cwd=tmp_path),
            call("commit", "-m", "chore: release v1.5.0", cwd=tmp_path),
            call("push", cwd=tmp_path),
            call("rev-parse", "HEAD", cwd=tmp_path),
        ]

    @patch("release_tagger.hooks.run")
    @patch("release_tagger.hooks.git")
    def test_failed_command_is_fatal(
        self, mock_git: MagicMock, mock_run: MagicMock, mock_step: MagicMock
    ) -> None:
        mock_run.return_value = subprocess.CompletedProcess("false", 2)

        with pytest.raises(PreReleaseCommandFailed) as excinfo:
            run_pre_release_command("false", version="1.0.0", tag="v1.0.0", head_sha="head")

        assert excinfo.value.returncode == 2
        mock_git.assert_not_called()

    @patch("release_tagger.hooks.run")
    @patch("release_tagger.hooks.git")
    def test_failed_push_is_fatal(
        self, mock_git: MagicMock, mock_run: MagicMock, mock_step: MagicMock
    ) -> None:
        mock_run.return_value = subprocess.CompletedProcess("bump", 0)
        mock_git.side_effect = [
            " M file",
            "",
            "",
            "",
            "",
            subprocess.CalledProcessError(1, ["git", "push"]),
        ]

        with pytest.raises(subprocess.CalledProcessError):
            run_pre_release_command("bump", version="1.0.0", tag="v1.0.0", head_sha="head")

    def test_runs_in_a_real_repository(self, mock_step: MagicMock, tmp_path: Path) -> None:
        """A command that leaves the tree clean keeps the pushed commit."""
        subprocess.run(["git", "init", "-q", str(tmp_path)], check=True)

        sha = run_pre_release_command(
            'test "$NEW_TAG" = v2.0.0',
            version="2.0.0",
            tag="v2.0.0",
            head_sha="head",
            workspace=tmp_path,
        )

        assert sha == "head"
