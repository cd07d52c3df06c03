"""Shared pytest fixtures for the test suite."""

from collections.abc import Generator
from typing import Any
from unittest.mock import MagicMock, patch

import pytest

from label_release.github_api import PullRequest


def make_pr(number: int, *labels: str) -> PullRequest:
    """Create a pull request snapshot with the given labels.

    Args:
        number: The pull request number.
        labels: Label names attached to the pull request.
    """
    return PullRequest(number=number, labels=frozenset(labels))


def make_github_pr(number: int, *labels: str) -> MagicMock:
    """Create a mock PyGithub pull request object."""
    pr = MagicMock()
    pr.number = number
    pr.labels = []
    for name in labels:
        label = MagicMock()
        label.name = name
        pr.labels.append(label)
    return pr


def make_github_tag(name: str) -> MagicMock:
    """Create a mock PyGithub tag object with the given name."""
    tag = MagicMock()
    tag.name = name
    return tag


@pytest.fixture
def mock_github_api() -> MagicMock:
    """Create a mock GitHubAPI instance for unit tests."""
    mock_api = MagicMock()
    mock_api.get_pull_requests_for_commit.return_value = []
    mock_api.get_pull_request.return_value = make_pr(1)
    mock_api.list_tag_names.return_value = []
    mock_api.create_tag_ref.return_value = None
    return mock_api


@pytest.fixture
def mock_github_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Any) -> dict[str, str]:
    """Set up mock GitHub environment variables for a merge run."""
    output_file = tmp_path / "github_output"
    output_file.write_text("")
    env_vars = {
        "GITHUB_EVENT_NAME": "push",
        "GITHUB_SHA": "abc123def456",
        "GITHUB_REPOSITORY": "owner/repo",
        "GITHUB_OUTPUT": str(output_file),
        "GITHUB_TOKEN": "test-token",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    for key in ("GITHUB_EVENT_PATH", "INPUT_GITHUB_TOKEN", "INPUT_TOKEN", "INPUT_INITIAL_TAG", "INPUT_DRY_RUN"):
        monkeypatch.delenv(key, raising=False)
    return env_vars


@pytest.fixture
def mock_pygithub() -> Generator[dict[str, Any], None, None]:
    """Patch PyGithub for unit tests."""
    with patch("label_release.github_api.Github") as mock_github:
        mock_repo = MagicMock()
        mock_github.return_value.get_repo.return_value = mock_repo
        yield {"github": mock_github, "repo": mock_repo}


@pytest.fixture
def sample_tags() -> list[str]:
    """Sample tag names mixing releases, pre-releases and non-semver tags."""
    return [
        "0.9.0",
        "v1.0.0",
        "1.0.1",
        "1.1.0-rc.1",
        "latest",
        "v-bad",
        "1.1.0",
        "release-2024",
    ]
