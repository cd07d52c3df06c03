# Copyright (c) 2026 Mark Ferrell. MIT License.
"""GitHub API wrapper for pull request lookups and tag operations.

References:
    - GitHub REST API: https://docs.github.com/en/rest
    - PyGithub Documentation: https://pygithub.readthedocs.io/
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from github import Github
from github.GithubException import GithubException
from requests.exceptions import RequestException

from label_release.errors import CollaboratorFailureError, PublishConflictError

if TYPE_CHECKING:
    from github.PullRequest import PullRequest as GithubPullRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PullRequest:
    """Snapshot of a pull request, taken once per run."""

    number: int
    labels: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_github(cls, pr: GithubPullRequest) -> PullRequest:
        """Build a snapshot from a PyGithub pull request."""
        return cls(number=pr.number, labels=frozenset(label.name for label in pr.labels))


def _error_message(error: GithubException) -> str:
    data: Any = error.data
    if isinstance(data, dict):
        return str(data.get("message", ""))
    return str(data or "")


class GitHubAPI:
    """Wrapper around PyGithub for pull request and tag operations.

    Handles authentication via token input, defaulting to GITHUB_TOKEN
    environment variable if not provided. Every GithubException or requests
    transport error is turned into a ReleaseError subclass.

    References:
        - Authentication: https://docs.github.com/en/rest/authentication
        - GITHUB_TOKEN: https://docs.github.com/en/actions/security-for-github-actions/security-guides/automatic-token-authentication
    """

    def __init__(self, token: str | None = None, repository: str | None = None) -> None:
        """Initialize the GitHub API client.

        Args:
            token: GitHub token for authentication. Defaults to GITHUB_TOKEN env var.
            repository: Repository in 'owner/repo' format. Defaults to GITHUB_REPOSITORY env var.

        Raises:
            ValueError: If the token or repository is missing.
            CollaboratorFailureError: If the repository cannot be fetched.

        References:
            - Get a repository: https://docs.github.com/en/rest/repos/repos#get-a-repository
        """
        self._token = token or os.environ.get("GITHUB_TOKEN", "")
        self._repository = repository or os.environ.get("GITHUB_REPOSITORY", "")

        if not self._token:
            raise ValueError("GitHub token is required. Set GITHUB_TOKEN or pass token parameter.")
        if not self._repository:
            raise ValueError("Repository is required. Set GITHUB_REPOSITORY or pass repository parameter.")

        self._github = Github(self._token)
        try:
            self._repo = self._github.get_repo(self._repository)
        except (GithubException, RequestException) as e:
            raise CollaboratorFailureError(f"Failed to access repository {self._repository}: {e}") from e

    def get_pull_requests_for_commit(self, commit_sha: str) -> list[PullRequest]:
        """List the pull requests associated with a commit.

        Args:
            commit_sha: SHA of the merge commit.

        Returns:
            Snapshots of every associated pull request, all pages included.

        Raises:
            CollaboratorFailureError: If the API call fails.

        References:
            - List pull requests associated with a commit:
              https://docs.github.com/en/rest/commits/commits#list-pull-requests-associated-with-a-commit
        """
        try:
            pulls = self._repo.get_commit(commit_sha).get_pulls()
            return [PullRequest.from_github(pr) for pr in pulls]
        except (GithubException, RequestException) as e:
            raise CollaboratorFailureError(f"Failed to list pull requests for {commit_sha}: {e}") from e

    def get_pull_request(self, number: int) -> PullRequest:
        """Fetch a pull request by number.

        Raises:
            CollaboratorFailureError: If the API call fails.

        References:
            - Get a pull request: https://docs.github.com/en/rest/pulls/pulls#get-a-pull-request
        """
        try:
            return PullRequest.from_github(self._repo.get_pull(number))
        except (GithubException, RequestException) as e:
            raise CollaboratorFailureError(f"Failed to get pull request #{number}: {e}") from e

    def list_tag_names(self) -> list[str]:
        """List the names of all tags in the repository.

        The paginated listing is drained completely before returning.

        Raises:
            CollaboratorFailureError: If the API call fails.

        References:
            - List repository tags: https://docs.github.com/en/rest/repos/repos#list-repository-tags
        """
        try:
            return [tag.name for tag in self._repo.get_tags()]
        except (GithubException, RequestException) as e:
            raise CollaboratorFailureError(f"Failed to list tags: {e}") from e

    def create_tag_ref(self, tag_name: str, commit_sha: str) -> None:
        """Create a lightweight tag reference pointing to a commit.

        Args:
            tag_name: Name of the tag to create (e.g., '1.2.0').
            commit_sha: SHA of the commit to tag.

        Raises:
            PublishConflictError: If the reference already exists.
            CollaboratorFailureError: If the API call fails for another reason.

        References:
            - Create a reference: https://docs.github.com/en/rest/git/refs#create-a-reference
        """
        try:
            self._repo.create_git_ref(ref=f"refs/tags/{tag_name}", sha=commit_sha)
        except GithubException as e:
            message = _error_message(e)
            if e.status == 422 and "already exists" in message:
                raise PublishConflictError(f"Tag {tag_name} already exists") from e
            raise CollaboratorFailureError(f"Failed to create tag {tag_name}: {message or e}") from e
        except RequestException as e:
            raise CollaboratorFailureError(f"Failed to create tag {tag_name}: {e}") from e
