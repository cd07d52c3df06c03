# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Release decision for a merged commit.

The decision is a straight sequence of checks: resolve the pull request of
the commit, validate its label, skip on ``no-release``, otherwise derive the
next version from the highest existing tag. Deciding only reads from GitHub;
writing the tag is a separate step so the decision can be tested on its own.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from label_release.errors import (
    AmbiguousAssociatedPullRequestError,
    NoAssociatedPullRequestError,
    select_single,
)
from label_release.labels import ReleaseLabel, validate_pull_request
from label_release.tags import select_latest_tag
from label_release.versions import increment

if TYPE_CHECKING:
    from label_release.github_api import GitHubAPI, PullRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReleaseDecision:
    """Outcome of a release decision.

    ``tag`` is None when the release is skipped.
    """

    pull_number: int
    label: ReleaseLabel
    tag: str | None = None

    @property
    def skip(self) -> bool:
        return self.tag is None


def resolve_pull_request(api: GitHubAPI, commit_sha: str) -> PullRequest:
    """Return the one pull request associated with a commit.

    Raises:
        NoAssociatedPullRequestError: If no pull request is associated.
        AmbiguousAssociatedPullRequestError: If several are.
    """
    pulls = api.get_pull_requests_for_commit(commit_sha)
    return select_single(
        pulls,
        missing=NoAssociatedPullRequestError(f"Cannot find any Pull Request associated with {commit_sha}"),
        ambiguous=AmbiguousAssociatedPullRequestError(
            f"Multiple Pull Requests found for {commit_sha}: "
            + ", ".join(f"#{pr.number}" for pr in sorted(pulls, key=lambda pr: pr.number))
        ),
    )


def next_tag(api: GitHubAPI, label: ReleaseLabel, initial_tag: str) -> str:
    """Compute the tag that follows the highest existing release.

    Args:
        api: GitHubAPI instance for listing tags.
        label: Bump label (patch, minor or major).
        initial_tag: Tag used verbatim when the repository has no release yet.

    Returns:
        The new tag name.

    Raises:
        IncrementFailureError: If the version cannot be incremented.
    """
    tag_names = api.list_tag_names()
    latest_tag = select_latest_tag(tag_names)

    if latest_tag is None:
        logger.info("No semver tag among %d tags, using initial tag '%s'", len(tag_names), initial_tag)
        return initial_tag

    new_version = increment(latest_tag, label)
    logger.info("Latest tag %s, %s bump gives %s", latest_tag, label, new_version)
    return str(new_version)


def decide(api: GitHubAPI, commit_sha: str, initial_tag: str) -> ReleaseDecision:
    """Decide what to release for a merged commit.

    Args:
        api: GitHubAPI instance used for read-only queries.
        commit_sha: SHA of the commit that triggered the run.
        initial_tag: Tag to use when no semver tag exists yet.

    Returns:
        ReleaseDecision; ``skip`` is set for a no-release pull request.

    Raises:
        ReleaseError: Any failure from resolution, validation or increment.
    """
    pr = resolve_pull_request(api, commit_sha)
    logger.info("Commit %s belongs to pull request #%d", commit_sha[:7], pr.number)

    label = validate_pull_request(pr)
    if not label.bump:
        logger.info("%s label detected, skipping release", label)
        return ReleaseDecision(pull_number=pr.number, label=label)

    return ReleaseDecision(pull_number=pr.number, label=label, tag=next_tag(api, label, initial_tag))


def validate_pull_request_event(api: GitHubAPI, number: int) -> ReleaseLabel:
    """Validate the labels of the pull request that triggered the run.

    The pull request is fetched again so that labels changed after the event
    was queued are taken into account.
    """
    return validate_pull_request(api.get_pull_request(number))


def publish(api: GitHubAPI, decision: ReleaseDecision, commit_sha: str, dry_run: bool = False) -> str:
    """Publish the tag of a decision at the triggering commit.

    Args:
        api: GitHubAPI instance for creating the reference.
        decision: Result of decide().
        commit_sha: SHA of the commit that triggered the run.
        dry_run: Log the tag instead of creating it.

    Returns:
        The tag name, or an empty string for a skipped release.

    Raises:
        PublishConflictError: If the tag already exists.
        CollaboratorFailureError: If the API call fails.
    """
    if decision.skip or decision.tag is None:
        return ""

    if dry_run:
        logger.info("[DRY-RUN] Would tag %s with tag %s", commit_sha[:7], decision.tag)
    else:
        logger.info("Tagging %s with tag %s", commit_sha[:7], decision.tag)
        api.create_tag_ref(decision.tag, commit_sha)

    return decision.tag
