# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Error types raised while deciding and publishing a release.

Every failure is terminal for the current run. Components raise one of the
``ReleaseError`` subclasses below and only the entry point turns it into a
failure report and exit status.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


class ReleaseError(Exception):
    """Base class for all release failures."""


class MissingLabelError(ReleaseError):
    """The pull request carries no release label."""


class AmbiguousLabelError(ReleaseError):
    """The pull request carries more than one release label."""


class NoAssociatedPullRequestError(ReleaseError):
    """No pull request is associated with the commit."""


class AmbiguousAssociatedPullRequestError(ReleaseError):
    """More than one pull request is associated with the commit."""


class IncrementFailureError(ReleaseError):
    """The next version could not be computed from the base version."""


class PublishConflictError(ReleaseError):
    """A tag with the requested name already exists."""


class CollaboratorFailureError(ReleaseError):
    """The GitHub API call failed (network, authorization, transport)."""


def select_single(items: Sequence[T], *, missing: ReleaseError, ambiguous: ReleaseError) -> T:
    """Return the only element of ``items``.

    Args:
        items: Candidates, already filtered to the relevant ones.
        missing: Raised when ``items`` is empty.
        ambiguous: Raised when ``items`` holds two or more elements.

    Returns:
        The single element.

    Examples:
        >>> select_single(["minor"], missing=MissingLabelError(), ambiguous=AmbiguousLabelError())
        'minor'
    """
    if not items:
        raise missing
    if len(items) > 1:
        raise ambiguous
    return items[0]
