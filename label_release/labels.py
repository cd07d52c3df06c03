# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Release label policy for pull requests.

A pull request must carry exactly one release label. The label decides how
the next version is derived from the latest tag, or that no release happens.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import Enum
from typing import TYPE_CHECKING

from label_release.errors import AmbiguousLabelError, MissingLabelError, select_single

if TYPE_CHECKING:
    from label_release.github_api import PullRequest

logger = logging.getLogger(__name__)


class ReleaseLabel(str, Enum):
    """Labels recognized as release intent."""

    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"
    NO_RELEASE = "no-release"

    @property
    def bump(self) -> bool:
        """Return True if the label asks for a version bump."""
        return self is not ReleaseLabel.NO_RELEASE

    def __str__(self) -> str:
        return self.value


VALID_LABELS = tuple(label.value for label in ReleaseLabel)


def validate_labels(labels: Iterable[str]) -> ReleaseLabel:
    """Return the single release label found in ``labels``.

    Labels that are not release labels are ignored. Repeated names count once.

    Args:
        labels: Label names attached to a pull request.

    Returns:
        The matching ReleaseLabel.

    Raises:
        MissingLabelError: If none of the labels is a release label.
        AmbiguousLabelError: If more than one release label is set.

    Examples:
        >>> validate_labels(["bug", "minor"])
        <ReleaseLabel.MINOR: 'minor'>
    """
    found = sorted({name for name in labels if name in VALID_LABELS})
    logger.debug("Release labels found: %s", found)

    name = select_single(
        found,
        missing=MissingLabelError(f"Please set one of the following labels: {', '.join(VALID_LABELS)}"),
        ambiguous=AmbiguousLabelError(f"Exactly one release label must be set, found: {', '.join(found)}"),
    )
    return ReleaseLabel(name)


def validate_pull_request(pr: PullRequest) -> ReleaseLabel:
    """Validate the labels of a pull request.

    Args:
        pr: Pull request snapshot.

    Returns:
        The release label of the pull request.
    """
    label = validate_labels(pr.labels)
    logger.info("Pull request #%d has release label '%s'", pr.number, label)
    return label
