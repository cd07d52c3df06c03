# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Label-driven Semantic Versioning Release Action - Core modules."""

from label_release.github_api import GitHubAPI, PullRequest
from label_release.labels import ReleaseLabel, validate_labels
from label_release.release import ReleaseDecision, decide, publish
from label_release.tags import select_latest

__all__ = [
    "GitHubAPI",
    "PullRequest",
    "ReleaseDecision",
    "ReleaseLabel",
    "decide",
    "publish",
    "select_latest",
    "validate_labels",
]
