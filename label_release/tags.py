# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Selection of the latest release among repository tags.

Only tags that parse as semantic versions take part; anything else in the
repository is ignored. The latest tag is the highest by SemVer precedence,
not the most recently created.

References:
    - Semantic Versioning 2.0.0, precedence: https://semver.org/#spec-item-11
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

import semver

from label_release.versions import parse_version

logger = logging.getLogger(__name__)


def _parse_tags(tag_names: Iterable[str]) -> list[tuple[semver.Version, str]]:
    """Parse tag names, dropping those that are not semantic versions."""
    parsed = []
    for name in tag_names:
        try:
            parsed.append((parse_version(name), name))
        except (TypeError, ValueError):
            logger.debug("Ignoring non-semver tag '%s'", name)
    return parsed


def _latest(tag_names: Iterable[str]) -> tuple[semver.Version, str] | None:
    parsed = _parse_tags(tag_names)
    if not parsed:
        return None

    # Build metadata does not affect precedence; the string form breaks ties
    # so the result only depends on the set of names.
    return max(parsed, key=lambda item: (item[0], str(item[0]), item[1]))


def select_latest(tag_names: Iterable[str]) -> semver.Version | None:
    """Return the highest semantic version among ``tag_names``.

    Args:
        tag_names: All tag names of the repository, every page included.

    Returns:
        The highest Version, or None if no tag is a semantic version.

    Examples:
        >>> str(select_latest(["1.2.3", "1.3.0", "v-bad", "2.0.0"]))
        '2.0.0'
        >>> select_latest(["latest", "nightly"]) is None
        True
    """
    latest = _latest(tag_names)
    return None if latest is None else latest[0]


def select_latest_tag(tag_names: Iterable[str]) -> str | None:
    """Return the name of the tag holding the highest semantic version.

    Examples:
        >>> select_latest_tag(["v1.0.0", "v1.10.0", "v1.9.0"])
        'v1.10.0'
    """
    latest = _latest(tag_names)
    return None if latest is None else latest[1]
