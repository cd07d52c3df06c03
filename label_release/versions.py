# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Semantic version helpers built on the ``semver`` package.

Tag names may carry a single leading ``v`` (``v1.2.3``); it is ignored when
parsing. Versions are never parsed by hand.

References:
    - Semantic Versioning 2.0.0: https://semver.org/
    - python-semver: https://python-semver.readthedocs.io/
"""

from __future__ import annotations

import semver

from label_release.errors import IncrementFailureError

BUMP_PARTS = ("patch", "minor", "major")


def parse_version(tag_name: str) -> semver.Version:
    """Parse a tag name into a Version.

    Raises:
        ValueError: If the name is not a semantic version.

    Examples:
        >>> str(parse_version("v1.2.3"))
        '1.2.3'
    """
    text = tag_name.strip()
    if text.startswith("v"):
        text = text[1:]
    return semver.Version.parse(text)


def is_valid(tag_name: str) -> bool:
    """Return True if ``tag_name`` is a semantic version."""
    try:
        parse_version(tag_name)
    except (TypeError, ValueError):
        return False
    return True


def compare(a: str | semver.Version, b: str | semver.Version) -> int:
    """Compare two versions by SemVer precedence.

    Returns:
        -1, 0 or 1.
    """
    left = a if isinstance(a, semver.Version) else parse_version(a)
    right = b if isinstance(b, semver.Version) else parse_version(b)
    return left.compare(right)


def increment(base: str | semver.Version, bump: str) -> semver.Version:
    """Return the next version after ``base``.

    Build metadata on the base is dropped before bumping, and a pre-release
    base is promoted to its release when that release is the next version
    (``1.3.0-rc.1`` + minor gives ``1.3.0``).

    Args:
        base: Current version or tag name.
        bump: One of 'patch', 'minor', 'major' (a ReleaseLabel works too).

    Raises:
        IncrementFailureError: If the base does not parse or the bump is unknown.

    Examples:
        >>> str(increment("1.4.2", "major"))
        '2.0.0'
    """
    part = str(bump)
    if part not in BUMP_PARTS:
        raise IncrementFailureError(f'failed to increment tag "{base}" with bump {part}')

    try:
        version = base if isinstance(base, semver.Version) else parse_version(base)
    except (TypeError, ValueError) as e:
        raise IncrementFailureError(f'failed to increment tag "{base}" with bump {part}') from e

    return version.replace(build=None).next_version(part=part)
