# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Property-based tests for label validation, tag selection and increments.

Uses hypothesis to generate random inputs and verify invariants hold
across all valid cases.
"""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from label_release.errors import AmbiguousLabelError, MissingLabelError
from label_release.labels import VALID_LABELS, ReleaseLabel, validate_labels
from label_release.tags import select_latest
from label_release.versions import compare, increment, is_valid

version_number = st.integers(min_value=0, max_value=999)

# Label names that are never release labels
other_label = st.text(min_size=1, max_size=20).filter(lambda name: name not in VALID_LABELS)


@st.composite
def release_version(draw: st.DrawFn) -> str:
    """Generate X.Y.Z release versions."""
    return f"{draw(version_number)}.{draw(version_number)}.{draw(version_number)}"


@st.composite
def any_version(draw: st.DrawFn) -> str:
    """Generate versions with optional 'v' prefix and pre-release."""
    prefix = draw(st.sampled_from(["", "v"]))
    pre = draw(st.sampled_from(["", "-rc.1", "-rc.2", "-alpha", "-beta.3"]))
    return f"{prefix}{draw(release_version())}{pre}"


# Tag names mixing semantic versions and arbitrary text
tag_name = st.one_of(any_version(), st.text(max_size=15))


class TestLabelCardinality:
    """Exactly one release label validates, zero or several fail."""

    @settings(max_examples=100)
    @given(label=st.sampled_from(VALID_LABELS), others=st.lists(other_label, max_size=5))
    def test_exactly_one_release_label(self, label: str, others: list[str]) -> None:
        assert validate_labels([*others, label]) == ReleaseLabel(label)

    @settings(max_examples=100)
    @given(others=st.lists(other_label, max_size=5))
    def test_no_release_label(self, others: list[str]) -> None:
        with pytest.raises(MissingLabelError):
            validate_labels(others)

    @settings(max_examples=100)
    @given(
        labels=st.lists(st.sampled_from(VALID_LABELS), min_size=2, unique=True),
        others=st.lists(other_label, max_size=5),
        data=st.data(),
    )
    def test_several_release_labels(self, labels: list[str], others: list[str], data: st.DataObject) -> None:
        mixed = data.draw(st.permutations([*labels, *others]))
        with pytest.raises(AmbiguousLabelError):
            validate_labels(mixed)


class TestSelectLatestProperties:
    """Latest tag selection is permutation invariant and ignores invalid tags."""

    @settings(max_examples=200)
    @given(names=st.lists(tag_name, max_size=15), data=st.data())
    def test_permutation_invariant(self, names: list[str], data: st.DataObject) -> None:
        shuffled = data.draw(st.permutations(names))
        first = select_latest(names)
        second = select_latest(shuffled)
        assert str(first) == str(second)

    @settings(max_examples=200)
    @given(names=st.lists(tag_name, max_size=15))
    def test_result_is_maximum_of_valid_tags(self, names: list[str]) -> None:
        valid = [name for name in names if is_valid(name)]
        latest = select_latest(names)

        if not valid:
            assert latest is None
            return

        assert latest is not None
        assert all(compare(latest, name) >= 0 for name in valid)
        assert any(compare(latest, name) == 0 for name in valid)

    @settings(max_examples=100)
    @given(names=st.lists(st.text(max_size=15), max_size=10))
    def test_invalid_tags_never_selected(self, names: list[str]) -> None:
        latest = select_latest([*names, "0.0.1"])
        assert latest is not None
        assert compare(latest, "0.0.1") >= 0


class TestIncrementProperties:
    """Increment changes the targeted component and zeroes lower ones."""

    @settings(max_examples=100)
    @given(base=release_version())
    def test_patch(self, base: str) -> None:
        major, minor, patch = (int(part) for part in base.split("."))
        result = increment(base, "patch")
        assert (result.major, result.minor, result.patch) == (major, minor, patch + 1)
        assert compare(result, base) == 1

    @settings(max_examples=100)
    @given(base=release_version())
    def test_minor(self, base: str) -> None:
        major, minor, _ = (int(part) for part in base.split("."))
        result = increment(base, "minor")
        assert (result.major, result.minor, result.patch) == (major, minor + 1, 0)
        assert compare(result, base) == 1

    @settings(max_examples=100)
    @given(base=release_version())
    def test_major(self, base: str) -> None:
        major, _, _ = (int(part) for part in base.split("."))
        result = increment(base, "major")
        assert (result.major, result.minor, result.patch) == (major + 1, 0, 0)
        assert compare(result, base) == 1

    @settings(max_examples=100)
    @given(base=any_version(), bump=st.sampled_from(["patch", "minor", "major"]))
    def test_result_strictly_greater(self, base: str, bump: str) -> None:
        assert compare(increment(base, bump), base) == 1
