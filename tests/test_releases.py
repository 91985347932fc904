"""Tests for the release manifest and version-aware ordering."""

from __future__ import annotations

from pathlib import Path

import pytest

from chalog.releases import (
    Release,
    compare_releases,
    parse_release_manifest,
    parse_version,
    read_release_manifest,
    sort_releases,
)


def _names(releases: list[Release]) -> list[str]:
    return [release.name for release in releases]


def test_read_release_manifest_reports_missing_file(tmp_path: Path) -> None:
    releases, found = read_release_manifest(tmp_path)

    assert releases == []
    assert found is False


def test_read_release_manifest_parses_names_and_meta(tmp_path: Path) -> None:
    (tmp_path / "releases.txt").write_text(
        "Unreleased\n\n1.1.0,2021-03-04\n1.0.0, 2020-01-02\n",
        encoding="utf-8",
    )

    releases, found = read_release_manifest(tmp_path)

    assert found is True
    assert releases == [
        Release(name="Unreleased"),
        Release(name="1.1.0", meta="2021-03-04"),
        Release(name="1.0.0", meta="2020-01-02"),
    ]


def test_parse_release_manifest_splits_on_first_comma_only() -> None:
    releases = parse_release_manifest(["1.0.0,released, finally"])

    assert releases == [Release(name="1.0.0", meta="released, finally")]


def test_parse_release_manifest_keeps_first_duplicate() -> None:
    releases = parse_release_manifest(["1.0.0,first", "   ", "1.0.0,second"])

    assert releases == [Release(name="1.0.0", meta="first")]


def test_read_release_manifest_propagates_other_errors(tmp_path: Path) -> None:
    (tmp_path / "releases.txt").mkdir()

    with pytest.raises(OSError):
        read_release_manifest(tmp_path)


def test_sort_releases_puts_non_versions_first() -> None:
    releases = [Release("2.0.0"), Release("1.0.0"), Release("Unreleased")]

    assert _names(sort_releases(releases)) == ["Unreleased", "2.0.0", "1.0.0"]


def test_sort_releases_orders_versions_newest_first() -> None:
    releases = [Release("1.2.0"), Release("1.10.0"), Release("1.9.1"), Release("0.1.0")]

    assert _names(sort_releases(releases)) == ["1.10.0", "1.9.1", "1.2.0", "0.1.0"]


def test_sort_releases_orders_non_versions_alphabetically() -> None:
    releases = [Release("zeta"), Release("Unreleased"), Release("alpha")]

    assert _names(sort_releases(releases)) == ["Unreleased", "alpha", "zeta"]


def test_single_non_version_wins_over_alphabetical_order() -> None:
    # "1.0.0" < "Unreleased" alphabetically, but only one of them is a version.
    assert compare_releases(Release("Unreleased"), Release("1.0.0")) < 0
    assert compare_releases(Release("1.0.0"), Release("Unreleased")) > 0
    assert _names(sort_releases([Release("1.0.0"), Release("Unreleased")])) == [
        "Unreleased",
        "1.0.0",
    ]


def test_sort_releases_is_stable_for_equal_versions() -> None:
    first = Release("1.0", meta="first")
    second = Release("1.0.0", meta="second")

    ordered = sort_releases([first, second])

    assert [release.meta for release in ordered] == ["first", "second"]


def test_sort_releases_does_not_mutate_input() -> None:
    releases = [Release("1.0.0"), Release("2.0.0")]

    sort_releases(releases)

    assert _names(releases) == ["1.0.0", "2.0.0"]


def test_parse_version_accepts_prefix_and_partial_versions() -> None:
    version = parse_version("v1.2")

    assert version is not None
    assert str(version) == "1.2.0"
    assert parse_version("Unreleased") is None


def test_sort_releases_reads_short_prefixed_names_as_versions() -> None:
    releases = [Release("v1"), Release("Unreleased")]

    assert _names(sort_releases(releases)) == ["Unreleased", "v1"]


def test_sort_releases_orders_prereleases_below_their_release() -> None:
    releases = [
        Release("1.0.0"),
        Release("Unreleased"),
        Release("1.1.0-SNAPSHOT"),
        Release("1.1.0"),
    ]

    assert _names(sort_releases(releases)) == [
        "Unreleased",
        "1.1.0",
        "1.1.0-SNAPSHOT",
        "1.0.0",
    ]


def test_sort_releases_compares_prerelease_identifiers() -> None:
    releases = [Release("2.0.0-alpha.beta"), Release("2.0.0"), Release("2.0.0-alpha.1")]

    assert _names(sort_releases(releases)) == ["2.0.0", "2.0.0-alpha.beta", "2.0.0-alpha.1"]
