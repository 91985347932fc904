"""Release collection: entities, the release manifest, and ordering."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cmp_to_key
from pathlib import Path
from typing import Iterable, Optional

import semver

from .utils import log_debug

RELEASES_FILENAME = "releases.txt"


@dataclass
class Release:
    """A single release with its optional metadata and categorized changes.

    `categories` maps a category name (e.g. "Added", "Fixed") to the rendered
    Markdown accumulated for it. The mapping keeps first-insertion order, which
    is the order categories are rendered in.
    """

    name: str
    meta: str = ""
    categories: dict[str, str] = field(default_factory=dict)


def release_manifest_path(input_dir: Path) -> Path:
    """Return the path of the optional release manifest."""
    return input_dir / RELEASES_FILENAME


def parse_release_manifest(lines: Iterable[str]) -> list[Release]:
    """Parse `name[,meta]` lines into releases, keeping the first of duplicates."""
    releases: list[Release] = []
    seen: set[str] = set()
    for line in lines:
        if not line.strip():
            continue
        name, _, meta = line.partition(",")
        name = name.strip()
        if not name or name in seen:
            continue
        seen.add(name)
        releases.append(Release(name=name, meta=meta.strip()))
    return releases


def read_release_manifest(input_dir: Path) -> tuple[list[Release], bool]:
    """Read the release manifest from the input directory.

    Returns the releases in manifest order and whether a manifest was found.
    A missing manifest is not an error; any other I/O failure propagates.
    """
    path = release_manifest_path(input_dir)
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        log_debug(f"no release manifest at {path}, ordering releases by version.")
        return [], False
    releases = parse_release_manifest(content.splitlines())
    log_debug(f"read {len(releases)} release(s) from {path}.")
    return releases, True


def find_release(releases: Iterable[Release], name: str) -> Optional[Release]:
    """Return the release with the given name, if present."""
    for release in releases:
        if release.name == name:
            return release
    return None


def parse_version(name: str) -> Optional[semver.Version]:
    """Parse a release name as a semantic version.

    A leading `v` is accepted and missing minor or patch numbers count as zero,
    so `v1.2` reads as 1.2.0. Returns None for names that are not versions.
    """
    if name[:1] in ("v", "V"):
        name = name[1:]
    try:
        return semver.Version.parse(name, optional_minor_and_patch=True)
    except ValueError:
        return None


def compare_releases(left: Release, right: Release) -> int:
    """Order two releases newest first.

    Names that are not versions sort before versions, so a label such as
    "Unreleased" ends up on top. Two non-version names compare alphabetically.
    """
    left_version = parse_version(left.name)
    right_version = parse_version(right.name)
    if left_version is None and right_version is None:
        if left.name < right.name:
            return -1
        if left.name > right.name:
            return 1
        return 0
    if left_version is None:
        return -1
    if right_version is None:
        return 1
    return -left_version.compare(right_version)


def sort_releases(releases: Iterable[Release]) -> list[Release]:
    """Return releases in changelog order; equal releases keep their input order."""
    return sorted(releases, key=cmp_to_key(compare_releases))
