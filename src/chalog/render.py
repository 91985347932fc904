"""Rendering of ordered releases into a Keep a Changelog document."""

from __future__ import annotations

from typing import Sequence

from .releases import Release

FIRST_RELEASE_LINK = "[{name}]: {repo}/releases/tag/{name}"
COMPARE_LINK = "[{name}]: {repo}/compare/{previous}...{name}"
UNRELEASED_LINK = "[{name}]: {repo}/compare/{previous}...HEAD"


def render_release_heading(release: Release) -> str:
    if release.meta:
        return f"## [{release.name}] - {release.meta}"
    return f"## [{release.name}]"


def render_releases(releases: Sequence[Release]) -> str:
    """Render the heading and category sections of every release."""
    output = ""
    for release in releases:
        output += f"\n{render_release_heading(release)}\n"
        for category, body in release.categories.items():
            output += f"### {category}\n"
            output += body
    return output


def render_release_links(
    releases: Sequence[Release], *, repo: str, unreleased: str
) -> list[str]:
    """Return one link reference per release.

    Each release links to the diff against the release following it in the
    list. The last release links to its tag, and the unreleased section
    compares against HEAD unless it is the only release.
    """
    repo = repo.rstrip("/")
    links: list[str] = []
    for index, release in enumerate(releases):
        is_last = index == len(releases) - 1
        if release.name == unreleased:
            if is_last:
                continue
            previous = releases[index + 1].name
            links.append(UNRELEASED_LINK.format(name=release.name, repo=repo, previous=previous))
        elif is_last:
            links.append(FIRST_RELEASE_LINK.format(name=release.name, repo=repo))
        else:
            previous = releases[index + 1].name
            links.append(COMPARE_LINK.format(name=release.name, repo=repo, previous=previous))
    return links


def render_changelog(
    releases: Sequence[Release],
    *,
    preamble: str,
    repo: str = "",
    unreleased: str = "Unreleased",
) -> str:
    """Render the full changelog document, ending in a single newline."""
    output = preamble + render_releases(releases)
    if repo:
        links = render_release_links(releases, repo=repo, unreleased=unreleased)
        if links:
            output += "\n" + "\n".join(links)
    return output.rstrip("\n") + "\n"
