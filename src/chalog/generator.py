"""Changelog generation: discover, order, and render releases."""

from __future__ import annotations

from dataclasses import dataclass, field

from .config import Config
from .fragments import aggregate_fragments
from .markdown import MarkdownFormatter, MdformatFormatter
from .releases import Release, read_release_manifest, sort_releases
from .render import render_changelog
from .utils import log_debug


@dataclass
class Generator:
    """Generates a changelog from a directory in the chalog layout."""

    formatter: MarkdownFormatter = field(default_factory=MdformatFormatter)

    def collect(self, config: Config) -> list[Release]:
        """Return the releases of the input directory in changelog order.

        A release manifest fixes the order; without one, releases are sorted
        by version.
        """
        releases, has_manifest = read_release_manifest(config.input_dir)
        releases = aggregate_fragments(config.input_dir, self.formatter, releases)
        if not has_manifest:
            releases = sort_releases(releases)
        log_debug(f"collected releases: {', '.join(r.name for r in releases) or 'none'}")
        return releases

    def generate(self, config: Config) -> str:
        """Return the rendered changelog for `config`."""
        return render_changelog(
            self.collect(config),
            preamble=config.preamble,
            repo=config.repo,
            unreleased=config.unreleased,
        )


def generate_changelog(config: Config, *, formatter: MarkdownFormatter | None = None) -> str:
    """Generate a changelog with the default formatter unless one is given."""
    generator = Generator(formatter) if formatter is not None else Generator()
    return generator.generate(config)
