"""Fragment discovery and categorization into releases."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from .markdown import MarkdownFormatter
from .releases import Release, find_release
from .utils import log_debug, log_warning

CATEGORY_HEADING_LEVEL = 1
LIST_KINDS = frozenset({"bullet_list", "ordered_list"})


@dataclass
class CategoryTexts:
    """Category bodies of one release, filled fragment by fragment.

    Blocks are separated by a blank line, except that a list directly
    following a list of the same kind continues it, so list items from
    several fragments end up in one list.
    """

    texts: dict[str, str] = field(default_factory=dict)
    tails: dict[str, str] = field(default_factory=dict)

    def ensure(self, name: str) -> None:
        self.texts.setdefault(name, "")

    def append(self, name: str, kind: str, text: str) -> None:
        if not text:
            self.ensure(name)
            return
        existing = self.texts.get(name, "")
        if existing and not (kind in LIST_KINDS and self.tails.get(name) == kind):
            existing += "\n"
        self.texts[name] = existing + text
        self.tails[name] = kind


@dataclass
class _CategoryWalk:
    """Walk state while reading a fragment.

    `name is None` is the no-category state; blocks seen there are dropped.
    Otherwise blocks accumulate in `buffer` until the next heading or the end
    of the document flushes them into `collected`.
    """

    collected: CategoryTexts
    name: Optional[str] = None
    buffer: list[tuple[str, str]] = field(default_factory=list)
    found_heading: bool = False

    def open(self, name: str) -> None:
        self.flush()
        self.name = name
        self.found_heading = True

    def append(self, kind: str, text: str) -> None:
        if self.name is None:
            return
        self.buffer.append((kind, text))

    def flush(self) -> None:
        if self.name is None:
            return
        self.collected.ensure(self.name)
        for kind, text in self.buffer:
            self.collected.append(self.name, kind, text)
        self.name = None
        self.buffer = []


def _walk_fragment(source: bytes, formatter: MarkdownFormatter, collected: CategoryTexts) -> bool:
    walk = _CategoryWalk(collected)
    for block in formatter.parse(source):
        if block.is_heading(CATEGORY_HEADING_LEVEL):
            walk.open(block.heading_text)
            continue
        if walk.name is not None:
            walk.append(block.kind, formatter.render(block, source).removeprefix("\n"))
    walk.flush()
    return walk.found_heading


def parse_fragment(
    source: bytes,
    formatter: MarkdownFormatter,
    collected: Optional[CategoryTexts] = None,
) -> dict[str, str]:
    """Split a fragment into categories keyed by its level-1 headings.

    Text is appended to `collected` when given, so several fragments of one
    release can be folded into a single mapping.
    """
    collected = collected if collected is not None else CategoryTexts()
    _walk_fragment(source, formatter, collected)
    return collected.texts


def _visible_entries(directory: Path) -> list[Path]:
    return sorted(
        (path for path in directory.iterdir() if not path.name.startswith(".")),
        key=lambda path: path.name,
    )


def iter_release_directories(input_dir: Path) -> Iterable[Path]:
    """Yield release directories below the input directory, sorted by name."""
    for path in _visible_entries(input_dir):
        if path.is_dir():
            yield path


def read_release_directory(directory: Path, formatter: MarkdownFormatter) -> Release:
    """Categorize every fragment file of a release directory."""
    collected = CategoryTexts()
    for path in _visible_entries(directory):
        if path.is_dir():
            continue
        if not _walk_fragment(path.read_bytes(), formatter, collected):
            log_warning(f"fragment {path} has no level-1 heading, its content is ignored.")
            continue
        log_debug(f"parsed fragment {path}.")
    return Release(name=directory.name, categories=collected.texts)


def aggregate_fragments(
    input_dir: Path,
    formatter: MarkdownFormatter,
    releases: Optional[list[Release]] = None,
) -> list[Release]:
    """Merge release directories into `releases` and return the collection.

    A directory whose name is already known replaces that release's categories
    and keeps its metadata; unknown names are appended.
    """
    collected = list(releases) if releases is not None else []
    for directory in iter_release_directories(input_dir):
        parsed = read_release_directory(directory, formatter)
        existing = find_release(collected, parsed.name)
        if existing is None:
            collected.append(parsed)
            continue
        existing.categories = parsed.categories
    return collected
