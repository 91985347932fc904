"""Markdown parsing and block rendering used to split fragments into categories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Union

import mdformat
from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

WrapMode = Union[str, int]


@dataclass(frozen=True)
class Block:
    """A top-level block of a parsed Markdown document."""

    kind: str
    level: int = 0
    text: str = ""
    lines: Optional[tuple[int, int]] = None

    def is_heading(self, level: int) -> bool:
        return self.kind == "heading" and self.level == level

    @property
    def heading_text(self) -> str:
        return self.text.strip()


class MarkdownFormatter(Protocol):
    """Capability required to categorize fragment files."""

    def parse(self, source: bytes) -> list[Block]: ...

    def render(self, block: Block, source: bytes) -> str: ...


class MdformatFormatter:
    """Formatter backed by markdown-it for parsing and mdformat for rendering.

    Each block is rendered by formatting the source lines it spans, so the
    output is normalized CommonMark for exactly that block.
    """

    def __init__(self, *, wrap: WrapMode = "keep") -> None:
        self.wrap = wrap
        self._parser = MarkdownIt("commonmark")

    def parse(self, source: bytes) -> list[Block]:
        text = source.decode("utf-8")
        root = SyntaxTreeNode(self._parser.parse(text))
        return [_block_from_node(node) for node in root.children]

    def render(self, block: Block, source: bytes) -> str:
        if block.lines is None:
            return ""
        start, end = block.lines
        lines = source.decode("utf-8").splitlines(keepends=True)
        snippet = "".join(lines[start:end])
        if not snippet.strip():
            return ""
        return mdformat.text(snippet, options={"wrap": self.wrap})


def _block_from_node(node: SyntaxTreeNode) -> Block:
    lines = (node.map[0], node.map[1]) if node.map else None
    if node.type != "heading":
        return Block(kind=node.type, lines=lines)
    level = int(node.tag[1:]) if node.tag.startswith("h") else 0
    inline = node.children[0] if node.children else None
    text = inline.content if inline is not None else ""
    return Block(kind="heading", level=level, text=text, lines=lines)
