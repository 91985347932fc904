"""Shared fixtures for chalog tests."""

from __future__ import annotations

import pytest

from chalog.markdown import Block


class LineFormatter:
    """Treats each non-blank line as a block.

    `# ` lines are level-1 headings and `- ` lines are bullet lists.
    """

    def parse(self, source: bytes) -> list[Block]:
        blocks: list[Block] = []
        for number, line in enumerate(source.decode("utf-8").splitlines()):
            if not line.strip():
                continue
            if line.startswith("# "):
                blocks.append(Block(kind="heading", level=1, text=line[2:], lines=(number, number + 1)))
            else:
                kind = "bullet_list" if line.startswith("- ") else "paragraph"
                blocks.append(Block(kind=kind, lines=(number, number + 1)))
        return blocks

    def render(self, block: Block, source: bytes) -> str:
        assert block.lines is not None
        start, _ = block.lines
        return "\n" + source.decode("utf-8").splitlines()[start] + "\n"


@pytest.fixture
def line_formatter() -> LineFormatter:
    return LineFormatter()

