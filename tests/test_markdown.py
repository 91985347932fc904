"""Tests for the markdown-it/mdformat formatter."""

from __future__ import annotations

from chalog.markdown import Block, MdformatFormatter


def test_parse_identifies_level_one_headings() -> None:
    formatter = MdformatFormatter()

    blocks = formatter.parse(b"# Added \n\n## Details\n\nText.\n")

    assert [block.kind for block in blocks] == ["heading", "heading", "paragraph"]
    assert blocks[0].is_heading(1)
    assert blocks[0].heading_text == "Added"
    assert not blocks[1].is_heading(1)
    assert blocks[1].is_heading(2)


def test_parse_recognizes_setext_headings() -> None:
    blocks = MdformatFormatter().parse(b"Fixed\n=====\n\n- bug\n")

    assert blocks[0].is_heading(1)
    assert blocks[0].heading_text == "Fixed"
    assert blocks[1].kind == "bullet_list"


def test_render_normalizes_block_source() -> None:
    formatter = MdformatFormatter()
    source = b"# Added\n\n* one\n* two\n"

    blocks = formatter.parse(source)

    assert formatter.render(blocks[1], source) == "- one\n- two\n"


def test_render_without_source_lines_is_empty() -> None:
    assert MdformatFormatter().render(Block(kind="paragraph"), b"text\n") == ""
