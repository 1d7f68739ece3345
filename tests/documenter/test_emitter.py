"""Tests for apipages.documenter.emitter."""

from __future__ import annotations

import pytest

from apipages.documenter.emitter import MarkdownEmitter
from apipages.documenter.nodes import (
    Anchor,
    BulletList,
    CodeSpan,
    EmphasisSpan,
    FencedCode,
    Heading,
    HtmlEndTag,
    HtmlStartTag,
    Link,
    NoteBox,
    Paragraph,
    PlainText,
    Section,
    Table,
    TableCell,
)


def test_blocks_are_separated_by_blank_lines() -> None:
    section = Section(
        [
            Heading("Title", level=1),
            Paragraph([PlainText("Body "), Link("link", "/x.md")]),
            FencedCode("let a = 1;\n", "typescript"),
        ]
    )

    assert MarkdownEmitter().emit(section) == "# Title\n\nBody [link](/x.md)\n\n```typescript\nlet a = 1;\n```\n"


def test_nested_sections_are_flattened() -> None:
    section = Section([HtmlStartTag("div", {"id": "class-details"}), Section([Anchor("a-b")]), HtmlEndTag("div")])

    assert MarkdownEmitter().emit(section) == '<div id="class-details">\n\n<a id="a-b"></a>\n\n</div>\n'


def test_plain_text_is_escaped() -> None:
    emitter = MarkdownEmitter()

    assert emitter.emit_inline([PlainText("Array<T> *[x]*")]) == "Array&lt;T&gt; \\*\\[x\\]\\*"
    assert emitter.emit_inline([PlainText("snake_case")]) == "snake_case"


def test_table_cells_escape_pipes() -> None:
    table = Table(["Type", "Description"])
    table.add_row(TableCell([PlainText("A | B")]), TableCell([CodeSpan("x | y")]))

    lines = MarkdownEmitter().emit(table).splitlines()

    assert lines == ["| Type | Description |", "| --- | --- |", "| A \\| B | `x \\| y` |"]


def test_note_box_prefixes_every_line() -> None:
    note = NoteBox([Paragraph([PlainText("First")]), Paragraph([PlainText("Second")])])

    assert MarkdownEmitter().emit(note) == "> First\n>\n> Second\n"


def test_emphasis_and_code_spans() -> None:
    emitter = MarkdownEmitter()

    assert emitter.emit_inline([EmphasisSpan([PlainText("Returns:")], bold=True)]) == "**Returns:**"
    assert emitter.emit_inline([EmphasisSpan([PlainText("(Optional)")], italic=True)]) == "_(Optional)_"
    assert emitter.emit_inline([EmphasisSpan([PlainText(" ")], bold=True)]) == " "
    assert emitter.emit_inline([CodeSpan("a`b")]) == "``a`b``"


def test_bullet_list() -> None:
    bullets = BulletList([[PlainText("@sealed")], [PlainText("@virtual")]])

    assert MarkdownEmitter().emit(bullets) == "- @sealed\n- @virtual\n"


def test_unknown_node_is_rejected() -> None:
    with pytest.raises(TypeError):
        MarkdownEmitter().emit(object())  # type: ignore[arg-type]


def test_anchor_renders_inline_in_table_cells() -> None:
    table = Table(["Member", "Value"])
    table.add_row(TableCell([Anchor("lib-Color-Red-EnumMember"), PlainText("Red")]), TableCell([CodeSpan("0")]))

    assert MarkdownEmitter().emit(table).splitlines()[-1] == '| <a id="lib-Color-Red-EnumMember"></a>Red | `0` |'
