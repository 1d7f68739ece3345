"""Markdown emission for the document-node tree."""

from __future__ import annotations

import html
import re
from typing import Iterable, List

from .nodes import (
    Anchor,
    BlockNode,
    BulletList,
    CodeSpan,
    EmphasisSpan,
    FencedCode,
    Heading,
    HtmlEndTag,
    HtmlStartTag,
    InlineNode,
    Link,
    NoteBox,
    Paragraph,
    PlainText,
    Section,
    Table,
    TableCell,
)

_MARKDOWN_SPECIALS = re.compile(r"([\\`*\[\]])")


class MarkdownEmitter:
    """Turns document nodes into markdown text.

    Blocks are separated by a blank line; table cells are rendered inline with
    pipes escaped.
    """

    def emit(self, node: BlockNode) -> str:
        blocks = self._blocks(node)
        return "\n\n".join(block for block in blocks if block) + "\n"

    def emit_inline(self, nodes: Iterable[InlineNode]) -> str:
        return "".join(self._inline(node, in_table=False) for node in nodes)

    def _blocks(self, node: BlockNode) -> List[str]:
        if isinstance(node, Section):
            blocks: List[str] = []
            for child in node.children:
                blocks.extend(self._blocks(child))
            return blocks
        return [self._block(node)]

    def _block(self, node: BlockNode) -> str:
        if isinstance(node, Paragraph):
            return self.emit_inline(node.children).strip()
        if isinstance(node, Heading):
            level = min(max(node.level, 1), 6)
            return f"{'#' * level} {self._escape(node.title)}"
        if isinstance(node, FencedCode):
            return f"```{node.language}\n{node.code.rstrip()}\n```"
        if isinstance(node, Anchor):
            return self._anchor(node)
        if isinstance(node, HtmlStartTag):
            attributes = "".join(
                f' {name}="{html.escape(value, quote=True)}"' for name, value in node.attributes.items()
            )
            return f"<{node.name}{attributes}>"
        if isinstance(node, HtmlEndTag):
            return f"</{node.name}>"
        if isinstance(node, BulletList):
            return "\n".join(f"- {self.emit_inline(item).strip()}" for item in node.items)
        if isinstance(node, NoteBox):
            inner = "\n\n".join(block for child in node.children for block in self._blocks(child) if block)
            return "\n".join(f"> {line}" if line else ">" for line in inner.splitlines())
        if isinstance(node, Table):
            return self._table(node)
        raise TypeError(f"Cannot emit node of type {type(node).__name__}")

    def _table(self, table: Table) -> str:
        header = "| " + " | ".join(self._escape(title) for title in table.header_titles) + " |"
        divider = "|" + "|".join(" --- " for _ in table.header_titles) + "|"
        lines = [header, divider]
        for row in table.rows:
            cells = [self._cell(cell) for cell in row.cells]
            lines.append("| " + " | ".join(cells) + " |")
        return "\n".join(lines)

    def _cell(self, cell: TableCell) -> str:
        return "".join(self._inline(node, in_table=True) for node in cell.children).strip()

    def _inline(self, node: InlineNode, *, in_table: bool) -> str:
        if isinstance(node, PlainText):
            return self._escape(node.text, in_table=in_table)
        if isinstance(node, Anchor):
            return self._anchor(node)
        if isinstance(node, Link):
            return f"[{self._escape(node.text, in_table=in_table)}]({node.url})"
        if isinstance(node, CodeSpan):
            code = node.code.replace("|", "\\|") if in_table else node.code
            fence = "``" if "`" in code else "`"
            return f"{fence}{code}{fence}"
        if isinstance(node, EmphasisSpan):
            inner = "".join(self._inline(child, in_table=in_table) for child in node.children)
            if not inner.strip():
                return inner
            if node.bold:
                inner = f"**{inner}**"
            if node.italic:
                inner = f"_{inner}_"
            return inner
        raise TypeError(f"Cannot emit inline node of type {type(node).__name__}")

    @staticmethod
    def _anchor(node: Anchor) -> str:
        return f'<a id="{html.escape(node.html_id, quote=True)}"></a>'

    @staticmethod
    def _escape(text: str, *, in_table: bool = False) -> str:
        escaped = _MARKDOWN_SPECIALS.sub(r"\\\1", text)
        escaped = escaped.replace("<", "&lt;").replace(">", "&gt;")
        if in_table:
            escaped = escaped.replace("|", "\\|")
        return escaped


__all__ = ["MarkdownEmitter"]
