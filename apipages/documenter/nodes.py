"""Abstract document nodes built by the section builder and consumed by the emitter."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Union


@dataclass
class PlainText:
    text: str


@dataclass
class Link:
    text: str
    url: str


@dataclass
class CodeSpan:
    code: str


@dataclass
class Anchor:
    """Empty HTML element whose ``id`` is the target of in-page links; usable inline or as a block."""

    html_id: str


@dataclass
class EmphasisSpan:
    children: List["InlineNode"] = field(default_factory=list)
    bold: bool = False
    italic: bool = False


InlineNode = Union[PlainText, Link, CodeSpan, EmphasisSpan, Anchor]


@dataclass
class Paragraph:
    children: List[InlineNode] = field(default_factory=list)

    def append(self, *nodes: InlineNode) -> "Paragraph":
        self.children.extend(nodes)
        return self


@dataclass
class Heading:
    title: str
    level: int = 2


@dataclass
class FencedCode:
    code: str
    language: str = ""


@dataclass
class HtmlStartTag:
    name: str
    attributes: Dict[str, str] = field(default_factory=dict)


@dataclass
class HtmlEndTag:
    name: str


@dataclass
class BulletList:
    items: List[List[InlineNode]] = field(default_factory=list)


@dataclass
class NoteBox:
    children: List["BlockNode"] = field(default_factory=list)


@dataclass
class TableCell:
    children: List[InlineNode] = field(default_factory=list)


@dataclass
class TableRow:
    cells: List[TableCell] = field(default_factory=list)


@dataclass
class Table:
    header_titles: Sequence[str]
    rows: List[TableRow] = field(default_factory=list)

    def add_row(self, *cells: TableCell) -> None:
        self.rows.append(TableRow(list(cells)))


@dataclass
class Section:
    """Ordered container of block nodes; nested sections flatten on emit."""

    children: List["BlockNode"] = field(default_factory=list)

    def append(self, *nodes: "BlockNode") -> "Section":
        self.children.extend(nodes)
        return self

    def __bool__(self) -> bool:
        return bool(self.children)


BlockNode = Union[
    Paragraph,
    Heading,
    FencedCode,
    Anchor,
    HtmlStartTag,
    HtmlEndTag,
    BulletList,
    NoteBox,
    Table,
    Section,
]


__all__ = [
    "Anchor",
    "BlockNode",
    "BulletList",
    "CodeSpan",
    "EmphasisSpan",
    "FencedCode",
    "Heading",
    "HtmlEndTag",
    "HtmlStartTag",
    "InlineNode",
    "Link",
    "NoteBox",
    "Paragraph",
    "PlainText",
    "Section",
    "Table",
    "TableCell",
    "TableRow",
]
