"""Page placement, identifier, linking and rendering engine."""

from .emitter import MarkdownEmitter
from .errors import DocumenterError, PageWriteError, UnsupportedEntityKindError
from .front_matter import FrontMatter, FrontMatterBuilder
from .links import LinkResolver
from .naming import IdentifierResolver
from .placement import PackageFilter, is_standalone_page
from .sections import SectionBuilder
from .writer import PageWriteEvent, PageWriter

__all__ = [
    "DocumenterError",
    "FrontMatter",
    "FrontMatterBuilder",
    "IdentifierResolver",
    "LinkResolver",
    "MarkdownEmitter",
    "PackageFilter",
    "PageWriteError",
    "PageWriteEvent",
    "PageWriter",
    "SectionBuilder",
    "UnsupportedEntityKindError",
    "is_standalone_page",
]
