"""URL resolution for entities and hyperlinkable excerpt tokens."""

from __future__ import annotations

import re
from typing import Callable, List, Optional

from ..logging import get_logger
from ..models import Entity, EntityKind, Excerpt, TokenKind
from ..tree import ApiModel
from .naming import IdentifierResolver
from .nodes import InlineNode, Link, PlainText
from .placement import is_rendered, is_standalone_page

_LOGGER = get_logger("links")
_NEWLINES = re.compile(r"[\r\n]+")


class LinkResolver:
    """Produces page paths and anchors relative to the page being assembled.

    ``page`` is always passed in by the caller; the resolver keeps no notion of
    a current page of its own.
    """

    def __init__(
        self,
        model: ApiModel,
        identifiers: IdentifierResolver,
        *,
        uri_root: str = "/",
        is_allowed: Optional[Callable[[Entity], bool]] = None,
    ) -> None:
        self._model = model
        self._identifiers = identifiers
        self.uri_root = uri_root
        self._is_allowed = is_allowed

    def page_for(self, entity: Entity) -> Optional[Entity]:
        """Nearest standalone-page ancestor (the entity itself when it has a page)."""
        for item in reversed(self._model.hierarchy(entity)):
            if is_standalone_page(item):
                return item
        return None

    def link_for(self, entity: Entity, page: Optional[Entity]) -> str:
        if entity.kind is EntityKind.MODEL:
            return self.uri_root
        if is_standalone_page(entity):
            return self.uri_root + self._identifiers.filename_for(entity)

        anchor = "#" + self._identifiers.html_id_for(entity)
        owner = self.page_for(entity)
        if owner is None or owner is page:
            return anchor
        page_path = self._identifiers.filename_for(owner)
        if page_path.endswith(".md"):
            page_path = page_path[: -len(".md")]
        page_path += "/"
        return self.uri_root + page_path + anchor

    def resolve_token_target(self, canonical_reference: Optional[str]) -> Optional[Entity]:
        """Entity behind a reference token, or ``None`` when it cannot be linked."""
        if not canonical_reference:
            return None
        target = self._model.resolve_reference(canonical_reference)
        if target is None:
            _LOGGER.debug("Unresolved reference %s rendered as plain text", canonical_reference)
            return None
        if not is_rendered(self._model, target):
            _LOGGER.debug("Reference %s points at an entity with no section", canonical_reference)
            return None
        if self._is_allowed is not None and not self._is_allowed(target):
            _LOGGER.debug("Reference %s points into a skipped package", canonical_reference)
            return None
        return target

    def excerpt_nodes(self, excerpt: Excerpt, page: Optional[Entity]) -> List[InlineNode]:
        """Inline nodes for ``excerpt`` with every resolvable reference hyperlinked."""
        nodes: List[InlineNode] = []
        for token in excerpt.tokens:
            # Newlines never survive into a table cell or heading.
            text = _NEWLINES.sub(" ", token.text)
            if token.kind is TokenKind.REFERENCE:
                target = self.resolve_token_target(token.canonical_reference)
                if target is not None:
                    nodes.append(Link(text=text, url=self.link_for(target, page)))
                    continue
            nodes.append(PlainText(text))
        return nodes


__all__ = ["LinkResolver"]
