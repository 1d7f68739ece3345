"""Errors raised during a render pass."""

from __future__ import annotations

from pathlib import Path

from ..models import EntityKind


class DocumenterError(RuntimeError):
    """Base class for render pass failures."""


class UnsupportedEntityKindError(DocumenterError):
    """An entity kind reached the section dispatch without a renderer."""

    def __init__(self, kind: EntityKind) -> None:
        super().__init__(f"Unsupported API item kind: {kind.value}")
        self.kind = kind


class PageWriteError(DocumenterError):
    """A completed page could not be written; later pages are not attempted."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to write {path}: {reason}")
        self.path = path


__all__ = ["DocumenterError", "PageWriteError", "UnsupportedEntityKindError"]
