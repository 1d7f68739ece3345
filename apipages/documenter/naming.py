"""Filename and anchor identifiers derived from an entity's ancestor chain."""

from __future__ import annotations

import re
from typing import Dict, List

from ..models import Entity, EntityKind
from ..tree import ApiModel

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_\-.]")

# These kinds only ever exist as fragments of a page, so their "filename" is an anchor.
ANCHOR_ONLY_KINDS = frozenset(
    {EntityKind.METHOD, EntityKind.PROPERTY, EntityKind.FUNCTION, EntityKind.VARIABLE}
)

_SKIPPED_KINDS = (EntityKind.MODEL, EntityKind.ENTRY_POINT)


def concise_signature(entity: Entity) -> str:
    """``name(a, b)`` for entities with a parameter list, the bare name otherwise."""
    if entity.has_parameter_list:
        return f"{entity.name}({', '.join(parameter.name for parameter in entity.parameters)})"
    return entity.name


def safe_filename_for_name(name: str) -> str:
    """Replace characters that are not safe in paths or HTML ids with ``_``."""
    return _UNSAFE_CHARS.sub("_", name)


def unscoped_name(package_name: str) -> str:
    """Strip an ``@scope/`` prefix from a package name."""
    if package_name.startswith("@") and "/" in package_name:
        return package_name.split("/", 1)[1]
    return package_name


class IdentifierResolver:
    """Computes stable, collision-free identifiers for entities of one model.

    Identifiers are pure functions of the ancestor chain; results are cached
    per entity because the tree cannot change during a render pass.
    """

    def __init__(self, model: ApiModel) -> None:
        self._model = model
        self._segments: Dict[Entity, List[str]] = {}

    def segment_for(self, entity: Entity) -> str:
        """Safe token for one level of the chain, with an overload suffix when needed."""
        segment = safe_filename_for_name(entity.name)
        if entity.has_parameter_list:
            rank = self._model.overload_rank(entity)
            if rank > 1:
                segment += f"_{rank}"
        return segment

    def path_segments(self, entity: Entity) -> List[str]:
        """Segments below the model root; the owning package contributes its unscoped name."""
        cached = self._segments.get(entity)
        if cached is not None:
            return cached
        segments: List[str] = []
        for item in self._model.hierarchy(entity):
            if item.kind in _SKIPPED_KINDS:
                continue
            if item.kind is EntityKind.PACKAGE:
                segments = [safe_filename_for_name(unscoped_name(item.name))]
            else:
                segments.append(self.segment_for(item))
        self._segments[entity] = segments
        return segments

    def filename_for(self, entity: Entity) -> str:
        """Relative page filename, e.g. ``foo/Bar.md``; anchor-only kinds yield ``#foo/Bar/baz``."""
        if entity.kind is EntityKind.MODEL:
            return "/"
        base = "/".join(self.path_segments(entity))
        if entity.kind in ANCHOR_ONLY_KINDS:
            return "#" + base
        return base + ".md"

    def html_id_for(self, entity: Entity) -> str:
        """Hyphen-joined chain suffixed with the kind tag, e.g. ``foo-Bar-baz-Method``."""
        if entity.kind is EntityKind.MODEL:
            return ""
        return "-".join([*self.path_segments(entity), entity.kind.value])


__all__ = [
    "ANCHOR_ONLY_KINDS",
    "IdentifierResolver",
    "concise_signature",
    "safe_filename_for_name",
    "unscoped_name",
]
