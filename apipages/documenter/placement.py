"""Decides which entities get a physical page and which packages are rendered at all."""

from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, Optional, Tuple

from ..models import Entity, EntityKind
from ..tree import ApiModel

STANDALONE_KINDS = frozenset({EntityKind.PACKAGE, EntityKind.CLASS, EntityKind.INTERFACE})

_PACKAGE_MEMBER_KINDS = frozenset(
    {
        EntityKind.CLASS,
        EntityKind.ENUM,
        EntityKind.INTERFACE,
        EntityKind.NAMESPACE,
        EntityKind.FUNCTION,
        EntityKind.TYPE_ALIAS,
        EntityKind.VARIABLE,
    }
)

# Member kinds each container renders as a page or an anchored section.
RENDERED_MEMBER_KINDS: Dict[EntityKind, FrozenSet[EntityKind]] = {
    EntityKind.MODEL: frozenset({EntityKind.PACKAGE}),
    EntityKind.PACKAGE: _PACKAGE_MEMBER_KINDS,
    EntityKind.NAMESPACE: _PACKAGE_MEMBER_KINDS,
    EntityKind.CLASS: frozenset({EntityKind.CONSTRUCTOR, EntityKind.METHOD, EntityKind.PROPERTY}),
    EntityKind.INTERFACE: frozenset(
        {
            EntityKind.CONSTRUCT_SIGNATURE,
            EntityKind.METHOD_SIGNATURE,
            EntityKind.METHOD,
            EntityKind.PROPERTY_SIGNATURE,
            EntityKind.PROPERTY,
        }
    ),
    EntityKind.ENUM: frozenset({EntityKind.ENUM_MEMBER}),
}


def is_standalone_page(entity: Entity) -> bool:
    """Packages, classes and interfaces get their own file; everything else is anchored."""
    return entity.kind in STANDALONE_KINDS


def is_rendered(model: ApiModel, entity: Entity) -> bool:
    """Whether ``entity`` and all of its ancestors end up on some page."""
    container: Optional[Entity] = None
    for item in model.hierarchy(entity):
        if item.kind is EntityKind.ENTRY_POINT:
            continue
        if container is not None:
            if item.kind not in RENDERED_MEMBER_KINDS.get(container.kind, frozenset()):
                return False
            if container.kind is EntityKind.PACKAGE and item not in model.members_of(container):
                return False
        container = item
    return True


class PackageFilter:
    """Allow-list of package name prefixes; an empty list allows every package."""

    def __init__(self, model: ApiModel, prefixes: Optional[Iterable[str]] = None) -> None:
        self._model = model
        self.prefixes: Tuple[str, ...] = tuple(prefixes or ())

    def allows_package(self, package: Entity) -> bool:
        if not self.prefixes:
            return True
        return any(package.name.startswith(prefix) for prefix in self.prefixes)

    def allows(self, entity: Entity) -> bool:
        """Whether ``entity`` lives in an allowed package (entities outside packages pass)."""
        package = self._model.associated_package(entity)
        if package is None:
            return True
        return self.allows_package(package)


__all__ = [
    "PackageFilter",
    "RENDERED_MEMBER_KINDS",
    "STANDALONE_KINDS",
    "is_rendered",
    "is_standalone_page",
]
