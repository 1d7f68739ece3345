"""Read-only view over an entity tree with parent and reference lookups."""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from .models import Entity, EntityKind


class ApiModel:
    """Wraps the root entity and indexes it once per render pass.

    The tree is never mutated; parents are kept in a side-table keyed by entity
    identity and canonical references in a plain dictionary.
    """

    def __init__(self, root: Entity) -> None:
        if root.kind is not EntityKind.MODEL:
            raise ValueError(f"Root entity must be a Model, got {root.kind.value}")
        self.root = root
        self._parents: Dict[Entity, Optional[Entity]] = {root: None}
        self._references: Dict[str, Entity] = {}
        self._overload_ranks: Dict[Entity, int] = {}
        self._index(root)

    def _index(self, root: Entity) -> None:
        stack: List[Entity] = [root]
        while stack:
            entity = stack.pop()
            if entity.canonical_reference:
                self._references.setdefault(entity.canonical_reference, entity)
            self._rank_overloads(entity)
            for member in entity.members:
                self._parents[member] = entity
                stack.append(member)

    def _rank_overloads(self, container: Entity) -> None:
        seen: Dict[Tuple[EntityKind, str], int] = {}
        for member in container.members:
            if not member.has_parameter_list:
                continue
            key = (member.kind, member.name)
            seen[key] = seen.get(key, 0) + 1
            self._overload_ranks[member] = seen[key]

    def parent_of(self, entity: Entity) -> Optional[Entity]:
        try:
            return self._parents[entity]
        except KeyError:
            raise KeyError(f"{entity.kind.value} {entity.name!r} is not part of this model") from None

    def hierarchy(self, entity: Entity) -> List[Entity]:
        """Return the ancestor chain from the model root down to ``entity``."""
        chain: List[Entity] = []
        current: Optional[Entity] = entity
        while current is not None:
            chain.append(current)
            current = self.parent_of(current)
        chain.reverse()
        return chain

    def associated_package(self, entity: Entity) -> Optional[Entity]:
        for item in self.hierarchy(entity):
            if item.kind is EntityKind.PACKAGE:
                return item
        return None

    def overload_rank(self, entity: Entity) -> int:
        """1-based position of ``entity`` among same-named, same-kind siblings."""
        return self._overload_ranks.get(entity, 1)

    def members_of(self, container: Entity) -> Tuple[Entity, ...]:
        """Members as listed on the container's page.

        A package that declares entry points exposes the members of its first
        entry point; every other container exposes its direct members.
        """
        if container.kind is EntityKind.PACKAGE:
            entry_points = [m for m in container.members if m.kind is EntityKind.ENTRY_POINT]
            if entry_points:
                return entry_points[0].members
        return container.members

    def resolve_reference(self, canonical_reference: str) -> Optional[Entity]:
        return self._references.get(canonical_reference)

    def scoped_name(self, entity: Entity) -> str:
        """Dot-joined names below the owning package or entry point."""
        names = [
            item.name
            for item in self.hierarchy(entity)
            if item.kind not in (EntityKind.MODEL, EntityKind.PACKAGE, EntityKind.ENTRY_POINT)
        ]
        if not names:
            return entity.name
        return ".".join(names)

    def __contains__(self, entity: object) -> bool:
        return entity in self._parents


__all__ = ["ApiModel"]
