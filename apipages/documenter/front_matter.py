"""Per-page metadata written ahead of each page body."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from ..models import Entity, EntityKind, Excerpt
from ..tree import ApiModel
from .links import LinkResolver
from .placement import is_rendered

GENERATED_MARKER = "Do not edit this file. It is automatically generated by apipages."
NO_PACKAGE = "undefined"

_TITLE_LABELS = {
    EntityKind.CLASS: "Class",
    EntityKind.INTERFACE: "Interface",
    EntityKind.PACKAGE: "Package",
}
_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")


@dataclass
class FrontMatter:
    kind: str
    title: str
    package: str = NO_PACKAGE
    summary: Optional[str] = None
    members: Dict[str, Dict[str, str]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, object]:
        data: Dict[str, object] = {"kind": self.kind, "title": self.title}
        if self.summary is not None:
            data["summary"] = self.summary
        data["package"] = self.package
        data["members"] = self.members
        return data

    def serialize(self) -> str:
        """Compact JSON followed by the generated-file marker comment."""
        payload = json.dumps(self.to_dict(), ensure_ascii=False, separators=(",", ":"))
        return f"{payload}\n\n[//]: # ({GENERATED_MARKER})\n\n"


def clean_display_name(name: str) -> str:
    return name.replace('"', "").replace("!", "")


def summary_text(summary: Excerpt) -> Optional[str]:
    """First paragraph of a summary as plain text with double quotes made single.

    Reference tokens contribute their bare text; front matter carries no links.
    """
    text = summary.text.strip()
    if not text:
        return None
    first = _PARAGRAPH_BREAK.split(text, 1)[0]
    return first.replace('"', "'").strip()


class FrontMatterBuilder:
    """Builds the front matter for one standalone page."""

    def __init__(
        self,
        model: ApiModel,
        links: LinkResolver,
        *,
        is_allowed: Optional[Callable[[Entity], bool]] = None,
    ) -> None:
        self._model = model
        self._links = links
        self._is_allowed = is_allowed

    def build(self, item: Entity) -> FrontMatter:
        title = clean_display_name(item.name)
        label = _TITLE_LABELS.get(item.kind)
        if label:
            title = f"{title} {label}"

        summary = None
        if item.kind in _TITLE_LABELS and item.docs is not None:
            summary = summary_text(item.docs.summary)

        package = self._model.associated_package(item)
        front_matter = FrontMatter(
            kind=item.kind.value,
            title=title,
            summary=summary,
            package=clean_display_name(package.name) if package is not None else NO_PACKAGE,
        )

        for member in self._model.members_of(item):
            if not member.name or not is_rendered(self._model, member):
                continue
            if self._is_allowed is not None and not self._is_allowed(member):
                continue
            links = front_matter.members.setdefault(member.kind.value, {})
            links[member.name] = self._links.link_for(member, item)
        return front_matter


__all__ = [
    "FrontMatter",
    "FrontMatterBuilder",
    "GENERATED_MARKER",
    "NO_PACKAGE",
    "clean_display_name",
    "summary_text",
]
