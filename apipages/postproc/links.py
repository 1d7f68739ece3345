"""Audit of links between generated pages."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, List, Set

_LINK_PATTERN = re.compile(r"\[(?:[^\]\\]|\\.)*\]\(([^)\s]+)\)")
_ANCHOR_PATTERN = re.compile(r'\bid="([^"]+)"')


class LinkValidator:
    """Checks that every site-relative link lands on a written page and anchor."""

    def validate(self, site_root: Path, *, uri_root: str = "/") -> List[str]:
        """Return one issue string per dangling link found under ``site_root``."""
        pages = sorted(site_root.rglob("*.md"))
        anchors: Dict[Path, Set[str]] = {}
        contents: Dict[Path, str] = {}
        for page in pages:
            text = page.read_text(encoding="utf-8")
            contents[page] = text
            anchors[page.resolve()] = set(_ANCHOR_PATTERN.findall(text))

        issues: List[str] = []
        for page in pages:
            relative = page.relative_to(site_root).as_posix()
            for match in _LINK_PATTERN.finditer(contents[page]):
                target = match.group(1)
                issue = self._check(site_root, page, target, uri_root, anchors)
                if issue:
                    issues.append(f"{relative}: {issue}")
        return issues

    @staticmethod
    def _check(
        site_root: Path,
        page: Path,
        target: str,
        uri_root: str,
        anchors: Dict[Path, Set[str]],
    ) -> str | None:
        if target.startswith(("http://", "https://", "mailto:")):
            return None
        path_part, _, anchor = target.partition("#")
        if not path_part:
            if anchor and anchor not in anchors.get(page.resolve(), set()):
                return f"Anchor not found: {target}"
            return None
        if not path_part.startswith(uri_root):
            return None
        relative = path_part[len(uri_root):]
        if not relative:
            return None
        if relative.endswith("/"):
            relative = relative[:-1] + ".md"
        candidate = (site_root / relative).resolve()
        if candidate not in anchors:
            return f"Link target not found: {target}"
        if anchor and anchor not in anchors[candidate]:
            return f"Anchor not found: {target}"
        return None


__all__ = ["LinkValidator"]
