"""Whitespace normalisation for emitted page bodies."""

from __future__ import annotations

from typing import List


class MarkdownLinter:
    """Normalises line endings and blank lines outside fenced code."""

    def lint(self, markdown: str) -> str:
        lines = markdown.replace("\r\n", "\n").replace("\r", "\n").split("\n")
        cleaned: List[str] = []
        in_code = False

        for raw in lines:
            line = raw if in_code else raw.rstrip()
            if line.lstrip().startswith("```"):
                in_code = not in_code
                cleaned.append(line.rstrip())
                continue
            if in_code:
                cleaned.append(line)
                continue
            if not line and (not cleaned or cleaned[-1] == ""):
                continue
            if line.startswith("#") and cleaned and cleaned[-1] != "":
                cleaned.append("")
            cleaned.append(line)

        while cleaned and cleaned[-1] == "":
            cleaned.pop()
        return "\n".join(cleaned) + "\n"


__all__ = ["MarkdownLinter"]
