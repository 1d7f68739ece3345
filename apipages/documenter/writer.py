"""Render pass orchestration: traverse the model and flush finished pages to disk."""

from __future__ import annotations

import contextlib
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional

from ..config import DocumenterConfig
from ..logging import get_logger
from ..models import Entity
from ..postproc.lint import MarkdownLinter
from ..postproc.links import LinkValidator
from ..tree import ApiModel
from .emitter import MarkdownEmitter
from .errors import PageWriteError
from .front_matter import GENERATED_MARKER, FrontMatterBuilder
from .links import LinkResolver
from .naming import IdentifierResolver
from .nodes import Section
from .placement import PackageFilter
from .sections import SectionBuilder

PAGE_HEADER = f"<!-- {GENERATED_MARKER} -->\n\n"


@dataclass
class PageWriteEvent:
    """Passed to the pre-write hook; ``page_content`` may be replaced in place."""

    entity: Entity
    output_filename: Path
    page_content: str


BeforeWritePage = Callable[[PageWriteEvent], Optional[str]]


class PageWriter:
    """Drives one render pass from the model root and writes every standalone page."""

    def __init__(
        self,
        model: ApiModel,
        output_folder: Path,
        config: DocumenterConfig | None = None,
        *,
        on_before_write_page: BeforeWritePage | None = None,
        emitter: MarkdownEmitter | None = None,
        linter: MarkdownLinter | None = None,
        link_validator: LinkValidator | None = None,
    ) -> None:
        self.model = model
        self.output_folder = Path(output_folder)
        self.config = config or DocumenterConfig(root=self.output_folder)
        self.on_before_write_page = on_before_write_page
        self.emitter = emitter or MarkdownEmitter()
        self.linter = linter or MarkdownLinter()
        self.link_validator = link_validator or LinkValidator()
        self.logger = get_logger("writer")

        self.package_filter = PackageFilter(model, self.config.only_packages_starting_with)
        self.identifiers = IdentifierResolver(model)
        self.links = LinkResolver(
            model,
            self.identifiers,
            uri_root=self.config.normalized_uri_root,
            is_allowed=self.package_filter.allows,
        )
        self.front_matter = FrontMatterBuilder(model, self.links, is_allowed=self.package_filter.allows)
        self.sections = SectionBuilder(
            model,
            self.identifiers,
            self.links,
            package_filter=self.package_filter,
            on_page_complete=self._write_page,
            code_language=self.config.code_language,
        )
        self._written: List[Path] = []

    def generate(self, entity: Entity | None = None) -> List[Path]:
        """Render ``entity`` (the model root by default); return the files written."""
        self._written = []
        root = entity if entity is not None else self.model.root
        self.logger.info("Rendering %s into %s", root.kind.value, self.output_folder)
        self.sections.render(root)
        self.logger.info("Wrote %d pages", len(self._written))

        if self.config.validate_links:
            issues = self.link_validator.validate(self.output_folder, uri_root=self.links.uri_root)
            for issue in issues:
                self.logger.warning(issue)
        return list(self._written)

    def render_page(self, entity: Entity, body: Section) -> str:
        """Full page text: marker comment, front matter, then the emitted body."""
        front_matter = self.front_matter.build(entity)
        rendered_body = self.linter.lint(self.emitter.emit(body))
        return PAGE_HEADER + front_matter.serialize() + rendered_body

    def _write_page(self, entity: Entity, body: Section) -> None:
        filename = self.output_folder / self.identifiers.filename_for(entity)
        page_content = self.render_page(entity, body)

        if self.on_before_write_page is not None:
            event = PageWriteEvent(entity=entity, output_filename=filename, page_content=page_content)
            replaced = self.on_before_write_page(event)
            page_content = replaced if replaced is not None else event.page_content
            self.logger.debug("Pre-write hook ran for %s", filename)

        self._write_file(filename, self._convert_newlines(page_content))
        self._written.append(filename)
        self.logger.info("%s saved to disk", filename)

    def _convert_newlines(self, content: str) -> str:
        normalized = content.replace("\r\n", "\n")
        newline = self.config.newline
        if newline == "\n":
            return normalized
        return normalized.replace("\n", newline)

    @staticmethod
    def _write_file(path: Path, content: str) -> None:
        temporary = path.with_name(path.name + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(temporary, "w", encoding="utf-8", newline="") as handle:
                handle.write(content)
            os.replace(temporary, path)
        except OSError as exc:
            with contextlib.suppress(OSError):
                temporary.unlink(missing_ok=True)
            raise PageWriteError(path, str(exc)) from exc


__all__ = ["BeforeWritePage", "PAGE_HEADER", "PageWriteEvent", "PageWriter"]
