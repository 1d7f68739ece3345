"""Recursive, per-kind construction of page bodies."""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Tuple

from ..logging import get_logger
from ..models import Entity, EntityKind, Excerpt, ReleaseTag
from ..tree import ApiModel
from .errors import UnsupportedEntityKindError
from .links import LinkResolver
from .naming import IdentifierResolver, concise_signature
from .nodes import (
    Anchor,
    BulletList,
    CodeSpan,
    EmphasisSpan,
    FencedCode,
    Heading,
    HtmlEndTag,
    HtmlStartTag,
    InlineNode,
    Link,
    NoteBox,
    Paragraph,
    PlainText,
    Section,
    Table,
    TableCell,
)
from .placement import PackageFilter, is_standalone_page

PageCompleteCallback = Callable[[Entity, Section], None]

DEPRECATION_PREFIX = "Warning: This API is now obsolete. "
BETA_WARNING = (
    "This API is provided as a preview for developers and may change based on feedback "
    "that we receive. Do not use this API in a production environment."
)

_CONTAINER_KINDS = frozenset(
    {EntityKind.CLASS, EntityKind.INTERFACE, EntityKind.NAMESPACE, EntityKind.PACKAGE}
)
_BREADCRUMB_KINDS = frozenset({EntityKind.PACKAGE, EntityKind.CLASS, EntityKind.INTERFACE})

_HEADING_LABELS: Dict[EntityKind, str] = {
    EntityKind.PACKAGE: "package",
    EntityKind.NAMESPACE: "namespace",
    EntityKind.CLASS: "class",
    EntityKind.INTERFACE: "interface",
    EntityKind.ENUM: "enum",
    EntityKind.CONSTRUCTOR: "constructor",
    EntityKind.CONSTRUCT_SIGNATURE: "construct signature",
    EntityKind.METHOD: "method",
    EntityKind.METHOD_SIGNATURE: "method",
    EntityKind.PROPERTY: "property",
    EntityKind.PROPERTY_SIGNATURE: "property",
    EntityKind.FUNCTION: "function",
    EntityKind.VARIABLE: "variable",
    EntityKind.TYPE_ALIAS: "type",
}


class SectionBuilder:
    """Builds the document-node body for every entity kind.

    ``page`` is the standalone entity whose file is being assembled. Rendering a
    class or interface member of a package passes the member as the new page,
    so the caller's page is untouched when the recursion returns.
    """

    def __init__(
        self,
        model: ApiModel,
        identifiers: IdentifierResolver,
        links: LinkResolver,
        *,
        package_filter: Optional[PackageFilter] = None,
        on_page_complete: Optional[PageCompleteCallback] = None,
        code_language: str = "typescript",
    ) -> None:
        self._model = model
        self._identifiers = identifiers
        self._links = links
        self._filter = package_filter or PackageFilter(model)
        self._on_page_complete = on_page_complete
        self._code_language = code_language
        self._logger = get_logger("sections")
        self._renderers: Dict[EntityKind, Callable[[Entity, Section, Optional[Entity]], None]] = {
            EntityKind.MODEL: self._write_model_table,
            EntityKind.PACKAGE: self._write_package_or_namespace_tables,
            EntityKind.NAMESPACE: self._write_package_or_namespace_tables,
            EntityKind.CLASS: self._write_class_tables,
            EntityKind.INTERFACE: self._write_interface_tables,
            EntityKind.ENUM: self._write_enum_tables,
            EntityKind.CONSTRUCTOR: self._write_parameter_tables,
            EntityKind.CONSTRUCT_SIGNATURE: self._write_parameter_tables,
            EntityKind.METHOD: self._write_parameter_tables,
            EntityKind.METHOD_SIGNATURE: self._write_parameter_tables,
            EntityKind.FUNCTION: self._write_parameter_tables,
            EntityKind.PROPERTY: self._write_nothing,
            EntityKind.PROPERTY_SIGNATURE: self._write_nothing,
            EntityKind.VARIABLE: self._write_nothing,
            EntityKind.TYPE_ALIAS: self._write_nothing,
        }

    def render(
        self,
        item: Entity,
        output: Optional[Section] = None,
        page: Optional[Entity] = None,
    ) -> Section:
        """Render ``item`` into ``output`` (a fresh section when omitted)."""
        renderer = self._renderers.get(item.kind)
        if renderer is None:
            raise UnsupportedEntityKindError(item.kind)

        if output is None:
            output = Section()
        if is_standalone_page(item):
            page = item

        if item.kind in _BREADCRUMB_KINDS:
            self._write_breadcrumb(output, item, page)
        self._write_heading(output, item)
        self._write_notices(output, item, page)
        self._write_signature(output, item, page)

        is_container = item.kind in _CONTAINER_KINDS
        if not is_container:
            self._write_remarks_section(output, item, page)
        renderer(item, output, page)
        if is_container:
            self._write_remarks_section(output, item, page)

        if is_standalone_page(item):
            self._complete_page(item, output)
        return output

    def _complete_page(self, item: Entity, output: Section) -> None:
        package = self._model.associated_package(item)
        if package is None or not self._filter.allows_package(package):
            self._logger.info("Skipping %s", self._model.scoped_name(item))
            if package is not None:
                self._logger.info("\t%s package isn't in the allowed list", package.name)
            return
        if self._on_page_complete is not None:
            self._on_page_complete(item, output)

    # ------------------------------------------------------------------
    # Shared header

    def _write_breadcrumb(self, output: Section, item: Entity, page: Optional[Entity]) -> None:
        paragraph = Paragraph([Link("Packages", self._links.link_for(self._model.root, page))])
        for ancestor in self._model.hierarchy(item):
            if ancestor.kind in (EntityKind.MODEL, EntityKind.ENTRY_POINT):
                continue
            paragraph.append(
                PlainText(" > "),
                Link(ancestor.name, self._links.link_for(ancestor, page)),
            )
        output.append(paragraph)

    def _write_heading(self, output: Section, item: Entity) -> None:
        if item.kind is EntityKind.MODEL:
            output.append(Heading("API Reference", level=1))
            return
        scoped_name = self._model.scoped_name(item)
        if item.has_parameter_list:
            scoped_name += "()"
        label = "event" if item.is_event else _HEADING_LABELS.get(item.kind, item.kind.value.lower())
        title = f"{scoped_name} {label}"
        if is_standalone_page(item):
            output.append(Heading(title, level=1))
            return
        output.append(Anchor(self._identifiers.html_id_for(item)))
        output.append(Heading(title, level=2 if item.kind is EntityKind.NAMESPACE else 3))

    def _write_notices(self, output: Section, item: Entity, page: Optional[Entity]) -> None:
        docs = item.docs
        if item.is_deprecated:
            output.append(
                NoteBox(
                    [
                        Paragraph(
                            [PlainText(DEPRECATION_PREFIX), *self._links.excerpt_nodes(docs.deprecated, page)]
                        )
                    ]
                )
            )
        if item.release_tag is ReleaseTag.BETA:
            output.append(NoteBox([Paragraph([PlainText(BETA_WARNING)])]))
        if docs is not None and not docs.summary.is_empty:
            output.append(Paragraph(self._links.excerpt_nodes(docs.summary, page)))

    def _write_signature(self, output: Section, item: Entity, page: Optional[Entity]) -> None:
        if not item.excerpt.is_empty:
            output.append(Paragraph([EmphasisSpan([PlainText("Signature:")], bold=True)]))
            output.append(FencedCode(self._signature_with_modifiers(item), self._code_language))

        if item.kind is EntityKind.CLASS:
            self._write_heritage(output, "Extends:", item.extends_types, page)
            self._write_heritage(output, "Implements:", item.implements_types, page)
        elif item.kind is EntityKind.INTERFACE:
            self._write_heritage(output, "Extends:", item.extends_types, page)

        decorators = item.docs.decorators if item.docs is not None else ()
        if decorators:
            output.append(Paragraph([EmphasisSpan([PlainText("Decorators:")], bold=True)]))
            output.append(
                BulletList([self._links.excerpt_nodes(decorator, page) for decorator in decorators])
            )

    @staticmethod
    def _signature_with_modifiers(item: Entity) -> str:
        text = item.excerpt.text
        if item.is_static and not text.startswith("static "):
            text = "static " + text
        return text

    def _write_heritage(
        self,
        output: Section,
        label: str,
        types: Tuple[Excerpt, ...],
        page: Optional[Entity],
    ) -> None:
        if not types:
            return
        paragraph = Paragraph([EmphasisSpan([PlainText(label)], bold=True), PlainText(" ")])
        for index, excerpt in enumerate(types):
            if index:
                paragraph.append(PlainText(", "))
            paragraph.append(*self._links.excerpt_nodes(excerpt, page))
        output.append(paragraph)

    def _write_remarks_section(self, output: Section, item: Entity, page: Optional[Entity]) -> None:
        docs = item.docs
        if docs is None:
            return
        if docs.remarks is not None and not docs.remarks.is_empty:
            output.append(Heading("Remarks", level=4))
            output.append(Paragraph(self._links.excerpt_nodes(docs.remarks, page)))
        examples = [example for example in docs.examples if not example.is_empty]
        for number, example in enumerate(examples, start=1):
            title = "Example" if len(examples) == 1 else f"Example {number}"
            output.append(Heading(title, level=4))
            output.append(Paragraph(self._links.excerpt_nodes(example, page)))

    # ------------------------------------------------------------------
    # Model

    def _write_model_table(self, api_model: Entity, output: Section, page: Optional[Entity]) -> None:
        packages_table = Table(["Package", "Description"])
        for member in api_model.members:
            if member.kind is not EntityKind.PACKAGE:
                continue
            if not self._filter.allows_package(member):
                self._logger.info("Skipping %s: package isn't in the allowed list", member.name)
                continue
            packages_table.add_row(self._title_cell(member, page), self._description_cell(member, page))
            self.render(member)

        if packages_table.rows:
            output.append(Heading("Packages"), packages_table)

    # ------------------------------------------------------------------
    # Package or namespace

    def _write_package_or_namespace_tables(
        self, container: Entity, output: Section, page: Optional[Entity]
    ) -> None:
        classes_table = Table(["Class", "Description"])
        enumerations_table = Table(["Enumeration", "Description"])
        functions_table = Table(["Function", "Description"])
        interfaces_table = Table(["Interface", "Description"])
        namespaces_table = Table(["Namespace", "Description"])
        variables_table = Table(["Variable", "Description"])
        type_aliases_table = Table(["Type Alias", "Description"])

        enums_details = Section()
        functions_details = Section()
        variables_details = Section()
        aliases_details = Section()

        for member in self._model.members_of(container):
            cells = (self._title_cell(member, page), self._description_cell(member, page))
            if member.kind is EntityKind.CLASS:
                classes_table.add_row(*cells)
                self.render(member)
            elif member.kind is EntityKind.ENUM:
                enumerations_table.add_row(*cells)
                self.render(member, enums_details, page)
            elif member.kind is EntityKind.INTERFACE:
                interfaces_table.add_row(*cells)
                self.render(member)
            elif member.kind is EntityKind.NAMESPACE:
                namespaces_table.add_row(*cells)
                # Namespaces have no page of their own; they render straight into the caller's output.
                self.render(member, output, page)
            elif member.kind is EntityKind.FUNCTION:
                functions_table.add_row(*cells)
                self.render(member, functions_details, page)
            elif member.kind is EntityKind.TYPE_ALIAS:
                type_aliases_table.add_row(*cells)
                self.render(member, aliases_details, page)
            elif member.kind is EntityKind.VARIABLE:
                variables_table.add_row(*cells)
                self.render(member, variables_details, page)
            else:
                self._logger.debug("Ignoring %s member %s", member.kind.value, member.name)

        for title, table in (
            ("Classes", classes_table),
            ("Enumerations", enumerations_table),
            ("Functions", functions_table),
            ("Interfaces", interfaces_table),
            ("Namespaces", namespaces_table),
            ("Variables", variables_table),
            ("Type Aliases", type_aliases_table),
        ):
            if table.rows:
                output.append(Heading(title), table)

        self._write_details(
            output,
            "package-details",
            [
                ("Enumerations", enums_details),
                ("Functions", functions_details),
                ("Variables", variables_details),
                ("Type Aliases", aliases_details),
            ],
        )

    # ------------------------------------------------------------------
    # Class

    def _write_class_tables(self, api_class: Entity, output: Section, page: Optional[Entity]) -> None:
        events_table = Table(["Property", "Modifiers", "Type", "Description"])
        constructors_table = Table(["Constructor", "Modifiers", "Description"])
        properties_table = Table(["Property", "Modifiers", "Type", "Description"])
        methods_table = Table(["Method", "Modifiers", "Description"])

        events_details = Section()
        constructors_details = Section()
        properties_details = Section()
        methods_details = Section()

        for member in api_class.members:
            if member.kind is EntityKind.CONSTRUCTOR:
                constructors_table.add_row(
                    self._title_cell(member, page),
                    self._modifiers_cell(member),
                    self._description_cell(member, page),
                )
                self.render(member, constructors_details, page)
            elif member.kind is EntityKind.METHOD:
                methods_table.add_row(
                    self._title_cell(member, page),
                    self._modifiers_cell(member),
                    self._description_cell(member, page),
                )
                self.render(member, methods_details, page)
            elif member.kind is EntityKind.PROPERTY:
                table, details = (
                    (events_table, events_details)
                    if member.is_event
                    else (properties_table, properties_details)
                )
                table.add_row(
                    self._title_cell(member, page),
                    self._modifiers_cell(member),
                    self._property_type_cell(member, page),
                    self._description_cell(member, page),
                )
                self.render(member, details, page)

        for title, table in (
            ("Events", events_table),
            ("Constructors", constructors_table),
            ("Properties", properties_table),
            ("Methods", methods_table),
        ):
            if table.rows:
                output.append(Heading(title), table)

        self._write_details(
            output,
            "class-details",
            [
                ("Events", events_details),
                ("Constructors", constructors_details),
                ("Properties", properties_details),
                ("Methods", methods_details),
            ],
        )

    # ------------------------------------------------------------------
    # Interface

    def _write_interface_tables(
        self, api_interface: Entity, output: Section, page: Optional[Entity]
    ) -> None:
        events_table = Table(["Property", "Type", "Description"])
        properties_table = Table(["Property", "Type", "Description"])
        methods_table = Table(["Method", "Description"])

        events_details = Section()
        properties_details = Section()
        methods_details = Section()

        for member in api_interface.members:
            if member.kind in (
                EntityKind.CONSTRUCT_SIGNATURE,
                EntityKind.METHOD_SIGNATURE,
                EntityKind.METHOD,
            ):
                methods_table.add_row(self._title_cell(member, page), self._description_cell(member, page))
                self.render(member, methods_details, page)
            elif member.kind in (EntityKind.PROPERTY_SIGNATURE, EntityKind.PROPERTY):
                table, details = (
                    (events_table, events_details)
                    if member.is_event
                    else (properties_table, properties_details)
                )
                table.add_row(
                    self._title_cell(member, page),
                    self._property_type_cell(member, page),
                    self._description_cell(member, page),
                )
                self.render(member, details, page)

        for title, table in (
            ("Events", events_table),
            ("Properties", properties_table),
            ("Methods", methods_table),
        ):
            if table.rows:
                output.append(Heading(title), table)

        self._write_details(
            output,
            "interface-details",
            [
                ("Events", events_details),
                ("Properties", properties_details),
                ("Methods", methods_details),
            ],
        )

    # ------------------------------------------------------------------
    # Enum

    def _write_enum_tables(self, api_enum: Entity, output: Section, page: Optional[Entity]) -> None:
        members_table = Table(["Member", "Value", "Description"])
        for member in api_enum.members:
            if member.kind is not EntityKind.ENUM_MEMBER:
                continue
            members_table.add_row(
                TableCell([Anchor(self._identifiers.html_id_for(member)), PlainText(concise_signature(member))]),
                TableCell([CodeSpan(member.initializer.text)]),
                self._description_cell(member, page),
            )
        if members_table.rows:
            output.append(Heading("Enumeration Members", level=4), members_table)

    # ------------------------------------------------------------------
    # Function-like

    def _write_parameter_tables(self, item: Entity, output: Section, page: Optional[Entity]) -> None:
        parameters_table = Table(["Parameter", "Type", "Description"])
        for parameter in item.parameters:
            description: List[InlineNode] = []
            if parameter.description is not None:
                description = self._links.excerpt_nodes(parameter.description, page)
            parameters_table.add_row(
                TableCell([PlainText(parameter.name)]),
                TableCell(self._type_nodes(parameter.type, page)),
                TableCell(description),
            )
        if parameters_table.rows:
            output.append(Heading("Parameters", level=4), parameters_table)

        if item.has_return_type:
            output.append(Paragraph([EmphasisSpan([PlainText("Returns:")], bold=True)]))
            output.append(Paragraph(self._type_nodes(item.return_type, page)))
            if item.docs is not None and item.docs.returns is not None:
                output.append(Paragraph(self._links.excerpt_nodes(item.docs.returns, page)))

        throws = item.docs.throws if item.docs is not None else ()
        if throws:
            output.append(Heading("Exceptions", level=4))
            for block in throws:
                output.append(Paragraph(self._links.excerpt_nodes(block, page)))

    def _write_nothing(self, item: Entity, output: Section, page: Optional[Entity]) -> None:
        return None

    # ------------------------------------------------------------------
    # Helpers

    @staticmethod
    def _write_details(output: Section, div_id: str, groups: List[Tuple[str, Section]]) -> None:
        details = Section([HtmlStartTag("hr"), HtmlStartTag("div", {"id": div_id})])
        for title, section in groups:
            if section:
                details.append(Heading(title), section)
        details.append(HtmlEndTag("div"))
        output.append(details)

    def _type_nodes(self, excerpt: Excerpt, page: Optional[Entity]) -> List[InlineNode]:
        if excerpt.is_empty:
            return [PlainText("(not declared)")]
        return self._links.excerpt_nodes(excerpt, page)

    def _title_cell(self, item: Entity, page: Optional[Entity]) -> TableCell:
        return TableCell([Link(concise_signature(item), self._links.link_for(item, page))])

    def _description_cell(self, item: Entity, page: Optional[Entity]) -> TableCell:
        cell = TableCell()
        if item.release_tag is ReleaseTag.BETA:
            cell.children.extend([EmphasisSpan([PlainText("(BETA)")], bold=True), PlainText(" ")])
        if item.is_optional:
            cell.children.extend([EmphasisSpan([PlainText("(Optional)")], italic=True), PlainText(" ")])
        if item.docs is not None:
            cell.children.extend(self._links.excerpt_nodes(item.docs.summary, page))
        return cell

    @staticmethod
    def _modifiers_cell(item: Entity) -> TableCell:
        cell = TableCell()
        flags = (
            ("protected", item.is_protected),
            ("readonly", item.is_readonly),
            ("static", item.is_static),
            ("abstract", item.is_abstract),
        )
        for name, enabled in flags:
            if not enabled:
                continue
            if cell.children:
                cell.children.append(PlainText(", "))
            cell.children.append(CodeSpan(name))
        return cell

    def _property_type_cell(self, item: Entity, page: Optional[Entity]) -> TableCell:
        return TableCell(self._links.excerpt_nodes(item.property_type, page))


__all__ = ["BETA_WARNING", "DEPRECATION_PREFIX", "SectionBuilder"]
