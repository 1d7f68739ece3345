"""Tests for apipages.documenter.links."""

from __future__ import annotations

import pytest

from apipages.documenter.links import LinkResolver
from apipages.documenter.naming import IdentifierResolver
from apipages.documenter.nodes import Link, PlainText
from apipages.documenter.placement import PackageFilter, is_rendered, is_standalone_page
from apipages.models import Entity, EntityKind, Excerpt, reference
from apipages.tree import ApiModel
from tests._fixtures.model_builder import find


def _walk(entity: Entity):
    yield entity
    for member in entity.members:
        yield from _walk(member)


def _resolver(model: ApiModel, **kwargs) -> LinkResolver:
    return LinkResolver(model, IdentifierResolver(model), **kwargs)


def test_model_and_standalone_links_use_uri_root(sample_model: ApiModel) -> None:
    links = _resolver(sample_model, uri_root="/api/")
    bar = find(sample_model, "@scope/foo", "Bar")

    assert links.link_for(sample_model.root, bar) == "/api/"
    assert links.link_for(bar, bar) == "/api/foo/Bar.md"
    assert links.link_for(find(sample_model, "@scope/foo"), None) == "/api/foo.md"


def test_member_link_is_anchor_on_its_own_page(sample_model: ApiModel) -> None:
    links = _resolver(sample_model)
    bar = find(sample_model, "@scope/foo", "Bar")

    assert links.link_for(bar.members[1], bar) == "#foo-Bar-baz-Method"
    assert links.link_for(bar.members[2], bar) == "#foo-Bar-baz_2-Method"


def test_member_link_from_another_page_includes_owner_path(sample_model: ApiModel) -> None:
    links = _resolver(sample_model)
    package = find(sample_model, "@scope/foo")
    bar = find(sample_model, "@scope/foo", "Bar")
    color = find(sample_model, "@scope/foo", "Color")

    assert links.link_for(bar.members[1], package) == "/foo/Bar/#foo-Bar-baz-Method"
    assert links.link_for(color, bar) == "/foo/#foo-Color-Enum"


def test_namespace_members_anchor_on_the_package_page(sample_model: ApiModel) -> None:
    links = _resolver(sample_model)
    package = find(sample_model, "@scope/foo")
    bar = find(sample_model, "@scope/foo", "Bar")
    clamp = find(sample_model, "@scope/foo", "Utils", "clamp")

    assert links.page_for(clamp) is package
    assert links.link_for(clamp, package) == "#foo-Utils-clamp-Function"
    assert links.link_for(clamp, bar) == "/foo/#foo-Utils-clamp-Function"


def test_same_page_and_cross_page_forms_are_exclusive(sample_model: ApiModel) -> None:
    identifiers = IdentifierResolver(sample_model)
    links = LinkResolver(sample_model, identifiers)
    entities = list(_walk(sample_model.root))
    pages = [entity for entity in entities if is_standalone_page(entity)]
    anchored = [
        entity
        for entity in entities
        if not is_standalone_page(entity)
        and entity.kind not in (EntityKind.MODEL, EntityKind.ENTRY_POINT)
    ]

    for entity in anchored:
        owner = links.page_for(entity)
        for page in pages:
            link = links.link_for(entity, page)
            anchor = "#" + identifiers.html_id_for(entity)
            if page is owner:
                assert link == anchor
            else:
                assert not link.startswith("#")
                assert link.endswith(anchor)


def test_excerpt_links_resolved_references(sample_model: ApiModel) -> None:
    links = _resolver(sample_model)
    bar = find(sample_model, "@scope/foo", "Bar")
    excerpt = Excerpt.of("Make a ", reference("Bar", "@scope/foo!Bar:class"), "\nnow")

    nodes = links.excerpt_nodes(excerpt, bar)

    assert nodes == [PlainText("Make a "), Link("Bar", "/foo/Bar.md"), PlainText(" now")]


def test_unresolved_reference_is_plain_text(sample_model: ApiModel) -> None:
    links = _resolver(sample_model)
    excerpt = Excerpt.of(reference("Missing", "@scope/foo!Missing:class"))

    assert links.excerpt_nodes(excerpt, None) == [PlainText("Missing")]
    assert links.resolve_token_target(None) is None


def test_reference_into_skipped_package_is_plain_text(sample_model: ApiModel) -> None:
    package_filter = PackageFilter(sample_model, ["@scope/"])
    links = _resolver(sample_model, is_allowed=package_filter.allows)
    excerpt = Excerpt.of(reference("Hidden", "@other/x!Hidden:class"))

    assert links.excerpt_nodes(excerpt, None) == [PlainText("Hidden")]


@pytest.mark.parametrize(
    "prefixes, expected",
    [
        ([], True),
        (["@scope/"], False),
        (["@other/", "@scope/"], True),
    ],
)
def test_package_filter_prefixes(sample_model: ApiModel, prefixes, expected) -> None:
    package_filter = PackageFilter(sample_model, prefixes)
    hidden = find(sample_model, "@other/x", "Hidden")

    assert package_filter.allows(hidden) is expected
    assert package_filter.allows(sample_model.root) is True


def test_references_to_entities_without_sections_are_plain_text() -> None:
    red = Entity(kind=EntityKind.ENUM_MEMBER, name="Red", canonical_reference="lib!Color.Red:member")
    call = Entity(kind=EntityKind.CALL_SIGNATURE, name="call", canonical_reference="lib!Painter:call")
    nested = Entity(kind=EntityKind.METHOD, name="inner", canonical_reference="lib!inner:function")
    color = Entity(kind=EntityKind.ENUM, name="Color", members=(red,))
    painter = Entity(kind=EntityKind.CLASS, name="Painter", members=(call,))
    stray = Entity(kind=EntityKind.NAMESPACE, name="ns", members=(nested,))
    package = Entity(kind=EntityKind.PACKAGE, name="lib", members=(color, painter, stray))
    model = ApiModel(Entity(kind=EntityKind.MODEL, name="", members=(package,)))
    links = _resolver(model)

    assert is_rendered(model, red)
    assert not is_rendered(model, call)
    assert not is_rendered(model, nested)
    assert links.excerpt_nodes(Excerpt.of(reference("Red", "lib!Color.Red:member")), package) == [
        Link("Red", "#lib-Color-Red-EnumMember")
    ]
    assert links.excerpt_nodes(Excerpt.of(reference("call", "lib!Painter:call")), painter) == [PlainText("call")]
    assert links.resolve_token_target("lib!inner:function") is None


def test_only_first_entry_point_is_rendered() -> None:
    first = Entity(kind=EntityKind.CLASS, name="Shown")
    second = Entity(kind=EntityKind.CLASS, name="Ignored")
    package = Entity(
        kind=EntityKind.PACKAGE,
        name="lib",
        members=(
            Entity(kind=EntityKind.ENTRY_POINT, name="", members=(first,)),
            Entity(kind=EntityKind.ENTRY_POINT, name="extra", members=(second,)),
        ),
    )
    model = ApiModel(Entity(kind=EntityKind.MODEL, name="", members=(package,)))

    assert is_rendered(model, first)
    assert not is_rendered(model, second)
