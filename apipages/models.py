"""Core data models for the API entity tree consumed by the documenter."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union


class EntityKind(str, Enum):
    """Closed set of entity kinds; values double as anchor and front matter tags."""

    MODEL = "Model"
    PACKAGE = "Package"
    ENTRY_POINT = "EntryPoint"
    NAMESPACE = "Namespace"
    CLASS = "Class"
    INTERFACE = "Interface"
    ENUM = "Enum"
    ENUM_MEMBER = "EnumMember"
    CONSTRUCTOR = "Constructor"
    CONSTRUCT_SIGNATURE = "ConstructSignature"
    METHOD = "Method"
    METHOD_SIGNATURE = "MethodSignature"
    PROPERTY = "Property"
    PROPERTY_SIGNATURE = "PropertySignature"
    FUNCTION = "Function"
    VARIABLE = "Variable"
    TYPE_ALIAS = "TypeAlias"
    CALL_SIGNATURE = "CallSignature"
    INDEX_SIGNATURE = "IndexSignature"


# Kinds that carry a parameter list and therefore take part in overload numbering.
PARAMETER_LIST_KINDS = frozenset(
    {
        EntityKind.CONSTRUCTOR,
        EntityKind.CONSTRUCT_SIGNATURE,
        EntityKind.METHOD,
        EntityKind.METHOD_SIGNATURE,
        EntityKind.FUNCTION,
        EntityKind.CALL_SIGNATURE,
    }
)

RETURN_TYPE_KINDS = frozenset(
    {
        EntityKind.CONSTRUCT_SIGNATURE,
        EntityKind.METHOD,
        EntityKind.METHOD_SIGNATURE,
        EntityKind.FUNCTION,
        EntityKind.CALL_SIGNATURE,
    }
)


class ReleaseTag(str, Enum):
    """Release stage annotation attached to an entity."""

    NONE = "None"
    INTERNAL = "Internal"
    ALPHA = "Alpha"
    BETA = "Beta"
    PUBLIC = "Public"


class TokenKind(str, Enum):
    CONTENT = "Content"
    REFERENCE = "Reference"


@dataclass(frozen=True)
class ExcerptToken:
    """One span of text; reference tokens may resolve to another entity."""

    kind: TokenKind
    text: str
    canonical_reference: Optional[str] = None


@dataclass(frozen=True)
class Excerpt:
    """Ordered run of tokens used for signatures, types and documentation text."""

    tokens: Tuple[ExcerptToken, ...] = ()

    @property
    def text(self) -> str:
        return "".join(token.text for token in self.tokens)

    @property
    def is_empty(self) -> bool:
        return not self.text.strip()

    @classmethod
    def of(cls, *parts: Union[str, ExcerptToken]) -> "Excerpt":
        """Build an excerpt from plain strings and prepared tokens."""
        tokens = []
        for part in parts:
            if isinstance(part, ExcerptToken):
                tokens.append(part)
            elif part:
                tokens.append(ExcerptToken(TokenKind.CONTENT, part))
        return cls(tuple(tokens))


def reference(text: str, canonical_reference: str) -> ExcerptToken:
    """Shorthand for a hyperlinkable token."""
    return ExcerptToken(TokenKind.REFERENCE, text, canonical_reference)


@dataclass(frozen=True)
class DocComment:
    """Pre-parsed documentation comment blocks."""

    summary: Excerpt = field(default_factory=Excerpt)
    remarks: Optional[Excerpt] = None
    deprecated: Optional[Excerpt] = None
    returns: Optional[Excerpt] = None
    throws: Tuple[Excerpt, ...] = ()
    examples: Tuple[Excerpt, ...] = ()
    decorators: Tuple[Excerpt, ...] = ()


@dataclass(frozen=True)
class Parameter:
    name: str
    type: Excerpt = field(default_factory=Excerpt)
    description: Optional[Excerpt] = None
    is_optional: bool = False


@dataclass(frozen=True, eq=False)
class Entity:
    """Immutable node of the API tree.

    Equality and hashing are by identity so entities can key side-tables; the
    parent relation lives in :class:`apipages.tree.ApiModel`, never on the node.
    """

    kind: EntityKind
    name: str
    docs: Optional[DocComment] = None
    excerpt: Excerpt = field(default_factory=Excerpt)
    canonical_reference: Optional[str] = None
    release_tag: ReleaseTag = ReleaseTag.PUBLIC
    is_event: bool = False
    is_static: bool = False
    is_optional: bool = False
    is_protected: bool = False
    is_readonly: bool = False
    is_abstract: bool = False
    parameters: Tuple[Parameter, ...] = ()
    return_type: Excerpt = field(default_factory=Excerpt)
    property_type: Excerpt = field(default_factory=Excerpt)
    initializer: Excerpt = field(default_factory=Excerpt)
    extends_types: Tuple[Excerpt, ...] = ()
    implements_types: Tuple[Excerpt, ...] = ()
    members: Tuple["Entity", ...] = ()

    @property
    def has_parameter_list(self) -> bool:
        return self.kind in PARAMETER_LIST_KINDS

    @property
    def has_return_type(self) -> bool:
        return self.kind in RETURN_TYPE_KINDS

    @property
    def is_deprecated(self) -> bool:
        return self.docs is not None and self.docs.deprecated is not None


__all__ = [
    "DocComment",
    "Entity",
    "EntityKind",
    "Excerpt",
    "ExcerptToken",
    "PARAMETER_LIST_KINDS",
    "Parameter",
    "RETURN_TYPE_KINDS",
    "ReleaseTag",
    "TokenKind",
    "reference",
]
