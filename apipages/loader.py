"""Load an API model tree from its JSON description."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Mapping, Optional, Tuple

from .logging import get_logger
from .models import (
    DocComment,
    Entity,
    EntityKind,
    Excerpt,
    ExcerptToken,
    Parameter,
    ReleaseTag,
    TokenKind,
)
from .tree import ApiModel

_LOGGER = get_logger("loader")


class ModelLoadError(RuntimeError):
    """Raised when the model file is missing or structurally invalid."""


def load_model(path: Path) -> ApiModel:
    """Read ``path`` and return the indexed model."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ModelLoadError(f"Model file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise ModelLoadError(f"Failed to parse {path.name}: {exc}") from exc

    root = entity_from_dict(data)
    if root.kind is not EntityKind.MODEL:
        raise ModelLoadError(f"{path.name} must describe a Model at the root, got {root.kind.value}")
    model = ApiModel(root)
    _LOGGER.debug("Loaded model from %s with %d packages", path, len(root.members))
    return model


def entity_from_dict(data: Any) -> Entity:
    """Convert one JSON node (and its members) into an :class:`Entity`."""
    if not isinstance(data, dict):
        raise ModelLoadError("Every model node must be a JSON object")

    kind = _as_kind(data.get("kind"))
    members = data.get("members") or []
    if not isinstance(members, list):
        raise ModelLoadError(f"'members' of {data.get('name')!r} must be a list")

    return Entity(
        kind=kind,
        name=str(data.get("name") or ""),
        docs=_as_docs(data.get("docs")),
        excerpt=_as_excerpt(data.get("excerpt")),
        canonical_reference=_as_optional_str(data.get("canonicalReference")),
        release_tag=_as_release_tag(data.get("releaseTag")),
        is_event=bool(data.get("isEvent", False)),
        is_static=bool(data.get("isStatic", False)),
        is_optional=bool(data.get("isOptional", False)),
        is_protected=bool(data.get("isProtected", False)),
        is_readonly=bool(data.get("isReadonly", False)),
        is_abstract=bool(data.get("isAbstract", False)),
        parameters=tuple(_as_parameter(item) for item in _as_list(data.get("parameters"))),
        return_type=_as_excerpt(data.get("returnType")),
        property_type=_as_excerpt(data.get("propertyType")),
        initializer=_as_excerpt(data.get("initializer")),
        extends_types=_as_excerpts(data.get("extends")),
        implements_types=_as_excerpts(data.get("implements")),
        members=tuple(entity_from_dict(member) for member in members),
    )


def _as_kind(value: Any) -> EntityKind:
    try:
        return EntityKind(value)
    except ValueError:
        raise ModelLoadError(f"Unknown entity kind: {value!r}") from None


def _as_release_tag(value: Any) -> ReleaseTag:
    if value is None:
        return ReleaseTag.PUBLIC
    try:
        return ReleaseTag(value)
    except ValueError:
        raise ModelLoadError(f"Unknown release tag: {value!r}") from None


def _as_excerpt(value: Any) -> Excerpt:
    """Accept a bare string or a list of strings/token objects."""
    if value is None:
        return Excerpt()
    if isinstance(value, str):
        return Excerpt.of(value)
    if isinstance(value, list):
        return Excerpt(tuple(_as_token(item) for item in value))
    raise ModelLoadError(f"Unsupported excerpt value: {value!r}")


def _as_optional_excerpt(value: Any) -> Optional[Excerpt]:
    if value is None:
        return None
    return _as_excerpt(value)


def _as_excerpts(value: Any) -> Tuple[Excerpt, ...]:
    return tuple(_as_excerpt(item) for item in _as_list(value))


def _as_token(value: Any) -> ExcerptToken:
    if isinstance(value, str):
        return ExcerptToken(TokenKind.CONTENT, value)
    if not isinstance(value, dict):
        raise ModelLoadError(f"Unsupported excerpt token: {value!r}")
    try:
        kind = TokenKind(value.get("kind", TokenKind.CONTENT.value))
    except ValueError:
        raise ModelLoadError(f"Unknown token kind: {value.get('kind')!r}") from None
    return ExcerptToken(
        kind=kind,
        text=str(value.get("text", "")),
        canonical_reference=_as_optional_str(value.get("canonicalReference")),
    )


def _as_docs(value: Any) -> Optional[DocComment]:
    if value is None:
        return None
    if isinstance(value, str):
        return DocComment(summary=Excerpt.of(value))
    if not isinstance(value, dict):
        raise ModelLoadError(f"Unsupported docs value: {value!r}")
    return DocComment(
        summary=_as_excerpt(value.get("summary")),
        remarks=_as_optional_excerpt(value.get("remarks")),
        deprecated=_as_optional_excerpt(value.get("deprecated")),
        returns=_as_optional_excerpt(value.get("returns")),
        throws=_as_excerpts(value.get("throws")),
        examples=_as_excerpts(value.get("examples")),
        decorators=_as_excerpts(value.get("decorators")),
    )


def _as_parameter(value: Any) -> Parameter:
    if not isinstance(value, Mapping):
        raise ModelLoadError(f"Unsupported parameter value: {value!r}")
    return Parameter(
        name=str(value.get("name", "")),
        type=_as_excerpt(value.get("type")),
        description=_as_optional_excerpt(value.get("description")),
        is_optional=bool(value.get("isOptional", False)),
    )


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _as_optional_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int)) else None


__all__ = ["ModelLoadError", "entity_from_dict", "load_model"]
