"""Configuration loading for apipages (.apipages.yml)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".apipages.yml"

NEWLINES = {
    "crlf": "\r\n",
    "lf": "\n",
    "os": os.linesep,
}


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class DocumenterConfig:
    """Represents the settings defined in .apipages.yml."""

    root: Path
    uri_root: Optional[str] = None
    only_packages_starting_with: List[str] = field(default_factory=list)
    newline_kind: str = "crlf"
    validate_links: bool = False
    code_language: str = "typescript"

    @property
    def normalized_uri_root(self) -> str:
        """Prefix for every standalone-page link, always ending in ``/``."""
        if self.uri_root is None:
            return "/"
        return self.uri_root.rstrip("/") + "/"

    @property
    def newline(self) -> str:
        return NEWLINES[self.newline_kind]


def load_config(config_path: Path) -> DocumenterConfig:
    """Load configuration from disk, returning defaults when the file is absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return DocumenterConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    newline_kind = _as_str(data.get("newline_kind")) or "crlf"
    newline_kind = newline_kind.lower()
    if newline_kind not in NEWLINES:
        raise ConfigError(
            f"newline_kind must be one of {', '.join(sorted(NEWLINES))}; got {newline_kind!r}"
        )

    return DocumenterConfig(
        root=root,
        uri_root=_as_str(data.get("uri_root")),
        only_packages_starting_with=_as_str_list(data.get("only_packages_starting_with")),
        newline_kind=newline_kind,
        validate_links=_as_bool(data.get("validate_links")) or False,
        code_language=_as_str(data.get("code_language")) or "typescript",
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = ["CONFIG_FILENAME", "ConfigError", "DocumenterConfig", "NEWLINES", "load_config"]
