"""Tests for apipages.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from apipages.config import CONFIG_FILENAME, ConfigError, DocumenterConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, DocumenterConfig)
    assert config.root == tmp_path.resolve()
    assert config.uri_root is None
    assert config.normalized_uri_root == "/"
    assert config.only_packages_starting_with == []
    assert config.newline_kind == "crlf"
    assert config.newline == "\r\n"
    assert config.validate_links is False
    assert config.code_language == "typescript"


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / CONFIG_FILENAME
    config_file.write_text(
        """
uri_root: "/docs/api"
only_packages_starting_with:
  - "@scope/"
  - "@tools/"
newline_kind: LF
validate_links: yes
code_language: ts
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.uri_root == "/docs/api"
    assert config.normalized_uri_root == "/docs/api/"
    assert config.only_packages_starting_with == ["@scope/", "@tools/"]
    assert config.newline_kind == "lf"
    assert config.newline == "\n"
    assert config.validate_links is True
    assert config.code_language == "ts"


def test_single_prefix_string_is_accepted(tmp_path: Path) -> None:
    (tmp_path / CONFIG_FILENAME).write_text('only_packages_starting_with: "@scope/"\n', encoding="utf-8")

    assert load_config(tmp_path).only_packages_starting_with == ["@scope/"]


def test_empty_file_yields_defaults(tmp_path: Path) -> None:
    (tmp_path / CONFIG_FILENAME).write_text("\n", encoding="utf-8")

    assert load_config(tmp_path).newline_kind == "crlf"


@pytest.mark.parametrize("uri_root, expected", [("/", "/"), ("/api/", "/api/"), ("https://x.io/docs", "https://x.io/docs/")])
def test_normalized_uri_root(tmp_path: Path, uri_root: str, expected: str) -> None:
    assert DocumenterConfig(root=tmp_path, uri_root=uri_root).normalized_uri_root == expected


def test_invalid_newline_kind_raises(tmp_path: Path) -> None:
    (tmp_path / CONFIG_FILENAME).write_text("newline_kind: mac\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="newline_kind"):
        load_config(tmp_path)


def test_invalid_yaml_raises(tmp_path: Path) -> None:
    (tmp_path / CONFIG_FILENAME).write_text("uri_root: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Failed to parse"):
        load_config(tmp_path)


def test_non_mapping_root_raises(tmp_path: Path) -> None:
    (tmp_path / CONFIG_FILENAME).write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="mapping"):
        load_config(tmp_path)
