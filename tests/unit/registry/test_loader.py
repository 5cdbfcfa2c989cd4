"""Tests for registry file loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from opverify.errors import (
    RegistryParseError,
    RegistryReadError,
    RegistryValidationError,
)
from opverify.registry.loader import load_registry, parse_registry
from opverify.registry.validation import IssueKind

DIGEST = "0fd8da9c6b6301781f50ef57cebbfd7d42d072777bcb4649ef5b6d360629b876"


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "versions.yaml"
    path.write_text(content)
    return path


class TestLoadRegistry:
    """Tests for load_registry."""

    def test_loads_valid_registry(self, registry_file: Path) -> None:
        registry = load_registry(registry_file)
        assert registry.schema_version == 1
        assert list(registry.versions) == ["2.31.1"]
        assert registry.versions["2.31.1"].linux_amd64 == DIGEST

    def test_accepts_string_path(self, registry_file: Path) -> None:
        assert "2.31.1" in load_registry(str(registry_file)).versions

    def test_normalizes_version_keys(self, tmp_path: Path) -> None:
        path = _write(tmp_path, f'schema_version: 1\nversions:\n  "v3.0.0":\n    linux_amd64: "{DIGEST}"\n')
        registry = load_registry(path)
        assert list(registry.versions) == ["3.0.0"]

    def test_ignores_unknown_keys(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            "schema_version: 1\n"
            "maintainer: someone\n"
            "versions:\n"
            "  \"2.31.1\":\n"
            f"    linux_amd64: \"{DIGEST}\"\n"
            "    solaris_sparc: whatever\n",
        )
        registry = load_registry(path)
        assert registry.versions["2.31.1"].populated() == {"linux_amd64": DIGEST}

    def test_missing_file_raises_read_error(self, tmp_path: Path) -> None:
        path = tmp_path / "missing.yaml"
        with pytest.raises(RegistryReadError) as exc_info:
            load_registry(path)
        assert exc_info.value.path == path
        assert str(path) in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)

    def test_directory_raises_read_error(self, tmp_path: Path) -> None:
        with pytest.raises(RegistryReadError):
            load_registry(tmp_path)

    def test_malformed_yaml_raises_parse_error(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "schema_version: 1\nversions: [unclosed\n")
        with pytest.raises(RegistryParseError) as exc_info:
            load_registry(path)
        assert exc_info.value.path == path
        assert "failed to parse YAML" in str(exc_info.value)

    @pytest.mark.parametrize(
        "content,what",
        [
            ("", "document"),
            ("- 1\n- 2\n", "document"),
            ("schema_version: 1\nversions: [1, 2]\n", "versions"),
            ('schema_version: 1\nversions:\n  "2.31.1": "abc"\n', "version 2.31.1"),
        ],
    )
    def test_wrong_shape_raises_parse_error(self, tmp_path: Path, content: str, what: str) -> None:
        path = _write(tmp_path, content)
        with pytest.raises(RegistryParseError, match=f"{what} must be a mapping"):
            load_registry(path)

    def test_unexpected_schema_version(self, tmp_path: Path) -> None:
        path = _write(tmp_path, f'schema_version: 2\nversions:\n  "2.31.1":\n    linux_amd64: "{DIGEST}"\n')
        with pytest.raises(RegistryValidationError) as exc_info:
            load_registry(path)
        assert "unexpected schema_version=2" in str(exc_info.value)
        assert exc_info.value.source == str(path)

    def test_version_missing_patch_component(self, tmp_path: Path) -> None:
        path = _write(tmp_path, f'schema_version: 1\nversions:\n  "2.31":\n    linux_amd64: "{DIGEST}"\n')
        with pytest.raises(RegistryValidationError) as exc_info:
            load_registry(path)
        assert [i.version for i in exc_info.value.issues] == ["2.31"]
        assert "'2.31'" in str(exc_info.value)

    def test_version_without_checksums(self, tmp_path: Path) -> None:
        path = _write(tmp_path, 'schema_version: 1\nversions:\n  "9.9.9":\n')
        with pytest.raises(RegistryValidationError) as exc_info:
            load_registry(path)
        assert "no platform checksums provided" in str(exc_info.value)
        assert exc_info.value.issues[0].kind is IssueKind.NO_CHECKSUMS

    def test_missing_versions_reports_empty(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "schema_version: 1\n")
        with pytest.raises(RegistryValidationError, match="versions map is empty"):
            load_registry(path)


class TestParseRegistry:
    """Tests for parse_registry."""

    def test_parses_text(self) -> None:
        registry = parse_registry(f'schema_version: 1\nversions:\n  "1.0.0":\n    darwin_arm64: "{DIGEST}"\n')
        assert registry.versions["1.0.0"].darwin_arm64 == DIGEST

    def test_unquoted_float_key_is_rejected(self) -> None:
        with pytest.raises(RegistryValidationError, match="invalid version key '2.31'"):
            parse_registry(f"schema_version: 1\nversions:\n  2.31:\n    linux_amd64: \"{DIGEST}\"\n")

    def test_block_scalar_digest_keeps_newline_and_is_rejected(self) -> None:
        text = (
            "schema_version: 1\n"
            "versions:\n"
            "  \"2.31.1\":\n"
            "    linux_amd64: |\n"
            f"      {DIGEST}\n"
        )
        with pytest.raises(RegistryValidationError) as exc_info:
            parse_registry(text)
        assert [i.kind for i in exc_info.value.issues] == [IssueKind.INVALID_CHECKSUM]

    def test_stripped_block_scalar_digest_is_accepted(self) -> None:
        text = (
            "schema_version: 1\n"
            "versions:\n"
            "  \"2.31.1\":\n"
            "    linux_amd64: |-\n"
            f"      {DIGEST}\n"
        )
        assert parse_registry(text).versions["2.31.1"].linux_amd64 == DIGEST


class TestDuplicateKeys:
    """Repeated keys are rejected at parse time."""

    def test_duplicate_version_entries(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            "schema_version: 1\n"
            "versions:\n"
            f"  \"2.31.1\":\n    linux_amd64: \"{'a' * 64}\"\n"
            f"  \"2.31.1\":\n    linux_amd64: \"{'b' * 64}\"\n",
        )
        with pytest.raises(RegistryParseError, match="found duplicate key '2.31.1'") as exc_info:
            load_registry(path)
        assert exc_info.value.path == path
        assert str(path) in str(exc_info.value)

    def test_duplicate_platform_field(self) -> None:
        text = (
            "schema_version: 1\n"
            "versions:\n"
            "  \"2.31.1\":\n"
            f"    linux_amd64: \"{'a' * 64}\"\n"
            f"    linux_amd64: \"{'b' * 64}\"\n"
        )
        with pytest.raises(RegistryParseError, match="found duplicate key 'linux_amd64'"):
            parse_registry(text)

    def test_duplicate_top_level_key(self) -> None:
        text = (
            f'schema_version: 1\nversions:\n  "1.0.0":\n    linux_amd64: "{DIGEST}"\n'
            "schema_version: 1\n"
        )
        with pytest.raises(RegistryParseError, match="found duplicate key 'schema_version'"):
            parse_registry(text)

    def test_keys_reading_as_same_text(self) -> None:
        text = (
            "schema_version: 1\n"
            "versions:\n"
            f"  1.10:\n    linux_amd64: \"{DIGEST}\"\n"
            f"  \"1.1\":\n    linux_amd64: \"{DIGEST}\"\n"
        )
        with pytest.raises(RegistryParseError, match="both read as '1.1'"):
            parse_registry(text)

    def test_merge_key_may_be_overridden(self) -> None:
        other = "b" * 64
        text = (
            "schema_version: 1\n"
            "versions:\n"
            "  \"2.31.1\": &base\n"
            f"    linux_amd64: \"{DIGEST}\"\n"
            f"    darwin_arm64: \"{DIGEST}\"\n"
            "  \"2.31.2\":\n"
            "    <<: *base\n"
            f"    linux_amd64: \"{other}\"\n"
        )
        registry = parse_registry(text)
        assert registry.versions["2.31.2"].linux_amd64 == other
        assert registry.versions["2.31.2"].darwin_arm64 == DIGEST
