"""Tests for opverify.cli.commands.status."""

from __future__ import annotations

from argparse import Namespace
from pathlib import Path
from unittest.mock import patch

from opverify.bootstrap.paths import default_registry_path
from opverify.cli.commands.status import StatusCommand
from opverify.cli.exit_codes import EXIT_SUCCESS

DIGEST = "a" * 64


def _linux_host():
    return patch("platform.system", return_value="Linux"), patch("platform.machine", return_value="x86_64")


class TestStatusCommand:
    """Tests for StatusCommand."""

    def test_name(self) -> None:
        assert StatusCommand(version="1.0.0").name == "status"

    def test_reports_missing_default_registry_without_installing(self, capsys) -> None:
        system, machine = _linux_host()
        with system, machine:
            result = StatusCommand(version="1.0.0").execute(Namespace(registry=None))

        assert result == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert "opverify version: 1.0.0" in out
        assert "Platform: linux-amd64" in out
        assert "Platform key: linux_amd64" in out
        assert f"Registry: {default_registry_path()} (default)" in out
        assert "Registry not installed" in out
        assert not default_registry_path().exists()

    def test_unsupported_platform(self, capsys) -> None:
        with patch("platform.system", return_value="FreeBSD"), patch("platform.machine", return_value="amd64"):
            StatusCommand(version="1.0.0").execute(Namespace(registry=None))

        assert "Platform key: unsupported" in capsys.readouterr().out

    def test_lists_versions_in_order(self, tmp_path: Path, capsys) -> None:
        path = tmp_path / "versions.yaml"
        path.write_text(
            "schema_version: 1\n"
            "versions:\n"
            f"  \"2.10.0\":\n    linux_amd64: \"{DIGEST}\"\n"
            f"  \"v2.9.1\":\n    darwin_arm64: \"{DIGEST}\"\n    windows_amd64: \"{DIGEST}\"\n"
        )

        StatusCommand(version="1.0.0").execute(Namespace(registry=path))

        out = capsys.readouterr().out
        assert f"Registry: {path} (override)" in out
        assert "Versions (2):" in out
        assert out.index("2.9.1: darwin_arm64, windows_amd64") < out.index("2.10.0: linux_amd64")

    def test_missing_override(self, tmp_path: Path, capsys) -> None:
        StatusCommand(version="1.0.0").execute(Namespace(registry=tmp_path / "nope.yaml"))
        assert "Registry file not found." in capsys.readouterr().out

    def test_invalid_registry_is_reported(self, tmp_path: Path, capsys) -> None:
        path = tmp_path / "versions.yaml"
        path.write_text("schema_version: 3\nversions: {}\n")

        result = StatusCommand(version="1.0.0").execute(Namespace(registry=path))

        assert result == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert "Registry unusable:" in out
        assert "unexpected schema_version=3" in out
