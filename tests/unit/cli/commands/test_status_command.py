"""Tests for the status command."""

from __future__ import annotations

from argparse import Namespace
from pathlib import Path
from unittest.mock import patch

from rlx.bootstrap.binary import ReleaseBinary
from rlx.bootstrap.install_record import InstallRecord, write_install_record
from rlx.bootstrap.paths import RlxPaths
from rlx.bootstrap.platform import HostPlatform
from rlx.cli.commands.status import StatusCommand
from rlx.cli.exit_codes import EXIT_SUCCESS


def _host(os_type: str, architecture: str):
    return patch(
        "rlx.cli.commands.status.get_host_platform",
        return_value=HostPlatform(os_type, architecture),
    )


class TestStatusCommand:
    """Tests for StatusCommand."""

    def test_command_name(self) -> None:
        assert StatusCommand().name == "status"

    def test_not_installed(self, capsys, shim_config, tmp_path: Path) -> None:
        manager = ReleaseBinary(paths=RlxPaths(tmp_path))
        with _host("Linux", "x64"):
            result = StatusCommand(manager).execute(Namespace(), shim_config)

        assert result == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert "rlx release: v1.2.3" in out
        assert "Platform: Linux/x64" in out
        assert "Release build: x86_64-unknown-linux-musl" in out
        assert "rust_v1.2.3/rlx-v1.2.3-x86_64-unknown-linux-musl.tar.gz" in out
        assert "(not installed)" in out

    def test_installed_and_other_versions(self, capsys, shim_config, tmp_path: Path) -> None:
        paths = RlxPaths(tmp_path)
        binary = paths.binary_dir("rlx", "1.2.3") / "rlx"
        binary.parent.mkdir(parents=True)
        binary.write_bytes(b"x")
        binary.chmod(0o755)
        paths.binary_dir("rlx", "1.0.0").mkdir(parents=True)

        with _host("Linux", "x64"):
            StatusCommand(ReleaseBinary(paths=paths)).execute(Namespace(), shim_config)

        out = capsys.readouterr().out
        assert "(installed)" in out
        assert "Other installed versions: 1.0.0" in out

    def test_emulated_build_is_marked(self, capsys, shim_config, tmp_path: Path) -> None:
        with _host("Darwin", "arm64"):
            StatusCommand(ReleaseBinary(paths=RlxPaths(tmp_path))).execute(Namespace(), shim_config)
        assert "x86_64-apple-darwin (emulated)" in capsys.readouterr().out

    def test_unsupported_platform_is_reported(self, capsys, shim_config, tmp_path: Path) -> None:
        with _host("Plan9", "mips"):
            result = StatusCommand(ReleaseBinary(paths=RlxPaths(tmp_path))).execute(
                Namespace(), shim_config
            )
        assert result == EXIT_SUCCESS
        assert "Release build: unsupported platform" in capsys.readouterr().out

    def test_reports_last_install(self, capsys, shim_config, tmp_path: Path) -> None:
        paths = RlxPaths(tmp_path)
        write_install_record(paths, InstallRecord("rlx", "9.9.9", tmp_path / "opt"))

        with _host("Linux", "x64"):
            StatusCommand(ReleaseBinary(paths=paths)).execute(Namespace(), shim_config)

        out = capsys.readouterr().out
        assert f"Last install (used by run): v9.9.9 in {tmp_path / 'opt'}" in out
