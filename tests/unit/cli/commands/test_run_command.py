"""Tests for the run command."""

from __future__ import annotations

from argparse import Namespace
from unittest.mock import patch

import pytest

from rlx.bootstrap.binary import BinaryExecutionError
from rlx.bootstrap.install_record import InstallRecord, write_install_record
from rlx.bootstrap.paths import RlxPaths
from rlx.bootstrap.platform import HostPlatform
from rlx.cli.commands.run import RunCommand, apply_install_record
from rlx.cli.exit_codes import EXIT_BINARY_NOT_FOUND, EXIT_UNSUPPORTED_PLATFORM
from tests.helpers import FakeBinaryManager


@pytest.fixture(autouse=True)
def linux_host():
    with patch(
        "rlx.bootstrap.platform.get_host_platform",
        return_value=HostPlatform("Linux", "x64"),
    ):
        yield


class TestRunCommand:
    """Tests for RunCommand."""

    def test_command_name(self) -> None:
        assert RunCommand().name == "run"

    def test_forwards_args_and_exit_code(self, shim_config) -> None:
        manager = FakeBinaryManager(installed=True, exit_code=9)
        result = RunCommand(manager).execute(Namespace(args=["rsc", "--strict"]), shim_config)
        assert result == 9
        assert manager.run_calls[0][1] == ["rsc", "--strict"]

    def test_strips_leading_separator(self, shim_config) -> None:
        manager = FakeBinaryManager(installed=True)
        RunCommand(manager).execute(Namespace(args=["--", "--help"]), shim_config)
        assert manager.run_calls[0][1] == ["--help"]

    def test_no_args(self, shim_config) -> None:
        manager = FakeBinaryManager(installed=True)
        RunCommand(manager).execute(Namespace(args=None), shim_config)
        assert manager.run_calls[0][1] == []

    def test_missing_binary(self, capsys, shim_config, fake_manager: FakeBinaryManager) -> None:
        result = RunCommand(fake_manager).execute(Namespace(args=[]), shim_config)
        assert result == EXIT_BINARY_NOT_FOUND
        assert fake_manager.install_calls == []
        assert "rlx-shim install" in capsys.readouterr().err

    def test_spawn_failure(self, shim_config) -> None:
        manager = FakeBinaryManager(installed=True)
        with patch.object(manager, "run_binary", side_effect=BinaryExecutionError("boom")):
            result = RunCommand(manager).execute(Namespace(args=[]), shim_config)
        assert result == EXIT_BINARY_NOT_FOUND

    def test_unsupported_platform(self, capsys, shim_config) -> None:
        manager = FakeBinaryManager(installed=True)
        with patch(
            "rlx.bootstrap.platform.get_host_platform",
            return_value=HostPlatform("Plan9", "mips"),
        ):
            result = RunCommand(manager).execute(Namespace(args=[]), shim_config)
        assert result == EXIT_UNSUPPORTED_PLATFORM
        assert "is not supported by rlx" in capsys.readouterr().err


class TestRunUsesLastInstall:
    """The run command finds the binary placed by the last install."""

    def test_record_selects_version_and_dir(self, shim_config, tmp_path) -> None:
        write_install_record(RlxPaths.default(), InstallRecord("rlx", "9.9.9", tmp_path / "opt"))
        with patch("rlx.cli.commands.run.entrypoints.run", return_value=0) as mock_run:
            RunCommand().execute(Namespace(args=["x"]), shim_config)

        config = mock_run.call_args[0][1]
        assert config.version == "9.9.9"
        assert config.install_dir == tmp_path / "opt"
        assert config.sources[-1].startswith("installed:")

    def test_location_flags_override_record(self, shim_config) -> None:
        write_install_record(RlxPaths.default(), InstallRecord("rlx", "9.9.9"))
        shim_config.version = "3.0.0"
        args = Namespace(args=["x"], release_version="3.0.0", install_dir=None)
        with patch("rlx.cli.commands.run.entrypoints.run", return_value=0) as mock_run:
            RunCommand().execute(args, shim_config)
        assert mock_run.call_args[0][1].version == "3.0.0"

    def test_without_record_config_is_used(self, shim_config) -> None:
        with patch("rlx.cli.commands.run.entrypoints.run", return_value=0) as mock_run:
            RunCommand().execute(Namespace(args=[]), shim_config)
        assert mock_run.call_args[0][1] is shim_config

    def test_apply_install_record_leaves_input_unchanged(self, shim_config, tmp_path) -> None:
        paths = RlxPaths(tmp_path / "home")
        write_install_record(paths, InstallRecord("rlx", "9.9.9"))
        updated = apply_install_record(shim_config, paths)
        assert updated.version == "9.9.9"
        assert shim_config.version == "1.2.3"
