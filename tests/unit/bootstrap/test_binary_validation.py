"""Tests for rlx.bootstrap.validation."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from rlx.bootstrap.validation import ToolStatus, validate_binary


class TestValidateBinary:
    """Tests for validate_binary."""

    def test_missing(self, tmp_path: Path) -> None:
        assert validate_binary(tmp_path / "rlx") == ToolStatus.MISSING

    def test_directory_is_missing(self, tmp_path: Path) -> None:
        (tmp_path / "rlx").mkdir()
        assert validate_binary(tmp_path / "rlx") == ToolStatus.MISSING

    def test_present(self, tmp_path: Path) -> None:
        binary = tmp_path / "rlx"
        binary.write_bytes(b"#!/bin/sh\n")
        binary.chmod(0o755)
        assert validate_binary(binary) == ToolStatus.PRESENT

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")
    def test_not_executable(self, tmp_path: Path) -> None:
        binary = tmp_path / "rlx"
        binary.write_bytes(b"data")
        binary.chmod(0o644)
        assert validate_binary(binary) == ToolStatus.NOT_EXECUTABLE

    def test_status_values(self) -> None:
        assert ToolStatus.PRESENT.value == "present"
        assert ToolStatus.MISSING.value == "missing"
        assert ToolStatus.NOT_EXECUTABLE.value == "not_executable"
