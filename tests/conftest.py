"""Shared pytest fixtures for rlx tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from rlx.config.models import ShimConfig
from tests.helpers import FakeBinaryManager


@pytest.fixture(autouse=True)
def isolated_rlx_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point RLX_HOME at a temporary directory for every test."""
    home = tmp_path / "rlx-home"
    monkeypatch.setenv("RLX_HOME", str(home))
    monkeypatch.delenv("RLX_CA_BUNDLE", raising=False)
    return home


@pytest.fixture
def shim_config() -> ShimConfig:
    return ShimConfig(
        name="rlx",
        version="1.2.3",
        repository_url="https://github.com/example/rlx",
    )


@pytest.fixture
def fake_manager() -> FakeBinaryManager:
    return FakeBinaryManager()
