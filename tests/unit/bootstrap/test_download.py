"""Tests for rlx.bootstrap.download."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from rlx.bootstrap import download
from rlx.bootstrap.download import (
    build_ssl_context,
    download_to_file,
    secure_urlopen,
)
from tests.helpers import FakeResponse


class TestBuildSslContext:
    """Tests for build_ssl_context."""

    def test_uses_ca_bundle_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls = {}

        def fake_create_default_context(*, cafile=None):
            calls["cafile"] = cafile
            return object()

        monkeypatch.setattr(download.ssl, "create_default_context", fake_create_default_context)
        monkeypatch.setenv("RLX_CA_BUNDLE", "/tmp/custom-ca.pem")

        assert build_ssl_context() is not None
        assert calls["cafile"] == "/tmp/custom-ca.pem"

    def test_default_context_without_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        sentinel = object()
        monkeypatch.setattr(download.ssl, "create_default_context", lambda **kw: sentinel)
        assert build_ssl_context() is sentinel


class TestSecureUrlopen:
    """Tests for secure_urlopen."""

    @pytest.mark.parametrize(
        "url",
        ["http://github.com/x.tar.gz", "file:///etc/passwd", "ftp://host/x"],
    )
    def test_rejects_non_https(self, url: str) -> None:
        with pytest.raises(ValueError, match="Invalid download URL"):
            secure_urlopen(url)

    def test_sends_user_agent_and_timeout(self) -> None:
        with patch("rlx.bootstrap.download.urllib.request.urlopen") as mock_urlopen:
            secure_urlopen("https://github.com/x.tar.gz", timeout=5)

        request = mock_urlopen.call_args[0][0]
        assert request.full_url == "https://github.com/x.tar.gz"
        assert request.get_header("User-agent").startswith("rlx-python/")
        assert mock_urlopen.call_args[1]["timeout"] == 5
        assert "context" in mock_urlopen.call_args[1]


class TestDownloadToFile:
    """Tests for download_to_file."""

    def test_writes_body(self, tmp_path: Path) -> None:
        payload = b"x" * (3 * 1024 * 1024 + 17)
        dest = tmp_path / "archive.tar.gz"

        with patch(
            "rlx.bootstrap.download.secure_urlopen",
            return_value=FakeResponse(payload),
        ) as mock_open:
            result = download_to_file("https://github.com/a.tar.gz", dest, timeout=7)

        assert result == dest
        assert dest.read_bytes() == payload
        mock_open.assert_called_once_with("https://github.com/a.tar.gz", timeout=7)

    def test_propagates_network_errors(self, tmp_path: Path) -> None:
        import urllib.error

        failing = MagicMock(side_effect=urllib.error.URLError("offline"))
        with patch("rlx.bootstrap.download.secure_urlopen", failing):
            with pytest.raises(urllib.error.URLError):
                download_to_file("https://github.com/a.tar.gz", tmp_path / "a")
