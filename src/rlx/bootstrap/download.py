"""HTTPS download helpers for release archives."""

from __future__ import annotations

import os
import ssl
import urllib.request
from pathlib import Path
from typing import IO, Any

from rlx import __version__
from rlx.core.logging import get_logger

LOGGER = get_logger(__name__)

# Environment variable pointing at a custom CA bundle (corporate proxies)
RLX_CA_BUNDLE_ENV = "RLX_CA_BUNDLE"

DEFAULT_TIMEOUT = 60
_CHUNK_SIZE = 1024 * 1024


def build_ssl_context() -> ssl.SSLContext:
    """Create a TLS context, honouring RLX_CA_BUNDLE when set."""
    ca_bundle = os.environ.get(RLX_CA_BUNDLE_ENV, "").strip()
    if ca_bundle:
        return ssl.create_default_context(cafile=ca_bundle)
    return ssl.create_default_context()


def secure_urlopen(url: str, timeout: float = DEFAULT_TIMEOUT) -> Any:
    """Open an HTTPS URL with certificate verification.

    Args:
        url: URL to open. Only https:// is accepted.
        timeout: Socket timeout in seconds.

    Returns:
        The response object, usable as a context manager.

    Raises:
        ValueError: If the URL is not https.
        urllib.error.URLError: On network or HTTP failures.
    """
    if not url.startswith("https://"):
        raise ValueError(f"Invalid download URL: {url}")

    request = urllib.request.Request(
        url,
        headers={
            "User-Agent": f"rlx-python/{__version__}",
            "Accept": "application/octet-stream",
        },
    )
    return urllib.request.urlopen(  # nosec B310
        request, timeout=timeout, context=build_ssl_context()
    )


def _copy_stream(source: IO[bytes], dest: IO[bytes]) -> int:
    total = 0
    for chunk in iter(lambda: source.read(_CHUNK_SIZE), b""):
        dest.write(chunk)
        total += len(chunk)
    return total


def download_to_file(url: str, dest: Path, timeout: float = DEFAULT_TIMEOUT) -> Path:
    """Download ``url`` into ``dest``.

    Args:
        url: HTTPS URL of the file.
        dest: Destination path; parent must exist.
        timeout: Socket timeout in seconds.

    Returns:
        The destination path.
    """
    LOGGER.debug(f"Downloading from {url}")
    with secure_urlopen(url, timeout=timeout) as response:
        with open(dest, "wb") as fh:
            size = _copy_stream(response, fh)
    LOGGER.debug(f"Downloaded {size} bytes to {dest}")
    return dest
