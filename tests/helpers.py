"""Test doubles and builders shared across rlx tests."""

from __future__ import annotations

import io
import tarfile
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from rlx.bootstrap.binary import BinaryManager, BinaryNotFoundError
from rlx.bootstrap.platform import PlatformDescriptor


class FakeBinaryManager(BinaryManager):
    """In-memory BinaryManager recording every call."""

    def __init__(self, installed: bool = False, exit_code: int = 0) -> None:
        self.installed = installed
        self.exit_code = exit_code
        self.install_calls: List[Tuple[PlatformDescriptor, str, str, Optional[Path]]] = []
        self.run_calls: List[Tuple[PlatformDescriptor, List[str]]] = []

    def binary_path(self, descriptor, version, install_dir=None) -> Path:
        return Path(install_dir or f"/fake/{version}") / descriptor.binary_name

    def is_installed(self, descriptor, version, install_dir=None) -> bool:
        return self.installed

    def install_binary(self, descriptor, url, version, install_dir=None) -> Path:
        self.install_calls.append((descriptor, url, version, install_dir))
        self.installed = True
        return self.binary_path(descriptor, version, install_dir)

    def run_binary(self, descriptor, args: Sequence[str], version, install_dir=None) -> int:
        if not self.installed:
            raise BinaryNotFoundError("You must install rlx before you can run it")
        self.run_calls.append((descriptor, list(args)))
        return self.exit_code


def make_tarball(members: Dict[str, bytes]) -> bytes:
    """Build an in-memory .tar.gz with the given file members."""
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as tar:
        for name, payload in members.items():
            info = tarfile.TarInfo(name=name)
            info.size = len(payload)
            info.mode = 0o755
            tar.addfile(info, io.BytesIO(payload))
    return buffer.getvalue()


class FakeResponse(io.BytesIO):
    """Stand-in for the object returned by secure_urlopen."""

    def __enter__(self) -> "FakeResponse":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
