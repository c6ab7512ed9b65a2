"""Installing and running the rlx release binary.

``BinaryManager`` is the seam between the entry points and the machine:
the entry points resolve what to fetch, a manager fetches, places and
spawns it. ``ReleaseBinary`` is the real implementation; tests swap in
fakes.

Binary management:
- Downloads the release archive (.tar.gz) from the computed URL
- Installs at ~/.rlx/bin/rlx/{version}/{binary_name}
- Spawns the installed binary with inherited stdio
"""

from __future__ import annotations

import os
import shutil
import subprocess
import tarfile
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path, PurePosixPath
from typing import Optional, Sequence

from rlx.bootstrap.download import DEFAULT_TIMEOUT, download_to_file
from rlx.bootstrap.paths import RlxPaths
from rlx.bootstrap.platform import PROGRAM_NAME, PlatformDescriptor
from rlx.bootstrap.validation import ToolStatus, validate_binary
from rlx.core.logging import get_logger

LOGGER = get_logger(__name__)


class BinaryError(Exception):
    """Base class for install and run failures."""


class DownloadOrInstallError(BinaryError):
    """Downloading, extracting or placing the binary failed."""


class BinaryNotFoundError(BinaryError):
    """The binary to run is not installed."""


class BinaryExecutionError(BinaryError):
    """The installed binary could not be started."""


class BinaryManager(ABC):
    """Installs release binaries and runs installed ones."""

    @abstractmethod
    def binary_path(
        self,
        descriptor: PlatformDescriptor,
        version: str,
        install_dir: Optional[Path] = None,
    ) -> Path:
        """Where the binary for ``descriptor`` lives once installed."""

    @abstractmethod
    def install_binary(
        self,
        descriptor: PlatformDescriptor,
        url: str,
        version: str,
        install_dir: Optional[Path] = None,
    ) -> Path:
        """Download and install the binary.

        Returns:
            Path to the installed binary.

        Raises:
            DownloadOrInstallError: On any network, archive or filesystem failure.
        """

    @abstractmethod
    def run_binary(
        self,
        descriptor: PlatformDescriptor,
        args: Sequence[str],
        version: str,
        install_dir: Optional[Path] = None,
    ) -> int:
        """Run the installed binary and wait for it.

        Returns:
            The child's exit code.

        Raises:
            BinaryNotFoundError: If the binary is not installed.
        """

    def is_installed(
        self,
        descriptor: PlatformDescriptor,
        version: str,
        install_dir: Optional[Path] = None,
    ) -> bool:
        path = self.binary_path(descriptor, version, install_dir)
        return validate_binary(path) == ToolStatus.PRESENT


class ReleaseBinary(BinaryManager):
    """Binary manager backed by release archives on disk under ~/.rlx."""

    def __init__(
        self,
        paths: Optional[RlxPaths] = None,
        name: str = PROGRAM_NAME,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._paths = paths or RlxPaths.default()
        self._name = name
        self._timeout = timeout

    @property
    def paths(self) -> RlxPaths:
        return self._paths

    def install_dir_for(self, version: str, install_dir: Optional[Path] = None) -> Path:
        if install_dir is not None:
            return Path(install_dir)
        return self._paths.binary_dir(self._name, version)

    def binary_path(
        self,
        descriptor: PlatformDescriptor,
        version: str,
        install_dir: Optional[Path] = None,
    ) -> Path:
        return self.install_dir_for(version, install_dir) / descriptor.binary_name

    def install_binary(
        self,
        descriptor: PlatformDescriptor,
        url: str,
        version: str,
        install_dir: Optional[Path] = None,
    ) -> Path:
        dest_dir = self.install_dir_for(version, install_dir)
        binary_path = dest_dir / descriptor.binary_name

        if self.is_installed(descriptor, version, install_dir):
            LOGGER.info(f"{self._name} v{version} is already installed, skipping installation.")
            return binary_path

        LOGGER.info(f"Downloading {self._name} v{version}...")

        try:
            self._clear_previous_install(dest_dir, binary_path, managed=install_dir is None)
            dest_dir.mkdir(parents=True, exist_ok=True)
            self._download_and_extract(url, dest_dir, descriptor.binary_name)
        except DownloadOrInstallError:
            raise
        except (OSError, ValueError, tarfile.TarError) as e:
            raise DownloadOrInstallError(
                f"Failed to install {self._name} v{version} from {url}: {e}"
            ) from e

        if not binary_path.is_file():
            raise DownloadOrInstallError(
                f"Archive {url} does not contain {descriptor.binary_name}"
            )

        LOGGER.info(f"{self._name} v{version} installed to {binary_path}")
        return binary_path

    @staticmethod
    def _clear_previous_install(dest_dir: Path, binary_path: Path, managed: bool) -> None:
        """Remove leftovers of an earlier install attempt.

        A managed per-version directory belongs to rlx and is wiped whole.
        A user-supplied directory is shared with other programs, so only
        the rlx binary itself is removed from it.
        """
        if managed:
            if dest_dir.exists():
                shutil.rmtree(dest_dir)
        elif binary_path.is_file() or binary_path.is_symlink():
            binary_path.unlink()

    def _download_and_extract(self, url: str, dest_dir: Path, binary_name: str) -> None:
        """Download the archive and extract the binary into ``dest_dir``."""
        # delete=False and manual cleanup: Windows cannot reopen an open temp file
        tmp_file = tempfile.NamedTemporaryFile(suffix=".tar.gz", delete=False)
        tmp_path = Path(tmp_file.name)
        tmp_file.close()

        try:
            download_to_file(url, tmp_path, timeout=self._timeout)
            with tarfile.open(tmp_path, "r:gz") as tar:
                _extract_binary(tar, dest_dir, binary_name)
        finally:
            tmp_path.unlink(missing_ok=True)

    def run_binary(
        self,
        descriptor: PlatformDescriptor,
        args: Sequence[str],
        version: str,
        install_dir: Optional[Path] = None,
    ) -> int:
        binary_path = self.binary_path(descriptor, version, install_dir)
        status = validate_binary(binary_path)

        if status == ToolStatus.MISSING:
            raise BinaryNotFoundError(
                f"You must install {self._name} before you can run it "
                f"(expected {binary_path})"
            )
        if status == ToolStatus.NOT_EXECUTABLE:
            raise BinaryExecutionError(f"{binary_path} is not executable")

        cmd = [str(binary_path), *args]
        LOGGER.debug(f"Running: {' '.join(cmd)}")

        try:
            result = subprocess.run(cmd, cwd=os.getcwd(), check=False)
        except OSError as e:
            raise BinaryExecutionError(f"Failed to start {binary_path}: {e}") from e

        return _exit_status(result.returncode)


def _exit_status(returncode: int) -> int:
    """Translate a child's return code into a shell exit status.

    ``subprocess`` reports death by signal N as ``-N``; shells report
    it as ``128 + N``.
    """
    if returncode < 0:
        return 128 - returncode
    return returncode


def _extract_binary(tar: tarfile.TarFile, dest_dir: Path, binary_name: str) -> Path:
    """Extract the member named ``binary_name`` (at any depth) into ``dest_dir``.

    Raises:
        DownloadOrInstallError: If the archive has no such regular file or a
            member path escapes ``dest_dir``.
    """
    root = dest_dir.resolve()

    for member in tar.getmembers():
        member_path = (dest_dir / member.name).resolve()
        if not member_path.is_relative_to(root):
            raise DownloadOrInstallError(f"Path traversal detected: {member.name}")

        if not member.isfile() or PurePosixPath(member.name).name != binary_name:
            continue

        source = tar.extractfile(member)
        if source is None:
            continue

        target = dest_dir / binary_name
        with source, open(target, "wb") as out:
            shutil.copyfileobj(source, out)
        if os.name != "nt":
            target.chmod(0o755)
        return target

    raise DownloadOrInstallError(f"Binary {binary_name} not found in archive")
