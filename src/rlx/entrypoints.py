"""Install and run entry points.

Each is a single pipeline: resolve the platform, then hand the resolved
descriptor to a ``BinaryManager``. Errors are not caught here; callers
decide how a failure ends the process. Install and run are never
chained: ``run`` does not install a missing binary.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from rlx.bootstrap.binary import BinaryManager, ReleaseBinary
from rlx.bootstrap.platform import (
    SUPPORTED_PLATFORMS,
    HostPlatform,
    PlatformDescriptor,
    apply_target_overrides,
    resolve_platform,
)
from rlx.config.models import ShimConfig
from rlx.core.logging import get_logger

LOGGER = get_logger(__name__)

DOWNLOAD_URL_TEMPLATE = (
    "{repository_url}/releases/download/rust_v{version}/"
    "{name}-v{version}-{release_target}.tar.gz"
)


def build_download_url(
    repository_url: str,
    name: str,
    version: str,
    release_target: str,
) -> str:
    """Build the release archive URL.

    Example:
        >>> build_download_url("https://github.com/o/rlx", "rlx", "1.2.3",
        ...                    "x86_64-unknown-linux-musl")
        'https://github.com/o/rlx/releases/download/rust_v1.2.3/rlx-v1.2.3-x86_64-unknown-linux-musl.tar.gz'
    """
    return DOWNLOAD_URL_TEMPLATE.format(
        repository_url=repository_url,
        name=name,
        version=version,
        release_target=release_target,
    )


def resolve_for_config(
    config: ShimConfig,
    host: Optional[HostPlatform] = None,
) -> PlatformDescriptor:
    """Resolve the host's descriptor, honouring configured target overrides."""
    platforms = apply_target_overrides(SUPPORTED_PLATFORMS, config.targets)
    return resolve_platform(host, platforms)


def default_manager(config: ShimConfig) -> BinaryManager:
    return ReleaseBinary(name=config.name, timeout=config.download_timeout)


def install(
    config: Optional[ShimConfig] = None,
    manager: Optional[BinaryManager] = None,
    host: Optional[HostPlatform] = None,
) -> Path:
    """Install the rlx binary for the host platform.

    Returns:
        Path to the installed binary.

    Raises:
        UnsupportedPlatformError: If the host has no release build.
        DownloadOrInstallError: If download or installation fails.
    """
    config = config or ShimConfig.default()
    manager = manager or default_manager(config)

    descriptor = resolve_for_config(config, host)
    url = build_download_url(
        config.repository_url,
        config.name,
        config.version,
        descriptor.release_target,
    )
    LOGGER.debug(f"Release archive: {url}")

    return manager.install_binary(descriptor, url, config.version, config.install_dir)


def run(
    args: Sequence[str],
    config: Optional[ShimConfig] = None,
    manager: Optional[BinaryManager] = None,
    host: Optional[HostPlatform] = None,
) -> int:
    """Run the installed rlx binary with ``args``.

    Returns:
        The binary's exit code.

    Raises:
        UnsupportedPlatformError: If the host has no release build.
        BinaryNotFoundError: If rlx has not been installed.
        BinaryExecutionError: If the binary cannot be started.
    """
    config = config or ShimConfig.default()
    manager = manager or default_manager(config)

    descriptor = resolve_for_config(config, host)
    return manager.run_binary(descriptor, list(args), config.version, config.install_dir)
