"""
Bootstrap module for rlx binary management.

This module handles:
- Platform resolution (OS type + architecture -> release build)
- Binary install directory management (~/.rlx/bin/)
- Downloading, installing and running the release binary
- Binary validation utilities
"""

from rlx.bootstrap.platform import (
    SUPPORTED_PLATFORMS,
    HostPlatform,
    PlatformDescriptor,
    PlatformTableError,
    UnsupportedPlatformError,
    get_host_platform,
    resolve_platform,
)
from rlx.bootstrap.paths import get_rlx_home, RlxPaths
from rlx.bootstrap.validation import validate_binary, ToolStatus
from rlx.bootstrap.binary import (
    BinaryError,
    BinaryExecutionError,
    BinaryManager,
    BinaryNotFoundError,
    DownloadOrInstallError,
    ReleaseBinary,
)

__all__ = [
    "SUPPORTED_PLATFORMS",
    "HostPlatform",
    "PlatformDescriptor",
    "PlatformTableError",
    "UnsupportedPlatformError",
    "get_host_platform",
    "resolve_platform",
    "get_rlx_home",
    "RlxPaths",
    "validate_binary",
    "ToolStatus",
    "BinaryError",
    "BinaryExecutionError",
    "BinaryManager",
    "BinaryNotFoundError",
    "DownloadOrInstallError",
    "ReleaseBinary",
]
