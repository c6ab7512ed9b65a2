"""Platform resolution for rlx release archives.

Maps the host's (OS type, architecture) pair to the release build that
has to be downloaded for it. Matching is exact and case-sensitive; the
supported set is the static ``SUPPORTED_PLATFORMS`` table.

OS types and architecture tags use the vocabulary of the published
release layout ("Windows_NT", "Linux", "Darwin"; "x64", "arm64").
``get_host_platform`` reports the running host in that vocabulary.
"""

from __future__ import annotations

import platform
from collections import Counter
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from rlx.core.logging import get_logger

LOGGER = get_logger(__name__)

PROGRAM_NAME = "rlx"

# platform.system() -> release OS type
_OS_TYPES: Dict[str, str] = {
    "Windows": "Windows_NT",
    "Linux": "Linux",
    "Darwin": "Darwin",
}

# platform.machine() (lower-cased) -> release architecture tag
_ARCHITECTURES: Dict[str, str] = {
    "x86_64": "x64",
    "amd64": "x64",
    "x64": "x64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "i386": "ia32",
    "i686": "ia32",
    "x86": "ia32",
}


class PlatformTableError(ValueError):
    """The supported-platform table violates its invariants."""


@dataclass(frozen=True)
class PlatformDescriptor:
    """A release build of rlx for one (OS type, architecture) pair."""

    os_type: str
    architecture: str
    release_target: str
    binary_name: str
    # Runs a build made for another architecture (e.g. under Rosetta 2)
    emulated: bool = False

    @property
    def key(self) -> Tuple[str, str]:
        return (self.os_type, self.architecture)

    @property
    def key_string(self) -> str:
        """``os_type/architecture``, the form used in config files."""
        return f"{self.os_type}/{self.architecture}"


@dataclass(frozen=True)
class HostPlatform:
    """The (OS type, architecture) pair reported by a host."""

    os_type: str
    architecture: str


# macOS arm64 is served by the Intel build; no Apple-silicon archive is published.
SUPPORTED_PLATFORMS: Tuple[PlatformDescriptor, ...] = (
    PlatformDescriptor("Windows_NT", "x64", "x86_64-pc-windows-msvc", "rlx.exe"),
    PlatformDescriptor("Linux", "x64", "x86_64-unknown-linux-musl", "rlx"),
    PlatformDescriptor("Darwin", "x64", "x86_64-apple-darwin", "rlx"),
    PlatformDescriptor("Darwin", "arm64", "x86_64-apple-darwin", "rlx", emulated=True),
)


class UnsupportedPlatformError(Exception):
    """No supported platform matches the host."""

    def __init__(
        self,
        os_type: str,
        architecture: str,
        supported: Sequence[PlatformDescriptor],
    ) -> None:
        self.os_type = os_type
        self.architecture = architecture
        self.supported = tuple(supported)
        super().__init__(
            f'Platform with type "{os_type}" and architecture "{architecture}" '
            f"is not supported by {PROGRAM_NAME}.\n"
            f"Your system must be one of the following:\n\n"
            f"{format_platform_table(self.supported)}"
        )


def get_host_platform() -> HostPlatform:
    """Report the running host as an (OS type, architecture) pair.

    Values the release layout has no name for are passed through, so
    they fail resolution instead of being guessed.
    """
    system = platform.system()
    machine = platform.machine()
    os_type = _OS_TYPES.get(system, system)
    architecture = _ARCHITECTURES.get(machine.lower(), machine.lower())
    LOGGER.debug(f"Host platform: {system}/{machine} -> {os_type}/{architecture}")
    return HostPlatform(os_type=os_type, architecture=architecture)


def validate_platform_table(platforms: Iterable[PlatformDescriptor]) -> None:
    """Check that no two descriptors share an (OS type, architecture) key.

    Raises:
        PlatformTableError: If a key is declared more than once.
    """
    counts = Counter(p.key for p in platforms)
    duplicates = sorted(key for key, count in counts.items() if count > 1)
    if duplicates:
        listed = ", ".join(f"{os_type}/{arch}" for os_type, arch in duplicates)
        raise PlatformTableError(f"Duplicate platform entries: {listed}")


def shared_release_targets(
    platforms: Iterable[PlatformDescriptor],
) -> Dict[str, List[str]]:
    """Find release targets served to more than one platform key.

    Returns:
        Mapping of release target to the ``os_type/architecture`` keys
        using it, only for targets used more than once.
    """
    users: Dict[str, List[str]] = {}
    for descriptor in platforms:
        users.setdefault(descriptor.release_target, []).append(descriptor.key_string)
    return {target: keys for target, keys in users.items() if len(keys) > 1}


def apply_target_overrides(
    platforms: Sequence[PlatformDescriptor],
    overrides: Optional[Mapping[str, str]],
) -> Tuple[PlatformDescriptor, ...]:
    """Return a copy of ``platforms`` with release targets replaced.

    Args:
        platforms: Base table.
        overrides: Mapping of ``os_type/architecture`` to release target.

    Returns:
        New table; the base table is not modified.

    Raises:
        PlatformTableError: If an override names an unknown platform.
    """
    if not overrides:
        return tuple(platforms)

    known = {p.key_string for p in platforms}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise PlatformTableError(
            f"Unknown platform(s) in target overrides: {', '.join(unknown)}. "
            f"Known: {', '.join(sorted(known))}"
        )

    result = []
    for descriptor in platforms:
        target = overrides.get(descriptor.key_string)
        if target and target != descriptor.release_target:
            LOGGER.debug(f"Overriding release target for {descriptor.key_string}: {target}")
            descriptor = replace(descriptor, release_target=target, emulated=False)
        result.append(descriptor)

    table = tuple(result)
    validate_platform_table(table)
    return table


def resolve_platform(
    host: Optional[HostPlatform] = None,
    platforms: Sequence[PlatformDescriptor] = SUPPORTED_PLATFORMS,
) -> PlatformDescriptor:
    """Resolve the release descriptor for a host.

    Args:
        host: Host to resolve for. Reads the running host when omitted.
        platforms: Table to search, in declaration order.

    Returns:
        The first descriptor whose key equals the host's.

    Raises:
        UnsupportedPlatformError: If no descriptor matches.
    """
    if host is None:
        host = get_host_platform()

    for descriptor in platforms:
        if descriptor.os_type == host.os_type and descriptor.architecture == host.architecture:
            LOGGER.debug(f"Resolved {descriptor.key_string} -> {descriptor.release_target}")
            return descriptor

    raise UnsupportedPlatformError(host.os_type, host.architecture, platforms)


_TABLE_COLUMNS = (
    ("TYPE", "os_type"),
    ("ARCHITECTURE", "architecture"),
    ("RUST_TARGET", "release_target"),
    ("BINARY_NAME", "binary_name"),
)


def format_platform_table(platforms: Sequence[PlatformDescriptor]) -> str:
    """Render descriptors as a plain-text table.

    Example:
        TYPE        ARCHITECTURE  RUST_TARGET             BINARY_NAME
        ----------  ------------  ----------------------  -----------
        Windows_NT  x64           x86_64-pc-windows-msvc  rlx.exe
    """
    rows = [[str(getattr(p, attr)) for _, attr in _TABLE_COLUMNS] for p in platforms]
    headers = [header for header, _ in _TABLE_COLUMNS]
    widths = [
        max([len(headers[i])] + [len(row[i]) for row in rows])
        for i in range(len(headers))
    ]

    def _line(cells: Sequence[str]) -> str:
        return "  ".join(cell.ljust(width) for cell, width in zip(cells, widths)).rstrip()

    lines = [_line(headers), _line(["-" * w for w in widths])]
    lines.extend(_line(row) for row in rows)
    return "\n".join(lines)


# Build-time check of the shipped table
validate_platform_table(SUPPORTED_PLATFORMS)
