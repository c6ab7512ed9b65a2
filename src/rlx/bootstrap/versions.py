"""Release metadata for the rlx binary.

Reads the release version and source repository from pyproject.toml
[tool.rlx.release]. This is the single source of truth for which rlx
release the shim downloads.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Dict

from rlx.bootstrap.platform import PROGRAM_NAME
from rlx.core.logging import get_logger

LOGGER = get_logger(__name__)

# Hardcoded fallback (kept in sync with pyproject.toml)
# Used when pyproject.toml is not shipped, i.e. for installed wheels
_FALLBACK_RELEASE: Dict[str, str] = {
    "version": "0.1.0",
    "repository": "https://github.com/rlx-dev/rlx",
}


@dataclass(frozen=True)
class ReleaseInfo:
    """Release coordinates of the binary the shim manages."""

    name: str
    version: str
    repository_url: str


@lru_cache(maxsize=1)
def _load_pyproject_release() -> Dict[str, str]:
    """Load release metadata from rlx's pyproject.toml.

    Returns:
        Dictionary with ``version`` and ``repository`` keys.
    """
    # Structure: src/rlx/bootstrap/versions.py -> ../../../pyproject.toml
    pyproject_path = Path(__file__).parent.parent.parent.parent / "pyproject.toml"

    if not pyproject_path.exists():
        return _FALLBACK_RELEASE.copy()

    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        LOGGER.debug(f"Could not read {pyproject_path}: {e}")
        return _FALLBACK_RELEASE.copy()

    release = dict(_FALLBACK_RELEASE)
    section = data.get("tool", {}).get("rlx", {}).get("release", {})
    for key in release:
        value = section.get(key)
        if isinstance(value, str) and value:
            release[key] = value

    return release


def get_release_info() -> ReleaseInfo:
    """Get the default release coordinates.

    Returns:
        ReleaseInfo for the packaged rlx release.
    """
    release = _load_pyproject_release()
    return ReleaseInfo(
        name=PROGRAM_NAME,
        version=release["version"],
        repository_url=release["repository"].rstrip("/"),
    )
