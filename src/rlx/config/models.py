"""Configuration data models for rlx.

Defines the typed configuration that the entry points consume. Defaults
come from the packaged release metadata; ~/.rlx/config/config.yml, a
custom --config file and CLI flags can override them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from rlx.bootstrap.download import DEFAULT_TIMEOUT
from rlx.bootstrap.versions import get_release_info


@dataclass
class ShimConfig:
    """Settings for installing and running the rlx binary.

    ``targets`` maps ``os_type/architecture`` keys to replacement
    release targets, e.g. ``{"Darwin/arm64": "aarch64-apple-darwin"}``.
    """

    name: str
    version: str
    repository_url: str
    install_dir: Optional[Path] = None
    download_timeout: float = DEFAULT_TIMEOUT
    targets: Dict[str, str] = field(default_factory=dict)

    # Where the values came from (e.g. ["global:/home/u/.rlx/config/config.yml", "cli"])
    _config_sources: List[str] = field(default_factory=list, repr=False)

    @classmethod
    def default(cls) -> "ShimConfig":
        """Configuration built from the packaged release metadata only."""
        release = get_release_info()
        return cls(
            name=release.name,
            version=release.version,
            repository_url=release.repository_url,
        )

    @property
    def sources(self) -> List[str]:
        return list(self._config_sources)
