"""Record of the last successful install.

``rlx-shim install`` writes the version and directory it installed into
``~/.rlx/installed.json``. ``rlx-shim run`` and the plain ``rlx`` script
read it back, so a binary installed with ``--release-version`` or
``--install-dir`` is the one they run.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from rlx.bootstrap.paths import RlxPaths
from rlx.core.logging import get_logger

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class InstallRecord:
    """Where a release binary was installed."""

    name: str
    version: str
    install_dir: Optional[Path] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "install_dir": str(self.install_dir) if self.install_dir else None,
        }


def write_install_record(paths: RlxPaths, record: InstallRecord) -> Path:
    """Persist ``record``, replacing any earlier one.

    Raises:
        OSError: If the record cannot be written.
    """
    paths.ensure_directories()
    path = paths.install_record_path
    with open(path, "w", encoding="utf-8") as f:
        json.dump(record.to_dict(), f, indent=2)
        f.write("\n")
    LOGGER.debug(f"Recorded install of {record.name} v{record.version} in {path}")
    return path


def read_install_record(paths: RlxPaths, name: str) -> Optional[InstallRecord]:
    """Load the record for ``name``.

    A missing, unreadable or malformed record, or one written for another
    program, yields None.
    """
    path = paths.install_record_path
    if not path.exists():
        return None

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        LOGGER.warning(f"Ignoring unreadable install record {path}: {e}")
        return None

    if not isinstance(data, dict) or not isinstance(data.get("version"), str):
        LOGGER.warning(f"Ignoring malformed install record {path}")
        return None
    if data.get("name") != name:
        return None

    install_dir = data.get("install_dir")
    return InstallRecord(
        name=name,
        version=data["version"],
        install_dir=Path(install_dir) if isinstance(install_dir, str) and install_dir else None,
    )
