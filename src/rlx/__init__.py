"""rlx - Python distribution of the rlx release tool.

Installs the prebuilt rlx binary for the current platform and runs it.
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
