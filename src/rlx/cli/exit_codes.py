"""Exit codes for the rlx-shim CLI.

- 0: Success
- 1: Unsupported platform (no release build for this OS/architecture)
- 2: Install failure (download, archive or filesystem error)
- 3: Binary not found or not runnable
- 4: Invalid usage (bad arguments, unreadable config)

``run`` returns the child's exit code verbatim once the binary starts.
"""

from __future__ import annotations

EXIT_SUCCESS = 0
EXIT_UNSUPPORTED_PLATFORM = 1
EXIT_INSTALL_FAILURE = 2
EXIT_BINARY_NOT_FOUND = 3
EXIT_INVALID_USAGE = 4
