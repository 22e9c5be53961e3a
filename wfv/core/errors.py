"""Exit codes for the wfv command line.

The numeric values are part of the CLI contract so scripts can tell a
missing fix version apart from a broken repository:
- 0: A fix version was found
- 1: User error (bad input, invalid arguments, malformed config)
- 2: Environment error (git not installed)
- 3: Git error (unexpected git failure while querying)
- 4: Network error (clone or fetch failed)
- 5: I/O error (cache directory not writable)
- 6: Not found (commit unknown, or no release contains it)
- 130: Cancelled by the user
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    GIT_ERROR = 3
    NETWORK_ERROR = 4
    IO_ERROR = 5
    NOT_FOUND = 6
    CANCELLED = 130

    def __str__(self) -> str:
        """Return human-readable name."""
        return self.name.lower().replace("_", " ")
