"""Fix-version resolution.

Usage:
    from wfv.services.fixversion import FixVersionService, describe_result

    result = FixVersionService().resolve(config)
    match result:
        case Ok(answer):
            print(describe_result(answer))
        case Err(error):
            print(error.pretty())
"""

from .catalog import BranchCatalog, build_catalog
from .errors import FixVersionError
from .model import (
    NO_FIX_VERSION_MESSAGE,
    NO_SUCH_HASH_MESSAGE,
    BranchCheck,
    CommitUnknown,
    FixVersionFound,
    FixVersionResult,
    NoFixVersion,
    RootCommit,
    describe_result,
)
from .scanner import (
    AncestryPredicate,
    CancelToken,
    RootCommitResolver,
    resolve_fix_version,
    scan_fix_version,
)
from .service import FixVersionService
from .version import Version, parse_release_branch, parse_version

__all__ = [
    # catalog
    "BranchCatalog",
    "build_catalog",
    # errors
    "FixVersionError",
    # model
    "NO_FIX_VERSION_MESSAGE",
    "NO_SUCH_HASH_MESSAGE",
    "BranchCheck",
    "CommitUnknown",
    "FixVersionFound",
    "FixVersionResult",
    "NoFixVersion",
    "RootCommit",
    "describe_result",
    # scanner
    "AncestryPredicate",
    "CancelToken",
    "RootCommitResolver",
    "resolve_fix_version",
    "scan_fix_version",
    # service
    "FixVersionService",
    # version
    "Version",
    "parse_release_branch",
    "parse_version",
]
