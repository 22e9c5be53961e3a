"""Platform abstraction layer."""

from .paths import (
    clear_caches,
    home,
    user_cache_dir,
    user_config_dir,
)
from .process import (
    ProcessError,
    run,
)

__all__ = [
    # paths
    "clear_caches",
    "home",
    "user_cache_dir",
    "user_config_dir",
    # process
    "ProcessError",
    "run",
]
