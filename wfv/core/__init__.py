"""Core types shared by every layer."""

from .config import Config, ConfigError, FixVersionConfig, load_config, load_config_or_default
from .errors import ErrorCode
from .log import configure_logging, get_logger
from .result import Err, Ok, Result

__all__ = [
    # config
    "Config",
    "ConfigError",
    "FixVersionConfig",
    "load_config",
    "load_config_or_default",
    # errors
    "ErrorCode",
    # log
    "configure_logging",
    "get_logger",
    # result
    "Err",
    "Ok",
    "Result",
]
