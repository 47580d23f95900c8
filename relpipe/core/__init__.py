"""Core types shared by every layer."""

from .config import ConfigError, ToolConfig, load_config, load_config_or_default, resolve_root
from .errors import ErrorCode
from .result import Err, Ok, Result, is_err, is_ok

__all__ = [
    # config
    "ConfigError",
    "ToolConfig",
    "load_config",
    "load_config_or_default",
    "resolve_root",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
]
