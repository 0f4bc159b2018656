"""Core infrastructure components for manifix."""

from .config import BuildConfig, Config, ToolsConfig, get_config
from .exceptions import (
    ConfigurationError,
    GraphError,
    ManifixError,
    SdkVersionError,
    ValidationError,
)
from .logging import bind_context, clear_context, get_logger, setup_logging
from .types import ArgList, ServiceResult

__all__ = [
    "BuildConfig",
    "Config",
    "ToolsConfig",
    "get_config",
    "ConfigurationError",
    "GraphError",
    "ManifixError",
    "SdkVersionError",
    "ValidationError",
    "bind_context",
    "clear_context",
    "get_logger",
    "setup_logging",
    "ArgList",
    "ServiceResult",
]
