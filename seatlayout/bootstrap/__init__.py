"""
bootstrap/ - Bootstrap Layer

Configuration loading, logging setup and command line entry points.
"""

from .config import (
    EngineConfig,
    LayoutConfig,
    ValidationConfig,
    ReconciliationConfig,
    LoggingConfig,
    load_config,
    get_config,
    reset_config,
)

__all__ = [
    "EngineConfig",
    "LayoutConfig",
    "ValidationConfig",
    "ReconciliationConfig",
    "LoggingConfig",
    "load_config",
    "get_config",
    "reset_config",
]
