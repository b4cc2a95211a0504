"""
================================================================================
WebBlocks Common Utilities
================================================================================

Shared configuration management and logging setup.

Exports:
    - get_config / set_config / reload_config: dot-notation configuration access
    - init_logger / get_logger: loguru logger with standard settings

Usage:
    from webblocks.common import get_config, init_logger

    init_logger()
    timeout = float(get_config("loader.timeout", 5.0))

================================================================================
"""

from .global_config import (
    get_config,
    get_logger,
    init_logger,
    reload_config,
    set_config,
)

__all__ = [
    "get_config",
    "set_config",
    "reload_config",
    "init_logger",
    "get_logger",
]
