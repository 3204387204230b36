"""
Configuration Management
========================

Configuration utilities for the package-document resolver.
"""

from opf_core.config.settings import (
    ResolverConfig,
    ParserConfig,
    ServerConfig,
    load_config,
    save_config,
    get_default_config,
)

__all__ = [
    "ResolverConfig",
    "ParserConfig",
    "ServerConfig",
    "load_config",
    "save_config",
    "get_default_config",
]
