"""Configuration system.

Usage:
    from canvas_controls.core.config import ConfigManager
    from canvas_controls.core.config.domains import ContextConfig

    manager = ConfigManager(repo_root=Path("/path/to/project"))
    config = manager.load_config()

    context_cfg = ContextConfig(repo_root=Path("/path/to/project"))
    prefix = context_cfg.draggable_activity_prefix
"""
from __future__ import annotations

from .manager import ConfigManager
from .cache import get_cached_config, clear_all_caches, is_cached
from .base import BaseDomainConfig
from .domains import ContextConfig, EngineConfig, LoggingConfig

__all__ = [
    "ConfigManager",
    "BaseDomainConfig",
    "get_cached_config",
    "clear_all_caches",
    "is_cached",
    "ContextConfig",
    "EngineConfig",
    "LoggingConfig",
]
