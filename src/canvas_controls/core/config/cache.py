"""Centralized configuration caching.

Every domain config reads through ``get_cached_config`` so a process loads
and validates the layered YAML once per project root. The cache key carries
a fingerprint of ``CANVAS_CONTROLS_*`` env vars and project config file
mtimes so edits are picked up without an explicit clear.
"""
from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import Any, Dict, Optional

from canvas_controls.core.utils.paths import get_project_config_dir, resolve_project_root
from canvas_controls.core.utils.profiling import span

ENV_PREFIX = "CANVAS_CONTROLS_"

_config_cache: Dict[str, Dict[str, Any]] = {}


def _normalize_repo_root(repo_root: Optional[Path]) -> Path:
    if repo_root is None:
        return resolve_project_root()
    return Path(repo_root).expanduser().resolve()


def _fingerprint_dir(directory: Path) -> list[tuple[str, int, int]]:
    files: list[tuple[str, int, int]] = []
    if not directory.is_dir():
        return files
    for path in sorted(directory.glob("*.y*ml")):
        st = path.stat()
        files.append((path.name, int(st.st_mtime_ns), int(st.st_size)))
    return files


def _cache_key(repo_root: Path, validate: bool = True) -> str:
    env_items = sorted((k, v) for k, v in os.environ.items() if k.startswith(ENV_PREFIX))
    env_fp = hashlib.sha256(repr(env_items).encode("utf-8")).hexdigest()[:12]
    cfg_files = _fingerprint_dir(get_project_config_dir(repo_root) / "config")
    cfg_fp = hashlib.sha256(repr(cfg_files).encode("utf-8")).hexdigest()[:12]
    # Unvalidated loads never satisfy a validated lookup.
    return f"{repo_root}:env={env_fp}:cfg={cfg_fp}:validated={int(validate)}"


def get_cached_config(repo_root: Optional[Path] = None, validate: bool = True) -> Dict[str, Any]:
    """Return the merged configuration for ``repo_root`` (cached).

    The returned dict is shared between callers; treat it as read-only.
    """
    normalized_root = _normalize_repo_root(repo_root)
    key = _cache_key(normalized_root, validate)

    # Lazy import to avoid circular dependency
    from .manager import ConfigManager

    with span("config.cache.get"):
        if key not in _config_cache:
            with span("config.cache.miss"):
                manager = ConfigManager(repo_root=normalized_root)
                _config_cache[key] = manager.load_config_uncached(validate=validate)
        return _config_cache[key]


def clear_all_caches() -> None:
    """Drop every cached config."""
    _config_cache.clear()


def is_cached(repo_root: Optional[Path] = None, validate: bool = True) -> bool:
    return _cache_key(_normalize_repo_root(repo_root), validate) in _config_cache


__all__ = [
    "ENV_PREFIX",
    "get_cached_config",
    "clear_all_caches",
    "is_cached",
]
