"""Project root and config directory resolution."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

PROJECT_CONFIG_DIRNAME = ".canvas-controls"
ROOT_ENV_VAR = "CANVAS_PROJECT_ROOT"

_ROOT_MARKERS = (PROJECT_CONFIG_DIRNAME, ".git")


def resolve_project_root(start: Optional[Path] = None) -> Path:
    """Resolve the project root.

    Resolution priority:
    1. ``CANVAS_PROJECT_ROOT`` environment variable
    2. Nearest ancestor of ``start`` (default: cwd) holding ``.canvas-controls/`` or ``.git/``
    3. ``start`` itself
    """
    env_root = os.environ.get(ROOT_ENV_VAR)
    if env_root:
        return Path(env_root).expanduser().resolve()

    origin = (start or Path.cwd()).expanduser().resolve()
    for candidate in (origin, *origin.parents):
        if any((candidate / marker).is_dir() for marker in _ROOT_MARKERS):
            return candidate
    return origin


def get_project_config_dir(repo_root: Path) -> Path:
    return Path(repo_root) / PROJECT_CONFIG_DIRNAME


__all__ = ["PROJECT_CONFIG_DIRNAME", "ROOT_ENV_VAR", "resolve_project_root", "get_project_config_dir"]
