"""Typed accessors over one top-level section of the layered config."""
from __future__ import annotations

from abc import ABC, abstractmethod
from functools import cached_property
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .cache import get_cached_config


class BaseDomainConfig(ABC):
    """One section of the merged config, e.g. ``context`` or ``engine``.

    Subclasses name their section in ``_config_section`` and expose
    settings as cached properties reading from :attr:`section`. Pass
    ``config`` to read from an already-loaded mapping instead of the
    cached layered config for ``repo_root``.
    """

    def __init__(self, repo_root: Optional[Path] = None, *, config: Optional[Mapping[str, Any]] = None) -> None:
        self._repo_root = repo_root
        self._config: Mapping[str, Any] = (
            config if config is not None else get_cached_config(repo_root=repo_root)
        )

    @abstractmethod
    def _config_section(self) -> str:
        ...

    @cached_property
    def section(self) -> Dict[str, Any]:
        raw = self._config.get(self._config_section())
        return dict(raw) if raw else {}


__all__ = ["BaseDomainConfig"]
