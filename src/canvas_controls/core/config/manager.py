"""
Layered configuration loading (YAML + environment overrides).
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

import yaml
from jsonschema import Draft202012Validator

from canvas_controls.core.exceptions import ConfigurationError
from canvas_controls.core.utils.merge import deep_merge
from canvas_controls.core.utils.paths import get_project_config_dir, resolve_project_root
from canvas_controls.core.utils.profiling import span
from canvas_controls.data import get_data_path, read_yaml

from .cache import ENV_PREFIX, get_cached_config

logger = logging.getLogger(__name__)

CONFIG_SCHEMA = "config.schema.yaml"


class ConfigManager:
    """Load, merge, and validate configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: CANVAS_CONTROLS_<SECTION>__<KEY>
    2. Project config: <repo_root>/.canvas-controls/config/*.yaml (alphabetical order)
    3. Bundled defaults: canvas_controls.data/config/*.yaml (alphabetical order)
    """

    def __init__(self, repo_root: Optional[Path] = None) -> None:
        self.repo_root = Path(repo_root) if repo_root is not None else resolve_project_root()
        self.core_config_dir = get_data_path("config")
        self.project_config_dir = get_project_config_dir(self.repo_root) / "config"

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        # Fail closed: configuration must never silently ignore invalid YAML.
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            raise ConfigurationError(
                f"Invalid YAML in {path}: {exc}", context={"path": str(path)}
            ) from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Config file {path} must contain a mapping at the top level",
                context={"path": str(path)},
            )
        return data

    def _load_directory(self, directory: Path, cfg: Dict[str, Any]) -> Dict[str, Any]:
        if not directory.is_dir():
            return cfg
        paths = sorted([*directory.glob("*.yaml"), *directory.glob("*.yml")], key=lambda p: p.name)
        for path in paths:
            logger.debug("Loading config layer %s", path)
            cfg = deep_merge(cfg, self.load_yaml(path))
        return cfg

    # ========== Environment overrides ==========

    def _coerce_type(self, value: str) -> Any:
        s = value.strip()
        low = s.lower()
        if low in {"true", "false"}:
            return low == "true"
        if re.fullmatch(r"[-+]?\d+", s):
            return int(s)
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except json.JSONDecodeError:
                return s
        return s

    def _parse_env_key(self, raw: str) -> List[str]:
        segments = raw.split("__")
        if any(seg == "" for seg in segments):
            raise ConfigurationError(
                f"Malformed {ENV_PREFIX}* key: empty segment in '{raw}'",
                context={"key": f"{ENV_PREFIX}{raw}"},
            )
        return [seg.lower() for seg in segments]

    def iter_env_overrides(self) -> Iterator[Tuple[List[str], Any]]:
        for key in sorted(os.environ):
            if not key.startswith(ENV_PREFIX):
                continue
            raw = key[len(ENV_PREFIX):]
            if not raw:
                raise ConfigurationError(f"Malformed {ENV_PREFIX}* key", context={"key": key})
            yield self._parse_env_key(raw), self._coerce_type(os.environ[key])

    def _set_nested(self, root: Dict[str, Any], path: List[str], value: Any) -> None:
        current: Dict[str, Any] = root
        for i, part in enumerate(path):
            # Case-insensitive match so FOO__PLACEHOLDERPATTERN hits placeholderPattern.
            existing = {k.lower(): k for k in current if isinstance(k, str)}
            key = existing.get(part, part)
            if i == len(path) - 1:
                current[key] = value
                return
            nxt = current.get(key)
            if nxt is None:
                nxt = current[key] = {}
            if not isinstance(nxt, dict):
                raise ConfigurationError(
                    f"Environment override path traverses non-mapping key '{key}'",
                    context={"path": ".".join(path)},
                )
            current = nxt

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> None:
        for path, value in self.iter_env_overrides():
            self._set_nested(cfg, path, value)

    # ========== Validation ==========

    def validate_schema(self, config: Dict[str, Any]) -> None:
        """Validate ``config`` against the bundled JSON Schema (stored as YAML)."""
        schema = read_yaml("schemas", CONFIG_SCHEMA)
        validator = Draft202012Validator(schema)
        errors = sorted(validator.iter_errors(config), key=lambda e: list(e.path))
        if not errors:
            return
        problems = []
        for err in errors:
            location = ".".join(str(p) for p in err.path) or "<root>"
            problems.append(f"{location}: {err.message}")
        raise ConfigurationError(
            "Configuration failed schema validation:\n  - " + "\n  - ".join(problems),
            context={"errors": problems},
        )

    # ========== Loading ==========

    def load_config_uncached(self, validate: bool = True) -> Dict[str, Any]:
        with span("config.load_config.total", validate=validate):
            cfg: Dict[str, Any] = {}
            with span("config.load_config.core"):
                cfg = self._load_directory(self.core_config_dir, cfg)
            with span("config.load_config.project"):
                cfg = self._load_directory(self.project_config_dir, cfg)
            with span("config.load_config.env"):
                self.apply_env_overrides(cfg)
            if validate:
                with span("config.load_config.validate"):
                    self.validate_schema(cfg)
            return cfg

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Load configuration through the centralized cache."""
        return get_cached_config(repo_root=self.repo_root, validate=validate)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a config value by dot-notation key.

        Example:
            >>> manager.get('context.draggableActivityPrefix')
            'drag-'
        """
        current: Any = self.load_config()
        for part in key.split("."):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current


__all__ = ["ConfigManager", "CONFIG_SCHEMA"]
