"""Files shipped with the package: default config, the config schema and
the Jinja2 templates used by the CLI text output.

Layout::

    data/config/defaults.yaml
    data/schemas/config.schema.yaml
    data/templates/*.txt.j2
"""

from __future__ import annotations

from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import yaml

_PACKAGE = "canvas_controls.data"


def get_data_path(subpackage: str, filename: str = "") -> Path:
    """Filesystem path of a bundled directory, or of a file inside it."""
    directory = Path(str(resources.files(_PACKAGE).joinpath(subpackage)))
    if not filename:
        return directory
    return directory / filename


def read_text(subpackage: str, filename: str) -> str:
    return get_data_path(subpackage, filename).read_text(encoding="utf-8")


@lru_cache(maxsize=None)
def read_yaml(subpackage: str, filename: str) -> dict[str, Any]:
    """Parsed bundled YAML; an empty document reads as ``{}``."""
    loaded = yaml.safe_load(read_text(subpackage, filename))
    return loaded if loaded is not None else {}


def clear_caches() -> None:
    read_yaml.cache_clear()


__all__ = ["get_data_path", "read_text", "read_yaml", "clear_caches"]
