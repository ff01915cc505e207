import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'canvas_controls' and tests/ as 'helpers'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from canvas_controls.core.config.cache import ENV_PREFIX, clear_all_caches
from canvas_controls.core.utils.paths import ROOT_ENV_VAR
from canvas_controls.core.utils.stdlib_logging import reset_stdlib_logging_for_tests
from canvas_controls.data import clear_caches as clear_data_caches

from helpers.backend import FakeBackend
from helpers.runtime import RecordingRuntime


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch: pytest.MonkeyPatch):
    """Drop config caches, CANVAS_CONTROLS_* env vars and installed log handlers."""
    for key in list(os.environ):
        if key.startswith(ENV_PREFIX) or key == ROOT_ENV_VAR:
            monkeypatch.delenv(key, raising=False)
    clear_all_caches()
    clear_data_caches()
    yield
    clear_all_caches()
    reset_stdlib_logging_for_tests()


@pytest.fixture
def isolated_project_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A throwaway project root with an empty ``.canvas-controls/config``."""
    (tmp_path / ".canvas-controls" / "config").mkdir(parents=True)
    monkeypatch.setenv(ROOT_ENV_VAR, str(tmp_path))
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def runtime() -> RecordingRuntime:
    return RecordingRuntime()


@pytest.fixture
def registry(backend: FakeBackend):
    from canvas_controls.core.controls import build_default_registry

    return build_default_registry(backend)


@pytest.fixture
def resolver(registry):
    from canvas_controls.core.resolution import ControlResolver

    return ControlResolver(registry)
