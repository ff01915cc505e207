"""Shared utilities: merging, profiling, templates, logging setup and paths."""
from .merge import deep_merge, merge_arrays
from .profiling import Profiler, enable_profiler, span

__all__ = ["deep_merge", "merge_arrays", "Profiler", "enable_profiler", "span"]
