"""Timing spans for context building and control resolution.

``span`` does nothing until a :class:`Profiler` is made current with
``enable_profiler``. The current profiler lives in a ContextVar, so the
resolver and builder can be timed without passing a profiler around.
The CLI turns this on with ``--profile``.
"""

from __future__ import annotations

from collections import defaultdict
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import asdict, dataclass, field
from time import perf_counter
from typing import Any, Dict, Iterator, List, Optional

_current: ContextVar[Optional["Profiler"]] = ContextVar("canvas_controls_profiler", default=None)

SUMMARY_HEADER = "Profiling (top spans):"


@dataclass(frozen=True)
class SpanRecord:
    name: str
    duration_ms: float
    depth: int
    meta: Dict[str, Any] = field(default_factory=dict)


class Profiler:
    """Records finished spans in completion order (innermost first)."""

    def __init__(self) -> None:
        self._records: List[SpanRecord] = []
        self._open = 0

    @property
    def spans(self) -> List[SpanRecord]:
        return list(self._records)

    @contextmanager
    def span(self, name: str, **meta: Any) -> Iterator[None]:
        depth, self._open = self._open, self._open + 1
        started = perf_counter()
        try:
            yield
        finally:
            elapsed = (perf_counter() - started) * 1000.0
            self._open = depth
            self._records.append(SpanRecord(name, elapsed, depth, dict(meta)))

    def summary_ms(self) -> Dict[str, float]:
        """Total milliseconds per span name."""
        totals: Dict[str, float] = defaultdict(float)
        for record in self._records:
            totals[record.name] += record.duration_ms
        return dict(totals)

    def format_summary(self, limit: int = 30) -> str:
        ranked = sorted(self.summary_ms().items(), key=lambda item: -item[1])
        rows = [f"- {name}: {total:.2f}ms" for name, total in ranked[:limit]]
        return "\n".join([SUMMARY_HEADER, *rows])

    def to_dict(self) -> Dict[str, Any]:
        return {"spans": [asdict(r) for r in self._records], "summary_ms": self.summary_ms()}


def get_active_profiler() -> Optional[Profiler]:
    return _current.get()


@contextmanager
def enable_profiler(profiler: Profiler) -> Iterator[Profiler]:
    """Make ``profiler`` current for the duration of the block."""
    token = _current.set(profiler)
    try:
        yield profiler
    finally:
        _current.reset(token)


@contextmanager
def span(name: str, **meta: Any) -> Iterator[None]:
    active = _current.get()
    if active is None:
        yield
    else:
        with active.span(name, **meta):
            yield


__all__ = [
    "Profiler",
    "SpanRecord",
    "SUMMARY_HEADER",
    "enable_profiler",
    "get_active_profiler",
    "span",
]
