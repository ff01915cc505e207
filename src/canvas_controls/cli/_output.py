"""Printing helpers shared by the CLI commands."""
from __future__ import annotations

import json
import sys
from typing import Any, Optional

from canvas_controls.core.exceptions import CanvasControlsError


class OutputFormatter:
    """Writes command results to stdout and failures to stderr.

    With ``json_mode`` both go out as JSON documents; otherwise results are
    printed as given and failures as a one-line ``Error:`` message.
    """

    def __init__(self, json_mode: bool = False, indent: int = 2):
        self.json_mode = json_mode
        self.indent = indent

    def _dump(self, payload: Any) -> str:
        return json.dumps(payload, indent=self.indent, default=str)

    def json_output(self, data: Any) -> None:
        print(self._dump(data))

    def text(self, message: str) -> None:
        print(message)

    def error(self, error: Exception, message: Optional[str] = None, *, error_code: str = "error") -> None:
        text = message or str(error)
        if not self.json_mode:
            print(f"Error: {text}", file=sys.stderr)
            return
        payload: dict[str, Any] = {"error": error_code, "message": text}
        if isinstance(error, CanvasControlsError):
            details = error.to_json_error()
            payload["type"] = details["code"]
            payload["context"] = details["context"]
        print(self._dump(payload), file=sys.stderr)


__all__ = ["OutputFormatter"]
