"""
Tool models — the resolved Elide binary and what running it produced.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict


class ToolReference(BaseModel):
    """Absolute path to a binary that was present and executable when found.

    Not re-validated later; the file may go stale during a long build.
    """

    model_config = ConfigDict(frozen=True)

    path: Path
    source: Literal["explicit", "path", "home"] = "path"

    def __str__(self) -> str:
        return str(self.path)


class CapturedOutput(BaseModel):
    """Combined stdout + stderr of a finished subprocess."""

    model_config = ConfigDict(frozen=True)

    text: str = ""
    exit_code: int = 0
    duration_ms: int = 0

    @property
    def single_line(self) -> str:
        """The output with line breaks removed (for version strings)."""
        return self.text.replace("\r", "").replace("\n", "")
