"""
ShimResult — outcome of ensuring a javac or javadoc shim exists.

Like an adapter receipt, a shim problem is a value, not an
exception: the caller falls back to the stock compiler and the
build continues.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict


class ShimResult(BaseModel):
    """Outcome of ``ensure_shim``."""

    model_config = ConfigDict(frozen=True)

    status: Literal["ready", "created", "repaired", "unavailable"]
    path: Path | None = None
    message: str = ""
    remediation: str = ""

    @property
    def ok(self) -> bool:
        """Whether the shim can be referenced by a compile step."""
        return self.status != "unavailable"

    @classmethod
    def ready(cls, path: Path, status: str = "ready", message: str = "") -> ShimResult:
        return cls(status=status, path=path, message=message)

    @classmethod
    def unavailable(
        cls,
        path: Path | None,
        message: str,
        remediation: str = "",
    ) -> ShimResult:
        return cls(
            status="unavailable",
            path=path,
            message=message,
            remediation=remediation,
        )
