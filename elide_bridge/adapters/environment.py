"""
Environment probe — process-wide state behind one small interface.

PATH, the home directory, JAVA_HOME and file permission checks are
all read through a probe so the locator and resolver can be tested
against a fake world. These probes READ; they never WRITE.
"""

from __future__ import annotations

import os
import shutil
from abc import ABC, abstractmethod
from pathlib import Path


class EnvironmentProbe(ABC):
    """Read-only view of the host environment and filesystem."""

    @abstractmethod
    def path_entries(self) -> list[str]:
        """Executable search path, split on the platform separator."""

    @abstractmethod
    def home(self) -> Path:
        """The invoking user's home directory."""

    @abstractmethod
    def java_home(self) -> Path | None:
        """Installation root of the host Java runtime, if known."""

    @abstractmethod
    def exists(self, path: Path) -> bool: ...

    @abstractmethod
    def is_executable(self, path: Path) -> bool: ...

    @abstractmethod
    def is_writable(self, path: Path) -> bool: ...


class SystemProbe(EnvironmentProbe):
    """The real environment: ``os.environ`` and the real filesystem."""

    def __init__(self, environ: dict[str, str] | None = None):
        self._environ = environ if environ is not None else os.environ

    def path_entries(self) -> list[str]:
        raw = self._environ.get("PATH", "")
        return [entry for entry in raw.split(os.pathsep) if entry]

    def home(self) -> Path:
        return Path(self._environ.get("HOME") or Path.home())

    def java_home(self) -> Path | None:
        configured = self._environ.get("JAVA_HOME")
        if configured:
            return Path(configured)
        # No JAVA_HOME: fall back to the javac on PATH (<home>/bin/javac)
        javac = shutil.which("javac", path=os.pathsep.join(self.path_entries()))
        if javac:
            return Path(javac).resolve().parent.parent
        return None

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_executable(self, path: Path) -> bool:
        return path.is_file() and os.access(path, os.X_OK)

    def is_writable(self, path: Path) -> bool:
        return path.is_dir() and os.access(path, os.W_OK)
