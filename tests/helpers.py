"""
Test doubles shared across the suite: environments, runners, a fake elide.
"""

from __future__ import annotations

import sys
import textwrap
from pathlib import Path

import pytest

from elide_bridge.adapters.environment import EnvironmentProbe, SystemProbe
from elide_bridge.core.models.tool import CapturedOutput

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="POSIX shell scripts")


class FakeProbe(EnvironmentProbe):
    """An environment that exists only in memory."""

    def __init__(
        self,
        path: list[str] | None = None,
        home: Path = Path("/home/dev"),
        java_home: Path | None = None,
        files: tuple = (),
        executables: tuple = (),
        writable: tuple = (),
    ):
        self._path = list(path or [])
        self._home = home
        self._java_home = java_home
        self.executables = {Path(e) for e in executables}
        self.files = {Path(f) for f in files} | self.executables
        self.writable = {Path(w) for w in writable}
        self.exists_calls: list[Path] = []

    def path_entries(self) -> list[str]:
        return list(self._path)

    def home(self) -> Path:
        return self._home

    def java_home(self) -> Path | None:
        return self._java_home

    def exists(self, path: Path) -> bool:
        self.exists_calls.append(Path(path))
        return Path(path) in self.files

    def is_executable(self, path: Path) -> bool:
        return Path(path) in self.executables

    def is_writable(self, path: Path) -> bool:
        return Path(path) in self.writable


class SandboxProbe(SystemProbe):
    """Real filesystem checks, but a fake PATH / HOME / JAVA_HOME.

    ``unwritable`` and ``unexecutable`` force permission failures even
    when the tests run as root.
    """

    def __init__(
        self,
        path: list[Path] | None = None,
        home: Path | None = None,
        java_home: Path | None = None,
        unwritable: tuple = (),
        unexecutable: tuple = (),
    ):
        super().__init__(environ={})
        self._path = [str(p) for p in path or []]
        self._home = home or Path("/nonexistent-home")
        self._java_home = java_home
        self._unwritable = {Path(p) for p in unwritable}
        self._unexecutable = {Path(p) for p in unexecutable}

    def path_entries(self) -> list[str]:
        return list(self._path)

    def home(self) -> Path:
        return self._home

    def java_home(self) -> Path | None:
        return self._java_home

    def is_writable(self, path: Path) -> bool:
        return Path(path) not in self._unwritable and super().is_writable(path)

    def is_executable(self, path: Path) -> bool:
        return Path(path) not in self._unexecutable and super().is_executable(path)


class FakeRunner:
    """Records invocations; answers by first argument."""

    def __init__(
        self,
        outputs: dict[str, str] | None = None,
        failures: dict[str, Exception] | None = None,
    ):
        self.outputs = outputs or {"--version": "1.0.0-beta8\n"}
        self.failures = failures or {}
        self.calls: list[tuple[str, list[str]]] = []

    def run(self, path, args):
        self.calls.append((str(path), list(args)))
        key = args[0] if args else ""
        if key in self.failures:
            raise self.failures[key]
        return CapturedOutput(text=self.outputs.get(key, ""))

    def calls_for(self, first_arg: str) -> list[list[str]]:
        return [args for _, args in self.calls if args and args[0] == first_arg]


FAKE_ELIDE = textwrap.dedent("""\
    #!/bin/sh
    case "$1" in
      --version) echo "1.2.3" ;;
      install)
        echo "resolved 3 packages"
        if [ -n "$ELIDE_FAIL_INSTALL" ]; then echo "boom" >&2; exit 2; fi
        ;;
      *) echo "$@" ;;
    esac
""")


