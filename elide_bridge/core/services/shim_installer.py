"""
Shim installer — put Elide forwarders where the host expects a JDK tool.

Two shims exist:

    elide-javac   <java home>/bin, execs ``elide javac -- "$@"``
    javadoc       <project>/build/elide-runtime/shim, execs ``elide javadoc "$@"``

The javac shim is shared by every project and compile step of a
build, so the check-then-write here must tolerate repeated and
concurrent calls: content is deterministic and the file is swapped
in with an atomic rename, so a reader sees either nothing or the
whole script.

Every problem is recoverable. Callers get ``ShimResult.unavailable``
and keep the stock tool.
"""

from __future__ import annotations

import logging
import os
import platform
import shlex
import stat
import tempfile
from pathlib import Path

from elide_bridge.adapters.environment import EnvironmentProbe, SystemProbe
from elide_bridge.core.models.shim import ShimResult
from elide_bridge.core.models.tool import ToolReference

logger = logging.getLogger(__name__)

SHIM_NAME = "elide-javac"
JAVAC_SUBCOMMAND = ("javac", "--")

JAVADOC_SHIM_NAME = "javadoc"
JAVADOC_SUBCOMMAND = ("javadoc",)
JAVADOC_SHIM_DIR = ("build", "elide-runtime", "shim")


def _is_windows() -> bool:
    return platform.system() == "Windows"


def _script_name(name: str) -> str:
    return f"{name}.cmd" if _is_windows() else name


def default_shim_path(java_home: Path | None) -> Path | None:
    """``<java_home>/bin/elide-javac`` (``.cmd`` on Windows), or None."""
    if java_home is None:
        return None
    return java_home / "bin" / _script_name(SHIM_NAME)


def default_javadoc_shim_path(project_dir: Path) -> Path:
    """``<project>/build/elide-runtime/shim/javadoc`` (``.cmd`` on Windows)."""
    return project_dir.joinpath(*JAVADOC_SHIM_DIR, _script_name(JAVADOC_SHIM_NAME))


def render_shim(
    tool: ToolReference | Path,
    subcommand: tuple[str, ...] = JAVAC_SUBCOMMAND,
) -> str:
    """Script body forwarding every argument to ``elide <subcommand>``."""
    target = str(tool.path if isinstance(tool, ToolReference) else tool)
    prefix = " ".join(subcommand)
    if _is_windows():
        return f'@echo off\r\n"{target}" {prefix} %*\r\n'
    return f'#!/bin/sh\nexec {shlex.quote(target)} {prefix} "$@"\n'


def ensure_shim(
    tool: ToolReference | Path,
    shim_path: Path | None,
    probe: EnvironmentProbe | None = None,
    subcommand: tuple[str, ...] = JAVAC_SUBCOMMAND,
    create_parent: bool = False,
) -> ShimResult:
    """Make sure an executable shim exists at ``shim_path``.

    Idempotent: an existing executable shim is returned untouched.

    Args:
        subcommand: What the shim runs (``javac --`` or ``javadoc``).
        create_parent: Create a missing parent directory first
            (build-directory shims); the JDK ``bin`` is never created.

    Returns:
        ``ready`` / ``created`` / ``repaired`` on success,
        ``unavailable`` (with a remediation) when the stock
        tool must be used instead.
    """
    probe = probe or SystemProbe()
    label = subcommand[0]

    if shim_path is None:
        return ShimResult.unavailable(
            None,
            f"No Java home found; cannot place Elide's {label} shim.",
            remediation="Set JAVA_HOME, or `java_home` in elide.yml.",
        )

    if not probe.exists(shim_path):
        return _create(tool, shim_path, probe, subcommand, create_parent)

    if not probe.is_executable(shim_path):
        return _make_executable(shim_path, probe, label)

    return ShimResult.ready(shim_path)


def _create(
    tool: ToolReference | Path,
    shim_path: Path,
    probe: EnvironmentProbe,
    subcommand: tuple[str, ...],
    create_parent: bool,
) -> ShimResult:
    label = subcommand[0]
    parent = shim_path.parent
    if create_parent and not probe.exists(parent):
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.debug("Cannot create %s: %s", parent, e)

    if not probe.is_writable(parent):
        return ShimResult.unavailable(
            shim_path,
            f"Elide's {label} shim was not found at '{shim_path}'; "
            f"falling back to stock {label}.",
            remediation=f"Make '{parent}' writable, or create the shim there by hand.",
        )

    content = render_shim(tool, subcommand)
    tmp: Path | None = None
    try:
        fd, tmp_name = tempfile.mkstemp(dir=parent, prefix=f".{shim_path.name}_", suffix=".tmp")
        tmp = Path(tmp_name)
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
            fh.write(content)
        tmp.chmod(0o755)
        os.replace(tmp, shim_path)
    except OSError as e:
        if tmp is not None:
            tmp.unlink(missing_ok=True)
        return ShimResult.unavailable(
            shim_path,
            f"Failed to write Elide's {label} shim at '{shim_path}': {e}; "
            f"falling back to stock {label}.",
            remediation=f"Check permissions on '{parent}'.",
        )

    logger.info("Created Elide %s shim at %s", label, shim_path)
    return ShimResult.ready(shim_path, status="created")


def _make_executable(shim_path: Path, probe: EnvironmentProbe, label: str) -> ShimResult:
    remediation = f"chmod +x {shim_path}"
    try:
        mode = shim_path.stat().st_mode
        shim_path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    except OSError as e:
        logger.debug("chmod failed on %s: %s", shim_path, e)

    if not probe.is_executable(shim_path):
        return ShimResult.unavailable(
            shim_path,
            f"Elide's {label} shim isn't executable, and can't be made executable. "
            f"Please run '{remediation}' to fix this.",
            remediation=remediation,
        )

    logger.info("Made Elide %s shim executable: %s", label, shim_path)
    return ShimResult.ready(shim_path, status="repaired")
