"""
Tool locator — find the Elide binary on this machine.

Search order, first match wins:
    1. an explicitly configured binary (``elide_bin`` in elide.yml)
    2. each PATH directory, left to right
    3. ``~/elide/elide``

A candidate is accepted only if it exists AND is executable.
Nothing is cached here; callers locate once per build and reuse
the ``ToolReference``.
"""

from __future__ import annotations

import logging
import platform
from pathlib import Path

from elide_bridge.adapters.environment import EnvironmentProbe, SystemProbe
from elide_bridge.core.errors import ToolNotFound
from elide_bridge.core.models.tool import ToolReference

logger = logging.getLogger(__name__)

ELIDE_BINARY_NAME = "elide"


def _candidate_names(binary: str) -> list[str]:
    if platform.system() == "Windows":
        return [f"{binary}.exe", binary]
    return [binary]


def _accept(probe: EnvironmentProbe, candidate: Path) -> bool:
    return probe.exists(candidate) and probe.is_executable(candidate)


def locate(
    probe: EnvironmentProbe | None = None,
    explicit: Path | None = None,
    binary: str = ELIDE_BINARY_NAME,
) -> ToolReference:
    """Resolve the tool binary.

    Args:
        probe: Environment to search (default: the real one).
        explicit: Configured binary path; when given it must be valid.
        binary: File name to look for.

    Returns:
        ToolReference with an absolute path.

    Raises:
        ToolNotFound: If no candidate is present and executable.
    """
    probe = probe or SystemProbe()
    searched: list[str] = []

    if explicit is not None:
        candidate = explicit.expanduser()
        if _accept(probe, candidate):
            logger.debug("Elide resolved to '%s' (configured)", candidate)
            return ToolReference(path=candidate.absolute(), source="explicit")
        raise ToolNotFound(str(candidate), searched=[str(candidate)])

    names = _candidate_names(binary)
    for entry in probe.path_entries():
        for name in names:
            candidate = Path(entry) / name
            searched.append(str(candidate))
            if _accept(probe, candidate):
                logger.debug("Elide resolved to '%s' (PATH)", candidate)
                return ToolReference(path=candidate.absolute(), source="path")

    for name in names:
        candidate = probe.home() / binary / name
        searched.append(str(candidate))
        if _accept(probe, candidate):
            logger.debug("Elide resolved to '%s' (home)", candidate)
            return ToolReference(path=candidate.absolute(), source="home")

    logger.debug("Elide not found; searched %d locations", len(searched))
    raise ToolNotFound(binary, searched=searched)
