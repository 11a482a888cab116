"""
Bridge settings — the configured defaults for one project.

Loaded from ``elide.yml`` (see ``core/config/loader.py``). Every
boolean here is a *default*: an explicit build property, when set,
overrides it during policy resolution.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel

# How a Java tool (javac, javadoc) is routed through Elide:
#   no-elide      leave the stock tool alone
#   prefer-elide  use Elide, fall back to the stock tool when the shim is unavailable
#   elide-strict  use Elide, fail the build when the shim is unavailable
IntegrationStrategy = Literal["no-elide", "prefer-elide", "elide-strict"]


class BridgeSettings(BaseModel):
    """Configured defaults, before property overrides are applied."""

    enable_install: bool = False
    enable_maven_integration: bool = True
    enable_java_compiler: bool = True

    javac_strategy: IntegrationStrategy = "prefer-elide"
    javadoc_strategy: IntegrationStrategy = "prefer-elide"

    manifest: Path | None = None        # relative → project directory
    dev_root: Path | None = None        # relative → root project directory
    elide_bin: Path | None = None       # explicit binary, checked before PATH
    java_home: Path | None = None       # where the javac shim lives

    debug: bool = False
    verbose: bool = False
    telemetry: bool = True
    version: str | None = None
    strict_version_check: bool = False
