"""
EffectiveConfig — the resolved decisions for one project.

Computed once per configuration pass by the policy resolver and
never mutated afterwards.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict

from elide_bridge.core.models.settings import IntegrationStrategy


class EffectiveConfig(BaseModel):
    """Resolved booleans and paths for a single project."""

    model_config = ConfigDict(frozen=True)

    install_enabled: bool = False
    javac_shim_enabled: bool = True
    maven_integration_enabled: bool = True
    manifest_present: bool = False
    javadoc_shim_enabled: bool = True

    javac_strategy: IntegrationStrategy = "prefer-elide"
    javadoc_strategy: IntegrationStrategy = "prefer-elide"

    # Raw overrides, kept so downstream rules can tell "default" from "explicit"
    install_override: bool | None = None
    javac_override: bool | None = None
    maven_installer_override: bool | None = None

    debug: bool = False
    verbose: bool = False
    telemetry: bool = True

    manifest_path: Path | None = None
    dev_root: Path
    shim_path: Path | None = None
    javadoc_shim_path: Path | None = None

    @property
    def maven_installer_active(self) -> bool:
        """Maven installer override short-circuits; otherwise install AND maven."""
        if self.maven_installer_override is not None:
            return self.maven_installer_override
        return self.install_enabled and self.maven_integration_enabled

    @property
    def requires_elide(self) -> bool:
        """An enabled Java tool is ``elide-strict``."""
        return (
            (self.javac_shim_enabled and self.javac_strategy == "elide-strict")
            or self.javadoc_strategy == "elide-strict"
        )

    @property
    def local_repository_path(self) -> Path:
        return self.dev_root / "dependencies" / "m2"

    @property
    def local_repository_url(self) -> str:
        return self.local_repository_path.absolute().as_uri()

    def to_dict(self) -> dict:
        data = self.model_dump(mode="json")
        data["maven_installer_active"] = self.maven_installer_active
        data["requires_elide"] = self.requires_elide
        data["local_repository_url"] = self.local_repository_url
        return data
