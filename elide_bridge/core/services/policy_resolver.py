"""
Policy resolver — turn settings + build properties into an EffectiveConfig.

Precedence for every boolean: explicit build property, if present,
wins; otherwise the configured default from elide.yml. The maven
installer is the one combined decision: its own property
short-circuits, otherwise it is ``install AND maven-integration``.

Each Java tool also has a strategy (``no-elide``, ``prefer-elide``,
``elide-strict``); ``no-elide`` turns its shim off whatever the
boolean switches say.

Pure apart from read-only existence checks on the manifest.
"""

from __future__ import annotations

import logging
from pathlib import Path

from elide_bridge.adapters.base import PropertySource
from elide_bridge.adapters.environment import EnvironmentProbe, SystemProbe
from elide_bridge.core.errors import ConfigError
from elide_bridge.core.models.config import EffectiveConfig
from elide_bridge.core.models.settings import BridgeSettings, IntegrationStrategy
from elide_bridge.core.services.shim_installer import default_javadoc_shim_path, default_shim_path

logger = logging.getLogger(__name__)

PROP_INSTALL_ENABLE = "elide.builder.install.enable"
PROP_JAVAC_ENABLE = "elide.builder.javac.enable"
PROP_MAVEN_INSTALL_ENABLE = "elide.builder.maven.install.enable"

PROP_JAVAC_STRATEGY = "dev.elide.gradle.features.javacStrategy"
PROP_JAVADOC_STRATEGY = "dev.elide.gradle.features.javadocStrategy"
STRATEGIES: tuple[str, ...] = ("no-elide", "prefer-elide", "elide-strict")

# Diagnostics passed through to the elide invocations the bridge owns
PROP_DEBUG = "dev.elide.gradle.diagnostics.debug"
PROP_VERBOSE = "dev.elide.gradle.diagnostics.verbose"
PROP_TELEMETRY = "dev.elide.gradle.diagnostics.telemetry"

DEFAULT_MANIFEST = "elide.pkl"
DEFAULT_DEV_ROOT = ".dev"


def parse_bool(raw: str) -> bool:
    """``"true"`` in any case is True; every other string is False."""
    return raw.strip().lower() == "true"


def read_override(properties: PropertySource, key: str) -> bool | None:
    """The property as a boolean, or None when it is not set."""
    raw = properties.get(key)
    if raw is None:
        return None
    return parse_bool(raw)


def parse_strategy(raw: str, key: str) -> IntegrationStrategy:
    """``PREFER_ELIDE``, ``prefer-elide`` and ``Prefer_Elide`` are the same strategy.

    Raises:
        ConfigError: On a value that names no strategy.
    """
    value = raw.strip().lower().replace("_", "-")
    if value not in STRATEGIES:
        raise ConfigError(
            f"Invalid value '{raw}' for {key}: expected one of {', '.join(STRATEGIES)}"
        )
    return value  # type: ignore[return-value]


def read_strategy(
    properties: PropertySource,
    key: str,
    default: IntegrationStrategy,
) -> IntegrationStrategy:
    raw = properties.get(key)
    return default if raw is None else parse_strategy(raw, key)


def _pick(override: bool | None, default: bool) -> bool:
    return override if override is not None else default


def _anchor(path: Path | None, base: Path) -> Path | None:
    if path is None:
        return None
    path = path.expanduser()
    return path if path.is_absolute() else base / path


def detect_manifest(
    configured: Path | None,
    project_dir: Path,
    probe: EnvironmentProbe,
) -> bool:
    """Configured manifest exists, or ``elide.pkl`` sits in the project dir."""
    return (
        (configured is not None and probe.exists(configured))
        or probe.exists(project_dir / DEFAULT_MANIFEST)
    )


def resolve(
    settings: BridgeSettings,
    properties: PropertySource,
    project_dir: Path,
    root_dir: Path | None = None,
    probe: EnvironmentProbe | None = None,
) -> EffectiveConfig:
    """Compute the effective decisions for one project."""
    probe = probe or SystemProbe()
    root_dir = root_dir or project_dir

    install_override = read_override(properties, PROP_INSTALL_ENABLE)
    javac_override = read_override(properties, PROP_JAVAC_ENABLE)
    maven_override = read_override(properties, PROP_MAVEN_INSTALL_ENABLE)

    install_enabled = _pick(install_override, settings.enable_install)
    javac_enabled = _pick(javac_override, settings.enable_java_compiler)
    javac_strategy = read_strategy(properties, PROP_JAVAC_STRATEGY, settings.javac_strategy)
    javadoc_strategy = read_strategy(properties, PROP_JAVADOC_STRATEGY, settings.javadoc_strategy)

    manifest_path = _anchor(settings.manifest, project_dir)
    manifest_present = detect_manifest(manifest_path, project_dir, probe)

    dev_root = _anchor(settings.dev_root, root_dir) or root_dir / DEFAULT_DEV_ROOT
    java_home = _anchor(settings.java_home, root_dir) or probe.java_home()

    config = EffectiveConfig(
        install_enabled=install_enabled,
        javac_shim_enabled=javac_enabled and javac_strategy != "no-elide",
        javadoc_shim_enabled=javadoc_strategy != "no-elide",
        javac_strategy=javac_strategy,
        javadoc_strategy=javadoc_strategy,
        maven_integration_enabled=settings.enable_maven_integration,
        manifest_present=manifest_present,
        install_override=install_override,
        javac_override=javac_override,
        maven_installer_override=maven_override,
        debug=_pick(read_override(properties, PROP_DEBUG), settings.debug),
        verbose=_pick(read_override(properties, PROP_VERBOSE), settings.verbose),
        telemetry=_pick(read_override(properties, PROP_TELEMETRY), settings.telemetry),
        manifest_path=manifest_path or project_dir / DEFAULT_MANIFEST,
        dev_root=dev_root,
        shim_path=default_shim_path(java_home),
        javadoc_shim_path=default_javadoc_shim_path(project_dir),
    )
    logger.debug(
        "Resolved policy for %s: install=%s javac=%s javadoc=%s mavenInstaller=%s manifest=%s",
        project_dir, config.install_enabled, config.javac_shim_enabled, config.javadoc_shim_enabled,
        config.maven_installer_active, config.manifest_present,
    )
    return config
