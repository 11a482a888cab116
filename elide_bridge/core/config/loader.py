"""
Configuration loader — reads elide.yml and build property files.

Settings come from ``elide.yml`` (YAML, validated with pydantic).
Properties come from ``gradle.properties``-style ``key=value`` files
plus ``-P`` flags on the command line; they carry the explicit
overrides the policy resolver gives precedence to.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import ValidationError

from elide_bridge.adapters.base import PropertySource
from elide_bridge.adapters.memory import MappingPropertySource
from elide_bridge.core.errors import ConfigError
from elide_bridge.core.models.settings import BridgeSettings

logger = logging.getLogger(__name__)

SETTINGS_FILE = "elide.yml"
PROPERTIES_FILE = "gradle.properties"

MAX_SEARCH_DEPTH = 20


def find_settings_file(start_dir: Path | None = None) -> Path | None:
    """Nearest elide.yml at or above ``start_dir`` (default: cwd), or None.

    A settings file in the root project applies to every subproject,
    so subproject directories fall through to it.
    """
    start = (start_dir or Path.cwd()).resolve()
    for directory in [start, *start.parents][:MAX_SEARCH_DEPTH]:
        candidate = directory / SETTINGS_FILE
        if candidate.is_file():
            return candidate
    return None


def load_settings(path: Path | None = None, start_dir: Path | None = None) -> BridgeSettings:
    """Load and validate bridge settings.

    Args:
        path: Explicit path to elide.yml. If None, searches upward
            from ``start_dir``; no file at all means all defaults.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None:
        path = find_settings_file(start_dir)
        if path is None:
            logger.debug("No %s found — using default settings", SETTINGS_FILE)
            return BridgeSettings()
    elif not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading settings from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return BridgeSettings()
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # The YAML may wrap everything under an "elide" key or be flat
    settings_data = data.get("elide", data)
    if not isinstance(settings_data, dict):
        raise ConfigError(f"Expected a mapping under 'elide' in {path}")

    try:
        settings = BridgeSettings.model_validate(settings_data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {path}: {e}") from e

    logger.info("Loaded Elide settings from %s", path)
    return settings


def parse_properties(text: str) -> dict[str, str]:
    """Parse ``key=value`` (or ``key: value``) lines; ``#``/``!`` start comments."""
    props: dict[str, str] = {}
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped[0] in "#!":
            continue
        sep = min(
            (i for i in (stripped.find("="), stripped.find(":")) if i != -1),
            default=-1,
        )
        if sep == -1:
            props[stripped] = ""
            continue
        props[stripped[:sep].strip()] = stripped[sep + 1:].strip()
    return props


def load_properties(path: Path) -> dict[str, str]:
    """Read a properties file; a missing file is empty."""
    if not path.is_file():
        return {}
    try:
        return parse_properties(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e


def parse_cli_properties(pairs: tuple[str, ...] | list[str]) -> dict[str, str]:
    """Turn ``-P key=value`` arguments into a mapping.

    Raises:
        ConfigError: On a pair without ``=``.
    """
    props: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ConfigError(f"Invalid property '{pair}': expected key=value")
        props[key.strip()] = value
    return props


def build_property_source(
    project_dir: Path,
    root_dir: Path | None = None,
    overrides: Mapping[str, str] | None = None,
) -> PropertySource:
    """Command line beats project properties beats root project properties."""
    layers: list[Mapping[str, str]] = [dict(overrides or {})]
    layers.append(load_properties(project_dir / PROPERTIES_FILE))
    if root_dir is not None and root_dir.resolve() != project_dir.resolve():
        layers.append(load_properties(root_dir / PROPERTIES_FILE))
    return MappingPropertySource(*layers)
