"""
Configure use case — wire Elide into every project of one build.

A ``BuildSession`` lives for one build invocation. It locates the
binary once (failing early and loudly if it is missing), probes the
version once, and then configures each project independently:

    settings + properties → resolve → plan → apply

Projects share only the tool reference and the "already probed"
flag; each project's EffectiveConfig and plan are its own.

An offline build without a binary skips the integration entirely,
unless a Java tool is `elide-strict`.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

from elide_bridge.adapters.base import BuildProject, CompileStep, DocStep
from elide_bridge.adapters.environment import EnvironmentProbe, SystemProbe
from elide_bridge.core.errors import ToolNotFound, ToolVersionMismatch
from elide_bridge.core.models.config import EffectiveConfig
from elide_bridge.core.models.plan import AppliedPlan, PreparationPlan
from elide_bridge.core.models.settings import BridgeSettings
from elide_bridge.core.models.tool import ToolReference
from elide_bridge.core.services import policy_resolver
from elide_bridge.core.services.orchestration import (
    JAVA_PLUGIN_ID,
    OrchestrationPlanner,
    probe_version,
)
from elide_bridge.core.services.process_runner import ProcessRunner
from elide_bridge.core.services.tool_locator import locate

logger = logging.getLogger(__name__)


@dataclass
class ConfigureResult:
    """Everything decided and changed for one project."""

    project: str
    config: EffectiveConfig
    plan: PreparationPlan
    applied: AppliedPlan
    skipped: bool = False

    def to_dict(self) -> dict:
        return {
            "project": self.project,
            "config": self.config.to_dict(),
            "plan": self.plan.to_dict(),
            "applied": self.applied.to_dict(),
            "skipped": self.skipped,
        }


class BuildSession:
    """Build-wide state: the located tool and the one-time version probe.

    Args:
        settings: Default settings for projects configured without their own.
        probe: Environment to search and check (default: the real one).
        runner: Process runner for the probe and install tasks.
        configuration_cache: The host asked for its configuration cache;
            the version probe is skipped because it spawns a process.
        offline: The host runs offline; a missing binary leaves projects
            untouched instead of failing the build.
    """

    def __init__(
        self,
        settings: BridgeSettings | None = None,
        probe: EnvironmentProbe | None = None,
        runner: ProcessRunner | None = None,
        configuration_cache: bool = False,
        offline: bool = False,
    ):
        self.settings = settings or BridgeSettings()
        self.probe = probe or SystemProbe()
        self.runner = runner or ProcessRunner()
        self.configuration_cache = configuration_cache
        self.offline = offline
        self.version: str | None = None
        self._tool: ToolReference | None = None
        self._probed = False
        self._mismatch: ToolVersionMismatch | None = None
        self._lock = threading.Lock()

    @property
    def tool(self) -> ToolReference:
        """The located binary; raises ToolNotFound on first access if missing."""
        with self._lock:
            if self._tool is None:
                self._tool = locate(self.probe, explicit=self.settings.elide_bin)
                logger.debug("Elide resolved to '%s'", self._tool.path)
            return self._tool

    def start(self) -> ToolReference:
        """Locate the tool and run the version probe, each at most once.

        A strict version mismatch is remembered and raised again for
        every later project of the build.
        """
        tool = self.tool
        with self._lock:
            if self._probed:
                if self._mismatch is not None:
                    raise self._mismatch
                return tool
            self._probed = True
            if self.configuration_cache:
                logger.debug("Configuration cache requested; skipping `elide --version`")
                return tool
            try:
                self.version = probe_version(
                    tool,
                    self.runner,
                    expected=self.settings.version,
                    strict=self.settings.strict_version_check,
                )
            except ToolVersionMismatch as e:
                self._mismatch = e
                raise
        return tool

    def configure(
        self,
        project: BuildProject,
        settings: BridgeSettings | None = None,
    ) -> ConfigureResult:
        """Resolve, plan and apply Elide integration for one project.

        Raises:
            ToolNotFound: No binary, and the build is online or needs Elide.
            ShimRequired: An `elide-strict` javac shim could not be placed.
        """
        settings = settings or self.settings
        config = policy_resolver.resolve(
            settings,
            project.properties,
            project.directory,
            project.root_directory,
            self.probe,
        )

        try:
            tool = self.start()
        except ToolNotFound:
            if not self.offline or config.requires_elide:
                raise
            logger.debug(
                "Skipping Elide integration for project '%s': elide is not found "
                "and the build is offline",
                project.name,
            )
            return ConfigureResult(
                project=project.name,
                config=config,
                plan=PreparationPlan(config=config),
                applied=AppliedPlan(),
                skipped=True,
            )

        planner = OrchestrationPlanner(tool, self.runner, self.probe)
        plan = planner.plan(
            config,
            project.tasks.find_tasks_of_kind(CompileStep),
            project.has_plugin(JAVA_PLUGIN_ID),
            project.tasks.find_tasks_of_kind(DocStep),
        )
        applied = planner.apply(plan, project)

        logger.info(
            "Configured project '%s': actions=%s shimmed=%s fallback=%s javadoc=%s",
            project.name, plan.action_names, applied.shimmed_steps, applied.fallback_steps,
            applied.doc_steps,
        )
        return ConfigureResult(project=project.name, config=config, plan=plan, applied=applied)
