"""
Orchestration planner — decide the preparatory actions and wire them in.

Two phases:

    plan()   pure: EffectiveConfig + compile steps → PreparationPlan
    apply()  side effects: repository registration, the ``elideInstall``
             task node, shim installation per compile step, and the
             dependency edges from compile steps onto prepared tasks

Decision table (top to bottom, additive):

    maven installer active       → register repository, must install
    manifest present             → must install (unless install is
                                   explicitly disabled by property)
    install enabled              → must install
    must install                 → run install, after every earlier action
    java plugin AND javac shim   → shim each compile step at apply time
    java plugin AND javadoc shim → route each javadoc step through
                                   ``prepareElideJavadocShim``

An `elide-strict` tool whose shim cannot be placed fails the build;
`prefer-elide` falls back to the stock tool with a warning.

An empty action list never adds an edge to a compile step. Javadoc
steps only ever depend on the shim task, never on install.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from elide_bridge.adapters.base import BuildProject, CompileStep, DocStep, TaskHandle
from elide_bridge.adapters.environment import EnvironmentProbe, SystemProbe
from elide_bridge.core.errors import (
    ShimRequired,
    ToolExecutionFailed,
    ToolLaunchFailed,
    ToolVersionMismatch,
)
from elide_bridge.core.models.config import EffectiveConfig
from elide_bridge.core.models.plan import (
    REGISTER_REPOSITORY,
    RUN_INSTALL,
    AppliedPlan,
    PreparationAction,
    PreparationPlan,
)
from elide_bridge.core.models.tool import ToolReference
from elide_bridge.core.services.process_runner import ProcessRunner
from elide_bridge.core.services.shim_installer import JAVADOC_SUBCOMMAND, ensure_shim

logger = logging.getLogger(__name__)

TASK_GROUP = "Elide"
INSTALL_TASK = "elideInstall"
INSTALL_DESCRIPTION = "Runs `elide install` to prepare the project for compilation."
REGISTER_REPOSITORY_ACTION = "elideMavenRepository"
JAVADOC_SHIM_TASK = "prepareElideJavadocShim"
JAVADOC_SHIM_DESCRIPTION = "Creates a shim script to invoke `elide javadoc` instead of the standard Javadoc tool."
LOCAL_REPOSITORY_NAME = "elide"
JAVA_PLUGIN_ID = "java"


class OrchestrationPlanner:
    """Plans and applies the preparation of one project."""

    def __init__(
        self,
        tool: ToolReference,
        runner: ProcessRunner | None = None,
        probe: EnvironmentProbe | None = None,
    ):
        self.tool = tool
        self.runner = runner or ProcessRunner()
        self.probe = probe or SystemProbe()

    def plan(
        self,
        config: EffectiveConfig,
        compile_steps: list[CompileStep],
        java_plugin_active: bool,
        doc_steps: list[DocStep] | tuple[DocStep, ...] = (),
    ) -> PreparationPlan:
        """Build the ordered action list. No side effects."""
        actions: list[PreparationAction] = []
        should_run_install = config.install_enabled

        if config.maven_installer_active:
            # Repository first, so the host knows about it before install runs
            actions.append(PreparationAction(REGISTER_REPOSITORY, REGISTER_REPOSITORY_ACTION))
            should_run_install = True

        if config.manifest_present and config.install_override is not False:
            should_run_install = True

        if should_run_install:
            earlier = tuple(a.name for a in actions)
            actions.append(PreparationAction(RUN_INSTALL, INSTALL_TASK, depends_on=earlier))

        shim_requested = java_plugin_active and config.javac_shim_enabled
        javadoc_requested = (
            java_plugin_active
            and config.javadoc_shim_enabled
            and config.javadoc_shim_path is not None
        )
        logger.info(
            "Elide Java support: (pluginActive=%s, javacSupport=%s, javadocSupport=%s)",
            java_plugin_active, config.javac_shim_enabled, config.javadoc_shim_enabled,
        )
        return PreparationPlan(
            actions=actions,
            compile_steps=list(compile_steps) if shim_requested else [],
            doc_steps=list(doc_steps) if javadoc_requested else [],
            shim_requested=shim_requested,
            config=config,
        )

    def apply(self, plan: PreparationPlan, project: BuildProject) -> AppliedPlan:
        """Materialize ``plan`` into ``project``'s graph."""
        config = plan.config
        if config is None:
            raise ValueError("PreparationPlan has no EffectiveConfig; build it with plan()")

        applied = AppliedPlan()
        handles: dict[str, TaskHandle] = {}

        for action in plan.actions:
            if action.kind == REGISTER_REPOSITORY:
                project.repositories.add_first(LOCAL_REPOSITORY_NAME, config.local_repository_url)
                applied.repository_registered = True
                logger.info(
                    "Registered local repository '%s' at %s",
                    LOCAL_REPOSITORY_NAME, config.local_repository_url,
                )
            elif action.kind == RUN_INSTALL:
                prerequisites = [handles[n] for n in action.depends_on if n in handles]
                task = project.tasks.create_task(
                    action.name, TASK_GROUP, INSTALL_DESCRIPTION, self.install_action(config),
                )
                if prerequisites:
                    task.depends_on(*prerequisites)
                handles[action.name] = task
                applied.tasks[action.name] = task

        if plan.shim_requested:
            logger.info(
                "Installing Elide's javac support for %d tasks (path: '%s')",
                len(plan.compile_steps), self.tool.path,
            )
        for step in plan.compile_steps:
            self._configure_compile_step(step, config, project, applied)

        prepared = list(handles.values())
        if prepared and plan.compile_steps:
            for step in plan.compile_steps:
                step.depends_on(*prepared)
                applied.edges_added += len(prepared)

        if plan.doc_steps:
            self._route_doc_steps(plan.doc_steps, config, project, applied)

        return applied

    def _route_doc_steps(
        self,
        doc_steps: list[DocStep],
        config: EffectiveConfig,
        project: BuildProject,
        applied: AppliedPlan,
    ) -> None:
        # The shim lives in the build directory; it is written by a task
        # that runs ahead of the javadoc steps, never while configuring.
        shim_task = project.tasks.create_task(
            JAVADOC_SHIM_TASK,
            TASK_GROUP,
            JAVADOC_SHIM_DESCRIPTION,
            self.javadoc_shim_action(config, doc_steps),
        )
        applied.tasks[JAVADOC_SHIM_TASK] = shim_task
        for step in doc_steps:
            step.executable = str(config.javadoc_shim_path)
            step.depends_on(shim_task)
            applied.doc_steps.append(step.name)
        logger.info(
            "Routing %d javadoc tasks of project '%s' through Elide (shim: '%s')",
            len(doc_steps), project.name, config.javadoc_shim_path,
        )

    def javadoc_shim_action(
        self,
        config: EffectiveConfig,
        doc_steps: list[DocStep],
    ) -> Callable[[], None]:
        """The body of ``prepareElideJavadocShim``.

        ``prefer-elide`` hands the doc steps back to the stock tool when
        the shim cannot be written; ``elide-strict`` fails instead.
        """

        def prepare_javadoc_shim() -> None:
            result = ensure_shim(
                self.tool,
                config.javadoc_shim_path,
                self.probe,
                subcommand=JAVADOC_SUBCOMMAND,
                create_parent=True,
            )
            if result.ok:
                return
            if config.javadoc_strategy == "elide-strict":
                raise ShimRequired("javadoc", result.message, result.remediation)
            logger.warning("%s %s", result.message, result.remediation)
            for step in doc_steps:
                step.executable = None

        return prepare_javadoc_shim

    def _configure_compile_step(
        self,
        step: CompileStep,
        config: EffectiveConfig,
        project: BuildProject,
        applied: AppliedPlan,
    ) -> None:
        logger.info(
            "Installing Elide's javac support for task '%s' within project '%s'",
            step.name, project.name,
        )
        result = ensure_shim(self.tool, config.shim_path, self.probe)
        if not result.ok:
            if config.javac_strategy == "elide-strict":
                raise ShimRequired("javac", result.message, result.remediation)
            logger.warning("%s %s", result.message, result.remediation)
            applied.fallback_steps.append(step.name)
            return
        step.use_external_executable = True
        step.executable = str(result.path)
        applied.shimmed_steps.append(step.name)

    def install_action(self, config: EffectiveConfig) -> Callable[[], None]:
        """The body of ``elideInstall``. Failures propagate and fail the build."""
        args = install_args(config)

        def run_install() -> None:
            start = time.monotonic()
            logger.info("Running `elide %s`", " ".join(args))
            try:
                output = self.runner.run(self.tool.path, args)
            except ToolExecutionFailed as e:
                if e.output:
                    logger.error(e.output)
                raise
            if output.text:
                logger.info(output.text)
            elapsed_ms = int((time.monotonic() - start) * 1000)
            logger.info("`elide install` completed in %dms", elapsed_ms)

        return run_install


def install_args(config: EffectiveConfig) -> list[str]:
    """Argument vector for ``elide install``: diagnostics flags, then the command."""
    args: list[str] = []
    if config.debug:
        args.append("--debug")
    if config.verbose:
        args.append("--verbose")
    args.append("install")
    if not config.telemetry:
        args.append("--no-telemetry")
    return args


def probe_version(
    tool: ToolReference,
    runner: ProcessRunner,
    expected: str | None = None,
    strict: bool = False,
) -> str | None:
    """Run ``elide --version`` and log it.

    Advisory: launch and exit failures are logged, never raised.
    A strict check against ``expected`` is the one fatal outcome.

    Raises:
        ToolVersionMismatch: ``strict`` is set and versions differ.
    """
    try:
        output = runner.run(tool.path, ["--version"])
    except (ToolLaunchFailed, ToolExecutionFailed) as e:
        logger.warning("Unable to determine the Elide version: %s", e)
        return None

    version = output.single_line.strip()
    logger.info("Using Elide %s", version)

    if strict and expected and version != expected:
        raise ToolVersionMismatch(expected, version)
    return version
