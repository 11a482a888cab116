"""
Preparation plan — the ordered actions that must finish before compilation.

Built by the orchestration planner, applied to the task graph once,
then discarded. Nothing here is persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from elide_bridge.adapters.base import CompileStep, DocStep, TaskHandle
    from elide_bridge.core.models.config import EffectiveConfig

ActionKind = Literal["register-repository", "run-install"]

REGISTER_REPOSITORY: ActionKind = "register-repository"
RUN_INSTALL: ActionKind = "run-install"


@dataclass(frozen=True)
class PreparationAction:
    """One preparatory step.

    ``depends_on`` lists the names of every action appended before
    this one, fixed at construction time.
    """

    kind: ActionKind
    name: str
    depends_on: tuple[str, ...] = ()


@dataclass
class PreparationPlan:
    """Ordered actions plus the compile steps that must wait on them.

    ``doc_steps`` are routed through the javadoc shim but never gain
    edges onto the actions.
    """

    actions: list[PreparationAction] = field(default_factory=list)
    compile_steps: list[CompileStep] = field(default_factory=list)
    doc_steps: list[DocStep] = field(default_factory=list)
    shim_requested: bool = False
    config: EffectiveConfig | None = None

    @property
    def is_empty(self) -> bool:
        return not self.actions

    @property
    def action_names(self) -> list[str]:
        return [a.name for a in self.actions]

    def has(self, kind: ActionKind) -> bool:
        return any(a.kind == kind for a in self.actions)

    def to_dict(self) -> dict:
        return {
            "actions": [
                {"kind": a.kind, "name": a.name, "depends_on": list(a.depends_on)}
                for a in self.actions
            ],
            "compile_steps": [s.name for s in self.compile_steps],
            "doc_steps": [s.name for s in self.doc_steps],
            "shim_requested": self.shim_requested,
        }


@dataclass
class AppliedPlan:
    """What ``apply`` actually changed in the host graph."""

    tasks: dict[str, TaskHandle] = field(default_factory=dict)
    repository_registered: bool = False
    shimmed_steps: list[str] = field(default_factory=list)
    fallback_steps: list[str] = field(default_factory=list)
    doc_steps: list[str] = field(default_factory=list)
    edges_added: int = 0

    def to_dict(self) -> dict:
        return {
            "tasks": sorted(self.tasks),
            "repository_registered": self.repository_registered,
            "shimmed_steps": self.shimmed_steps,
            "fallback_steps": self.fallback_steps,
            "doc_steps": self.doc_steps,
            "edges_added": self.edges_added,
        }
