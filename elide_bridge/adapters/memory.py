"""
In-memory host — a minimal build engine implementing ``adapters/base.py``.

Used by the CLI to plan and run the install step outside a real
build, and by the tests as the universal host double. Execution
order comes from Kahn's algorithm over the dependency edges, the
same way plan steps are ordered elsewhere.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from pathlib import Path

from elide_bridge.adapters.base import (
    BuildProject,
    CompileStep,
    DocStep,
    PropertySource,
    RepositorySet,
    T,
    TaskGraph,
    TaskHandle,
)
from elide_bridge.core.errors import TaskGraphError

logger = logging.getLogger(__name__)


class MappingPropertySource(PropertySource):
    """Properties backed by one or more mappings; earlier layers win."""

    def __init__(self, *layers: Mapping[str, str]):
        self._layers = layers

    def get(self, key: str) -> str | None:
        for layer in self._layers:
            if key in layer:
                return layer[key]
        return None


class InMemoryTask(TaskHandle):
    """A task node with an optional action."""

    def __init__(
        self,
        name: str,
        group: str = "",
        description: str = "",
        action: Callable[[], None] | None = None,
    ):
        self._name = name
        self.group = group
        self.description = description
        self.action = action
        self._dependencies: list[TaskHandle] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def dependencies(self) -> list[TaskHandle]:
        return list(self._dependencies)

    def depends_on(self, *tasks: TaskHandle) -> None:
        for task in tasks:
            if task is self:
                raise TaskGraphError(f"Task '{self.name}' cannot depend on itself")
            if task not in self._dependencies:
                self._dependencies.append(task)


class InMemoryCompileStep(InMemoryTask, CompileStep):
    """A compile task; ``executable`` is None while the stock compiler is used."""

    def __init__(self, name: str = "compileJava", **kwargs):
        super().__init__(name, group="build", **kwargs)
        self.use_external_executable = False
        self.executable = None


class InMemoryDocStep(InMemoryTask, DocStep):
    """A javadoc task; ``executable`` is None while the stock tool is used."""

    def __init__(self, name: str = "javadoc", **kwargs):
        super().__init__(name, group="documentation", **kwargs)
        self.executable = None


class InMemoryTaskGraph(TaskGraph):
    """Named tasks with dependency edges."""

    def __init__(self) -> None:
        self._tasks: dict[str, InMemoryTask] = {}

    def __contains__(self, name: str) -> bool:
        return name in self._tasks

    def __getitem__(self, name: str) -> InMemoryTask:
        try:
            return self._tasks[name]
        except KeyError:
            raise TaskGraphError(f"Unknown task: '{name}'") from None

    def add(self, task: InMemoryTask) -> InMemoryTask:
        """Register an existing task object (compile steps, fixtures)."""
        if task.name in self._tasks:
            raise TaskGraphError(f"Task '{task.name}' is already registered")
        self._tasks[task.name] = task
        return task

    def create_task(
        self,
        name: str,
        group: str,
        description: str,
        action: Callable[[], None],
    ) -> TaskHandle:
        return self.add(InMemoryTask(name, group, description, action))

    def find_tasks_of_kind(self, kind: type[T]) -> list[T]:
        return [t for t in self._tasks.values() if isinstance(t, kind)]

    @property
    def names(self) -> list[str]:
        return list(self._tasks)

    def execution_order(self, target: str | None = None) -> list[str]:
        """Topological order of ``target`` and its dependencies (or of all tasks).

        Raises:
            TaskGraphError: On a dependency cycle.
        """
        if target is None:
            scope = list(self._tasks)
        else:
            scope = []
            stack = [self[target]]
            while stack:
                task = stack.pop()
                if task.name in scope:
                    continue
                scope.append(task.name)
                stack.extend(self[d.name] for d in task.dependencies)

        in_degree = {name: 0 for name in scope}
        successors: dict[str, list[str]] = {name: [] for name in scope}
        for name in scope:
            for dep in self._tasks[name].dependencies:
                in_degree[name] += 1
                successors[dep.name].append(name)

        # Registration order breaks ties so runs are deterministic
        queue = [n for n in self._tasks if n in in_degree and in_degree[n] == 0]
        order: list[str] = []
        while queue:
            node = queue.pop(0)
            order.append(node)
            for successor in successors[node]:
                in_degree[successor] -= 1
                if in_degree[successor] == 0:
                    queue.append(successor)

        if len(order) < len(scope):
            raise TaskGraphError("Dependency cycle detected in task graph")
        return order

    def run(self, target: str) -> list[str]:
        """Run ``target`` after all of its dependencies; return the names run."""
        order = self.execution_order(target)
        for name in order:
            task = self._tasks[name]
            if task.action is not None:
                logger.debug("Running task '%s'", name)
                task.action()
        return order


class InMemoryRepositorySet(RepositorySet):
    """Ordered ``(name, url)`` pairs."""

    def __init__(self, initial: list[tuple[str, str]] | None = None):
        self._repos: list[tuple[str, str]] = list(initial or [])

    def add_first(self, name: str, url: str) -> None:
        self._repos = [(n, u) for n, u in self._repos if n != name and u != url]
        self._repos.insert(0, (name, url))

    def names(self) -> list[str]:
        return [n for n, _ in self._repos]

    def url(self, name: str) -> str | None:
        for n, u in self._repos:
            if n == name:
                return u
        return None


class InMemoryProject(BuildProject):
    """A project with in-memory tasks, repositories and properties."""

    def __init__(
        self,
        name: str,
        directory: Path,
        root_directory: Path | None = None,
        properties: PropertySource | None = None,
        plugins: set[str] | None = None,
    ):
        self._name = name
        self._directory = directory
        self._root = root_directory or directory
        self._properties = properties or MappingPropertySource()
        self._tasks = InMemoryTaskGraph()
        self._repositories = InMemoryRepositorySet()
        self._plugins: set[str] = set()
        for plugin_id in plugins or ():
            self.apply_plugin(plugin_id)

    @property
    def name(self) -> str:
        return self._name

    @property
    def directory(self) -> Path:
        return self._directory

    @property
    def root_directory(self) -> Path:
        return self._root

    @property
    def properties(self) -> PropertySource:
        return self._properties

    @property
    def tasks(self) -> InMemoryTaskGraph:
        return self._tasks

    @property
    def repositories(self) -> InMemoryRepositorySet:
        return self._repositories

    def has_plugin(self, plugin_id: str) -> bool:
        return plugin_id in self._plugins

    def apply_plugin(self, plugin_id: str) -> None:
        """Apply a plugin; ``java`` registers the stock compile and javadoc steps."""
        self._plugins.add(plugin_id)
        if plugin_id == "java" and "compileJava" not in self._tasks:
            self._tasks.add(InMemoryCompileStep("compileJava"))
            self._tasks.add(InMemoryCompileStep("compileTestJava"))
            self._tasks.add(InMemoryDocStep("javadoc"))
