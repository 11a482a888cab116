"""
Host build interfaces — the narrow contract between the bridge and a build engine.

The bridge never schedules, caches or executes the host's work. It
only reads properties, adds one task node, adds dependency edges,
flips the "use external executable" switch on compile steps and
registers a repository. Everything it needs from the host is here.

An in-memory implementation lives in ``adapters/memory.py``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

T = TypeVar("T", bound="TaskHandle")


class PropertySource(ABC):
    """Key/value build properties (``-P`` flags, ``gradle.properties``)."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the raw property value, or None when absent."""


class TaskHandle(ABC):
    """A node in the host task graph."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique task name within its project."""

    @property
    @abstractmethod
    def dependencies(self) -> list[TaskHandle]:
        """Tasks that must run before this one."""

    @abstractmethod
    def depends_on(self, *tasks: TaskHandle) -> None:
        """Add dependency edges onto ``tasks``."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


class CompileStep(TaskHandle):
    """A Java compile task whose compiler executable can be swapped."""

    use_external_executable: bool = False
    executable: str | None = None


class DocStep(TaskHandle):
    """A javadoc task whose tool executable can be swapped."""

    executable: str | None = None


class TaskGraph(ABC):
    """Task registration and lookup for one project."""

    @abstractmethod
    def create_task(
        self,
        name: str,
        group: str,
        description: str,
        action: Callable[[], None],
    ) -> TaskHandle:
        """Register a new task node that runs ``action``."""

    @abstractmethod
    def find_tasks_of_kind(self, kind: type[T]) -> list[T]:
        """Every registered task that is an instance of ``kind``."""


class RepositorySet(ABC):
    """Ordered dependency repositories of a project."""

    @abstractmethod
    def add_first(self, name: str, url: str) -> None:
        """Put repository ``name`` at ``url`` first, replacing any earlier entry."""

    @abstractmethod
    def names(self) -> list[str]:
        """Repository names in lookup order."""


class BuildProject(ABC):
    """One project of a (possibly multi-project) build."""

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def directory(self) -> Path: ...

    @property
    @abstractmethod
    def root_directory(self) -> Path: ...

    @property
    @abstractmethod
    def properties(self) -> PropertySource: ...

    @property
    @abstractmethod
    def tasks(self) -> TaskGraph: ...

    @property
    @abstractmethod
    def repositories(self) -> RepositorySet: ...

    @abstractmethod
    def has_plugin(self, plugin_id: str) -> bool:
        """Whether a host plugin (e.g. ``"java"``) is applied."""
