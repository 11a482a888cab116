"""Adapters — host build interfaces and their in-memory implementation.

Public re-exports for convenient access.
"""

from elide_bridge.adapters.base import (
    BuildProject,
    CompileStep,
    DocStep,
    PropertySource,
    RepositorySet,
    TaskGraph,
    TaskHandle,
)
from elide_bridge.adapters.environment import EnvironmentProbe, SystemProbe
from elide_bridge.adapters.memory import (
    InMemoryCompileStep,
    InMemoryDocStep,
    InMemoryProject,
    InMemoryRepositorySet,
    InMemoryTask,
    InMemoryTaskGraph,
    MappingPropertySource,
)

__all__ = [
    "BuildProject",
    "CompileStep",
    "DocStep",
    "EnvironmentProbe",
    "InMemoryCompileStep",
    "InMemoryDocStep",
    "InMemoryProject",
    "InMemoryRepositorySet",
    "InMemoryTask",
    "InMemoryTaskGraph",
    "MappingPropertySource",
    "PropertySource",
    "RepositorySet",
    "SystemProbe",
    "TaskGraph",
    "TaskHandle",
]
