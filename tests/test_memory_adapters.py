"""
Tests for the in-memory host adapters.
"""

from pathlib import Path

import pytest

from elide_bridge.adapters.base import CompileStep, DocStep
from elide_bridge.adapters.memory import (
    InMemoryCompileStep,
    InMemoryProject,
    InMemoryRepositorySet,
    InMemoryTaskGraph,
    MappingPropertySource,
)
from elide_bridge.core.errors import TaskGraphError


class TestMappingPropertySource:
    def test_earlier_layer_wins(self):
        source = MappingPropertySource({"a": "1"}, {"a": "2", "b": "3"})
        assert source.get("a") == "1"
        assert source.get("b") == "3"

    def test_missing_is_none(self):
        assert MappingPropertySource().get("a") is None


class TestTaskGraph:
    def _graph(self) -> InMemoryTaskGraph:
        graph = InMemoryTaskGraph()
        graph.create_task("a", "g", "", lambda: None)
        graph.create_task("b", "g", "", lambda: None)
        graph.add(InMemoryCompileStep())
        return graph

    def test_duplicate_name_rejected(self):
        graph = self._graph()
        with pytest.raises(TaskGraphError):
            graph.create_task("a", "g", "", lambda: None)

    def test_unknown_task(self):
        with pytest.raises(TaskGraphError):
            self._graph()["nope"]

    def test_self_dependency_rejected(self):
        graph = self._graph()
        with pytest.raises(TaskGraphError):
            graph["a"].depends_on(graph["a"])

    def test_depends_on_deduplicates(self):
        graph = self._graph()
        graph["b"].depends_on(graph["a"], graph["a"])
        graph["b"].depends_on(graph["a"])
        assert graph["b"].dependencies == [graph["a"]]

    def test_find_compile_steps(self):
        steps = self._graph().find_tasks_of_kind(CompileStep)
        assert [s.name for s in steps] == ["compileJava"]

    def test_execution_order_respects_edges(self):
        graph = self._graph()
        graph["a"].depends_on(graph["b"])
        graph["compileJava"].depends_on(graph["a"])
        assert graph.execution_order() == ["b", "a", "compileJava"]

    def test_execution_order_scoped_to_target(self):
        graph = self._graph()
        graph["compileJava"].depends_on(graph["b"])
        assert graph.execution_order("compileJava") == ["b", "compileJava"]

    def test_cycle_detected(self):
        graph = self._graph()
        graph["a"].depends_on(graph["b"])
        graph["b"].depends_on(graph["a"])
        with pytest.raises(TaskGraphError, match="cycle"):
            graph.execution_order()

    def test_run_calls_actions_in_order(self):
        ran: list[str] = []
        graph = InMemoryTaskGraph()
        first = graph.create_task("first", "g", "", lambda: ran.append("first"))
        second = graph.create_task("second", "g", "", lambda: ran.append("second"))
        second.depends_on(first)
        assert graph.run("second") == ["first", "second"]
        assert ran == ["first", "second"]


class TestRepositorySet:
    def test_add_first_prepends(self):
        repos = InMemoryRepositorySet([("central", "https://repo1")])
        repos.add_first("elide", "file:///m2")
        assert repos.names() == ["elide", "central"]

    def test_add_first_replaces_same_name(self):
        repos = InMemoryRepositorySet([("central", "https://repo1")])
        repos.add_first("elide", "file:///a")
        repos.add_first("elide", "file:///b")
        assert repos.names() == ["elide", "central"]
        assert repos.url("elide") == "file:///b"


class TestProject:
    def test_java_plugin_adds_compile_and_doc_steps(self):
        project = InMemoryProject("app", Path("/app"), plugins={"java"})
        assert project.has_plugin("java")
        assert project.tasks.names == ["compileJava", "compileTestJava", "javadoc"]
        assert [t.name for t in project.tasks.find_tasks_of_kind(DocStep)] == ["javadoc"]
        assert project.root_directory == Path("/app")

    def test_plain_project_has_no_tasks(self):
        project = InMemoryProject("app", Path("/app"))
        assert not project.has_plugin("java")
        assert project.tasks.names == []

    def test_applying_java_twice_is_harmless(self):
        project = InMemoryProject("app", Path("/app"), plugins={"java"})
        project.apply_plugin("java")
        assert len(project.tasks.names) == 3
