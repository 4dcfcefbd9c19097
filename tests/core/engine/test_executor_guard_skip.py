# tests/core/engine/test_executor_guard_skip.py
"""
Testes de execução condicional (guards).

Um guard falso pula a ação da Task, mas ela conta como concluída:
suas dependências executam e seus dependentes não são afetados.
"""

from buildgraph.core.engine.engine import Engine
from buildgraph.core.pipeline.registry import TaskRegistry
from buildgraph.core.pipeline.types import TaskStatus


def test_guard_false_skips_action_but_runs_dependencies(dummy_ctx, recorder):
    calls, make = recorder
    reg = TaskRegistry.from_tasks(
        [
            make("Build"),
            make("InstallCertificate", depends_on=["Build"], guard=lambda ctx: False),
            make("Test", depends_on=["InstallCertificate"]),
        ]
    )

    result = Engine(registry=reg, ctx=dummy_ctx).run("Test")

    assert [c[0] for c in calls] == ["Build", "Test"]
    assert result.executed == ["Build", "Test"]
    assert result.results["InstallCertificate"].status == TaskStatus.SKIPPED
    assert result.succeeded


def test_guard_sees_run_context(dummy_ctx, recorder):
    calls, make = recorder
    reg = TaskRegistry.from_tasks(
        [
            make("Debug", guard=lambda ctx: ctx.configuration == "Debug"),
            make("Release", guard=lambda ctx: ctx.configuration == "Release"),
            make("Default", depends_on=["Debug", "Release"]),
        ]
    )

    Engine(registry=reg, ctx=dummy_ctx).run("Default")

    assert [c[0] for c in calls] == ["Release", "Default"]


def test_guard_is_evaluated_when_task_is_reached(dummy_ctx, recorder):
    calls, make = recorder
    reg = TaskRegistry.from_tasks(
        [
            make("Detect"),
            make("UsesDetection", depends_on=["Detect"], guard=lambda ctx: ("Detect",) in calls),
        ]
    )

    result = Engine(registry=reg, ctx=dummy_ctx).run("UsesDetection")

    assert result.executed == ["Detect", "UsesDetection"]


def test_skip_event_is_logged(dummy_ctx, recorder):
    _, make = recorder
    reg = TaskRegistry.from_tasks([make("Optional", guard=lambda ctx: False)])

    Engine(registry=reg, ctx=dummy_ctx).run("Optional")

    assert [e.get("event") for e in dummy_ctx.events if e["task"] == "Optional"] == [
        "task_started",
        "task_skipped",
    ]
