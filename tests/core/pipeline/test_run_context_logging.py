# tests/core/pipeline/test_run_context_logging.py
"""
Testes de logging estruturado, warnings e detecção de host no RunContext.

Invariantes:
    - Todo evento carrega `run_id` e `task`
    - Warnings são agrupados por Task
"""

from buildgraph.core.pipeline.context import RunContext


def test_log_includes_run_id_and_task(dummy_ctx):
    dummy_ctx.log(task="Build", level="INFO", message="hello", extra_key=1)

    event = dummy_ctx.events[-1]
    assert event["run_id"] == "run-test-001"
    assert event["task"] == "Build"
    assert event["level"] == "INFO"
    assert event["message"] == "hello"
    assert event["extra_key"] == 1
    assert "timestamp" in event


def test_warnings_grouped_by_task(dummy_ctx):
    dummy_ctx.add_warning(task="Test", message="flaky")
    dummy_ctx.add_warning(task="Test", message="slow")
    dummy_ctx.add_warning(task="Pack", message="no symbols")

    assert dummy_ctx.warnings == {"Test": ["flaky", "slow"], "Pack": ["no symbols"]}


def test_ci_host_detection():
    ctx = RunContext(target="Default", configuration="Debug", environ={"APPVEYOR": "True", "CI": "true"})

    assert ctx.ci_host == "appveyor"
    assert ctx.is_running_on("AppVeyor", "github")
    assert not ctx.is_running_on("github")


def test_outside_ci_no_host_matches():
    ctx = RunContext(target="Default", configuration="Debug", environ={"CI": "false"})

    assert ctx.ci_host is None
    assert not ctx.is_running_on("generic")


def test_each_context_gets_its_own_run_id():
    a = RunContext(target="Default", configuration="Debug")
    b = RunContext(target="Default", configuration="Debug")

    assert a.run_id != b.run_id
    assert a.events is not b.events


def test_has_capability(dummy_ctx):
    ctx = RunContext(target="Default", configuration="Debug", capabilities=frozenset({"docker"}))

    assert ctx.has_capability("docker")
    assert not ctx.has_capability("dotnet-run")
    assert not dummy_ctx.has_capability("docker")
