# tests/core/process/test_process_invoker.py
"""
Testes do ProcessInvoker com processos reais (`sys.executable -c ...`).

Os testes asseguram que:
- o exit code é devolvido quando zero
- exit code != 0 vira ProcessFailedError com comando, argumentos e código
- o override por chamada transforma a falha em warning
- overrides de ambiente chegam ao processo filho
- o histórico segue a máquina de estados Pending → Running → {Succeeded, Failed}
"""

import logging
import subprocess
import sys

import pytest

from buildgraph.core.exceptions import ProcessFailedError
from buildgraph.core.pipeline.types import InvocationState
from buildgraph.core.process.invoker import ProcessInvoker


def _exit_with(code):
    return ["-c", f"import sys; sys.exit({code})"]


def test_success_returns_zero():
    invoker = ProcessInvoker()

    assert invoker.invoke(sys.executable, _exit_with(0)) == 0
    assert invoker.history[-1].state == InvocationState.SUCCEEDED
    assert invoker.history[-1].exit_code == 0


def test_non_zero_exit_raises_typed_error():
    invoker = ProcessInvoker()

    with pytest.raises(ProcessFailedError) as info:
        invoker.invoke(sys.executable, _exit_with(3))

    err = info.value
    assert err.command == sys.executable
    assert err.arguments == _exit_with(3)
    assert err.exit_code == 3
    assert invoker.history[-1].state == InvocationState.FAILED


def test_override_predicate_logs_and_returns_code(caplog):
    invoker = ProcessInvoker()

    with caplog.at_level(logging.WARNING, logger="buildgraph.core.process.invoker"):
        code = invoker.invoke(sys.executable, _exit_with(2), ignore_failure_when=lambda: True)

    assert code == 2
    assert invoker.history[-1].ignored is True
    assert invoker.history[-1].state == InvocationState.FAILED
    assert "Ignoring failure" in caplog.text


def test_override_predicate_false_still_raises():
    invoker = ProcessInvoker()

    with pytest.raises(ProcessFailedError):
        invoker.invoke(sys.executable, _exit_with(1), ignore_failure_when=lambda: False)


def test_override_accepts_plain_bool():
    assert ProcessInvoker().invoke(sys.executable, _exit_with(5), ignore_failure_when=True) == 5


def test_environment_overrides_reach_child(tmp_path):
    script = "import os, sys; sys.exit(0 if os.environ.get('BUILDGRAPH_PROBE') == 'yes' else 9)"

    assert ProcessInvoker().invoke(sys.executable, ["-c", script], {"BUILDGRAPH_PROBE": "yes"}) == 0
    with pytest.raises(ProcessFailedError):
        ProcessInvoker().invoke(sys.executable, ["-c", script])


def test_working_directory(tmp_path):
    marker = tmp_path / "marker.txt"
    marker.write_text("x", encoding="utf-8")
    script = "import os, sys; sys.exit(0 if os.path.exists('marker.txt') else 4)"

    assert ProcessInvoker().invoke(sys.executable, ["-c", script], cwd=tmp_path) == 0


def test_missing_executable_raises_with_no_exit_code():
    invoker = ProcessInvoker()

    with pytest.raises(ProcessFailedError) as info:
        invoker.invoke("buildgraph-definitely-not-a-command-xyz")

    assert info.value.exit_code is None
    assert "failed to start" in str(info.value)
    assert invoker.history[-1].state == InvocationState.FAILED


def test_reinvoking_reruns_the_command(tmp_path):
    counter = tmp_path / "count.txt"
    script = (
        "import pathlib; p = pathlib.Path(r'%s'); "
        "p.write_text(str(int(p.read_text()) + 1) if p.exists() else '1')" % counter
    )
    invoker = ProcessInvoker()

    invoker.invoke(sys.executable, ["-c", script])
    invoker.invoke(sys.executable, ["-c", script])

    assert counter.read_text() == "2"
    assert len(invoker.history) == 2


def test_custom_runner_receives_command_line():
    seen = []

    def runner(args, **kwargs):
        seen.append((args, kwargs["check"]))
        return subprocess.CompletedProcess(args, 0)

    invoker = ProcessInvoker(runner=runner)
    invoker.invoke("dotnet", ["build", "--configuration", "Release"])

    assert seen == [(["dotnet", "build", "--configuration", "Release"], False)]
    assert invoker.history[0].command_line == "dotnet build --configuration Release"
