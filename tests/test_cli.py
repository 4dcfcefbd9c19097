# tests/test_cli.py
"""
Testes da CLI: seleção de target, listagem, dry-run e códigos de saída.
"""

import pytest

from buildgraph import cli

PASSING = "tests.fixtures.pipelines:passing"
FAILING = "tests.fixtures.pipelines:failing"
CYCLIC = "tests.fixtures.pipelines:cyclic"


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    # nenhuma sonda real durante os testes
    (tmp_path / "buildgraph.yaml").write_text("capabilities:\n  docker: null\n  dotnet-run: null\n", encoding="utf-8")
    return tmp_path


def test_list_prints_tasks_with_dependencies(capsys):
    rc = cli.main(["--pipeline", PASSING, "--list"], environ={})

    out = capsys.readouterr().out
    assert rc == 0
    assert "Build (depends on: Clean)" in out
    assert "Pretends to build." in out


def test_dry_run_prints_order_without_running(capsys):
    rc = cli.main(["--pipeline", FAILING, "--dry-run"], environ={})

    assert rc == 0
    assert capsys.readouterr().out.split() == ["Clean", "Build", "Test", "Default"]


def test_target_from_environment(capsys):
    rc = cli.main(["--pipeline", PASSING, "--dry-run"], environ={"BUILDGRAPH_TARGET": "Build"})

    assert rc == 0
    assert capsys.readouterr().out.split() == ["Clean", "Build"]


def test_argument_target_wins_over_environment(capsys):
    rc = cli.main(["--pipeline", PASSING, "--dry-run", "-t", "Clean"], environ={"BUILDGRAPH_TARGET": "Build"})

    assert rc == 0
    assert capsys.readouterr().out.split() == ["Clean"]


def test_successful_run_exits_zero(capsys):
    rc = cli.main(["--pipeline", PASSING], environ={})

    assert rc == 0
    assert "Target 'Default' succeeded: Clean, Build, Default" in capsys.readouterr().out


def test_failed_run_reports_task_command_and_exit_code(capsys):
    rc = cli.main(["--pipeline", FAILING], environ={})

    err = capsys.readouterr().err
    assert rc == 1
    assert "task: Build" in err
    assert "exit code: 7" in err
    assert "command:" in err


def test_unknown_target_exits_non_zero(capsys):
    rc = cli.main(["--pipeline", PASSING, "--target", "Publish"], environ={})

    assert rc == 1
    assert "Unknown task: Publish" in capsys.readouterr().err


def test_cycle_exits_non_zero(capsys):
    rc = cli.main(["--pipeline", CYCLIC, "--dry-run"], environ={})

    assert rc == 1
    assert "Cyclic dependency detected" in capsys.readouterr().err


def test_bad_pipeline_spec(capsys):
    rc = cli.main(["--pipeline", "no-colon-here"], environ={})

    assert rc == 1
    assert "module:function" in capsys.readouterr().err


def test_missing_explicit_config_file(capsys, tmp_path):
    rc = cli.main(["--pipeline", PASSING, "--config", str(tmp_path / "nope.yaml")], environ={})

    assert rc == 1
    assert "não encontrado" in capsys.readouterr().err


def test_default_pipeline_lists_dotnet_tasks(capsys):
    rc = cli.main(["--list"], environ={})

    out = capsys.readouterr().out
    assert rc == 0
    for name in ["Clean", "Restore", "Build", "InstallDeveloperCertificate", "Test", "Pack", "Default"]:
        assert name in out


def test_broken_yaml_config_reports_error(capsys, isolated_cwd):
    (isolated_cwd / "buildgraph.yaml").write_text("capabilities: [unclosed\n", encoding="utf-8")

    rc = cli.main(["--list"], environ={})

    err = capsys.readouterr().err
    assert rc == 1
    assert "error: Configuração inválida em" in err
    assert "Traceback" not in err


def test_warnings_are_reported_after_success(capsys):
    rc = cli.main(["--pipeline", "tests.fixtures.pipelines:lenient"], environ={})

    captured = capsys.readouterr()
    assert rc == 0
    assert "warning: [Test] ignored exit code 3" in captured.err
    assert "Target 'Default' succeeded: Test, Default" in captured.out
