# tests/conftest.py
"""
Fixtures compartilhados para testes do buildgraph.

Este módulo define fixtures reutilizáveis que fornecem:
- um RunContext determinístico
- um invoker falso que registra chamadas e simula exit codes
- uma fábrica de Tasks que registram a própria execução

Decisões arquiteturais:
    - Fixtures não lançam processos reais (exceto onde o teste pede)
    - Dados retornados são determinísticos e isolados
    - Imports do core são realizados de forma lazy

Limites explícitos:
    - Não substituir testes de integração da CLI
    - Não conter lógica de domínio
"""

from datetime import datetime, timezone

import pytest

from tests.fixtures.invokers import FakeInvoker


@pytest.fixture
def fake_invoker():
    return FakeInvoker()


@pytest.fixture
def dummy_config() -> dict:
    """Configuração mínima já resolvida (sem arquivos)."""
    from buildgraph.core.config.loader import DEFAULT_CONFIG
    import copy

    return copy.deepcopy(DEFAULT_CONFIG)


@pytest.fixture
def dummy_ctx(dummy_config, fake_invoker, tmp_path):
    """
    RunContext determinístico para testes.

    `run_id` e `created_at` são fixos; o ambiente é vazio (fora de CI)
    e os diretórios apontam para `tmp_path`.
    """
    from buildgraph.core.pipeline.context import RunContext

    return RunContext(
        target="Default",
        configuration="Release",
        run_id="run-test-001",
        created_at=datetime(2026, 1, 16, 0, 0, 0, tzinfo=timezone.utc),
        config=dummy_config,
        capabilities=frozenset(),
        environ={},
        source_root=tmp_path,
        artefacts_dir=tmp_path / "artefacts",
        invoker=fake_invoker,
    )


@pytest.fixture
def recorder():
    """
    Fábrica de Tasks que registram a própria execução em `calls`.

    Uso:
        calls, make = recorder
        make("Build", depends_on=["Restore"])
    """
    from buildgraph.core.pipeline.task import task

    calls = []

    def make(name, *, depends_on=(), items=None, guard=None, fail_on=None, exc=None):
        def action(ctx, *item):
            calls.append((name, *item))
            if fail_on is not None and (not item or item[0] == fail_on):
                raise exc or RuntimeError(f"{name} exploded")

        return task(name, description=f"{name} task", depends_on=depends_on, action=action, items=items, guard=guard)

    return calls, make


@pytest.fixture
def project_config_yaml() -> str:
    """YAML de configuração de projeto semelhante ao uso real."""
    return """\
build:
  configuration: Debug
test:
  ignore_failures_on:
    - appveyor
"""
