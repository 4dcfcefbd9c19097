# tests/test_smoke.py
"""
Teste de sanidade estrutural (smoke test) do buildgraph.

Garante apenas que o pacote importa e expõe a versão; não valida
comportamento de resolução ou execução.
"""


def test_smoke():
    import buildgraph

    assert buildgraph.__version__
