# src/buildgraph/core/engine/__init__.py
"""
Engine do buildgraph.

Este pacote contém a implementação responsável por **resolver** e
**executar** targets:

Componentes principais:
    - resolver → busca em profundidade determinística, detecção de ciclos
      e de dependências desconhecidas
    - engine   → execução sequencial com guards, iteração e fail-fast

Princípios fundamentais:
    - Resolução e execução são responsabilidades separadas
    - Toda a ordem é resolvida antes do primeiro efeito colateral
    - A primeira falha encerra a run; não há retry nem rollback

Invariantes:
    - Tasks só executam após suas dependências
    - Cada Task executa no máximo uma vez por run
"""

from .engine import Engine, RunResult
from .resolver import plan, resolve, validate

__all__ = ["Engine", "RunResult", "plan", "resolve", "validate"]
