# src/buildgraph/core/pipeline/__init__.py
"""
# Pipeline Core — buildgraph

Este pacote define os **contratos canônicos** e as **estruturas fundamentais**
de um grafo de build.

Um build é modelado como um **grafo explícito de Tasks**, onde:
- cada Task declara nome, descrição e dependências
- a execução é coordenada exclusivamente pelo Engine
- o estado de uma run é mediado pelo `RunContext`

## Componentes

- **types**
  - `TaskStatus`: estados finais de execução
  - `TaskResult`: resultado imutável da execução de uma Task
  - `InvocationState`: estados de uma invocação de processo

- **task**
  - `Task`: registro imutável de definição
  - `task(...)`: builder explícito

- **context**
  - `RunContext`: contexto de execução de uma run (settings, capabilities, logs)

- **registry**
  - `TaskRegistry`: unicidade de nomes e lookup tipado

## Invariantes

- Cada Task possui um nome único no registry
- Tasks são imutáveis após o registro
- Estado de execução nunca é global: vive no RunContext de uma run
"""

from .context import RunContext
from .registry import TaskRegistry
from .task import Task, task
from .types import InvocationState, TaskResult, TaskStatus

__all__ = [
    "InvocationState",
    "RunContext",
    "Task",
    "TaskRegistry",
    "TaskResult",
    "TaskStatus",
    "task",
]
