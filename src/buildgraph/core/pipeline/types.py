# src/buildgraph/core/pipeline/types.py
"""
Tipos canônicos do pipeline do buildgraph.

Componentes principais:
    - TaskStatus      → enum de estados finais (SUCCESS, SKIPPED, FAILED)
    - TaskResult      → estrutura imutável de resultado de execução
    - InvocationState → máquina de estados de uma invocação de processo

Princípios fundamentais:
    - Tipos são estáveis e serializáveis
    - Nenhuma lógica de execução vive neste módulo

Limites explícitos:
    - Não executa Tasks
    - Não resolve dependências
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class TaskStatus(str, Enum):
    """
    Estados finais possíveis da execução de uma Task.

    Estados definidos:
        - SUCCESS: ação executada sem erro
        - SKIPPED: ação pulada porque o guard avaliou falso
        - FAILED: ação interrompida por erro

    Decisões arquiteturais:
        - O status é um valor final, não transitório
        - Uma Task SKIPPED conta como concluída para seus dependentes
    """

    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


class InvocationState(str, Enum):
    """Estados de uma invocação: Pending → Running → {Succeeded, Failed}."""

    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class TaskResult:
    """
    Resultado imutável da execução de uma Task.

    Campos:
        - task: nome da Task
        - status: estado final
        - summary: resumo textual
        - items: quantidade de itens de iteração efetivamente executados
        - duration_ms: duração da ação em milissegundos
        - error: payload serializável do erro (apenas quando FAILED)
    """

    task: str
    status: TaskStatus
    summary: str
    items: int = 0
    duration_ms: int = 0
    error: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "task": self.task,
            "status": self.status.value,
            "summary": self.summary,
            "items": self.items,
            "duration_ms": self.duration_ms,
            "error": dict(self.error) if self.error is not None else None,
        }
