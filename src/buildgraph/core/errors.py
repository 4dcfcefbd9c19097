"""
buildgraph — Canonical Error Structures (v1)

Este módulo define o payload canônico de erros do buildgraph.

Erros fazem parte do contrato operacional do sistema e devem ser:
- explícitos
- serializáveis
- rastreáveis
- acionáveis

O payload é usado em `TaskResult.error` e pela CLI ao reportar falhas.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from .exceptions import (
    BuildGraphException,
    CyclicDependencyError,
    DiscoveryMismatchError,
    DuplicateTaskError,
    InvalidTaskError,
    ProcessFailedError,
    TaskExecutionError,
    UnknownTaskError,
)


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BuildErrorPayload:
    """
    Payload canônico de erro do buildgraph.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Grafo / Configuração
TASK_DUPLICATE = "TASK_DUPLICATE"
TASK_UNKNOWN = "TASK_UNKNOWN"
TASK_INVALID = "TASK_INVALID"
GRAPH_CYCLE = "GRAPH_CYCLE"

# Execução
PROCESS_FAILED = "PROCESS_FAILED"
DISCOVERY_MISMATCH = "DISCOVERY_MISMATCH"
ENGINE_EXECUTION_ERROR = "ENGINE_EXECUTION_ERROR"

_TYPE_BY_CLASS = (
    (DuplicateTaskError, TASK_DUPLICATE),
    (UnknownTaskError, TASK_UNKNOWN),
    (InvalidTaskError, TASK_INVALID),
    (CyclicDependencyError, GRAPH_CYCLE),
    (ProcessFailedError, PROCESS_FAILED),
    (DiscoveryMismatchError, DISCOVERY_MISMATCH),
)


def exception_to_error(exc: BaseException) -> BuildErrorPayload:
    """Converte exceções em BuildErrorPayload (serializável, acionável).

    Regras:
    - TaskExecutionError: desembrulha a causa e anota o nome da Task.
    - BuildGraphException: já vem com message/details/hint.
    - Outras exceções: encapsular como ENGINE_EXECUTION_ERROR sem stack trace.
    """
    if isinstance(exc, TaskExecutionError):
        inner = exception_to_error(exc.cause)
        details = dict(inner.details)
        details.setdefault("task", exc.task)
        return BuildErrorPayload(
            type=inner.type,
            message=inner.message,
            details=details,
            hint=inner.hint,
        )

    if isinstance(exc, BuildGraphException):
        code = next(
            (code for cls, code in _TYPE_BY_CLASS if isinstance(exc, cls)),
            exc.__class__.__name__,
        )
        return BuildErrorPayload(
            type=code,
            message=exc.message or "Erro de execução",
            details=dict(exc.details),
            hint=exc.hint,
        )

    # Fallback genérico
    return BuildErrorPayload(
        type=ENGINE_EXECUTION_ERROR,
        message=str(exc) or "Erro inesperado durante execução",
        details={"exception_class": exc.__class__.__name__},
        hint="Verifique o log técnico e a definição da Task",
    )
