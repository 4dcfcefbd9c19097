# src/buildgraph/core/exceptions.py
"""
buildgraph — Exceções canônicas (v1)

Este módulo define as exceções tipadas do buildgraph.

Objetivo:
- Permitir que Tasks/Engine levantem exceções semânticas tipadas
- Facilitar o mapeamento determinístico para BuildErrorPayload
- Separar erros de configuração (grafo) de erros de execução (processos)

Taxonomia:
- TaskGraphError: erros estruturais detectados antes de qualquer ação
    - DuplicateTaskError
    - UnknownTaskError
    - CyclicDependencyError
    - InvalidTaskError
- ProcessFailedError: comando externo terminou com exit code != 0
- DiscoveryMismatchError: zero ou múltiplos arquivos onde se esperava um
- TaskExecutionError: envelope levantado pelo Engine com o nome da Task

Regras:
- Exceções carregam apenas dados estruturados (serializáveis) em `details`.
- Mensagens são curtas e humanas.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence


class BuildGraphException(Exception):
    """Base class para exceções internas do buildgraph.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Não embedar stack trace em payloads de erro
    - Mensagem deve ser curta e humana
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[Dict[str, Any]] = None,
        hint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = dict(details or {})
        self.hint = hint

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Grafo de Tasks (configuração)
# ---------------------------------------------------------------------------


class TaskGraphError(BuildGraphException):
    """Violação estrutural do grafo; sempre detectada antes de qualquer ação."""


class InvalidTaskError(TaskGraphError):
    """Definição de Task inválida (ex.: nome vazio)."""


class DuplicateTaskError(TaskGraphError):
    """
    Exceção levantada ao registrar duas Tasks com o mesmo nome.

    Decisões arquiteturais:
        - Nomes de Task são a chave do grafo e devem ser únicos
        - A duplicidade é detectada no momento do registro

    Limites explícitos:
        - Não tenta renomear ou substituir a Task existente
    """

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Duplicate task name: {name}",
            details={"task": name},
            hint="Renomeie uma das Tasks ou remova o registro duplicado.",
        )
        self.name = name


class UnknownTaskError(TaskGraphError):
    """
    Exceção levantada quando um target ou dependência referencia
    uma Task inexistente no registry.

    `referenced_by` é None quando o nome desconhecido é o próprio target.
    """

    def __init__(self, name: str, *, referenced_by: Optional[str] = None) -> None:
        if referenced_by is None:
            message = f"Unknown task: {name}"
        else:
            message = f"Task '{referenced_by}' depends on unknown task '{name}'"
        super().__init__(
            message,
            details={"task": name, "referenced_by": referenced_by},
            hint="Verifique o nome solicitado ou registre a Task ausente.",
        )
        self.name = name
        self.referenced_by = referenced_by


class CyclicDependencyError(TaskGraphError):
    """
    Exceção levantada quando o grafo de dependências contém um ciclo.

    O atributo `cycle` contém o caminho fechado, com a primeira Task
    repetida no final (ex.: ["A", "B", "A"]).
    """

    def __init__(self, cycle: Sequence[str]) -> None:
        self.cycle: List[str] = list(cycle)
        super().__init__(
            f"Cyclic dependency detected: {' -> '.join(self.cycle)}",
            details={"cycle": list(self.cycle)},
            hint="Remova uma das dependências do ciclo.",
        )


# ---------------------------------------------------------------------------
# Execução
# ---------------------------------------------------------------------------


class ProcessFailedError(BuildGraphException):
    """
    Comando externo terminou com exit code diferente de zero.

    `exit_code` é None quando o processo nem chegou a iniciar
    (executável ausente, permissão negada, ...).
    """

    def __init__(
        self,
        command: str,
        arguments: Sequence[str] = (),
        exit_code: Optional[int] = None,
        *,
        reason: Optional[str] = None,
    ) -> None:
        self.command = command
        self.arguments: List[str] = [str(a) for a in arguments]
        self.exit_code = exit_code
        if exit_code is None:
            message = f"Process '{command}' failed to start: {reason or 'unknown error'}"
        else:
            message = f"Process '{command}' exited with code {exit_code}"
        super().__init__(
            message,
            details={
                "command": command,
                "arguments": list(self.arguments),
                "exit_code": exit_code,
                "reason": reason,
            },
            hint="Inspecione a saída do comando acima para diagnosticar a falha.",
        )


class DiscoveryMismatchError(BuildGraphException):
    """Esperava-se exatamente um arquivo correspondente ao padrão."""

    def __init__(self, pattern: str, matches: Sequence[Any], *, root: Optional[str] = None) -> None:
        self.pattern = pattern
        self.matches: List[str] = [str(m) for m in matches]
        super().__init__(
            f"Expected exactly one file matching '{pattern}', found {len(self.matches)}",
            details={"pattern": pattern, "root": root, "matches": list(self.matches)},
            hint="Ajuste o padrão de busca para selecionar um único arquivo.",
        )


class TaskExecutionError(BuildGraphException):
    """
    Envelope levantado pelo Engine quando a ação de uma Task falha.

    Carrega o nome da Task de origem, a exceção original (`cause`, também
    encadeada em `__cause__`) e o RunResult parcial da run interrompida.
    """

    def __init__(self, task: str, cause: BaseException, result: Any = None) -> None:
        self.task = task
        self.cause = cause
        self.result = result
        super().__init__(
            f"Task '{task}' failed: {cause}",
            details={"task": task, "exception_class": cause.__class__.__name__},
            hint=getattr(cause, "hint", None),
        )
