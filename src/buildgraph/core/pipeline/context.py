# src/buildgraph/core/pipeline/context.py
"""
Contexto de execução de uma run do buildgraph.

Este módulo define o `RunContext`, a estrutura passada a toda ação de Task.
Ele substitui qualquer estado global de build: target, configuração de
build, capabilities detectadas, configuração resolvida e o invoker de
processos vivem aqui, isolados por run.

Responsabilidades do módulo:
    - Manter identidade e metadados da execução
    - Expor settings resolvidos (target, configuration, diretórios)
    - Expor capabilities detectadas e o ambiente do processo
    - Registrar eventos de log estruturados
    - Coletar warnings por Task

Invariantes:
    - Logs sempre incluem `run_id` e `task`
    - Warnings são agrupados por nome de Task
    - Cada run possui o seu próprio RunContext

Limites explícitos:
    - Não executa Tasks
    - Não resolve dependências
    - Não persiste dados automaticamente
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, Optional

from ..environment import detect_ci_host


def new_run_id() -> str:
    return f"run-{uuid.uuid4().hex[:12]}"


@dataclass
class RunContext:
    """
    Contexto de execução de uma run.

    O `invoker` é tipicamente um `ProcessInvoker`; ações o utilizam para
    delegar trabalho a processos externos. `environ` é o snapshot do
    ambiente usado para decisões dependentes de host (ex.: CI).
    """

    target: str
    configuration: str
    run_id: str = field(default_factory=new_run_id)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    config: Dict[str, Any] = field(default_factory=dict)
    capabilities: FrozenSet[str] = frozenset()
    environ: Dict[str, str] = field(default_factory=dict)
    source_root: Path = field(default_factory=Path.cwd)
    artefacts_dir: Path = field(default_factory=lambda: Path("artefacts"))
    invoker: Optional[Any] = None

    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    # -----------------------------
    # Ambiente
    # -----------------------------

    def has_capability(self, name: str) -> bool:
        return name in self.capabilities

    @property
    def ci_host(self) -> Optional[str]:
        return detect_ci_host(self.environ)

    def is_running_on(self, *hosts: str) -> bool:
        """Verdadeiro quando a run executa em um dos hosts de CI informados."""
        host = self.ci_host
        return host is not None and host in {h.lower() for h in hosts}

    # -----------------------------
    # Logging & warnings
    # -----------------------------

    def log(self, *, task: Optional[str], level: str, message: str, **extra: Any) -> None:
        event = {
            "run_id": self.run_id,
            "task": task,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, task: str, message: str) -> None:
        if task not in self.warnings:
            self.warnings[task] = []
        self.warnings[task].append(message)
