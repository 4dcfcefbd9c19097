# src/buildgraph/core/pipeline/registry.py
"""
Registro estrutural de Tasks do buildgraph.

Este módulo define o `TaskRegistry`, o mapa tipado nome → Task usado pelo
resolver e pelo Engine. Toda busca por nome passa por aqui; não existe
despacho dinâmico por reflexão.

Responsabilidades do módulo:
    - Validar unicidade e formato do nome de cada Task
    - Preservar a ordem de registro
    - Expor lookup tipado com erro explícito para nomes desconhecidos

Decisões arquiteturais:
    - O registry é write-once, read-many: não há remoção
    - Erros estruturais são detectados no registro, antes de qualquer run
    - A ordem de registro é mantida separadamente do armazenamento

Limites explícitos:
    - Não resolve dependências (não é resolver)
    - Não executa Tasks
    - Não valida se dependências existem (isso ocorre na resolução)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List

from ..exceptions import DuplicateTaskError, InvalidTaskError, UnknownTaskError
from .task import Task


@dataclass
class TaskRegistry:
    """
    Registro canônico de Tasks.

    Invariantes:
        - Cada nome é único no registry
        - `list()` reflete exatamente a ordem de registro
        - Apenas Tasks com nome não vazio são aceitas
    """

    _tasks: Dict[str, Task] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)

    @classmethod
    def from_tasks(cls, tasks: Iterable[Task]) -> "TaskRegistry":
        registry = cls()
        for t in tasks:
            registry.register(t)
        return registry

    def register(self, task: Task) -> Task:
        name = getattr(task, "name", None)
        if not isinstance(name, str) or not name.strip():
            raise InvalidTaskError("task.name must be a non-empty string", details={"task": name})
        if name in self._tasks:
            raise DuplicateTaskError(name)
        self._tasks[name] = task
        self._order.append(name)
        return task

    def lookup(self, name: str) -> Task:
        try:
            return self._tasks[name]
        except KeyError:
            raise UnknownTaskError(name) from None

    def names(self) -> List[str]:
        return list(self._order)

    def list(self) -> List[Task]:
        return [self._tasks[name] for name in self._order]

    def __contains__(self, name: object) -> bool:
        return name in self._tasks

    def __len__(self) -> int:
        return len(self._order)

    def __iter__(self) -> Iterator[Task]:
        return iter(self.list())
