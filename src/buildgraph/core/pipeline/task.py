# src/buildgraph/core/pipeline/task.py
"""
Contrato canônico de Task do buildgraph.

Uma Task é a menor unidade nomeada do grafo de build. Ela declara:
    - `name`: identificador único (chave do grafo)
    - `description`: texto livre, sem efeito semântico
    - `dependencies`: Tasks que precisam concluir antes desta
    - `action`: unidade de trabalho, `action(ctx)` ou `action(ctx, item)`
    - `items`: fonte de iteração opcional e preguiçosa
    - `guard`: predicado opcional que decide se a ação executa

Princípios fundamentais:
    - Tasks são registros imutáveis (frozen dataclass)
    - Tasks não conhecem o Engine nem o resolver
    - A comunicação com o mundo externo passa pelo RunContext

Invariantes:
    - `dependencies` não contém duplicatas (a primeira ocorrência vence)
    - A ação executa no máximo uma vez por run (ou uma vez por item)

Limites explícitos:
    - Não valida unicidade de nomes (responsabilidade do registry)
    - Não detecta ciclos (responsabilidade do resolver)
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, Tuple

from ..exceptions import InvalidTaskError
from .context import RunContext

Action = Callable[..., Any]
Guard = Callable[[RunContext], bool]
ItemSource = Callable[[], Iterable[Any]]


@dataclass(frozen=True)
class Task:
    """
    Definição imutável de uma Task.

    Quando `items` está presente, a ação recebe `(ctx, item)` e executa uma
    vez por item, na ordem produzida pela fonte. Caso contrário recebe apenas
    `(ctx)`. Uma Task sem ação é um nó de agregação (ex.: `Default`).

    `items` é uma *fábrica* (callable sem argumentos): a fonte só é avaliada
    quando o Engine alcança a Task, nunca no momento do registro.
    """

    name: str
    description: str = ""
    dependencies: Tuple[str, ...] = ()
    action: Optional[Action] = None
    items: Optional[ItemSource] = None
    guard: Optional[Guard] = None

    @property
    def iterates(self) -> bool:
        return self.items is not None

    def is_enabled(self, ctx: RunContext) -> bool:
        """Avalia o guard; ausência de guard equivale a verdadeiro."""
        if self.guard is None:
            return True
        return bool(self.guard(ctx))


def _unique(names: Iterable[str]) -> Tuple[str, ...]:
    seen = set()
    ordered = []
    for name in names:
        if name not in seen:
            seen.add(name)
            ordered.append(name)
    return tuple(ordered)


def task(
    name: str,
    *,
    description: str = "",
    depends_on: Iterable[str] = (),
    action: Optional[Action] = None,
    items: Optional[ItemSource] = None,
    guard: Optional[Guard] = None,
) -> Task:
    """
    Builder explícito de Task.

    Normaliza `depends_on` para uma tupla ordenada e sem duplicatas e
    produz o registro imutável. Se `items` for passado como uma sequência
    concreta (lista, tupla), ele é embrulhado em uma fábrica para manter o
    contrato preguiçoso de `Task.items`. Iteradores de uso único (ex.:
    geradores) são rejeitados: seriam consumidos no registro.

    Args:
        name (str): Nome único da Task.
        description (str): Descrição para listagem.
        depends_on (Iterable[str]): Nomes das dependências, em ordem.
        action (Optional[Action]): `action(ctx)` ou `action(ctx, item)`.
        items (Optional[ItemSource]): Fonte de iteração.
        guard (Optional[Guard]): Predicado `guard(ctx) -> bool`.

    Returns:
        Task: Definição imutável pronta para registro.

    Raises:
        InvalidTaskError: Se `items` não for callable nem sequência.
    """
    if isinstance(depends_on, str):
        depends_on = (depends_on,)

    source = items
    if items is not None and not callable(items):
        if not isinstance(items, Sequence) or isinstance(items, str):
            raise InvalidTaskError(
                f"Task '{name}': items must be a callable or a sequence, got {type(items).__name__}",
                details={"task": name},
                hint="wrap one-shot iterators in a function so they are read when the task runs",
            )
        snapshot = tuple(items)

        def source() -> Iterable[Any]:
            return snapshot

    return Task(
        name=name,
        description=description,
        dependencies=_unique(depends_on),
        action=action,
        items=source,
        guard=guard,
    )
