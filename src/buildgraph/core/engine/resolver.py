# src/buildgraph/core/engine/resolver.py
"""
Resolver de dependências do buildgraph.

Este módulo transforma um *target* em uma sequência linear e sem
duplicatas de nomes de Task, pronta para execução pelo Engine.

Algoritmo:
    - busca em profundidade a partir do target
    - cada dependência é visitada (em ordem de declaração) antes de emitir
      a Task corrente
    - um caminho "visiting" detecta ciclos e permite nomeá-los
    - um conjunto "done" evita reemissão e re-travessia

A travessia é iterativa (pilha explícita), então grafos profundos não
esbarram no limite de recursão do interpretador.

Invariantes:
    - Nenhuma Task aparece antes de suas dependências transitivas
    - Nenhum nome aparece duas vezes (a primeira visita vence)
    - A mesma definição e o mesmo target produzem sempre a mesma ordem
    - Toda a ordem é resolvida antes de qualquer ação executar

Limites explícitos:
    - Não executa Tasks
    - Não avalia guards
    - Não interage com RunContext
"""

from __future__ import annotations

from typing import Iterator, List, Set, Tuple

from ..exceptions import CyclicDependencyError, UnknownTaskError
from ..pipeline.registry import TaskRegistry
from ..pipeline.task import Task


def resolve(registry: TaskRegistry, target: str) -> List[str]:
    """
    Produz a ordem de execução para `target`.

    Args:
        registry (TaskRegistry): Registro de Tasks da invocação.
        target (str): Nome da Task solicitada.

    Returns:
        List[str]: Nomes em ordem topológica, terminando em `target`.

    Raises:
        UnknownTaskError: Se o target ou alguma dependência não existir.
        CyclicDependencyError: Se houver ciclo alcançável a partir do target.
    """
    root = registry.lookup(target)

    order: List[str] = []
    done: Set[str] = set()
    path: List[str] = [target]
    on_path: Set[str] = {target}
    stack: List[Tuple[str, Iterator[str]]] = [(target, iter(root.dependencies))]

    while stack:
        name, pending = stack[-1]
        descended = False

        for dep in pending:
            if dep in done:
                continue
            if dep in on_path:
                start = path.index(dep)
                raise CyclicDependencyError(path[start:] + [dep])
            if dep not in registry:
                raise UnknownTaskError(dep, referenced_by=name)

            child = registry.lookup(dep)
            stack.append((dep, iter(child.dependencies)))
            path.append(dep)
            on_path.add(dep)
            descended = True
            break

        if descended:
            continue

        stack.pop()
        path.pop()
        on_path.discard(name)
        done.add(name)
        order.append(name)

    return order


def plan(registry: TaskRegistry, target: str) -> List[Task]:
    """Como `resolve`, mas retorna as definições de Task."""
    return [registry.lookup(name) for name in resolve(registry, target)]


def validate(registry: TaskRegistry) -> None:
    """Resolve todas as Tasks registradas, levantando o primeiro erro estrutural."""
    for name in registry.names():
        resolve(registry, name)
