# src/buildgraph/core/engine/engine.py
"""
Engine de execução do buildgraph.

O Engine resolve a ordem completa do target antes de qualquer efeito
colateral e depois executa cada Task, uma por vez:

    1. avalia o guard (padrão: verdadeiro) quando a Task é alcançada
    2. guard falso → SKIPPED; a Task conta como concluída
    3. guard verdadeiro → executa a ação uma vez, ou uma vez por item
    4. a primeira falha encerra a run: nenhuma outra Task ou item executa

A falha é propagada como `TaskExecutionError`, com o nome da Task de
origem, a exceção original e o `RunResult` parcial.

Cada chamada a `run()` começa com um conjunto "done" novo; o registry
é reaproveitado, sem memoização entre runs.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..errors import exception_to_error
from ..exceptions import TaskExecutionError
from ..pipeline.context import RunContext
from ..pipeline.registry import TaskRegistry
from ..pipeline.task import Task
from ..pipeline.types import TaskResult, TaskStatus
from .resolver import resolve

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunResult:
    """Resultado agregado de uma run.

    `executed` lista, em ordem, as Tasks cuja ação concluiu com sucesso
    (nós de agregação sem ação também contam). Tasks puladas pelo guard
    aparecem apenas em `results`.
    """

    target: str
    order: List[str] = field(default_factory=list)
    executed: List[str] = field(default_factory=list)
    results: Dict[str, TaskResult] = field(default_factory=dict)

    @property
    def failed_task(self) -> Optional[str]:
        for name, result in self.results.items():
            if result.status == TaskStatus.FAILED:
                return name
        return None

    @property
    def succeeded(self) -> bool:
        return self.failed_task is None and len(self.results) == len(self.order)

    def summary(self) -> Dict[str, Any]:
        return {
            "target": self.target,
            "succeeded": self.succeeded,
            "order": list(self.order),
            "executed": list(self.executed),
            "tasks": {name: r.to_dict() for name, r in self.results.items()},
        }


def _elapsed_ms(started: float) -> int:
    return max(0, int((time.monotonic() - started) * 1000))


class Engine:
    """Engine canônico do buildgraph (resolver + executor)."""

    def __init__(self, *, registry: TaskRegistry, ctx: RunContext):
        self.registry = registry
        self.ctx = ctx

    def _emit(self, level: int, task: Optional[str], message: str, **extra: Any) -> None:
        self.ctx.log(task=task, level=logging.getLevelName(level), message=message, **extra)
        logger.log(level, message)

    def _execute(self, task: Task) -> Tuple[TaskStatus, int]:
        if not task.is_enabled(self.ctx):
            return TaskStatus.SKIPPED, 0

        if task.action is None:
            return TaskStatus.SUCCESS, 0

        if not task.iterates:
            task.action(self.ctx)
            return TaskStatus.SUCCESS, 0

        # Um único snapshot da fonte por run.
        items = tuple(task.items())
        self._emit(logging.DEBUG, task.name, f"{task.name}: {len(items)} item(s)", event="task_items")
        for index, item in enumerate(items):
            self._execute_item(task, item, index)
        return TaskStatus.SUCCESS, len(items)

    def _execute_item(self, task: Task, item: Any, index: int) -> None:
        self._emit(logging.INFO, task.name, f"{task.name} [{item}]", event="item_started", index=index)
        try:
            task.action(self.ctx, item)
        except Exception as exc:
            exc.add_note(f"while processing item {index}: {item}")
            raise

    def run(self, target: Optional[str] = None) -> RunResult:
        target = target or self.ctx.target
        order = resolve(self.registry, target)

        results: Dict[str, TaskResult] = {}
        executed: List[str] = []
        run_started = time.monotonic()
        self._emit(logging.INFO, None, f"Running target '{target}': {' -> '.join(order)}", event="run_started")

        for name in order:
            task = self.registry.lookup(name)
            started = time.monotonic()
            self._emit(logging.INFO, name, f"Task {name} started", event="task_started")

            try:
                status, items = self._execute(task)
            except Exception as exc:
                error = exception_to_error(exc)
                results[name] = TaskResult(
                    task=name,
                    status=TaskStatus.FAILED,
                    summary=error.message,
                    duration_ms=_elapsed_ms(started),
                    error=error.to_dict(),
                )
                self._emit(logging.ERROR, name, f"Task {name} failed: {error.message}", event="task_failed")
                partial = RunResult(target=target, order=order, executed=executed, results=results)
                raise TaskExecutionError(name, exc, partial) from exc

            if status == TaskStatus.SKIPPED:
                results[name] = TaskResult(task=name, status=status, summary="skipped by guard")
                self._emit(logging.INFO, name, f"Task {name} skipped", event="task_skipped")
                continue

            results[name] = TaskResult(
                task=name,
                status=status,
                summary="ok",
                items=items,
                duration_ms=_elapsed_ms(started),
            )
            executed.append(name)
            self._emit(logging.INFO, name, f"Task {name} finished", event="task_finished")

        self._emit(
            logging.INFO,
            None,
            f"Target '{target}' succeeded ({len(executed)} task(s) executed)",
            event="run_finished",
            duration_ms=_elapsed_ms(run_started),
        )
        return RunResult(target=target, order=order, executed=executed, results=results)
