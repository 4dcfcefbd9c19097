# src/buildgraph/core/process/invoker.py
"""
Invocação de processos externos.

O `ProcessInvoker` lança um comando como processo filho, aguarda seu
término e devolve o exit code. Um exit code diferente de zero vira
`ProcessFailedError`, exceto quando a própria chamada fornece um
predicado `ignore_failure_when` verdadeiro: nesse caso a falha é apenas
registrada em log.

O override é sempre por chamada, nunca global, para que a leniência
dependente de ambiente fique visível no ponto de uso.

Máquina de estados de uma invocação:
    Pending → Running → {Succeeded, Failed}

Não há retry nem timeout; um watchdog externo é responsabilidade de
quem chama. Reinvocar executa o comando novamente.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from ..exceptions import ProcessFailedError
from ..pipeline.types import InvocationState

logger = logging.getLogger(__name__)

FailurePredicate = Union[bool, Callable[[], bool], None]
Runner = Callable[..., "subprocess.CompletedProcess[Any]"]


@dataclass
class ProcessInvocation:
    """Registro observável de uma invocação."""

    command: str
    arguments: List[str]
    state: InvocationState = InvocationState.PENDING
    exit_code: Optional[int] = None
    ignored: bool = False

    @property
    def command_line(self) -> str:
        return shlex.join([self.command, *self.arguments])


def _should_ignore(predicate: FailurePredicate) -> bool:
    if predicate is None:
        return False
    if callable(predicate):
        return bool(predicate())
    return bool(predicate)


@dataclass
class ProcessInvoker:
    """
    Executor de comandos externos.

    `runner` segue a assinatura de `subprocess.run` e pode ser substituído
    em testes. `history` guarda todas as invocações na ordem em que foram
    feitas.
    """

    runner: Runner = subprocess.run
    cwd: Optional[Path] = None
    base_env: Optional[Mapping[str, str]] = None
    history: List[ProcessInvocation] = field(default_factory=list, init=False)

    def _environment(self, overrides: Optional[Mapping[str, str]]) -> Optional[Dict[str, str]]:
        if overrides is None and self.base_env is None:
            return None
        env = dict(os.environ if self.base_env is None else self.base_env)
        env.update({k: str(v) for k, v in (overrides or {}).items()})
        return env

    def invoke(
        self,
        command: str,
        arguments: Sequence[Any] = (),
        env: Optional[Mapping[str, str]] = None,
        *,
        ignore_failure_when: FailurePredicate = None,
        cwd: Optional[Union[str, Path]] = None,
    ) -> int:
        """
        Executa `command` com `arguments` e devolve o exit code.

        Args:
            command (str): Executável a lançar.
            arguments (Sequence[Any]): Argumentos; convertidos para str.
            env (Optional[Mapping[str, str]]): Variáveis sobrepostas ao ambiente.
            ignore_failure_when (FailurePredicate): Predicado (ou bool) que,
                quando verdadeiro no momento da falha, transforma a falha em
                um warning de log.
            cwd (Optional[Union[str, Path]]): Diretório de trabalho do filho.

        Returns:
            int: Exit code do processo.

        Raises:
            ProcessFailedError: Exit code != 0 sem override ativo, ou falha
                ao iniciar o processo.
        """
        invocation = ProcessInvocation(command=command, arguments=[str(a) for a in arguments])
        self.history.append(invocation)

        workdir = cwd if cwd is not None else self.cwd
        logger.info("$ %s", invocation.command_line)
        invocation.state = InvocationState.RUNNING

        try:
            completed = self.runner(
                [invocation.command, *invocation.arguments],
                cwd=str(workdir) if workdir is not None else None,
                env=self._environment(env),
                check=False,
            )
        except OSError as error:
            invocation.state = InvocationState.FAILED
            raise ProcessFailedError(command, invocation.arguments, None, reason=str(error)) from error

        invocation.exit_code = int(completed.returncode)
        if invocation.exit_code == 0:
            invocation.state = InvocationState.SUCCEEDED
            return 0

        invocation.state = InvocationState.FAILED
        if _should_ignore(ignore_failure_when):
            invocation.ignored = True
            logger.warning(
                "Ignoring failure of '%s' (exit code %s)",
                invocation.command_line,
                invocation.exit_code,
            )
            return invocation.exit_code

        raise ProcessFailedError(command, invocation.arguments, invocation.exit_code)
