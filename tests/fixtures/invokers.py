# tests/fixtures/invokers.py
"""Invoker falso compartilhado entre conftest e testes de pipeline."""

from buildgraph.core.exceptions import ProcessFailedError


class FakeInvoker:
    """
    Invoker que não lança processos.

    `exit_codes` mapeia o primeiro argumento (ou o comando, se não houver
    argumentos) para o exit code simulado; o padrão é 0. Falhas respeitam
    o mesmo contrato do ProcessInvoker real, incluindo `ignore_failure_when`.
    """

    def __init__(self, exit_codes=None):
        self.exit_codes = dict(exit_codes or {})
        self.calls = []

    def invoke(self, command, arguments=(), env=None, *, ignore_failure_when=None, cwd=None):
        arguments = [str(a) for a in arguments]
        self.calls.append((command, arguments))
        key = arguments[0] if arguments else command
        code = self.exit_codes.get(key, 0)
        if code == 0:
            return 0
        ignore = ignore_failure_when() if callable(ignore_failure_when) else bool(ignore_failure_when)
        if ignore:
            return code
        raise ProcessFailedError(command, arguments, code)
