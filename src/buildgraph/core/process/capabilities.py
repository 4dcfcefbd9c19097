# src/buildgraph/core/process/capabilities.py
"""
Detecção de capabilities do ambiente.

Uma capability (ex.: "docker") é verdadeira quando o comando de sonda
termina com sucesso. Qualquer outro desfecho (exit code != 0, executável
ausente, exceção inesperada) degrada para "ausente": a detecção nunca
interrompe a run.
"""

from __future__ import annotations

import logging
from typing import Any, FrozenSet, Mapping, Sequence, Tuple

logger = logging.getLogger(__name__)

Probe = Tuple[str, Sequence[Any]]


def probe_capability(invoker: Any, command: str, arguments: Sequence[Any] = ()) -> bool:
    try:
        return invoker.invoke(command, arguments) == 0
    except Exception as exc:  # noqa: BLE001
        logger.debug("Capability probe '%s' failed: %s", command, exc)
        return False


def detect_capabilities(invoker: Any, probes: Mapping[str, Probe]) -> FrozenSet[str]:
    """Executa cada sonda e devolve o conjunto de capabilities presentes."""
    present = set()
    for name, (command, arguments) in probes.items():
        available = probe_capability(invoker, command, arguments)
        logger.info("Capability %s: %s", name, "present" if available else "absent")
        if available:
            present.add(name)
    return frozenset(present)


def probes_from_config(section: Mapping[str, Any]) -> dict:
    """Converte a seção `capabilities` da configuração em sondas.

    Entradas nulas desabilitam a sonda (a capability fica ausente).
    """
    probes = {}
    for name, spec in (section or {}).items():
        if not spec:
            continue
        probes[name] = (str(spec["command"]), [str(a) for a in spec.get("arguments", []) or []])
    return probes
