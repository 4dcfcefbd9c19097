# src/buildgraph/core/environment.py
"""
Detecção do host de CI a partir de variáveis de ambiente.

Usado para construir predicados de override por chamada, por exemplo
"ignorar falhas de teste quando rodando no AppVeyor".
"""

from __future__ import annotations

from typing import Mapping, Optional, Tuple

# Ordem importa: provedores específicos antes do marcador genérico `CI`.
CI_HOST_MARKERS: Tuple[Tuple[str, str], ...] = (
    ("appveyor", "APPVEYOR"),
    ("github", "GITHUB_ACTIONS"),
    ("azure", "TF_BUILD"),
    ("travis", "TRAVIS"),
    ("gitlab", "GITLAB_CI"),
    ("generic", "CI"),
)

_FALSY = {"", "0", "false", "no", "off"}


def _is_set(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() not in _FALSY


def detect_ci_host(environ: Mapping[str, str]) -> Optional[str]:
    """Retorna o nome canônico do host de CI, ou None fora de CI."""
    for host, variable in CI_HOST_MARKERS:
        if _is_set(environ.get(variable)):
            return host
    return None
