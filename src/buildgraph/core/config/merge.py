# src/buildgraph/core/config/merge.py
"""
Deep-merge de camadas de configuração (defaults → projeto → local).

Uma camada posterior vence por chave. Seções (`dict`) combinam
recursivamente; qualquer outro valor é substituído por inteiro, inclusive
listas. `null` em qualquer lado substitui o valor: é assim que um arquivo
desliga uma entrada herdada (ex.: `capabilities.docker: null`).

Nenhum input é mutado.
"""

from copy import deepcopy
from typing import Any, Dict, Tuple

from .errors import ConfigTypeConflictError


def _replaceable(current: Any, incoming: Any) -> bool:
    return current is None or incoming is None or type(current) is type(incoming)


def _merge_section(base: Dict[str, Any], layer: Dict[str, Any], path: Tuple[str, ...]) -> Dict[str, Any]:
    merged = {key: deepcopy(value) for key, value in base.items()}

    for key, incoming in layer.items():
        current = merged.get(key)
        where = ".".join(path + (str(key),))

        if isinstance(current, dict) and isinstance(incoming, dict):
            merged[key] = _merge_section(current, incoming, path + (str(key),))
        elif key not in merged or _replaceable(current, incoming):
            merged[key] = deepcopy(incoming)
        else:
            raise ConfigTypeConflictError(
                f"Conflito de tipo na chave '{where}': "
                f"{type(current).__name__} vs {type(incoming).__name__}"
            )

    return merged


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Aplica a camada `override` sobre `base` e devolve um novo dicionário.

    Raises:
        ConfigTypeConflictError: Se uma chave trocar de tipo entre camadas
            (ex.: seção em `base`, texto em `override`), ou se alguma das
            raízes não for um dicionário.
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge requer dicts no nível raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )
    return _merge_section(base, override, ())
