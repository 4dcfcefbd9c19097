# src/buildgraph/core/process/filters.py
"""
Expressão de filtro de testes derivada das capabilities.

Função pura: dado o conjunto de capabilities presentes, exclui os traits
cujos testes dependem de uma capability ausente.

Exemplo:
    capabilities = {"dotnet-run"}
    exclusions = [TraitExclusion("IsUsingDocker", "true", "docker")]
    build_test_filter(capabilities, exclusions) == "IsUsingDocker!=true"
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, Any, Iterable, List, Mapping


@dataclass(frozen=True)
class TraitExclusion:
    trait: str
    value: str
    capability: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TraitExclusion":
        return cls(
            trait=str(data["trait"]),
            value=str(data.get("value", "true")),
            capability=str(data["capability"]),
        )

    def expression(self) -> str:
        return f"{self.trait}!={self.value}"


def build_test_filter(capabilities: AbstractSet[str], exclusions: Iterable[TraitExclusion]) -> str:
    terms: List[str] = []
    for exclusion in exclusions:
        if exclusion.capability in capabilities:
            continue
        term = exclusion.expression()
        if term not in terms:
            terms.append(term)
    return "&".join(terms)
