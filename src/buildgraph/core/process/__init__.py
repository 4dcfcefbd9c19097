# src/buildgraph/core/process/__init__.py
"""
Camada de processos externos do buildgraph.

Componentes:
    - invoker      → execução de comandos e mapeamento de exit code em erro
    - capabilities → detecção de capabilities por comandos de sonda
    - filters      → expressão de filtro de testes a partir das capabilities

Ferramentas externas são opacas: apenas o exit code importa.
"""

from .capabilities import detect_capabilities, probe_capability, probes_from_config
from .filters import TraitExclusion, build_test_filter
from .invoker import ProcessInvocation, ProcessInvoker

__all__ = [
    "ProcessInvocation",
    "ProcessInvoker",
    "TraitExclusion",
    "build_test_filter",
    "detect_capabilities",
    "probe_capability",
    "probes_from_config",
]
