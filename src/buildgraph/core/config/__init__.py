# src/buildgraph/core/config/__init__.py
"""
Camada de configuração do buildgraph.

Responsabilidades do pacote:
    - Carregamento de arquivos de configuração (projeto + overrides locais)
    - Resolução de configuração final via deep-merge determinístico
    - Resolução de settings (argumento > ambiente > arquivo > default)

Princípios fundamentais:
    - Configuração não contém lógica de execução
    - Overrides são sempre explícitos
    - A mesma entrada sempre produz a mesma configuração final
"""

from .loader import DEFAULT_CONFIG, load_config
from .settings import BuildSettings, resolve_build_settings, resolve_setting

__all__ = [
    "BuildSettings",
    "DEFAULT_CONFIG",
    "load_config",
    "resolve_build_settings",
    "resolve_setting",
]
