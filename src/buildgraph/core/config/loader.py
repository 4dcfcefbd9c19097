# src/buildgraph/core/config/loader.py
"""
Loader canônico de configuração do buildgraph.

A configuração efetiva é resolvida a partir de:
    - `DEFAULT_CONFIG` embutido (sempre presente)
    - um arquivo de projeto (opcional; obrigatório existir se informado)
    - um arquivo local de overrides (opcional; ignorado se ausente)

Responsabilidades do módulo:
    - Carregar arquivos de configuração em YAML ou JSON
    - Validar requisitos estruturais mínimos (tipo raiz)
    - Resolver a configuração final via deep-merge determinístico

Invariantes:
    - O resultado é sempre um dicionário puro (`dict`)
    - Overrides nunca mutam os defaults
    - A mesma entrada sempre produz a mesma configuração final

Limites explícitos:
    - Não lê variáveis de ambiente (ver `settings`)
    - Não interage com Engine ou Tasks
"""

from __future__ import annotations

import json
from copy import deepcopy
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple, Union

import yaml  # PyYAML

from .errors import (
    ConfigNotFoundError,
    InvalidConfigRootTypeError,
    InvalidConfigSyntaxError,
    UnsupportedConfigFormatError,
)
from .merge import deep_merge

DEFAULT_CONFIG: Dict[str, Any] = {
    "engine": {"log_level": "INFO"},
    "build": {"target": "Default", "configuration": "Release"},
    "paths": {"source_root": ".", "artefacts": "artefacts"},
    "capabilities": {
        "docker": {"command": "docker", "arguments": ["info"]},
        "dotnet-run": {"command": "dotnet", "arguments": ["--version"]},
    },
    "test": {
        "pattern": "**/*.Test.csproj",
        "trait_exclusions": [
            {"trait": "IsUsingDocker", "value": "true", "capability": "docker"},
            {"trait": "IsUsingDotnetRun", "value": "true", "capability": "dotnet-run"},
        ],
        "ignore_failures_on": [],
    },
    "certificate": {"hosts": ["appveyor", "github", "azure"]},
    "pack": {"pattern": "*.csproj"},
}


_PARSERS: Dict[str, Tuple[Callable[[str], Any], Tuple[type, ...]]] = {
    ".yaml": (yaml.safe_load, (yaml.YAMLError,)),
    ".yml": (yaml.safe_load, (yaml.YAMLError,)),
    ".json": (json.loads, (json.JSONDecodeError,)),
}


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Lê um arquivo de configuração YAML/JSON como dicionário.

    Arquivo vazio equivale a `{}`. Erros de sintaxe do parser são
    convertidos em `InvalidConfigSyntaxError`, preservando a causa.

    Raises:
        ConfigNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se a extensão não for suportada.
        InvalidConfigSyntaxError: Se o conteúdo não puder ser interpretado.
        InvalidConfigRootTypeError: Se a raiz não for um mapeamento.
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"Arquivo de configuração não encontrado: {path}")

    try:
        parse, syntax_errors = _PARSERS[path.suffix.lower()]
    except KeyError:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix or path.name}") from None

    try:
        data = parse(path.read_text(encoding="utf-8"))
    except syntax_errors as exc:
        raise InvalidConfigSyntaxError(f"Configuração inválida em {path}: {exc}") from exc

    data = {} if data is None else data
    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(data).__name__}"
        )
    return data


def load_config(
    *,
    defaults_path: Optional[Union[str, Path]] = None,
    local_path: Optional[Union[str, Path]] = None,
) -> Dict[str, Any]:
    """
    Carrega e resolve a configuração efetiva do build.

    Política de resolução:
        - `DEFAULT_CONFIG` é sempre a base
        - `defaults_path`, quando informado, deve existir
        - `local_path` é opcional; quando presente tem prioridade máxima

    Args:
        defaults_path: Caminho para o arquivo de configuração do projeto.
        local_path: Caminho opcional para overrides locais.

    Returns:
        Dict[str, Any]: Configuração final resolvida.

    Raises:
        ConfigNotFoundError: Se `defaults_path` não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigSyntaxError: Se um arquivo tiver erro de sintaxe.
        InvalidConfigRootTypeError: Se o conteúdo não for um dicionário.
        ConfigTypeConflictError: Se ocorrer conflito estrutural durante o merge.
    """
    effective = deepcopy(DEFAULT_CONFIG)

    if defaults_path is not None:
        effective = deep_merge(effective, _load_file(Path(defaults_path)))

    if local_path is not None:
        local_file = Path(local_path)
        if local_file.exists():
            effective = deep_merge(effective, _load_file(local_file))

    return effective
