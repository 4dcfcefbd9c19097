# src/buildgraph/core/config/settings.py
"""
Resolução de settings de build.

Precedência (da maior para a menor):
    1. argumento explícito (CLI)
    2. variável de ambiente
    3. valor da configuração carregada
    4. default embutido

Strings vazias contam como ausentes em todos os níveis.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence

from .errors import InvalidSettingError

DEFAULT_TARGET = "Default"
DEFAULT_CONFIGURATION = "Release"

TARGET_ENV_VARS = ("BUILDGRAPH_TARGET", "TARGET")
CONFIGURATION_ENV_VARS = ("BUILDGRAPH_CONFIGURATION", "CONFIGURATION")


def _present(value: Any) -> bool:
    return value is not None and not (isinstance(value, str) and not value.strip())


def resolve_setting(
    argument: Optional[str],
    *,
    env_vars: Sequence[str] = (),
    environ: Mapping[str, str],
    configured: Any = None,
    default: str,
) -> str:
    if _present(argument):
        return str(argument).strip()
    for name in env_vars:
        value = environ.get(name)
        if _present(value):
            return str(value).strip()
    if _present(configured):
        if not isinstance(configured, (str, int, float)):
            raise InvalidSettingError(
                f"Setting deve ser texto, recebido: {type(configured).__name__}"
            )
        return str(configured).strip()
    return default


@dataclass(frozen=True)
class BuildSettings:
    target: str = DEFAULT_TARGET
    configuration: str = DEFAULT_CONFIGURATION
    source_root: Path = Path(".")
    artefacts_dir: Path = Path("artefacts")
    config: Dict[str, Any] = field(default_factory=dict)


def resolve_build_settings(
    *,
    target: Optional[str] = None,
    configuration: Optional[str] = None,
    config: Optional[Dict[str, Any]] = None,
    environ: Mapping[str, str],
) -> BuildSettings:
    config = dict(config or {})
    build_cfg = config.get("build", {}) or {}
    paths_cfg = config.get("paths", {}) or {}

    source_root = Path(str(paths_cfg.get("source_root") or "."))
    artefacts = Path(str(paths_cfg.get("artefacts") or "artefacts"))
    if not artefacts.is_absolute():
        artefacts = source_root / artefacts

    return BuildSettings(
        target=resolve_setting(
            target,
            env_vars=TARGET_ENV_VARS,
            environ=environ,
            configured=build_cfg.get("target"),
            default=DEFAULT_TARGET,
        ),
        configuration=resolve_setting(
            configuration,
            env_vars=CONFIGURATION_ENV_VARS,
            environ=environ,
            configured=build_cfg.get("configuration"),
            default=DEFAULT_CONFIGURATION,
        ),
        source_root=source_root,
        artefacts_dir=artefacts,
        config=config,
    )
