# src/buildgraph/pipelines/dotnet.py
"""
Pipeline padrão de build .NET.

Grafo:

    Clean → Restore → Build ─┬───────────────→ Test → Pack → Default
                             └→ InstallDeveloperCertificate ┘

- `Clean` remove e recria o diretório de artefatos (recusa quando ele
  contém a raiz do código-fonte).
- `Restore`, `Build` delegam para `dotnet`.
- `InstallDeveloperCertificate` confia no certificado HTTPS de
  desenvolvimento, apenas em hosts de CI listados em `certificate.hosts`.
- `Test` executa uma vez por projeto de teste descoberto, com filtro que
  exclui traits cujas capabilities estão ausentes; falhas ignoradas em
  hosts lenientes viram warnings da run.
- `Pack` exige exatamente um projeto que case com `pack.pattern` e o
  empacota com `dotnet pack`.
- `Default` agrega o pipeline completo.

Os comandos são opacos para o núcleo: só o exit code importa.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Any, Dict, List

from ..core.config.errors import InvalidSettingError
from ..core.config.settings import BuildSettings
from ..core.discovery import discover, single_match
from ..core.pipeline.context import RunContext
from ..core.pipeline.registry import TaskRegistry
from ..core.pipeline.task import task
from ..core.process.filters import TraitExclusion, build_test_filter

logger = logging.getLogger(__name__)


def _section(ctx: RunContext, name: str) -> Dict[str, Any]:
    return dict(ctx.config.get(name, {}) or {})


def clean(ctx: RunContext) -> None:
    artefacts = Path(ctx.artefacts_dir).resolve()
    source_root = Path(ctx.source_root).resolve()
    if artefacts == source_root or artefacts in source_root.parents:
        raise InvalidSettingError(
            f"Refusing to clean '{artefacts}': artefacts directory contains the source root '{source_root}'"
        )
    if artefacts.exists():
        logger.info("Removing %s", artefacts)
        shutil.rmtree(artefacts)
    artefacts.mkdir(parents=True, exist_ok=True)


def restore(ctx: RunContext) -> None:
    ctx.invoker.invoke("dotnet", ["restore"], cwd=ctx.source_root)


def build(ctx: RunContext) -> None:
    ctx.invoker.invoke(
        "dotnet",
        ["build", "--configuration", ctx.configuration, "--no-restore"],
        cwd=ctx.source_root,
    )


def certificate_required(ctx: RunContext) -> bool:
    hosts = _section(ctx, "certificate").get("hosts", []) or []
    return ctx.is_running_on(*hosts)


def install_developer_certificate(ctx: RunContext) -> None:
    ctx.invoker.invoke("dotnet", ["dev-certs", "https", "--trust"])


def compute_test_filter(ctx: RunContext) -> str:
    exclusions = [
        TraitExclusion.from_dict(entry)
        for entry in _section(ctx, "test").get("trait_exclusions", []) or []
    ]
    return build_test_filter(ctx.capabilities, exclusions)


def run_test_project(ctx: RunContext, project: Path) -> None:
    test_cfg = _section(ctx, "test")
    lenient_hosts: List[str] = list(test_cfg.get("ignore_failures_on", []) or [])

    arguments = [
        "test",
        str(project),
        "--configuration",
        ctx.configuration,
        "--no-build",
        "--results-directory",
        str(Path(ctx.artefacts_dir) / "test-results"),
    ]
    expression = compute_test_filter(ctx)
    if expression:
        arguments += ["--filter", expression]

    exit_code = ctx.invoker.invoke(
        "dotnet",
        arguments,
        ignore_failure_when=lambda: ctx.is_running_on(*lenient_hosts),
    )
    if exit_code:
        ctx.add_warning(
            task="Test",
            message=f"{project.name}: ignored test failure (exit code {exit_code}) on {ctx.ci_host}",
        )


def pack(ctx: RunContext) -> None:
    pattern = _section(ctx, "pack").get("pattern") or "*.csproj"
    project = single_match(ctx.source_root, pattern)
    ctx.invoker.invoke(
        "dotnet",
        [
            "pack",
            str(project),
            "--configuration",
            ctx.configuration,
            "--no-build",
            "--output",
            str(ctx.artefacts_dir),
        ],
        cwd=ctx.source_root,
    )


def build_registry(settings: BuildSettings) -> TaskRegistry:
    test_pattern = (settings.config.get("test", {}) or {}).get("pattern") or "**/*.Test.csproj"

    registry = TaskRegistry()
    registry.register(task("Clean", description="Cleans the artefacts directory.", action=clean))
    registry.register(
        task("Restore", description="Restores NuGet packages.", depends_on=["Clean"], action=restore)
    )
    registry.register(
        task("Build", description="Builds the solution.", depends_on=["Restore"], action=build)
    )
    registry.register(
        task(
            "InstallDeveloperCertificate",
            description="Installs and trusts the HTTPS developer certificate on CI hosts.",
            depends_on=["Build"],
            action=install_developer_certificate,
            guard=certificate_required,
        )
    )
    registry.register(
        task(
            "Test",
            description="Runs every test project and collects results.",
            depends_on=["Build", "InstallDeveloperCertificate"],
            action=run_test_project,
            items=discover(settings.source_root, test_pattern),
        )
    )
    registry.register(
        task("Pack", description="Creates the NuGet package.", depends_on=["Test"], action=pack)
    )
    registry.register(
        task("Default", description="Cleans, restores, builds, tests and packs.", depends_on=["Pack"])
    )
    return registry
