# src/buildgraph/cli.py
"""
Linha de comando do buildgraph.

Carrega a configuração (projeto + local), resolve target e configuration,
constrói o registry do pipeline escolhido, detecta capabilities e executa
o target. Falhas de grafo, processo ou configuração viram uma linha
`error:` em stderr e exit code 1.
"""

from __future__ import annotations

import argparse
import importlib
import logging
import os
import subprocess
import sys
from collections.abc import Mapping, Sequence
from functools import partial
from pathlib import Path
from typing import Callable, Optional

from .core.config.errors import ConfigError
from .core.config.loader import load_config
from .core.config.settings import BuildSettings, resolve_build_settings
from .core.engine.engine import Engine
from .core.engine.resolver import resolve
from .core.errors import exception_to_error
from .core.exceptions import BuildGraphException, ProcessFailedError, TaskExecutionError
from .core.pipeline.context import RunContext
from .core.pipeline.registry import TaskRegistry
from .core.process.capabilities import detect_capabilities, probes_from_config
from .core.process.invoker import ProcessInvoker

logger = logging.getLogger("buildgraph")

DEFAULT_PIPELINE = "buildgraph.pipelines.dotnet:build_registry"
PROJECT_CONFIG = "buildgraph.yaml"
LOCAL_CONFIG = "buildgraph.local.yaml"

PipelineFactory = Callable[[BuildSettings], TaskRegistry]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="buildgraph",
        description="Resolve and run a target of the build task graph.",
    )
    parser.add_argument("-t", "--target", help="Task to run (env: BUILDGRAPH_TARGET, default: Default)")
    parser.add_argument(
        "-c",
        "--configuration",
        help="Build configuration (env: BUILDGRAPH_CONFIGURATION, default: Release)",
    )
    parser.add_argument("--config", help=f"Project configuration file (default: ./{PROJECT_CONFIG} if present)")
    parser.add_argument("--local-config", help=f"Local overrides file (default: ./{LOCAL_CONFIG} if present)")
    parser.add_argument(
        "--pipeline",
        default=DEFAULT_PIPELINE,
        help="Pipeline factory as module:function returning a TaskRegistry",
    )
    parser.add_argument("--list", action="store_true", help="List tasks and exit")
    parser.add_argument("--dry-run", action="store_true", help="Print the resolved order without running it")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def load_pipeline(spec: str) -> PipelineFactory:
    module_name, sep, attr = spec.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"Pipeline must be given as module:function, got '{spec}'")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ValueError(f"Cannot import pipeline module '{module_name}': {exc}") from exc
    factory = getattr(module, attr, None)
    if not callable(factory):
        raise ValueError(f"Pipeline factory '{spec}' is not callable")
    return factory


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _default_file(explicit: Optional[str], name: str) -> Optional[str]:
    if explicit:
        return explicit
    candidate = Path.cwd() / name
    return str(candidate) if candidate.exists() else None


def _print_tasks(registry: TaskRegistry) -> None:
    for t in registry.list():
        deps = f" (depends on: {', '.join(t.dependencies)})" if t.dependencies else ""
        print(f"{t.name}{deps}")
        if t.description:
            print(f"    {t.description}")


def _report_failure(exc: BaseException) -> None:
    error = exception_to_error(exc)
    task = error.details.get("task") if isinstance(exc, TaskExecutionError) else None
    print(f"error: {error.message}", file=sys.stderr)
    if task:
        print(f"  task: {task}", file=sys.stderr)

    cause = exc.cause if isinstance(exc, TaskExecutionError) else exc
    if isinstance(cause, ProcessFailedError):
        print(f"  command: {' '.join([cause.command, *cause.arguments])}", file=sys.stderr)
        if cause.exit_code is not None:
            print(f"  exit code: {cause.exit_code}", file=sys.stderr)
    if error.hint:
        print(f"  hint: {error.hint}", file=sys.stderr)


def main(argv: Sequence[str] | None = None, environ: Mapping[str, str] | None = None) -> int:
    args = build_parser().parse_args(list(argv) if argv is not None else None)
    env = dict(os.environ if environ is None else environ)

    try:
        config = load_config(
            defaults_path=_default_file(args.config, PROJECT_CONFIG),
            local_path=_default_file(args.local_config, LOCAL_CONFIG),
        )
        engine_cfg = config.get("engine") or {}
        _configure_logging("DEBUG" if args.verbose else str(engine_cfg.get("log_level") or "INFO"))

        settings = resolve_build_settings(
            target=args.target,
            configuration=args.configuration,
            config=config,
            environ=env,
        )
        registry = load_pipeline(args.pipeline)(settings)

        if args.list:
            _print_tasks(registry)
            return 0

        order = resolve(registry, settings.target)
        if args.dry_run:
            print("\n".join(order))
            return 0

        probe_invoker = ProcessInvoker(
            runner=partial(subprocess.run, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
        )
        ctx = RunContext(
            target=settings.target,
            configuration=settings.configuration,
            config=config,
            capabilities=detect_capabilities(probe_invoker, probes_from_config(config.get("capabilities", {}))),
            environ=env,
            source_root=settings.source_root,
            artefacts_dir=settings.artefacts_dir,
            invoker=ProcessInvoker(),
        )
        result = Engine(registry=registry, ctx=ctx).run(settings.target)
    except (BuildGraphException, ConfigError, ValueError) as exc:
        _report_failure(exc)
        return 1

    for task_name, messages in ctx.warnings.items():
        for message in messages:
            print(f"warning: [{task_name}] {message}", file=sys.stderr)
    print(f"Target '{result.target}' succeeded: {', '.join(result.executed)}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main(sys.argv[1:]))
