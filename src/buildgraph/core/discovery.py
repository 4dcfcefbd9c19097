# src/buildgraph/core/discovery.py
"""
Descoberta de arquivos para iteração e empacotamento.

`discover` devolve uma fonte preguiçosa: o filesystem só é consultado
quando o Engine alcança a Task, e cada chamada produz um snapshot novo,
ordenado de forma determinística.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Union

from .exceptions import DiscoveryMismatchError

PathLike = Union[str, Path]


def find_files(root: PathLike, pattern: str) -> List[Path]:
    base = Path(root)
    return sorted(p for p in base.glob(pattern) if p.is_file())


def discover(root: PathLike, pattern: str) -> Callable[[], List[Path]]:
    def source() -> List[Path]:
        return find_files(root, pattern)

    return source


def single_match(root: PathLike, pattern: str) -> Path:
    """Retorna o único arquivo que casa com `pattern` ou levanta DiscoveryMismatchError."""
    matches = find_files(root, pattern)
    if len(matches) != 1:
        raise DiscoveryMismatchError(pattern, matches, root=str(root))
    return matches[0]
