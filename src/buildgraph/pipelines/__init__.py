# src/buildgraph/pipelines/__init__.py
"""
Pipelines prontos para uso.

Um pipeline é uma função `(settings: BuildSettings) -> TaskRegistry`.
A CLI usa `dotnet.build_registry` quando nenhum outro é informado.
"""
