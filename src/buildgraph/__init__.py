# src/buildgraph/__init__.py
"""
buildgraph — orquestração declarativa de build, teste e empacotamento.

Um build é modelado como um grafo dirigido de Tasks nomeadas. O usuário
solicita um *target*, o resolver expande suas dependências transitivas e
o Engine executa cada Task exatamente uma vez, interrompendo a run na
primeira falha.
"""

__version__ = "0.1.0"
