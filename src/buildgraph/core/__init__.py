# src/buildgraph/core/__init__.py
"""
Núcleo do buildgraph.

Subpacotes:
    - pipeline → contratos de Task, tipos, registry e RunContext
    - engine   → resolução de dependências e execução
    - process  → invocação de processos externos, capabilities e filtros
    - config   → carregamento de configuração e resolução de settings

O núcleo não conhece ferramentas específicas (dotnet, docker, ...):
cada comando externo é tratado como opaco, relevante apenas pelo seu
exit code.
"""
