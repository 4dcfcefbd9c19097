# src/buildgraph/core/config/errors.py
"""
Exceções canônicas da camada de configuração do buildgraph.

As exceções aqui definidas representam **violações estruturais
explícitas** da configuração, e não erros de execução de Tasks.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção representa falha de processo externo

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não depende de Engine ou CLI
"""


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração do buildgraph.

    Permite captura genérica de erros de configuração na borda (CLI),
    distinguindo-os de falhas de execução de Tasks.
    """


class ConfigNotFoundError(ConfigError):
    """
    Arquivo de configuração explicitamente informado não foi encontrado.

    Decisões arquiteturais:
        - Um caminho passado pelo usuário deve existir
        - O arquivo local (override) é opcional e não gera este erro
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Formato do arquivo de configuração não suportado.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """O conteúdo raiz da configuração não é um dicionário (`dict`)."""


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"test": {"pattern": "**/*.Test.csproj"}}
        - override: {"test": "disabled"}

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito
    """


class InvalidSettingError(ConfigError):
    """Valor de setting fora do domínio aceito (ex.: lista onde se espera texto)."""


class InvalidConfigSyntaxError(ConfigError):
    """O arquivo de configuração não é YAML/JSON sintaticamente válido."""
