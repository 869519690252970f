# src/meshery_helm/core/config/errors.py
"""
Exceções da camada de configuração do conversor.

Estas exceções representam falhas estruturais ao carregar ou mesclar arquivos
de configuração. Erros de *valores* (tipos errados para uma chave conhecida)
são reportados depois, por `ConverterSettings.from_config`, como
`ConverterConfigurationError`.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma delas tenta recovery ou fallback
"""


class ConfigError(Exception):
    """Exceção base para erros de carregamento e merge de configuração."""


class DefaultsNotFoundError(ConfigError):
    """
    O arquivo de configuração base (defaults) não existe no caminho informado.

    O arquivo de defaults é obrigatório: sem ele não existe configuração
    efetiva válida, e o loader não tenta criá-lo.
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    A extensão do arquivo não é suportada pelo loader.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """O conteúdo raiz do arquivo não é um mapa chave-valor (`dict`)."""


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"packager": {"timeout_seconds": 120}}
        - override: {"packager": "helm"}
    """
