# src/meshery_helm/core/config/__init__.py
"""
Camada de configuração do conversor.

Responsabilidades do pacote:
    - Carregamento de arquivos de configuração (defaults + override local)
    - Resolução da configuração final via deep-merge determinístico
    - Validação dos valores e construção de `ConverterSettings`

A configuração nunca é lida implicitamente do ambiente: o chamador resolve
os settings e os injeta no conversor.
"""

from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .loader import load_config
from .merge import deep_merge
from .settings import DEFAULT_CONFIG, ConverterSettings, load_settings

__all__ = [
    "ConfigError",
    "ConfigTypeConflictError",
    "DefaultsNotFoundError",
    "InvalidConfigRootTypeError",
    "UnsupportedConfigFormatError",
    "load_config",
    "deep_merge",
    "DEFAULT_CONFIG",
    "ConverterSettings",
    "load_settings",
]
