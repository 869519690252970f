# src/meshery_helm/__init__.py
"""
Meshery Helm — empacotamento de designs Meshery como Helm charts.

Dado um design (pattern) e um renderer de manifest Kubernetes, o conversor
monta um chart Helm em um workspace temporário isolado, empacota com o
`helm` e devolve o `.tgz` em memória, sem deixar estado em disco.

Arquitetura em alto nível:
    - chart       → sanitização de nome, identidade, workspace e árvore do chart
    - packaging   → invocação do helm e leitura do archive
    - pattern     → carregamento do design e protocolo do renderer
    - converter   → orquestração fail-fast com limpeza garantida
    - core        → exceções, payloads de erro, contexto, configuração, logging

Limites explícitos:
    - Não valida a semântica do manifest
    - Não gerencia múltiplas versões de chart ao longo do tempo
    - Não implementa o formato de pacote do Helm
"""

from .chart.naming import sanitize_chart_name
from .converter import ConversionResult, HelmConverter, convert
from .core.config.settings import ConverterSettings, load_settings
from .core.exceptions import (
    ConverterConfigurationError,
    ConverterException,
    ConverterIOError,
    LoadError,
    PackagingError,
    RenderError,
)
from .pattern import CallableRenderer, ManifestRenderer, PatternInput, load_pattern

__version__ = "0.1.0"

__all__ = [
    "sanitize_chart_name",
    "ConversionResult",
    "HelmConverter",
    "convert",
    "ConverterSettings",
    "load_settings",
    "ConverterConfigurationError",
    "ConverterException",
    "ConverterIOError",
    "LoadError",
    "PackagingError",
    "RenderError",
    "CallableRenderer",
    "ManifestRenderer",
    "PatternInput",
    "load_pattern",
]
