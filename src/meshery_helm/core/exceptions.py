# src/meshery_helm/core/exceptions.py
"""
Meshery Helm — Canonical Exceptions (v1)

Este módulo define as exceções tipadas do conversor Design → Helm chart.

Objetivo:
- Permitir que cada etapa do pipeline levante falhas semânticas tipadas
- Facilitar o mapeamento determinístico para ConverterErrorPayload
- Evitar RuntimeError/OSError genéricos chegando ao chamador

Regras:
- Toda exceção carrega uma mensagem curta e humana, contextualizada pela etapa.
- `details` contém apenas dados estruturados (serializáveis): paths, nomes, códigos.
- A exceção original é encadeada via `raise ... from`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(eq=False)
class ConverterException(Exception):
    """Base class para exceções do conversor.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Não embedar stack trace em payloads de erro
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    #: código estável usado no ConverterErrorPayload
    code = "CONVERTER_ERROR"

    def __str__(self) -> str:
        return self.message

    def to_payload(self):
        from .errors import ConverterErrorPayload

        return ConverterErrorPayload(
            type=self.code,
            message=self.message,
            details=dict(self.details),
            hint=self.hint,
        )


# ---------------------------------------------------------------------------
# Entrada / Renderização
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class LoadError(ConverterException):
    """O design (pattern) não pôde ser lido ou interpretado."""

    code = "PATTERN_LOAD_ERROR"


@dataclass(eq=False)
class RenderError(ConverterException):
    """O renderer externo falhou ao produzir o manifest Kubernetes."""

    code = "MANIFEST_RENDER_ERROR"


# ---------------------------------------------------------------------------
# Filesystem / Empacotamento
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class ConverterIOError(ConverterException):
    """Falha de criação, escrita, leitura ou remoção no filesystem."""

    code = "CHART_IO_ERROR"


@dataclass(eq=False)
class PackagingError(ConverterException):
    """O empacotador externo rejeitou a árvore do chart ou falhou."""

    code = "CHART_PACKAGING_ERROR"


# ---------------------------------------------------------------------------
# Configuração
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class ConverterConfigurationError(ConverterException):
    """Configuração inválida ou inconsistente para o conversor."""

    code = "CONVERTER_CONFIGURATION_ERROR"
