"""
Meshery Helm — Canonical Error Structures (v1)

Este módulo define o padrão canônico de erros do conversor.
Erros são artefatos do contrato operacional do sistema, devendo ser:

- explícitos
- serializáveis
- rastreáveis
- acionáveis

O chamador recebe exatamente um erro, descrevendo a primeira etapa que falhou.
Nenhum retorno parcial é produzido.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ConverterErrorPayload:
    """
    Payload canônico de erro do conversor.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico (paths, identidade)
    - hint: ação sugerida ao operador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Entrada
PATTERN_LOAD_ERROR = "PATTERN_LOAD_ERROR"
MANIFEST_RENDER_ERROR = "MANIFEST_RENDER_ERROR"

# Filesystem / Empacotamento
CHART_IO_ERROR = "CHART_IO_ERROR"
CHART_PACKAGING_ERROR = "CHART_PACKAGING_ERROR"

# Configuração / Execução
CONVERTER_CONFIGURATION_ERROR = "CONVERTER_CONFIGURATION_ERROR"
CONVERTER_EXECUTION_ERROR = "CONVERTER_EXECUTION_ERROR"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def converter_execution_error(
    *,
    step: Optional[str] = None,
    exc_type: Optional[str] = None,
    exc_message: Optional[str] = None,
    hint: str = "Verifique o stacktrace e os eventos da conversão. Nenhum retry é aplicado automaticamente.",
) -> ConverterErrorPayload:
    return ConverterErrorPayload(
        type=CONVERTER_EXECUTION_ERROR,
        message="Falha inesperada durante a conversão",
        details={
            "step": step,
            "exc_type": exc_type,
            "exc_message": exc_message,
        },
        hint=hint,
    )


def exception_to_payload(exc: BaseException, *, step: Optional[str] = None) -> ConverterErrorPayload:
    """Converte exceções em ConverterErrorPayload (serializável, acionável).

    Regras:
    - ConverterException: já vem com código estável, details e hint.
    - Outras exceções: encapsular como CONVERTER_EXECUTION_ERROR sem expor stack trace.
    """
    from .exceptions import ConverterException

    if isinstance(exc, ConverterException):
        return exc.to_payload()

    return converter_execution_error(
        step=step,
        exc_type=exc.__class__.__name__,
        exc_message=str(exc) or None,
    )
