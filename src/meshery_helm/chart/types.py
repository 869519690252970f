# src/meshery_helm/chart/types.py
"""
Tipos canônicos do chart.

Componentes:
    - PackageIdentity → nome sanitizado + versão, calculado uma vez por conversão
    - ChartMetadata   → conteúdo do Chart.yaml (apiVersion v2, type application)

Ambos são imutáveis (frozen) depois de criados.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml

from .naming import sanitize_chart_name

CHART_API_VERSION = "v2"
CHART_TYPE = "application"
GENERATOR_NAME = "Meshery"


@dataclass(frozen=True)
class PackageIdentity:
    """Identidade do pacote: `name` sempre sanitizado e não vazio."""

    name: str
    version: str

    @property
    def archive_name(self) -> str:
        """Nome do archive produzido pelo helm (`<name>-<version>.tgz`)."""
        return f"{self.name}-{self.version}.tgz"


def derive_identity(name: Optional[str], version: Optional[str], *, default_version: str) -> PackageIdentity:
    """
    Deriva a identidade do pacote a partir do nome/versão livres do design.

    O nome passa sempre por `sanitize_chart_name`; um nome vazio resulta no
    nome de fallback e nunca em um nome vazio. A versão não é validada contra
    nenhum esquema; apenas versões em branco são substituídas por
    `default_version`.
    """
    resolved_version = (version or "").strip() or default_version
    return PackageIdentity(name=sanitize_chart_name(name or ""), version=resolved_version)


@dataclass(frozen=True)
class ChartMetadata:
    """
    Metadados serializados no Chart.yaml.

    Campos:
    - api_version: sempre "v2" (Helm 3)
    - name / version: vindos de PackageIdentity
    - description: texto sintetizado que identifica o gerador
    - type: sempre "application"
    """

    name: str
    version: str
    description: str
    api_version: str = CHART_API_VERSION
    type: str = CHART_TYPE

    @classmethod
    def for_identity(cls, identity: PackageIdentity) -> "ChartMetadata":
        return cls(
            name=identity.name,
            version=identity.version,
            description=f"Helm chart for '{identity.name}' generated by {GENERATOR_NAME}",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "apiVersion": self.api_version,
            "description": self.description,
            "name": self.name,
            "type": self.type,
            "version": self.version,
        }

    def to_yaml(self) -> str:
        # chaves em ordem alfabética, como o marshaller YAML do Go
        return yaml.safe_dump(
            self.to_dict(),
            sort_keys=True,
            default_flow_style=False,
            allow_unicode=True,
            width=4096,
        )
