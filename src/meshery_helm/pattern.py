# src/meshery_helm/pattern.py
"""
Entrada do conversor: o design (pattern) e o renderer de manifest.

O conversor lê apenas dois campos do design, `name` e `version`. O restante
do documento é repassado intacto ao `ManifestRenderer`, colaborador externo
que traduz o design em manifest Kubernetes. Pós-processamento de anotações
não acontece aqui.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Protocol, Union, runtime_checkable

import yaml

from meshery_helm.core.exceptions import LoadError

PatternSource = Union["PatternInput", Mapping[str, Any], str, bytes, Path]


@dataclass(frozen=True)
class PatternInput:
    """Design já carregado. `document` é o mapa completo, para o renderer."""

    name: str
    version: str
    document: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_mapping(cls, document: Mapping[str, Any]) -> "PatternInput":
        name = document.get("name")
        version = document.get("version")
        return cls(
            name="" if name is None else str(name),
            version="" if version is None else str(version),
            document=dict(document),
        )


def load_pattern(source: PatternSource) -> PatternInput:
    """
    Carrega o design a partir de texto YAML/JSON, bytes, arquivo ou mapa.

    Um `str` é sempre interpretado como conteúdo do design (não como path);
    para ler de disco, passe um `Path`.

    Raises:
        LoadError: Arquivo ilegível, YAML inválido ou raiz que não é um mapa.
    """
    if isinstance(source, PatternInput):
        return source

    if isinstance(source, Mapping):
        return PatternInput.from_mapping(source)

    label = "<inline>"
    if isinstance(source, Path):
        label = str(source)
        try:
            source = source.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise LoadError(
                message=f"failed to load pattern file: {label}",
                details={"source": label, "exc_message": str(e)},
            ) from e

    if isinstance(source, bytes):
        try:
            source = source.decode("utf-8")
        except UnicodeDecodeError as e:
            raise LoadError(
                message="failed to load pattern file: content is not UTF-8",
                details={"source": label, "exc_message": str(e)},
            ) from e

    if not isinstance(source, str):
        raise LoadError(
            message=f"failed to load pattern file: unsupported source type {type(source).__name__}",
            details={"source_type": type(source).__name__},
        )

    try:
        document = yaml.safe_load(source)
    except yaml.YAMLError as e:
        raise LoadError(
            message=f"failed to load pattern file: {label}",
            details={"source": label, "exc_message": str(e)},
            hint="O design deve ser um documento YAML ou JSON válido.",
        ) from e

    if not isinstance(document, dict):
        raise LoadError(
            message=f"failed to load pattern file: {label}",
            details={"source": label, "received": type(document).__name__},
            hint="A raiz do design deve ser um mapa com 'name' e 'version'.",
        )

    return PatternInput.from_mapping(document)


@runtime_checkable
class ManifestRenderer(Protocol):
    """Colaborador externo: design → manifest Kubernetes (texto UTF-8)."""

    def render(self, pattern: PatternInput) -> str:
        ...


class CallableRenderer:
    """Adapta uma função `(PatternInput) -> str` ao protocolo ManifestRenderer."""

    def __init__(self, fn: Callable[[PatternInput], str]):
        self._fn = fn

    def render(self, pattern: PatternInput) -> str:
        return self._fn(pattern)
