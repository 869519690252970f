# src/meshery_helm/chart/tree.py
"""
Package Tree Builder.

Popula o diretório fonte do chart dentro de um BuildWorkspace. Por padrão
são escritos exatamente três arquivos:

    <chart>/Chart.yaml                → ChartMetadata serializado
    <chart>/values.yaml               → placeholder de namespace
    <chart>/templates/manifest.yaml   → manifest renderizado, verbatim

A lista de arquivos é dirigida por configuração (`ChartFileSpec`): helpers
de labels (`templates/_helpers.tpl`), `NOTES.txt` e arquivos estáticos extras
entram via `ConverterSettings` sem tocar no orquestrador.

Qualquer falha de escrita é fatal (ConverterIOError); a limpeza do workspace
continua sendo responsabilidade de quem o abriu.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Callable, List, Optional, Sequence

from meshery_helm.core.config.settings import ConverterSettings
from meshery_helm.core.exceptions import ConverterConfigurationError, ConverterException, ConverterIOError

from .types import ChartMetadata, PackageIdentity
from .workspace import BuildWorkspace

logger = logging.getLogger(__name__)

CHART_FILE = "Chart.yaml"
VALUES_FILE = "values.yaml"
MANIFEST_FILE = "templates/manifest.yaml"
HELPERS_FILE = "templates/_helpers.tpl"
NOTES_FILE = "NOTES.txt"

HELPERS_TEMPLATE = """\
{{/* Generate basic chart labels */}}
{{- define "chart.labels" }}
helm.sh/chart: {{ .Chart.Name }}-{{ .Chart.Version | replace "+" "_" | trunc 63 | trimSuffix "-" }}
app.kubernetes.io/managed-by: {{ .Release.Service }}
app.kubernetes.io/instance: {{ .Release.Name }}
app.kubernetes.io/name: {{ include "chart.name" . }}
{{- end }}

{{/* Define chart name */}}
{{- define "chart.name" }}
{{- default .Chart.Name .Values.nameOverride | trunc 63 | trimSuffix "-" }}
{{- end }}
"""


@dataclass(frozen=True)
class ChartFileInput:
    """Dados disponíveis para renderizar um arquivo do chart."""

    identity: PackageIdentity
    metadata: ChartMetadata
    manifest_text: str


@dataclass(frozen=True)
class ChartFileSpec:
    """Um arquivo do chart: path relativo ao diretório fonte + função de conteúdo."""

    path: str
    render: Callable[[ChartFileInput], str]


def _render_chart_yaml(data: ChartFileInput) -> str:
    return data.metadata.to_yaml()


def _render_values(data: ChartFileInput) -> str:
    return f"# Default values for {data.identity.name}\nglobal:\n  namespace: default\n"


def _render_manifest(data: ChartFileInput) -> str:
    return data.manifest_text


def _render_notes(data: ChartFileInput) -> str:
    return f"This Helm chart '{data.identity.name}' was generated by Meshery.\n"


def _static(content: str) -> Callable[[ChartFileInput], str]:
    return lambda _data: content


DEFAULT_CHART_FILES: Sequence[ChartFileSpec] = (
    ChartFileSpec(CHART_FILE, _render_chart_yaml),
    ChartFileSpec(VALUES_FILE, _render_values),
    ChartFileSpec(MANIFEST_FILE, _render_manifest),
)


def chart_files_for(settings: Optional[ConverterSettings]) -> List[ChartFileSpec]:
    """Resolve a lista de arquivos do chart a partir dos settings."""
    files = list(DEFAULT_CHART_FILES)
    if settings is None:
        return files

    if settings.include_helpers:
        files.append(ChartFileSpec(HELPERS_FILE, _static(HELPERS_TEMPLATE)))
    if settings.include_notes:
        files.append(ChartFileSpec(NOTES_FILE, _render_notes))

    core = {f.path for f in files}
    for rel_path, content in sorted(settings.extra_files.items()):
        if rel_path in core:
            raise ConverterConfigurationError(
                message=f"chart.extra_files não pode sobrescrever '{rel_path}'",
                details={"key": "chart.extra_files", "path": rel_path},
            )
        files.append(ChartFileSpec(rel_path, _static(content)))

    return validate_chart_files(files)


def _relative_parts(rel_path: str) -> tuple:
    p = PurePosixPath(rel_path)
    if not rel_path or p.is_absolute() or ".." in p.parts:
        raise ConverterConfigurationError(
            message=f"Caminho de arquivo do chart inválido: {rel_path!r}",
            details={"path": rel_path},
            hint="Use caminhos relativos ao diretório do chart, sem '..'.",
        )
    return p.parts


def validate_chart_files(files: Sequence[ChartFileSpec]) -> List[ChartFileSpec]:
    """
    Valida uma lista de arquivos do chart antes de qualquer escrita em disco.

    Raises:
        ConverterConfigurationError: Path vazio, absoluto, com '..' ou repetido.
    """
    seen = set()
    for entry in files:
        _relative_parts(entry.path)
        if entry.path in seen:
            raise ConverterConfigurationError(
                message=f"Arquivo do chart declarado mais de uma vez: '{entry.path}'",
                details={"path": entry.path},
            )
        seen.add(entry.path)
    return list(files)


def _target_path(chart_dir: Path, rel_path: str) -> Path:
    return chart_dir.joinpath(*_relative_parts(rel_path))


def populate(
    workspace: BuildWorkspace,
    identity: PackageIdentity,
    manifest_text: str,
    *,
    files: Optional[Sequence[ChartFileSpec]] = None,
) -> List[Path]:
    """
    Escreve os arquivos do chart no workspace.

    Args:
        workspace: Workspace aberto (diretório fonte e templates já existem).
        identity: Identidade do pacote.
        manifest_text: Manifest renderizado, escrito sem alterações.
        files: Lista de arquivos; default `DEFAULT_CHART_FILES`.

    Returns:
        List[Path]: Paths escritos, na ordem da lista.

    Raises:
        ConverterIOError: Falha ao renderizar ou escrever qualquer arquivo.
        ConverterConfigurationError: Entrada de arquivo com path inválido.
    """
    entries = list(files) if files is not None else list(DEFAULT_CHART_FILES)
    data = ChartFileInput(
        identity=identity,
        metadata=ChartMetadata.for_identity(identity),
        manifest_text=manifest_text,
    )

    written: List[Path] = []
    for entry in entries:
        target = _target_path(workspace.chart_source_dir, entry.path)
        try:
            content = entry.render(data)
        except ConverterException:
            raise
        except Exception as e:
            raise ConverterIOError(
                message=f"failed to render {entry.path}: {e}",
                details={"operation": f"render {entry.path}", "path": str(target), "exc_type": e.__class__.__name__},
            ) from e
        if not isinstance(content, str):
            raise ConverterIOError(
                message=f"failed to render {entry.path}: content must be text",
                details={"operation": f"render {entry.path}", "path": str(target), "received": type(content).__name__},
            )
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            # newline="" preserva o manifest byte a byte
            with target.open("w", encoding="utf-8", newline="") as f:
                f.write(content)
        except OSError as e:
            raise ConverterIOError(
                message=f"failed to write {entry.path}",
                details={"operation": f"write {entry.path}", "path": str(target), "exc_message": str(e)},
            ) from e
        written.append(target)

    logger.debug("chart tree populated at %s (%d files)", workspace.chart_source_dir, len(written))
    return written
