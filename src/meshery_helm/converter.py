# src/meshery_helm/converter.py
"""
Orquestrador da conversão Design → Helm chart.

Sequência linear, fail-fast:

    load_pattern → render_manifest → derive_identity → open_workspace
    → populate → package → read_archive → discard_archive
    → release_workspace → bytes

Regras:
- Cada etapa encapsula sua falha em uma exceção tipada, com mensagem própria
  da etapa, e a propaga imediatamente; não há retorno parcial nem retry.
- A liberação do workspace é registrada com `with` logo após a abertura e
  roda em todo caminho de saída, exatamente uma vez.
- A remoção do archive após a leitura é best-effort (warning).
- Cada chamada cria o seu ConversionContext; a instância do conversor não
  guarda estado mutável entre conversões e pode ser usada em paralelo.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from meshery_helm.chart.tree import ChartFileSpec, chart_files_for, populate, validate_chart_files
from meshery_helm.chart.types import PackageIdentity, derive_identity
from meshery_helm.chart.workspace import build_workspace
from meshery_helm.core.config.settings import ConverterSettings
from meshery_helm.core.context import ConversionContext
from meshery_helm.core.errors import exception_to_payload
from meshery_helm.core.exceptions import (
    ConverterException,
    ConverterIOError,
    PackagingError,
    RenderError,
)
from meshery_helm.packaging.archive import discard_archive, read_archive
from meshery_helm.packaging.packager import HelmCliPackager, Packager
from meshery_helm.pattern import ManifestRenderer, PatternInput, PatternSource, load_pattern

logger = logging.getLogger(__name__)

CHART_CONTENT_ERROR = "failed to create helm chart content"


@dataclass(frozen=True)
class ConversionResult:
    """Resultado de uma conversão bem-sucedida."""

    chart_bytes: bytes
    identity: PackageIdentity
    archive_name: str
    build_id: str
    events: List[Dict[str, Any]]
    warnings: Dict[str, List[str]]


def _with_step(exc: ConverterException, prefix: str) -> ConverterException:
    """Nova instância da mesma exceção, com a mensagem prefixada pela etapa."""
    return type(exc)(
        message=f"{prefix}: {exc.message}",
        details=dict(exc.details),
        hint=exc.hint,
    )


class HelmConverter:
    """Converte designs em archives Helm (`.tgz`) retornados em memória."""

    def __init__(
        self,
        *,
        renderer: ManifestRenderer,
        settings: Optional[ConverterSettings] = None,
        packager: Optional[Packager] = None,
        chart_files: Optional[Sequence[ChartFileSpec]] = None,
    ):
        self.renderer = renderer
        self.settings = settings or ConverterSettings()
        self.packager = packager or HelmCliPackager.from_settings(self.settings)
        self.chart_files = (
            validate_chart_files(chart_files) if chart_files is not None else chart_files_for(self.settings)
        )

    # ------------------------------------------------------------------
    # API pública
    # ------------------------------------------------------------------
    def convert(self, pattern_source: PatternSource) -> bytes:
        """Converte o design e retorna os bytes do chart empacotado."""
        return self.convert_detailed(pattern_source).chart_bytes

    def convert_detailed(
        self,
        pattern_source: PatternSource,
        *,
        ctx: Optional[ConversionContext] = None,
    ) -> ConversionResult:
        ctx = ctx or ConversionContext(logger_name=__name__)
        step = "load"

        try:
            pattern = load_pattern(pattern_source)
            ctx.log(step_id=step, level="debug", message="pattern loaded", pattern_name=pattern.name)

            step = "render"
            manifest = self._render(pattern)
            ctx.log(
                step_id=step,
                level="info",
                message=f"K8s manifest generated, size: {len(manifest.encode('utf-8'))} bytes",
            )

            step = "identity"
            identity = derive_identity(pattern.name, pattern.version, default_version=self.settings.default_version)
            ctx.log(
                step_id=step,
                level="debug",
                message="package identity derived",
                chart_name=identity.name,
                chart_version=identity.version,
            )

            step = "chart"
            chart_bytes = self._build_chart(identity, manifest, ctx)
        except Exception as e:
            # erro serializável no event log, sem stack trace; a exceção segue para o chamador
            error = exception_to_payload(e, step=step)
            ctx.log(step_id=step, level="error", message=error.message, error=error.to_dict())
            raise

        return ConversionResult(
            chart_bytes=chart_bytes,
            identity=identity,
            archive_name=identity.archive_name,
            build_id=ctx.build_id,
            events=list(ctx.events),
            warnings={k: list(v) for k, v in ctx.warnings.items()},
        )

    # ------------------------------------------------------------------
    # Etapas
    # ------------------------------------------------------------------
    def _render(self, pattern: PatternInput) -> str:
        try:
            manifest = self.renderer.render(pattern)
        except RenderError as e:
            raise _with_step(e, "failed to convert to k8s manifest") from e
        except Exception as e:
            raise RenderError(
                message=f"failed to convert to k8s manifest: {e}",
                details={"pattern_name": pattern.name, "exc_type": e.__class__.__name__},
            ) from e

        if isinstance(manifest, bytes):
            try:
                manifest = manifest.decode("utf-8")
            except UnicodeDecodeError as e:
                raise RenderError(
                    message="failed to convert to k8s manifest: output is not UTF-8",
                    details={"pattern_name": pattern.name},
                ) from e

        if not isinstance(manifest, str):
            raise RenderError(
                message="failed to convert to k8s manifest: renderer must return text",
                details={"pattern_name": pattern.name, "received": type(manifest).__name__},
            )
        return manifest

    def _build_chart(self, identity: PackageIdentity, manifest: str, ctx: ConversionContext) -> bytes:
        try:
            with build_workspace(self.settings, identity.name, ctx=ctx) as ws:
                populate(ws, identity, manifest, files=self.chart_files)
                ctx.log(step_id="populate", level="debug", message="chart tree written", chart_dir=str(ws.chart_source_dir))

                archive_path = self._package(ws.chart_source_dir, ws.destination_dir)

                chart_data = read_archive(archive_path)
                ctx.log(step_id="archive", level="info", message=f"Packaged chart size: {len(chart_data)} bytes")

                discard_archive(archive_path, ctx=ctx)
        except (ConverterIOError, PackagingError) as e:
            raise _with_step(e, CHART_CONTENT_ERROR) from e

        return chart_data

    def _package(self, source_dir, destination_dir):
        try:
            return self.packager.package(source_dir, destination_dir)
        except PackagingError:
            raise
        except Exception as e:
            raise PackagingError(
                message=f"helm packaging failed: {e}",
                details={
                    "source_dir": str(source_dir),
                    "destination_dir": str(destination_dir),
                    "exc_type": e.__class__.__name__,
                },
            ) from e


def convert(
    pattern_source: PatternSource,
    *,
    renderer: ManifestRenderer,
    settings: Optional[ConverterSettings] = None,
    packager: Optional[Packager] = None,
) -> bytes:
    """Atalho: `HelmConverter(...).convert(pattern_source)`."""
    return HelmConverter(renderer=renderer, settings=settings, packager=packager).convert(pattern_source)
