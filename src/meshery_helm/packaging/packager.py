# src/meshery_helm/packaging/packager.py
"""
External Packager Invoker.

O formato de pacote não é implementado aqui: o empacotamento é delegado a um
primitivo externo, modelado pelo protocolo `Packager`. A implementação
padrão, `HelmCliPackager`, executa `helm package` em um subprocesso.

Regras:
    - O destino é um diretório durável separado do workspace temporário
    - Falhas não são repetidas: são determinísticas para a mesma árvore
    - Toda falha vira PackagingError, com stderr em `details`
"""

from __future__ import annotations

import logging
import re
import subprocess
from pathlib import Path
from typing import List, Optional, Protocol, Union, runtime_checkable

import yaml

from meshery_helm.core.exceptions import PackagingError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

_SAVED_TO = re.compile(r"saved it to:\s*(?P<path>.+?)\s*$", re.MULTILINE)


@runtime_checkable
class Packager(Protocol):
    """Primitivo externo: empacota `source_dir` em `destination_dir` e retorna o archive."""

    def package(self, source_dir: Path, destination_dir: Path) -> Path:
        ...


def expected_archive_path(source_dir: Path, destination_dir: Path) -> Path:
    """
    Calcula `<destination>/<name>-<version>.tgz` a partir do Chart.yaml da árvore.

    Raises:
        PackagingError: Chart.yaml ausente, ilegível ou sem name/version.
    """
    chart_file = Path(source_dir) / "Chart.yaml"
    try:
        with chart_file.open("r", encoding="utf-8") as f:
            meta = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise PackagingError(
            message=f"failed to read chart metadata: {chart_file}",
            details={"source_dir": str(source_dir), "exc_message": str(e)},
        ) from e

    if not isinstance(meta, dict) or not meta.get("name") or not meta.get("version"):
        raise PackagingError(
            message="chart metadata must declare name and version",
            details={"source_dir": str(source_dir), "chart_file": str(chart_file)},
        )
    return Path(destination_dir) / f"{meta['name']}-{meta['version']}.tgz"


class HelmCliPackager:
    """Empacota charts chamando o binário `helm` (Helm 3)."""

    def __init__(self, *, helm_binary: str = "helm", timeout_seconds: float = 120.0):
        self.helm_binary = helm_binary
        self.timeout_seconds = timeout_seconds

    @classmethod
    def from_settings(cls, settings) -> "HelmCliPackager":
        return cls(helm_binary=settings.helm_binary, timeout_seconds=settings.timeout_seconds)

    def command(self, source_dir: Path, destination_dir: Path) -> List[str]:
        return [self.helm_binary, "package", str(source_dir), "--destination", str(destination_dir)]

    def package(self, source_dir: Path, destination_dir: Path) -> Path:
        source_dir = Path(source_dir)
        destination_dir = Path(destination_dir)
        cmd = self.command(source_dir, destination_dir)
        details = {"source_dir": str(source_dir), "destination_dir": str(destination_dir), "command": cmd}

        logger.info("Packaging chart from: %s to: %s", source_dir, destination_dir)

        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout_seconds,
                check=False,
            )
        except FileNotFoundError as e:
            raise PackagingError(
                message=f"helm binary not found: {self.helm_binary}",
                details=details,
                hint="Instale o Helm 3 ou ajuste packager.helm_binary.",
            ) from e
        except subprocess.TimeoutExpired as e:
            raise PackagingError(
                message=f"helm packaging timed out after {self.timeout_seconds:g}s",
                details=details,
            ) from e
        except OSError as e:
            raise PackagingError(
                message="helm packaging could not be started",
                details={**details, "exc_message": str(e)},
            ) from e

        if proc.returncode != 0:
            raise PackagingError(
                message="helm packaging failed",
                details={**details, "returncode": proc.returncode, "stderr": (proc.stderr or "").strip()},
                hint="Inspecione o Chart.yaml gerado; falhas de empacotamento são determinísticas.",
            )

        archive = self._archive_from_output(proc.stdout or "")
        if archive is None:
            archive = expected_archive_path(source_dir, destination_dir)

        if not archive.is_file():
            raise PackagingError(
                message=f"packaged chart not found: {archive}",
                details={**details, "stdout": (proc.stdout or "").strip()},
            )
        return archive

    @staticmethod
    def _archive_from_output(stdout: str) -> Optional[Path]:
        m = _SAVED_TO.search(stdout)
        if m is None:
            return None
        return Path(m.group("path"))
