# src/meshery_helm/packaging/archive.py
"""
Leitura e descarte do archive produzido pelo empacotador.

- `read_archive`: lê o `.tgz` inteiro para memória (falha é fatal)
- `discard_archive`: remove o arquivo do destino (best-effort: só loga)
- `read_chart_metadata`: abre um archive em memória e devolve o Chart.yaml,
  para inspeção de nome/versão declarados
"""

from __future__ import annotations

import io
import logging
import tarfile
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from meshery_helm.core.context import ConversionContext
from meshery_helm.core.exceptions import ConverterIOError, PackagingError

logger = logging.getLogger(__name__)

STEP_ID = "archive"


def read_archive(path: Path) -> bytes:
    """Lê o archive produzido. Raises ConverterIOError."""
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise ConverterIOError(
            message=f"failed to read packaged chart: {path}",
            details={"operation": "read packaged chart", "path": str(path), "exc_message": str(e)},
        ) from e


def discard_archive(path: Path, *, ctx: Optional[ConversionContext] = None) -> bool:
    """
    Remove o archive do diretório de destino.

    Os bytes já foram capturados; uma falha aqui só deixa um arquivo órfão,
    então é registrada como warning e nunca propagada.

    Returns:
        bool: True se o arquivo foi removido.
    """
    try:
        Path(path).unlink()
    except OSError as e:
        message = "Failed to clean up packaged chart"
        logger.warning("%s %s: %s", message, path, e)
        if ctx is not None:
            ctx.add_warning(step_id=STEP_ID, message=message, path=str(path), exc_message=str(e))
        return False
    return True


def read_chart_metadata(data: bytes) -> Dict[str, Any]:
    """
    Retorna o conteúdo do `<chart>/Chart.yaml` de um archive Helm.

    O Chart.yaml de topo é o membro com exatamente dois componentes de path;
    Chart.yaml de subcharts (`<chart>/charts/...`) são ignorados.

    Raises:
        PackagingError: Bytes não são um tar.gz válido ou não contêm Chart.yaml.
    """
    try:
        with tarfile.open(fileobj=io.BytesIO(data), mode="r:gz") as tar:
            for member in tar.getmembers():
                parts = member.name.strip("/").split("/")
                if len(parts) == 2 and parts[1] == "Chart.yaml" and member.isfile():
                    f = tar.extractfile(member)
                    if f is None:
                        break
                    meta = yaml.safe_load(f.read().decode("utf-8"))
                    if not isinstance(meta, dict):
                        break
                    return meta
    except (tarfile.TarError, OSError, EOFError, yaml.YAMLError, UnicodeDecodeError) as e:
        raise PackagingError(
            message="packaged chart is not a readable Helm archive",
            details={"bytes": len(data), "exc_message": str(e)},
        ) from e

    raise PackagingError(
        message="packaged chart does not contain a Chart.yaml",
        details={"bytes": len(data)},
    )
