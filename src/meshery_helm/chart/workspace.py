# src/meshery_helm/chart/workspace.py
"""
Build Workspace Manager.

Cada conversão monta o seu chart dentro de um workspace isolado:

    <data_root>/<tmp_dir>/<build_id>/<chart_name>/templates
    <data_root>/<packages_dir>/<build_id>/            → destino do empacotador

O `build_id` é um token aleatório de 128 bits, gerado por conversão. É ele
que garante que conversões concorrentes (inclusive com o mesmo nome de
chart) nunca leiam ou escrevam os arquivos umas das outras, sem nenhum lock.

Regras:
    - Diretórios pais (data_root, tmp_dir, packages_dir) são criados de forma
      idempotente
    - Os diretórios `<build_id>` são criados com `exist_ok=False`: nunca são reutilizados
    - `release()` remove `<tmp_dir>/<build_id>` e `<packages_dir>/<build_id>`
      recursivamente, no máximo uma vez;
      falhas de remoção são apenas logadas (dados órfãos não afetam a saída)
    - Falhas de criação são fatais e levantam ConverterIOError com o path
"""

from __future__ import annotations

import logging
import shutil
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterator, Optional

from meshery_helm.core.config.settings import ConverterSettings
from meshery_helm.core.context import ConversionContext, new_build_id
from meshery_helm.core.exceptions import ConverterIOError

logger = logging.getLogger(__name__)

STEP_ID = "workspace"


def _mkdir(path: Path, *, operation: str, exist_ok: bool = True) -> None:
    try:
        path.mkdir(parents=exist_ok, exist_ok=exist_ok)
    except OSError as e:
        raise ConverterIOError(
            message=f"failed to create {operation}: {path}",
            details={"operation": f"create {operation}", "path": str(path), "exc_message": str(e)},
            hint="Verifique permissões e espaço livre no diretório de dados do conversor.",
        ) from e


@dataclass
class BuildWorkspace:
    """
    Escopo de filesystem de uma conversão.

    Campos:
    - root_dir: `<tmp_dir>/<build_id>`, removido por `release()`
    - chart_source_dir: `<root_dir>/<chart_name>`, entrada do empacotador
    - templates_dir: `<chart_source_dir>/templates`
    - packages_dir: área durável dos archives (fora de root_dir)
    - destination_dir: `<packages_dir>/<build_id>`, destino exclusivo do
      empacotador nesta conversão, removido por `release()`
    - build_id: token único da conversão
    """

    root_dir: Path
    chart_source_dir: Path
    templates_dir: Path
    packages_dir: Path
    destination_dir: Path
    build_id: str
    on_warning: Optional[Callable[[str, dict], None]] = field(default=None, repr=False)

    _released: bool = field(default=False, init=False, repr=False)

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        """Remove o workspace e o destino do build. Idempotente; nunca levanta exceção de I/O."""
        if self._released:
            return
        self._released = True

        self._remove(self.root_dir, "Failed to clean up build directory")
        self._remove(self.destination_dir, "Failed to clean up package destination")

    def _remove(self, path: Path, message: str) -> None:
        try:
            shutil.rmtree(path)
        except FileNotFoundError:
            return
        except OSError as e:
            extra = {"path": str(path), "exc_message": str(e)}
            logger.warning("%s %s: %s", message, path, e)
            if self.on_warning is not None:
                self.on_warning(message, extra)


def open_workspace(
    settings: ConverterSettings,
    chart_name: str,
    *,
    build_id: Optional[str] = None,
    ctx: Optional[ConversionContext] = None,
) -> BuildWorkspace:
    """
    Cria a árvore de diretórios do workspace e retorna o BuildWorkspace.

    O chamador é dono do retorno e deve chamar `release()`; prefira
    `build_workspace(...)`, que garante a liberação.

    Args:
        settings: Settings com a raiz de dados e os subdiretórios.
        chart_name: Nome (já sanitizado) do chart; vira o nome do diretório fonte.
        build_id: Token do build. Default: `ctx.build_id` ou um uuid4 novo.
        ctx: Contexto da conversão, para eventos e warnings.

    Raises:
        ConverterIOError: Raiz de dados não resolvível ou falha de mkdir.
    """
    if build_id is None:
        build_id = ctx.build_id if ctx is not None else new_build_id()

    packages_dir = settings.packages_path()
    tmp_dir = settings.tmp_path()

    _mkdir(packages_dir, operation="package directory")
    _mkdir(tmp_dir, operation="temp directory")

    root_dir = tmp_dir / build_id
    _mkdir(root_dir, operation="build directory", exist_ok=False)

    on_warning = None
    if ctx is not None:
        def on_warning(message: str, extra: dict) -> None:
            ctx.add_warning(step_id=STEP_ID, message=message, **extra)

    chart_source_dir = root_dir / chart_name
    workspace = BuildWorkspace(
        root_dir=root_dir,
        chart_source_dir=chart_source_dir,
        templates_dir=chart_source_dir / "templates",
        packages_dir=packages_dir,
        destination_dir=packages_dir / build_id,
        build_id=build_id,
        on_warning=on_warning,
    )

    try:
        _mkdir(workspace.chart_source_dir, operation="chart source directory")
        _mkdir(workspace.templates_dir, operation="templates directory")
        _mkdir(workspace.destination_dir, operation="package destination directory", exist_ok=False)
    except ConverterIOError:
        workspace.release()
        raise

    if ctx is not None:
        ctx.log(step_id=STEP_ID, level="debug", message="workspace opened", root_dir=str(root_dir))

    return workspace


@contextmanager
def build_workspace(
    settings: ConverterSettings,
    chart_name: str,
    *,
    build_id: Optional[str] = None,
    ctx: Optional[ConversionContext] = None,
) -> Iterator[BuildWorkspace]:
    """Abre um workspace e garante `release()` em qualquer caminho de saída."""
    workspace = open_workspace(settings, chart_name, build_id=build_id, ctx=ctx)
    try:
        yield workspace
    finally:
        workspace.release()
        if ctx is not None:
            ctx.log(step_id=STEP_ID, level="debug", message="workspace released", root_dir=str(workspace.root_dir))
