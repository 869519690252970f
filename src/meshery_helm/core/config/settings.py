# src/meshery_helm/core/config/settings.py
"""
Settings efetivos do conversor.

Este módulo transforma a configuração resolvida (dict) em um objeto imutável
`ConverterSettings`, injetado explicitamente no Build Workspace Manager, no
Package Tree Builder e no empacotador. Nenhum componente lê diretórios fixos
ou variáveis de ambiente por conta própria: a raiz de dados é sempre
resolvida a partir destes settings, o que permite testes com uma raiz falsa.

Layout (relativo à raiz de dados, default `~/.meshery`):
    - helm-packages/                    → área de saída dos archives
    - tmp/helm/<build_id>/<chart>/...   → workspaces temporários
"""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any, Dict, Mapping, Optional, Union

from meshery_helm.core.exceptions import ConverterConfigurationError, ConverterIOError

from .errors import ConfigTypeConflictError
from .loader import load_config, load_file
from .merge import deep_merge

DATA_ROOT_DIRNAME = ".meshery"

DEFAULT_CONFIG: Dict[str, Any] = {
    "paths": {
        "data_root": None,
        "packages_dir": "helm-packages",
        "tmp_dir": "tmp/helm",
    },
    "chart": {
        "default_version": "0.1.0",
        "include_helpers": False,
        "include_notes": False,
        "extra_files": {},
    },
    "packager": {
        "helm_binary": "helm",
        "timeout_seconds": 120,
    },
}


def _section(cfg: Mapping[str, Any], name: str) -> Dict[str, Any]:
    value = cfg.get(name)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConverterConfigurationError(
            message=f"Seção de configuração '{name}' deve ser um mapa",
            details={"section": name, "received": type(value).__name__},
            hint=f"Declare '{name}:' como um mapa YAML.",
        )
    return value


def _relative_subpath(value: Any, *, key: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ConverterConfigurationError(
            message=f"paths.{key} deve ser uma string não vazia",
            details={"key": f"paths.{key}", "received": repr(value)},
        )
    p = PurePosixPath(value.strip())
    if p.is_absolute() or ".." in p.parts:
        raise ConverterConfigurationError(
            message=f"paths.{key} deve ser relativo à raiz de dados",
            details={"key": f"paths.{key}", "received": value},
            hint="Use caminhos relativos como 'tmp/helm'.",
        )
    return str(p)


def _bool(value: Any, *, key: str) -> bool:
    if not isinstance(value, bool):
        raise ConverterConfigurationError(
            message=f"{key} deve ser booleano",
            details={"key": key, "received": repr(value)},
        )
    return value


@dataclass(frozen=True)
class ConverterSettings:
    """Configuração imutável e já validada de uma instância do conversor."""

    data_root: Optional[Path] = None
    packages_dir: str = "helm-packages"
    tmp_dir: str = "tmp/helm"
    default_version: str = "0.1.0"
    include_helpers: bool = False
    include_notes: bool = False
    extra_files: Dict[str, str] = field(default_factory=dict)
    helm_binary: str = "helm"
    timeout_seconds: float = 120.0

    # -----------------------------
    # Construção
    # -----------------------------
    @classmethod
    def from_config(cls, cfg: Mapping[str, Any]) -> "ConverterSettings":
        """
        Constrói settings a partir de um dict de configuração resolvido.

        Chaves ausentes assumem os valores de `DEFAULT_CONFIG`.

        Raises:
            ConverterConfigurationError: Se alguma chave conhecida tiver tipo ou valor inválido.
        """
        try:
            merged = deep_merge(DEFAULT_CONFIG, dict(cfg))
        except ConfigTypeConflictError as e:
            raise ConverterConfigurationError(
                message=f"Configuração incompatível com os defaults: {e}",
                details={"exc_message": str(e)},
            ) from e

        paths = _section(merged, "paths")
        chart = _section(merged, "chart")
        packager = _section(merged, "packager")

        raw_root = paths.get("data_root")
        if raw_root is not None and (not isinstance(raw_root, str) or not raw_root.strip()):
            raise ConverterConfigurationError(
                message="paths.data_root deve ser uma string não vazia ou null",
                details={"key": "paths.data_root", "received": repr(raw_root)},
            )

        default_version = chart.get("default_version")
        if not isinstance(default_version, str) or not default_version.strip():
            raise ConverterConfigurationError(
                message="chart.default_version deve ser uma string não vazia",
                details={"key": "chart.default_version", "received": repr(default_version)},
            )

        extra_files = chart.get("extra_files") or {}
        if not isinstance(extra_files, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in extra_files.items()
        ):
            raise ConverterConfigurationError(
                message="chart.extra_files deve mapear caminho relativo → conteúdo (strings)",
                details={"key": "chart.extra_files"},
            )
        for rel_path in extra_files:
            p = PurePosixPath(rel_path)
            if not rel_path.strip() or p.is_absolute() or ".." in p.parts:
                raise ConverterConfigurationError(
                    message=f"chart.extra_files: caminho inválido {rel_path!r}",
                    details={"key": "chart.extra_files", "path": rel_path},
                    hint="Use caminhos relativos ao diretório do chart, sem '..'.",
                )

        helm_binary = packager.get("helm_binary")
        if not isinstance(helm_binary, str) or not helm_binary.strip():
            raise ConverterConfigurationError(
                message="packager.helm_binary deve ser uma string não vazia",
                details={"key": "packager.helm_binary", "received": repr(helm_binary)},
            )

        timeout = packager.get("timeout_seconds")
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise ConverterConfigurationError(
                message="packager.timeout_seconds deve ser um número positivo",
                details={"key": "packager.timeout_seconds", "received": repr(timeout)},
            )

        return cls(
            data_root=Path(raw_root).expanduser() if raw_root else None,
            packages_dir=_relative_subpath(paths.get("packages_dir"), key="packages_dir"),
            tmp_dir=_relative_subpath(paths.get("tmp_dir"), key="tmp_dir"),
            default_version=default_version.strip(),
            include_helpers=_bool(chart.get("include_helpers"), key="chart.include_helpers"),
            include_notes=_bool(chart.get("include_notes"), key="chart.include_notes"),
            extra_files=dict(extra_files),
            helm_binary=helm_binary.strip(),
            timeout_seconds=float(timeout),
        )

    # -----------------------------
    # Paths
    # -----------------------------
    def resolve_data_root(self) -> Path:
        """Retorna a raiz de dados; sem override, `<home>/.meshery`."""
        if self.data_root is not None:
            return Path(self.data_root)
        try:
            home = Path.home()
        except (RuntimeError, KeyError) as e:
            raise ConverterIOError(
                message="failed to get user home directory",
                details={"operation": "resolve_home", "exc_message": str(e)},
                hint="Defina paths.data_root explicitamente na configuração.",
            ) from e
        return home / DATA_ROOT_DIRNAME

    def packages_path(self) -> Path:
        return self.resolve_data_root() / self.packages_dir

    def tmp_path(self) -> Path:
        return self.resolve_data_root() / self.tmp_dir


def load_settings(
    *,
    defaults_path: Optional[Union[str, Path]] = None,
    local_path: Optional[Union[str, Path]] = None,
) -> ConverterSettings:
    """
    Resolve settings a partir de arquivos.

    Sem `defaults_path`, os defaults embutidos (`DEFAULT_CONFIG`) são usados
    como base e apenas o override local (se existir) é lido do disco.
    """
    if defaults_path is not None:
        cfg = load_config(defaults_path=defaults_path, local_path=local_path)
    else:
        cfg = deepcopy(DEFAULT_CONFIG)
        if local_path is not None and Path(local_path).exists():
            cfg = deep_merge(cfg, load_file(Path(local_path)))
    return ConverterSettings.from_config(cfg)
