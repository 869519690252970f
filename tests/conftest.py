# tests/conftest.py
"""
Fixtures compartilhados para testes do conversor Design → Helm chart.

Este módulo fornece:
- settings apontando para uma raiz de dados isolada em `tmp_path`
- um renderer de manifest determinístico
- um empacotador falso (tar.gz no layout do Helm), para testes sem o binário `helm`

Decisões:
    - Nenhuma fixture escreve fora de `tmp_path`
    - O empacotador falso é uma *classe* devolvida pelo fixture, para que cada
      teste instancie o comportamento que precisa (ex.: falhar de propósito)
    - Imports do pacote são lazy, para mensagens de erro mais claras
"""

import io
import tarfile
from pathlib import Path

import pytest
import yaml


SAMPLE_MANIFEST = """\
apiVersion: apps/v1
kind: Deployment
metadata:
  name: web
spec:
  replicas: 1
"""


@pytest.fixture
def sample_manifest() -> str:
    return SAMPLE_MANIFEST


@pytest.fixture
def data_root(tmp_path: Path) -> Path:
    """Raiz de dados falsa (equivalente a `~/.meshery`)."""
    return tmp_path / "meshery-data"


@pytest.fixture
def settings(data_root: Path):
    from meshery_helm.core.config.settings import ConverterSettings

    return ConverterSettings(data_root=data_root)


@pytest.fixture
def renderer(sample_manifest):
    """Renderer que devolve sempre o mesmo manifest e registra os designs recebidos."""
    from meshery_helm.pattern import CallableRenderer

    seen = []

    def _render(pattern):
        seen.append(pattern)
        return sample_manifest

    r = CallableRenderer(_render)
    r.seen = seen
    return r


@pytest.fixture
def FakePackager():
    """
    Fixture factory que fornece um empacotador duck-typed (protocolo Packager).

    Gera `<destination>/<name>-<version>.tgz` com o mesmo layout de um chart
    empacotado pelo Helm (`<chart>/Chart.yaml`, `<chart>/templates/...`).

    Parâmetros do construtor:
        fail_with: exceção a levantar em `package()` (simula falha do helm)
        missing_archive: quando True, retorna um path sem escrever o archive

    Atributos de inspeção:
        calls: lista de (source_dir, destination_dir)
        snapshots: arquivos presentes na árvore fonte no momento do empacotamento
    """

    class _FakePackager:
        def __init__(self, *, fail_with=None, missing_archive=False):
            self.fail_with = fail_with
            self.missing_archive = missing_archive
            self.calls = []
            self.snapshots = []

        def package(self, source_dir, destination_dir):
            source_dir = Path(source_dir)
            destination_dir = Path(destination_dir)
            self.calls.append((source_dir, destination_dir))
            self.snapshots.append(
                {
                    p.relative_to(source_dir).as_posix(): p.read_text(encoding="utf-8")
                    for p in sorted(source_dir.rglob("*"))
                    if p.is_file()
                }
            )

            if self.fail_with is not None:
                raise self.fail_with

            meta = yaml.safe_load((source_dir / "Chart.yaml").read_text(encoding="utf-8"))
            archive = destination_dir / f"{meta['name']}-{meta['version']}.tgz"
            if self.missing_archive:
                return archive

            buf = io.BytesIO()
            with tarfile.open(fileobj=buf, mode="w:gz") as tar:
                tar.add(str(source_dir), arcname=source_dir.name)
            archive.write_bytes(buf.getvalue())
            return archive

    return _FakePackager
