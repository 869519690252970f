# tests/packaging/test_chart_archive.py
"""
Testes de leitura/descarte do archive e da inspeção do Chart.yaml empacotado.
"""

import io
import tarfile

import pytest

from meshery_helm.core.context import ConversionContext
from meshery_helm.core.exceptions import ConverterIOError, PackagingError
from meshery_helm.packaging.archive import discard_archive, read_archive, read_chart_metadata


def _tgz(members):
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w:gz") as tar:
        for name, content in members.items():
            data = content.encode("utf-8")
            info = tarfile.TarInfo(name)
            info.size = len(data)
            tar.addfile(info, io.BytesIO(data))
    return buf.getvalue()


def test_read_chart_metadata_returns_top_level_chart():
    data = _tgz(
        {
            "app/charts/dep/Chart.yaml": "apiVersion: v2\nname: dep\nversion: 9.9.9\n",
            "app/Chart.yaml": "apiVersion: v2\nname: app\nversion: 1.2.3\n",
            "app/templates/manifest.yaml": "kind: Pod\n",
        }
    )

    meta = read_chart_metadata(data)

    assert meta["name"] == "app"
    assert meta["version"] == "1.2.3"


def test_read_chart_metadata_rejects_garbage():
    with pytest.raises(PackagingError, match="not a readable Helm archive"):
        read_chart_metadata(b"definitely not gzip")


def test_read_chart_metadata_requires_chart_yaml():
    data = _tgz({"app/values.yaml": "a: 1\n"})
    with pytest.raises(PackagingError, match="does not contain a Chart.yaml"):
        read_chart_metadata(data)


def test_read_archive_returns_bytes(tmp_path):
    path = tmp_path / "app-1.0.0.tgz"
    path.write_bytes(b"\x1f\x8bpayload")
    assert read_archive(path) == b"\x1f\x8bpayload"


def test_read_archive_missing_file_raises_io_error(tmp_path):
    missing = tmp_path / "missing.tgz"
    with pytest.raises(ConverterIOError) as exc_info:
        read_archive(missing)
    assert exc_info.value.details["path"] == str(missing)


def test_discard_archive_removes_file(tmp_path):
    path = tmp_path / "app-1.0.0.tgz"
    path.write_bytes(b"x")
    assert discard_archive(path) is True
    assert not path.exists()


def test_discard_archive_failure_is_only_a_warning(tmp_path, caplog):
    ctx = ConversionContext()
    missing = tmp_path / "already-gone.tgz"

    with caplog.at_level("WARNING", logger="meshery_helm.packaging.archive"):
        assert discard_archive(missing, ctx=ctx) is False

    assert "Failed to clean up packaged chart" in caplog.text
    assert ctx.warnings["archive"] == ["Failed to clean up packaged chart"]
