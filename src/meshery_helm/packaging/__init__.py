# src/meshery_helm/packaging/__init__.py
"""
Interface com o primitivo de empacotamento externo (helm) e com o archive
que ele produz.
"""

from .archive import discard_archive, read_archive, read_chart_metadata
from .packager import HelmCliPackager, Packager, expected_archive_path

__all__ = [
    "discard_archive",
    "read_archive",
    "read_chart_metadata",
    "HelmCliPackager",
    "Packager",
    "expected_archive_path",
]
