# src/meshery_helm/chart/__init__.py
"""
Montagem da árvore fonte do chart: nome, identidade, workspace e arquivos.
"""

from .naming import FALLBACK_CHART_NAME, MAX_CHART_NAME_LENGTH, sanitize_chart_name
from .tree import DEFAULT_CHART_FILES, ChartFileSpec, chart_files_for, populate, validate_chart_files
from .types import ChartMetadata, PackageIdentity, derive_identity
from .workspace import BuildWorkspace, build_workspace, open_workspace

__all__ = [
    "FALLBACK_CHART_NAME",
    "MAX_CHART_NAME_LENGTH",
    "sanitize_chart_name",
    "DEFAULT_CHART_FILES",
    "ChartFileSpec",
    "chart_files_for",
    "populate",
    "validate_chart_files",
    "ChartMetadata",
    "PackageIdentity",
    "derive_identity",
    "BuildWorkspace",
    "build_workspace",
    "open_workspace",
]
