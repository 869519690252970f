# tests/chart/test_chart_identity.py
"""
Testes de PackageIdentity e ChartMetadata.

Fixa a decisão sobre nomes vazios: a identidade usa sempre o nome
sanitizado, então um design sem nome vira "meshery-design" e nunca um
chart com nome vazio.
"""

import dataclasses

import pytest
import yaml

from meshery_helm.chart.naming import FALLBACK_CHART_NAME
from meshery_helm.chart.types import ChartMetadata, PackageIdentity, derive_identity


def test_identity_uses_sanitized_name():
    identity = derive_identity("My Service!", "1.0.0", default_version="0.1.0")
    assert identity == PackageIdentity(name="my-service", version="1.0.0")


def test_empty_name_falls_back_to_default_chart_name():
    identity = derive_identity("", "0.1.0", default_version="9.9.9")
    assert identity.name == FALLBACK_CHART_NAME
    assert identity.version == "0.1.0"


def test_blank_version_uses_default_version():
    assert derive_identity("app", "  ", default_version="0.1.0").version == "0.1.0"
    assert derive_identity("app", None, default_version="0.2.0").version == "0.2.0"


def test_version_is_free_text():
    identity = derive_identity("app", "v1-beta+build.7", default_version="0.1.0")
    assert identity.version == "v1-beta+build.7"


def test_identity_is_immutable():
    identity = PackageIdentity(name="app", version="1.0.0")
    with pytest.raises(dataclasses.FrozenInstanceError):
        identity.name = "other"  # type: ignore[misc]


def test_archive_name():
    assert PackageIdentity(name="app", version="1.2.3").archive_name == "app-1.2.3.tgz"


def test_chart_metadata_yaml_fields():
    meta = ChartMetadata.for_identity(PackageIdentity(name="my-service", version="1.0.0"))
    loaded = yaml.safe_load(meta.to_yaml())

    assert loaded == {
        "apiVersion": "v2",
        "description": "Helm chart for 'my-service' generated by Meshery",
        "name": "my-service",
        "type": "application",
        "version": "1.0.0",
    }


def test_chart_metadata_keys_are_sorted():
    meta = ChartMetadata.for_identity(PackageIdentity(name="app", version="1.0.0"))
    keys = [line.split(":", 1)[0] for line in meta.to_yaml().splitlines()]
    assert keys == ["apiVersion", "description", "name", "type", "version"]


def test_numeric_looking_version_stays_a_string():
    meta = ChartMetadata.for_identity(PackageIdentity(name="app", version="1.0"))
    assert yaml.safe_load(meta.to_yaml())["version"] == "1.0"
