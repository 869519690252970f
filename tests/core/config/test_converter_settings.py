# tests/core/config/test_converter_settings.py
"""
Testes de ConverterSettings: construção a partir de config, validação e paths.
"""

from pathlib import Path

import pytest

from meshery_helm.core.config.loader import load_config
from meshery_helm.core.config.settings import DEFAULT_CONFIG, ConverterSettings, load_settings
from meshery_helm.core.exceptions import ConverterConfigurationError

REPO_DEFAULTS = Path(__file__).parents[3] / "config" / "converter.defaults.yaml"


def test_empty_config_gives_defaults():
    assert ConverterSettings.from_config({}) == ConverterSettings()


def test_shipped_defaults_file_matches_builtin_defaults():
    assert load_config(defaults_path=REPO_DEFAULTS) == DEFAULT_CONFIG


def test_from_config_reads_every_section(tmp_path: Path):
    cfg = {
        "paths": {"data_root": str(tmp_path), "packages_dir": "out", "tmp_dir": "scratch/helm"},
        "chart": {"default_version": "2.0.0", "include_helpers": True, "extra_files": {"a.txt": "a"}},
        "packager": {"helm_binary": "/usr/local/bin/helm", "timeout_seconds": 15},
    }

    s = ConverterSettings.from_config(cfg)

    assert s.data_root == tmp_path
    assert s.packages_path() == tmp_path / "out"
    assert s.tmp_path() == tmp_path / "scratch" / "helm"
    assert s.default_version == "2.0.0"
    assert s.include_helpers is True
    assert s.include_notes is False
    assert s.extra_files == {"a.txt": "a"}
    assert s.helm_binary == "/usr/local/bin/helm"
    assert s.timeout_seconds == 15.0


def test_default_data_root_is_under_home(monkeypatch, tmp_path: Path):
    monkeypatch.setattr(Path, "home", staticmethod(lambda: tmp_path))

    s = ConverterSettings()

    assert s.resolve_data_root() == tmp_path / ".meshery"
    assert s.packages_path() == tmp_path / ".meshery" / "helm-packages"
    assert s.tmp_path() == tmp_path / ".meshery" / "tmp" / "helm"


def test_data_root_expands_user(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("HOME", str(tmp_path))
    s = ConverterSettings.from_config({"paths": {"data_root": "~/custom"}})
    assert s.data_root == tmp_path / "custom"


@pytest.mark.parametrize(
    "cfg",
    [
        {"paths": {"tmp_dir": "../outside"}},
        {"paths": {"tmp_dir": "/abs"}},
        {"paths": {"packages_dir": ""}},
        {"paths": {"data_root": ""}},
        {"chart": {"default_version": " "}},
        {"chart": {"include_notes": "yes"}},
        {"chart": {"extra_files": {"a.txt": 1}}},
        {"chart": {"extra_files": {"../evil.txt": "x"}}},
        {"chart": {"extra_files": {"/etc/evil.txt": "x"}}},
        {"packager": {"helm_binary": ""}},
        {"packager": {"timeout_seconds": 0}},
        {"packager": {"timeout_seconds": None}},
    ],
)
def test_invalid_values_raise_configuration_error(cfg):
    with pytest.raises(ConverterConfigurationError):
        ConverterSettings.from_config(cfg)


def test_configuration_error_payload():
    with pytest.raises(ConverterConfigurationError) as exc_info:
        ConverterSettings.from_config({"packager": {"timeout_seconds": -1}})

    payload = exc_info.value.to_payload().to_dict()
    assert payload["type"] == "CONVERTER_CONFIGURATION_ERROR"
    assert payload["details"]["key"] == "packager.timeout_seconds"


def test_load_settings_without_defaults_uses_builtin(tmp_path: Path):
    local = tmp_path / "converter.local.yaml"
    local.write_text("chart:\n  include_notes: true\n", encoding="utf-8")

    s = load_settings(local_path=local)

    assert s.include_notes is True
    assert s.helm_binary == "helm"


def test_load_settings_with_defaults_file(tmp_path: Path):
    local = tmp_path / "converter.local.yaml"
    local.write_text(f"paths:\n  data_root: {tmp_path}\n", encoding="utf-8")

    s = load_settings(defaults_path=REPO_DEFAULTS, local_path=local)

    assert s.resolve_data_root() == tmp_path
    assert s.default_version == "0.1.0"
