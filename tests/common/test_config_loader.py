"""Tests for landing/common/config_loader.py"""

import pytest

from landing.common.config_loader import load_config, load_site_settings


class TestLoadFromConfigFiles:
    """Tests that load real config YAML files from the repo."""

    def test_load_site_settings_sections(self):
        settings = load_site_settings()
        assert settings["site"]["url"] == "https://discor.com.ar"
        assert settings["api"]["path"] == "/api/products/landing/pages"
        assert settings["api"]["max_limit"] == 100

    def test_wholesale_defaults(self):
        settings = load_site_settings()
        assert settings["wholesale"]["cta_url"] == "https://clientes.discor.com.ar"
        assert settings["wholesale"]["cta_text"] == "Acceder al Área Clientes"

    def test_load_config_missing_file(self):
        with pytest.raises(FileNotFoundError):
            load_config("nonexistent_file.yaml")


class TestCustomConfigDir:
    def test_reads_from_given_dir(self, tmp_path):
        (tmp_path / "site.yaml").write_text("site:\n  url: https://staging.example.com\n", encoding="utf-8")
        assert load_site_settings(tmp_path)["site"]["url"] == "https://staging.example.com"

    def test_empty_file_is_empty_dict(self, tmp_path):
        (tmp_path / "site.yaml").write_text("", encoding="utf-8")
        assert load_site_settings(tmp_path) == {}
