"""Tests for settings loading."""

import logging

import pytest
from craftlens.config import AnalysisSettings, load_settings


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    for name in ("CRAFTLENS_TEMPLATE", "CRAFTLENS_FORMAT", "CRAFTLENS_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


def test_defaults():
    settings = load_settings()
    assert settings == AnalysisSettings()
    assert settings.default_template == "three-act"
    assert settings.output_format == "text"


def test_yaml_file_in_working_directory(tmp_path):
    (tmp_path / "craftlens.yaml").write_text("default_template: hero-journey\noutput_format: JSON\n")
    settings = load_settings()
    assert settings.default_template == "hero-journey"
    assert settings.output_format == "json"


def test_environment_overrides_file(tmp_path, monkeypatch):
    config = tmp_path / "custom.yaml"
    config.write_text("default_template: five-act\nlog_level: info\n")
    monkeypatch.setenv("CRAFTLENS_LOG_LEVEL", "debug")

    settings = load_settings(config)
    assert settings.default_template == "five-act"
    assert settings.log_level == "DEBUG"


def test_invalid_value(tmp_path):
    (tmp_path / "craftlens.yaml").write_text("output_format: xml\n")
    with pytest.raises(ValueError):
        load_settings()


def test_missing_explicit_file():
    with pytest.raises(FileNotFoundError):
        load_settings("missing.yaml")


def test_file_must_be_mapping(tmp_path):
    (tmp_path / "craftlens.yaml").write_text("- one\n- two\n")
    with pytest.raises(ValueError):
        load_settings()


def test_unknown_keys_are_ignored(caplog):
    with caplog.at_level(logging.WARNING, logger="craftlens.config"):
        settings = AnalysisSettings.from_dict({"output_format": "yaml", "colour": "blue"})
    assert settings.output_format == "yaml"
    assert "colour" in caplog.text


@pytest.mark.parametrize("content", ["output_format: 3\n", "log_level: null\n", "default_template: [a, b]\n"])
def test_non_string_values_are_rejected(tmp_path, content):
    (tmp_path / "craftlens.yaml").write_text(content)
    with pytest.raises(ValueError):
        load_settings()
