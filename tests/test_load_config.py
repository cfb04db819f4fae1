import pytest
from pydantic import ValidationError

from waste_sorter.utils.load_config import AppConfig, load_app_config, load_config_file


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "homepage_url: https://example.org\n"
        "llm:\n"
        "  default_provider: gemini\n"
        "  temperature: 0.1\n"
        "  max_tokens: 400\n"
        "  providers:\n"
        "    GEMINI:\n"
        "      model: gemini-2.0-flash\n"
        "      api_key_env: GOOGLE_KEY\n"
    )
    return path


def test_load_config_file(config_file):
    raw = load_config_file(str(config_file))
    assert raw["llm"]["max_tokens"] == 400


def test_load_app_config(config_file, monkeypatch):
    monkeypatch.delenv("VISION_MODEL", raising=False)

    config = load_app_config(str(config_file))

    assert isinstance(config, AppConfig)
    assert config.homepage_url == "https://example.org"
    assert config.llm.default_provider == "GEMINI"
    assert config.llm.temperature == 0.1
    assert config.llm.max_tokens == 400
    assert config.llm.max_attempts == 1
    assert config.llm.providers["GEMINI"].model == "gemini-2.0-flash"
    assert config.llm.providers["GEMINI"].api_key_env == "GOOGLE_KEY"
    # Providers not mentioned in the file keep their defaults
    assert config.llm.providers["GROQ"].base_url == "https://api.groq.com/openai/v1"


def test_env_overrides_default_provider(config_file, monkeypatch):
    monkeypatch.setenv("VISION_MODEL", "groq")

    config = load_app_config(str(config_file))

    assert config.llm.default_provider == "GROQ"


def test_missing_file_uses_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv("VISION_MODEL", raising=False)

    config = load_app_config(str(tmp_path / "missing.yaml"))

    assert config.llm.default_provider == "TOGETHER"
    assert config.llm.temperature == 0.2
    assert config.llm.max_tokens == 1000
    assert set(config.llm.providers) == {"GROQ", "TOGETHER", "GEMINI", "OPENAI"}


def test_invalid_values_rejected(tmp_path, monkeypatch):
    monkeypatch.delenv("VISION_MODEL", raising=False)
    path = tmp_path / "config.yaml"
    path.write_text("llm:\n  max_tokens: 0\n")

    with pytest.raises(ValidationError):
        load_app_config(str(path))
