import os
from typing import Dict, Optional

import yaml
from pydantic import BaseModel, Field

from waste_sorter.logger import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = "config.yaml"


def load_config_file(file_path=DEFAULT_CONFIG_PATH):
    """
    Loads the configuration from the specified YAML file.

    Args:
        file_path (str): Path to the YAML configuration file.

    Returns:
        dict: Parsed configuration as a dictionary.
    """
    with open(file_path, "r") as file:
        return yaml.safe_load(file) or {}


class ProviderSettings(BaseModel):
    model: str
    api_key_env: str
    base_url: Optional[str] = None


def _default_providers() -> Dict[str, ProviderSettings]:
    return {
        "GROQ": ProviderSettings(
            model="meta-llama/llama-4-scout-17b-16e-instruct",
            api_key_env="GROQ_API_KEY",
            base_url="https://api.groq.com/openai/v1",
        ),
        "TOGETHER": ProviderSettings(
            model="meta-llama/Llama-3.2-11B-Vision-Instruct-Turbo",
            api_key_env="TOGETHER_API_KEY",
            base_url="https://api.together.xyz/v1",
        ),
        "GEMINI": ProviderSettings(model="gemini-1.5-flash", api_key_env="GEMINI_API_KEY"),
        "OPENAI": ProviderSettings(model="gpt-4o-mini", api_key_env="OPENAI_API_KEY"),
    }


class LLMConfig(BaseModel):
    default_provider: str = "TOGETHER"
    temperature: float = Field(0.2, ge=0.0, le=2.0)
    max_tokens: int = Field(1000, gt=0)
    max_attempts: int = Field(1, ge=1)
    providers: Dict[str, ProviderSettings] = Field(default_factory=_default_providers)


class AppConfig(BaseModel):
    llm: LLMConfig = Field(default_factory=LLMConfig)
    homepage_url: str = "https://www.chinesepowered.com"


def load_app_config(file_path: str = DEFAULT_CONFIG_PATH) -> AppConfig:
    """
    Build the validated application config.

    Values come from the YAML file when present; `VISION_MODEL` in the
    environment overrides the default provider.
    """
    try:
        raw = load_config_file(file_path)
    except FileNotFoundError:
        logger.warning("Config file '%s' not found, using built-in defaults.", file_path)
        raw = {}

    llm_raw = dict(raw.get("llm") or {})
    providers_raw = llm_raw.pop("providers", None) or {}

    providers = _default_providers()
    for name, settings in providers_raw.items():
        providers[name.upper()] = ProviderSettings(**settings)

    env_default = os.getenv("VISION_MODEL")
    if env_default:
        llm_raw["default_provider"] = env_default
    if "default_provider" in llm_raw:
        llm_raw["default_provider"] = str(llm_raw["default_provider"]).upper()

    config = AppConfig(
        llm=LLMConfig(providers=providers, **llm_raw),
        **{k: v for k, v in raw.items() if k != "llm"},
    )
    logger.debug("Loaded config with default provider '%s'", config.llm.default_provider)
    return config
