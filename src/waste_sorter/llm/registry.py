"""
registry.py

Maps provider names to client classes. Adding a backend means writing a
BaseVisionClient subclass and registering it here; nothing in the
classification path changes.
"""

import sys
from typing import Dict, Type

from waste_sorter.exception import ProviderConfigurationError, ProviderInvocationError
from waste_sorter.llm.base import BaseVisionClient
from waste_sorter.llm.gemini_client import GeminiVisionClient
from waste_sorter.llm.openai_client import GroqVisionClient, OpenAIVisionClient, TogetherVisionClient
from waste_sorter.logger import get_logger
from waste_sorter.utils.load_config import LLMConfig

logger = get_logger(__name__)

PROVIDER_REGISTRY: Dict[str, Type[BaseVisionClient]] = {
    "GROQ": GroqVisionClient,
    "TOGETHER": TogetherVisionClient,
    "GEMINI": GeminiVisionClient,
    "OPENAI": OpenAIVisionClient,
}


def register_provider(name: str, client_cls: Type[BaseVisionClient]) -> None:
    PROVIDER_REGISTRY[name.upper()] = client_cls


def available_providers():
    return sorted(PROVIDER_REGISTRY)


def resolve_provider_name(choice) -> str:
    """
    Canonical (upper-case) provider name for a user choice.
    Unknown values fail here, before any client exists.
    """
    name = str(choice).strip().upper() if choice is not None else ""
    if name not in PROVIDER_REGISTRY:
        raise ProviderConfigurationError(
            f"Unsupported vision provider '{choice}'. Available: {available_providers()}"
        )
    return name


def build_provider(choice, llm_config: LLMConfig, **overrides) -> BaseVisionClient:
    """Instantiate the client for `choice` with the configured model and sampling settings."""
    name = resolve_provider_name(choice)
    settings = llm_config.providers.get(name)
    if settings is None:
        raise ProviderConfigurationError(f"No settings configured for provider '{name}'")

    kwargs = dict(
        model=settings.model,
        api_key_env=settings.api_key_env,
        base_url=settings.base_url,
        temperature=llm_config.temperature,
        max_tokens=llm_config.max_tokens,
        max_attempts=llm_config.max_attempts,
    )
    kwargs.update(overrides)

    try:
        return PROVIDER_REGISTRY[name](**kwargs)
    except ProviderInvocationError:
        raise
    except Exception as e:
        logger.error("Failed to build %s client: %s", name, e)
        raise ProviderConfigurationError(e, provider=name, error_detail=sys)
