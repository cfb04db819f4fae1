from waste_sorter.llm.base import BaseVisionClient
from waste_sorter.llm.openai_client import OpenAIVisionClient, GroqVisionClient, TogetherVisionClient
from waste_sorter.llm.gemini_client import GeminiVisionClient
from waste_sorter.llm.registry import PROVIDER_REGISTRY, build_provider, register_provider, resolve_provider_name

__all__ = [
    "BaseVisionClient",
    "OpenAIVisionClient",
    "GroqVisionClient",
    "TogetherVisionClient",
    "GeminiVisionClient",
    "PROVIDER_REGISTRY",
    "build_provider",
    "register_provider",
    "resolve_provider_name",
]
