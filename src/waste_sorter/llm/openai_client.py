from __future__ import annotations

from typing import Any, Tuple

from openai import APIConnectionError, APITimeoutError, InternalServerError, OpenAI, RateLimitError

from waste_sorter.llm.base import BaseVisionClient
from waste_sorter.utils.image_payload import to_data_uri


class OpenAIVisionClient(BaseVisionClient):
    """
    Chat Completions client for any OpenAI-compatible vision endpoint.

    The image travels as an `image_url` content part holding a full data URI.
    """

    provider_name = "OPENAI"
    transient_errors = (APITimeoutError, APIConnectionError, RateLimitError, InternalServerError)

    def _build_client(self, api_key: str) -> OpenAI:
        return OpenAI(api_key=api_key, base_url=self.base_url)

    def _request(self, prompt: str, image: str):
        return self.client.chat.completions.create(
            model=self.model,
            messages=[
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": prompt},
                        {"type": "image_url", "image_url": {"url": to_data_uri(image)}},
                    ],
                }
            ],
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )

    @staticmethod
    def _extract_text(response: Any) -> str:
        choices = getattr(response, "choices", None)
        if not choices:
            return ""
        return choices[0].message.content or ""

    @staticmethod
    def _extract_usage(response: Any) -> Tuple[int, int, int]:
        usage = getattr(response, "usage", None)
        if usage is None:
            return 0, 0, 0
        return (
            getattr(usage, "prompt_tokens", 0) or 0,
            getattr(usage, "completion_tokens", 0) or 0,
            getattr(usage, "total_tokens", 0) or 0,
        )


class GroqVisionClient(OpenAIVisionClient):
    """Groq's OpenAI-compatible endpoint (Llama vision models)."""

    provider_name = "GROQ"


class TogetherVisionClient(OpenAIVisionClient):
    """Together AI's OpenAI-compatible endpoint."""

    provider_name = "TOGETHER"
