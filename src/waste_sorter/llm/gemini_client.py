from __future__ import annotations

from typing import Any, Tuple

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from waste_sorter.llm.base import BaseVisionClient
from waste_sorter.utils.image_payload import split_data_uri


class GeminiVisionClient(BaseVisionClient):
    """
    Google Gemini client. Gemini wants bare base64 in an `inline_data` part,
    so any data URI header is stripped and its mime type passed separately.
    """

    provider_name = "GEMINI"
    transient_errors = (
        google_exceptions.ResourceExhausted,
        google_exceptions.ServiceUnavailable,
        google_exceptions.DeadlineExceeded,
    )

    def _build_client(self, api_key: str):
        genai.configure(api_key=api_key)
        return genai.GenerativeModel(self.model)

    def _request(self, prompt: str, image: str):
        mime_type, data = split_data_uri(image)
        return self.client.generate_content(
            contents=[
                {
                    "role": "user",
                    "parts": [
                        {"text": prompt},
                        {"inline_data": {"mime_type": mime_type, "data": data}},
                    ],
                }
            ],
            generation_config={
                "temperature": self.temperature,
                "max_output_tokens": self.max_tokens,
            },
        )

    @staticmethod
    def _extract_text(response: Any) -> str:
        # `.text` raises ValueError when the answer was blocked or has no parts
        return response.text or ""

    @staticmethod
    def _extract_usage(response: Any) -> Tuple[int, int, int]:
        usage = getattr(response, "usage_metadata", None)
        if usage is None:
            return 0, 0, 0
        return (
            getattr(usage, "prompt_token_count", 0) or 0,
            getattr(usage, "candidates_token_count", 0) or 0,
            getattr(usage, "total_token_count", 0) or 0,
        )
