from __future__ import annotations

import os
import sys
import time
from abc import ABC, abstractmethod
from typing import Any, Optional, Tuple, Type

from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from waste_sorter.exception import ProviderInvocationError
from waste_sorter.logger import get_logger
from waste_sorter.models import LLMResponse

logger = get_logger(__name__)


class BaseVisionClient(ABC):
    """
    Uniform `invoke(prompt, image)` over a multimodal backend.

    Subclasses shape the image for their transport, issue the request and
    pull the answer text out of the response envelope. Everything that goes
    wrong on the way out surfaces as ProviderInvocationError.
    """

    provider_name: str = "BASE"
    transient_errors: Tuple[Type[BaseException], ...] = ()

    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        api_key_env: Optional[str] = None,
        temperature: float = 0.2,
        max_tokens: int = 1000,
        max_attempts: int = 1,
        base_url: Optional[str] = None,
        client: Any = None,
    ) -> None:
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.max_attempts = max(1, max_attempts)
        self.base_url = base_url

        if client is not None:
            self.client = client
        else:
            resolved_api_key = api_key or (os.getenv(api_key_env) if api_key_env else None)
            if not resolved_api_key:
                raise ProviderInvocationError(
                    f"{api_key_env or 'API key'} is not set in the environment.",
                    provider=self.provider_name,
                )
            self.client = self._build_client(resolved_api_key)

        logger.info("%s client initialized with model=%s", self.provider_name, self.model)

    # ------------------------------------------------------------------
    def invoke(self, prompt: str, image: str) -> LLMResponse:
        """
        Send the prompt and image to the backend and return its answer.

        Args:
            prompt: Instruction text, must not be empty.
            image: Base64 image, with or without a data URI header.

        Returns:
            LLMResponse: the answer text in `content` plus usage/latency info.
        """
        if not prompt or not prompt.strip():
            raise ValueError("Prompt must not be empty")

        started = time.perf_counter()
        try:
            logger.debug("Calling %s with model=%s", self.provider_name, self.model)
            response = self._request_with_retry(prompt, image)
            text = self._extract_text(response)
        except ProviderInvocationError:
            raise
        except Exception as exc:
            logger.error("%s call failed: %s", self.provider_name, exc)
            raise ProviderInvocationError(exc, provider=self.provider_name, error_detail=sys)

        if not text or not text.strip():
            logger.error("%s returned an empty answer", self.provider_name)
            raise ProviderInvocationError(
                f"{self.provider_name} returned no content", provider=self.provider_name
            )

        latency_ms = (time.perf_counter() - started) * 1000
        prompt_tokens, completion_tokens, total_tokens = self._extract_usage(response)
        logger.info(
            "Received response from %s model %s in %.0f ms",
            self.provider_name, self.model, latency_ms,
        )
        return LLMResponse(
            content=text,
            model_name=self.model,
            provider=self.provider_name,
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            total_tokens=total_tokens,
            latency_ms=latency_ms,
        )

    # ------------------------------------------------------------------
    def _request_with_retry(self, prompt: str, image: str):
        """Issue the request, retrying transient errors when max_attempts > 1."""
        retrying = Retrying(
            reraise=True,
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=1, min=1, max=8),
            retry=retry_if_exception_type(self.transient_errors),
        )
        for attempt in retrying:
            with attempt:
                return self._request(prompt, image)

    # ------------------------------------------------------------------
    @abstractmethod
    def _build_client(self, api_key: str) -> Any:
        """Create the SDK client for this backend."""

    @abstractmethod
    def _request(self, prompt: str, image: str) -> Any:
        """Perform exactly one inference call and return the raw SDK response."""

    @abstractmethod
    def _extract_text(self, response: Any) -> str:
        """Pull the answer text out of the raw SDK response."""

    def _extract_usage(self, response: Any) -> Tuple[int, int, int]:
        return 0, 0, 0
