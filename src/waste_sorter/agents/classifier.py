import sys
from typing import Callable, Optional

from pydantic import BaseModel

from waste_sorter.exception import CustomException, MissingInputError
from waste_sorter.llm.base import BaseVisionClient
from waste_sorter.llm.registry import build_provider, resolve_provider_name
from waste_sorter.logger import get_logger
from waste_sorter.models import ClassificationResult
from waste_sorter.agents.normalizer import normalize_response
from waste_sorter.utils.load_config import AppConfig, LLMConfig, load_app_config

logger = get_logger(__name__)

CLASSIFICATION_PROMPT = """Look at this image and identify what item the user is trying to dispose of.
If there are people or other objects in the image, only focus on the most likely item that the user is trying to dispose of.
Respond in this exact format:
[ITEM: name of the waste item]
[CATEGORY: recycle, compost, or trash]
[EXPLANATION: detailed explanation why the item goes in this category]"""


class ClassificationOutcome(BaseModel):
    result: ClassificationResult
    provider: str
    model_name: str
    latency_ms: float = 0.0


ProviderFactory = Callable[[str, LLMConfig], BaseVisionClient]


class DisposalClassifier:
    """
    Runs one disposal classification:
    1. Validate the image payload
    2. Resolve the provider (explicit choice, else configured default)
    3. Send the fixed prompt + image to the provider
    4. Normalize the free-text answer into a ClassificationResult
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        provider_factory: ProviderFactory = build_provider,
    ):
        self.config = config or load_app_config()
        self.provider_factory = provider_factory
        # Fail at startup on a misconfigured default instead of on first request
        self.default_provider = resolve_provider_name(self.config.llm.default_provider)
        logger.info("DisposalClassifier initialized with default provider '%s'.", self.default_provider)

    def resolve_provider(self, requested: Optional[str] = None) -> str:
        if requested is None or not str(requested).strip():
            return self.default_provider
        return resolve_provider_name(requested)

    def classify(self, image: Optional[str], model: Optional[str] = None) -> ClassificationOutcome:
        """
        Classify the item in a base64 image.

        Args:
            image: Base64 payload, optionally with a data URI header.
            model: Optional provider override (e.g. "GEMINI").

        Returns:
            ClassificationOutcome with the result and the provider that served it.
        """
        if not image or not image.strip():
            logger.error("Classification requested without image data.")
            raise MissingInputError("No image data provided")

        provider_name = self.resolve_provider(model)

        try:
            provider = self.provider_factory(provider_name, self.config.llm)
            response = provider.invoke(CLASSIFICATION_PROMPT, image)
            result = normalize_response(response.content)
        except CustomException:
            raise
        except Exception as e:
            logger.error("Classification with %s failed: %s", provider_name, e)
            raise CustomException(e, sys)

        logger.info(
            "Classified '%s' as %s via %s (%s)",
            result.item, result.category, provider_name, response.model_name,
        )
        return ClassificationOutcome(
            result=result,
            provider=provider_name,
            model_name=response.model_name,
            latency_ms=response.latency_ms,
        )
