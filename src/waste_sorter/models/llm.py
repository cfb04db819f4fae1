from typing import Any, Dict, Optional
from pydantic import BaseModel

class LLMResponse(BaseModel):
    """
    Data Transfer Object (DTO) for standardized vision model outputs.
    Ensures that regardless of the provider, the application receives the same structure.
    """
    content: str
    model_name: str
    provider: str
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
    latency_ms: float = 0.0
    metadata: Optional[Dict[str, Any]] = None
