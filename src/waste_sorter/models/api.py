from typing import Optional
from pydantic import BaseModel, Field


class AnalyzeImageRequest(BaseModel):
    image: Optional[str] = Field(None, description="Base64 image, optionally prefixed with a data URI header")
    model: Optional[str] = Field(None, description="Provider override, e.g. GROQ or GEMINI")


class AnalyzeImageResponse(BaseModel):
    item: str
    category: str
    explanation: str
    color: str
    model: str = Field(..., description="Provider that served the request")


class ErrorResponse(BaseModel):
    error: str
    message: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    default_provider: str
    providers: list[str]
