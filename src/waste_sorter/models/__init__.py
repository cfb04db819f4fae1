from .classification import Category, ClassificationResult, CATEGORY_COLORS, CATEGORY_ICONS, color_for, icon_for
from .llm import LLMResponse
from .api import AnalyzeImageRequest, AnalyzeImageResponse, ErrorResponse, HealthResponse
