import asyncio
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse

from waste_sorter.agents.classifier import DisposalClassifier
from waste_sorter.exception import CustomException, MissingInputError
from waste_sorter.llm.registry import available_providers
from waste_sorter.logger import get_logger
from waste_sorter.models import AnalyzeImageRequest, AnalyzeImageResponse, ErrorResponse, HealthResponse
from waste_sorter.utils.load_config import AppConfig, load_app_config

logger = get_logger(__name__)

ANALYZE_FAILED = "Failed to analyze image"


def _error(status_code: int, error: str, message: Optional[str] = None) -> JSONResponse:
    body = ErrorResponse(error=error, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def handle_analyze_image(body: AnalyzeImageRequest, classifier: DisposalClassifier) -> JSONResponse:
    """
    Request boundary: every failure becomes a structured error body,
    never a raw exception.
    """
    try:
        outcome = classifier.classify(body.image, model=body.model)
    except MissingInputError as e:
        return _error(status.HTTP_400_BAD_REQUEST, e.message)
    except CustomException as e:
        logger.error("Error processing image: %s", e, exc_info=True)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, ANALYZE_FAILED, e.message)
    except Exception as e:
        logger.error("Unexpected error processing image: %s", e, exc_info=True)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, ANALYZE_FAILED, str(e))

    result = outcome.result
    payload = AnalyzeImageResponse(
        item=result.item,
        category=result.category,
        explanation=result.explanation,
        color=result.color,
        model=outcome.provider,
    )
    return JSONResponse(status_code=status.HTTP_200_OK, content=payload.model_dump())


def create_app(
    classifier: Optional[DisposalClassifier] = None,
    config: Optional[AppConfig] = None,
) -> FastAPI:
    config = config or (classifier.config if classifier else load_app_config())
    classifier = classifier or DisposalClassifier(config=config)

    app = FastAPI(title="Waste Sorter", version="0.1.0")
    app.state.classifier = classifier
    app.state.config = config

    @app.exception_handler(RequestValidationError)
    async def invalid_body_handler(request: Request, exc: RequestValidationError):
        logger.error("Unreadable request body: %s", exc.errors())
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, ANALYZE_FAILED, str(exc))

    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        return HealthResponse(
            status="healthy",
            default_provider=classifier.default_provider,
            providers=available_providers(),
        )

    @app.get("/api/analyze-image")
    async def analyze_image_redirect():
        return RedirectResponse(config.homepage_url)

    @app.post("/api/analyze-image")
    async def analyze_image(body: AnalyzeImageRequest):
        # Provider SDK calls are blocking
        return await asyncio.to_thread(handle_analyze_image, body, classifier)

    return app


def _build_default_app() -> FastAPI:
    load_dotenv()
    return create_app()


app = _build_default_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("waste_sorter.api.app:app", host="0.0.0.0", port=8000, log_level="info")
