import pytest
from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from waste_sorter.agents.classifier import DisposalClassifier
from waste_sorter.api.app import create_app
from waste_sorter.exception import ProviderInvocationError
from waste_sorter.models.llm import LLMResponse
from waste_sorter.utils.load_config import AppConfig

URL = "/api/analyze-image"


@pytest.fixture
def mock_provider():
    provider = MagicMock()
    provider.invoke.return_value = LLMResponse(
        content="[ITEM: plastic bottle]\n[CATEGORY: recycle]\n[EXPLANATION: Made of PET plastic, accepted by most programs.]",
        model_name="mock-vision",
        provider="MOCK",
    )
    return provider


@pytest.fixture
def provider_factory(mock_provider):
    return MagicMock(return_value=mock_provider)


@pytest.fixture
def client(provider_factory):
    classifier = DisposalClassifier(config=AppConfig(), provider_factory=provider_factory)
    return TestClient(create_app(classifier=classifier))


def test_analyze_image_success(client):
    response = client.post(URL, json={"image": "data:image/jpeg;base64,QUJD"})

    assert response.status_code == 200
    assert response.json() == {
        "item": "plastic bottle",
        "category": "recycle",
        "explanation": "Made of PET plastic, accepted by most programs.",
        "color": "bg-emerald-500",
        "model": "TOGETHER",
    }


def test_analyze_image_with_model_override(client, provider_factory):
    response = client.post(URL, json={"image": "QUJD", "model": "GEMINI"})

    assert response.status_code == 200
    assert response.json()["model"] == "GEMINI"
    assert provider_factory.call_args.args[0] == "GEMINI"


@pytest.mark.parametrize("body", [{}, {"image": ""}, {"image": None, "model": "GROQ"}])
def test_missing_image_is_client_error(client, provider_factory, mock_provider, body):
    response = client.post(URL, json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "No image data provided"}
    assert provider_factory.call_count == 0
    assert mock_provider.invoke.call_count == 0


def test_unknown_model_is_server_error(client, provider_factory):
    response = client.post(URL, json={"image": "QUJD", "model": "CLAUDE"})

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Failed to analyze image"
    assert "Unsupported vision provider" in body["message"]
    assert provider_factory.call_count == 0


def test_provider_failure_is_server_error(client, mock_provider):
    mock_provider.invoke.side_effect = ProviderInvocationError("Invalid API Key", provider="TOGETHER")

    response = client.post(URL, json={"image": "QUJD"})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to analyze image", "message": "Invalid API Key"}


def test_non_json_body_is_server_error(client, provider_factory):
    """An unreadable body falls into the catch-all failure, like any other exception."""
    response = client.post(URL, content="not json", headers={"content-type": "application/json"})

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Failed to analyze image"
    assert body["message"]
    assert provider_factory.call_count == 0


def test_wrongly_typed_image_is_server_error(client, provider_factory):
    response = client.post(URL, json={"image": 123})

    assert response.status_code == 500
    assert response.json()["error"] == "Failed to analyze image"
    assert provider_factory.call_count == 0


def test_get_redirects_to_homepage(client):
    response = client.get(URL, follow_redirects=False)

    assert response.status_code == 307
    assert response.headers["location"] == "https://www.chinesepowered.com"


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["default_provider"] == "TOGETHER"
    assert set(body["providers"]) >= {"GROQ", "TOGETHER", "GEMINI", "OPENAI"}
