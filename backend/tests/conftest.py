"""
Pytest configuration and fixtures for the Rooh da Safar backend tests
"""

import json
import os

# Must be set before any project module reads the environment
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["GUIDANCE_TELEMETRY_ENABLED"] = "0"
os.environ["LLM_CALL_LOG"] = ""
os.environ["OPENAI_API_KEY"] = ""

import httpx
import pytest
from fastapi.testclient import TestClient

from database import Base, SessionLocal, engine
from deps import get_hukamnama_service, get_llm_service
from hukamnama_service import HukamnamaService
from llm_service import LLMConfig, LLMService
from main import app


VALID_GUIDANCE = {
    "gurbaniTuk": {
        "gurmukhi": "ਦੁਖੁ ਦਾਰੂ ਸੁਖੁ ਰੋਗੁ ਭਇਆ ਜਾ ਸੁਖੁ ਤਾਮਿ ਨ ਹੋਈ ॥",
        "transliteration": "Dukh daaroo sukh rog bhaiaa jaa sukh taam na hoee.",
        "translation": "Suffering is the medicine, and pleasure the disease.",
        "source": "Ang 469, Sri Guru Granth Sahib Ji",
        "raag": "Aasaa",
    },
    "actions": ["Sit in Naam Simran for ten minutes", "Call a friend from the Sangat"],
    "ardaas": "Waheguru ji, give me the strength to accept Your Hukam.",
    "explanation": "Hardship turns the mind back towards the Guru.",
}

SAMPLE_HUKAMNAMA = {
    "date": "March 3, 2025",
    "gurmukhi": "ਸੋਰਠਿ ਮਹਲਾ ੫ ॥ ਗੁਰੁ ਪੂਰਾ ਭੇਟਿਓ ਵਡਭਾਗੀ ਮਨਹਿ ਭਇਆ ਪਰਗਾਸਾ ॥",
    "punjabi": "Sorath, Fifth Mehl: By great good fortune, I have met the Perfect Guru.",
    "english": "Sorat'h, Fifth Mehl: By great good fortune, I have met the Perfect Guru, and my mind has been enlightened.",
    "audioLinks": {
        "gurmukhi": "https://audio.test/g.mp3",
        "english": "https://audio.test/e.mp3",
        "punjabi": "https://audio.test/p.mp3",
    },
    "source": "Ang 622",
    "pageNumber": 622,
    "writer": "Guru Arjan Dev Ji",
    "raag": "Sorath",
}


class FakeCompletions:
    """Stands in for the chat completions endpoint behind httpx.MockTransport."""

    def __init__(self):
        self.status_code = 200
        self.content = json.dumps(VALID_GUIDANCE, ensure_ascii=False)
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.status_code != 200:
            return httpx.Response(self.status_code, json={"error": {"message": "upstream failure"}})
        return httpx.Response(
            200,
            json={"choices": [{"message": {"role": "assistant", "content": self.content}}]},
        )


class FakeSikhNet:
    """Stands in for the Hukamnama API; records requested paths."""

    def __init__(self):
        self.status_code = 200
        self.payload = dict(SAMPLE_HUKAMNAMA)
        self.paths = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.paths.append(request.url.path)
        if self.status_code != 200:
            return httpx.Response(self.status_code, json={"error": "unavailable"})
        return httpx.Response(200, json=self.payload)


@pytest.fixture(autouse=True)
def fresh_db():
    """Every test starts from empty tables."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def completions():
    return FakeCompletions()


@pytest.fixture
def llm(completions):
    config = LLMConfig(api_key="test-key", max_retry_attempts=1, retry_backoff_base_sec=0.0)
    return LLMService(config=config, transport=httpx.MockTransport(completions))


@pytest.fixture
def sikhnet():
    return FakeSikhNet()


@pytest.fixture
def hukamnama(sikhnet):
    return HukamnamaService(base_url="https://hukamnama.test/v1/hukamnama", transport=httpx.MockTransport(sikhnet))


@pytest.fixture
def client(llm, hukamnama):
    app.dependency_overrides[get_llm_service] = lambda: llm
    app.dependency_overrides[get_hukamnama_service] = lambda: hukamnama
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    response = client.post("/api/users/register", json={"username": "simran", "display_name": "Simran Kaur"})
    assert response.status_code == 201
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
